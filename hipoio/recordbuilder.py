"""Assembles events into LZ4-compressed HIPO records."""

from __future__ import annotations

import struct

import lz4.block

from hipoio.utils import write_int, write_long

HEADER_SIZE = 56
HEADER_WORDS = 14
MAGIC_WORD = 0xC0DA0100
RECORD_VERSION = 6
LZ4_COMPRESSION = 1

DEFAULT_MAX_EVENTS = 100_000
DEFAULT_MAX_LENGTH = 8 * 1024 * 1024

_INT = struct.Struct("<i")
_LONG = struct.Struct("<q")


def _padding_to_word(size: int) -> int:
    """Number of bytes needed to bring ``size`` up to a multiple of four."""
    return (-size) % 4


class RecordBuilder:
    """Collects event buffers and builds a compressed record from them."""

    def __init__(
        self, max_events: int = DEFAULT_MAX_EVENTS, max_length: int = DEFAULT_MAX_LENGTH
    ) -> None:
        if max_events <= 0 or max_length <= 0:
            raise ValueError("max_events and max_length must be positive")
        self.max_events = max_events
        self.max_length = max_length
        self.user_word_one = 0
        self.user_word_two = 0
        self._lengths: list[int] = []
        self._events: list[bytes] = []
        self._events_position = 0
        self._record = bytearray(HEADER_SIZE)

    def add_event(self, data: bytes | bytearray | memoryview, start: int = 0, length: int | None = None) -> bool:
        """Append ``length`` bytes of ``data`` from ``start``.

        Returns False when the builder has no room for the event.
        """
        view = memoryview(data).cast("B")
        if length is None:
            length = len(view) - start
        if start < 0 or length < 0 or start + length > len(view):
            raise ValueError(
                f"range [{start}, {start + length}) is outside a buffer of {len(view)} bytes"
            )
        if self._events_position + length >= self.max_length:
            return False
        if (len(self._lengths) + 1) * 4 >= 4 * self.max_events:
            return False
        self._lengths.append(length)
        self._events.append(bytes(view[start:start + length]))
        self._events_position += length
        return True

    def reset(self) -> None:
        """Drop the collected events; the last built record is kept."""
        self._lengths.clear()
        self._events.clear()
        self._events_position = 0

    def build(self) -> None:
        """Compress the collected events and write the record header."""
        index = b"".join(_INT.pack(length) for length in self._lengths)
        events = b"".join(self._events)
        compressed = lz4.block.compress(
            index + events, mode="fast", acceleration=1, store_size=False
        )
        rounding = _padding_to_word(len(compressed))
        payload_words = (len(compressed) + rounding) // 4
        record_length = payload_words + HEADER_WORDS

        record = bytearray(HEADER_SIZE + payload_words * 4)
        record[HEADER_SIZE:HEADER_SIZE + len(compressed)] = compressed

        entries = len(self._lengths)
        write_int(record, 0, record_length)
        write_int(record, 4, 0)
        write_int(record, 8, HEADER_WORDS)
        write_int(record, 12, entries)
        write_int(record, 16, entries * 4)
        write_int(record, 20, (rounding << 24) | RECORD_VERSION)
        write_int(record, 24, 0)
        write_int(record, 28, MAGIC_WORD)
        write_int(record, 32, len(events))
        write_int(record, 36, (LZ4_COMPRESSION << 28) | (payload_words & 0x0FFFFFFF))
        write_long(record, 40, self.user_word_one)
        write_long(record, 48, self.user_word_two)
        self._record = record

    def entries(self) -> int:
        """Number of events in the last built record."""
        return _INT.unpack_from(self._record, 12)[0]

    def record_size(self) -> int:
        """Size in bytes of the last built record, header included."""
        return _INT.unpack_from(self._record, 0)[0] * 4

    def record_bytes(self) -> bytes:
        """The last built record, ready to be written."""
        return bytes(self._record[:self.record_size()])

    def built_user_word_one(self) -> int:
        """First user word stored in the last built record."""
        return _LONG.unpack_from(self._record, 40)[0]

    def built_user_word_two(self) -> int:
        """Second user word stored in the last built record."""
        return _LONG.unpack_from(self._record, 48)[0]

    def __len__(self) -> int:
        return len(self._lengths)