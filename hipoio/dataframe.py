"""A flat, uncompressed frame of concatenated events behind a record header."""

from __future__ import annotations

import struct
from collections.abc import Iterator

from hipoio.utils import write_int

HEADER_SIZE = 56
MAGIC_WORD = 0xC0DA0100

_INT = struct.Struct("<i")
_UINT = struct.Struct("<I")


class DataFrame:
    """Events packed one after another after a 56-byte header."""

    def __init__(self, max_events: int = 50, max_size: int = 512 * 1024) -> None:
        self.max_events = max_events
        self.max_size = max_size
        self._buffer = bytearray(HEADER_SIZE + max_size)
        self.reset()

    def _int(self, position: int) -> int:
        return _INT.unpack_from(self._buffer, position)[0]

    def reset(self) -> None:
        """Write an empty header."""
        write_int(self._buffer, 0, HEADER_SIZE)
        write_int(self._buffer, 4, 1)
        write_int(self._buffer, 8, 14)
        write_int(self._buffer, 12, 0)
        write_int(self._buffer, 16, 0)
        write_int(self._buffer, 20, 5)
        write_int(self._buffer, 24, 0)
        write_int(self._buffer, 28, MAGIC_WORD)
        write_int(self._buffer, 32, 0)
        write_int(self._buffer, 36, 0)

    def add_event(self, event: bytes | bytearray | memoryview) -> bool:
        """Append an event; returns False when the frame is full."""
        data = bytes(event)
        frame_size = self.size()
        if len(data) + frame_size + HEADER_SIZE > self.max_size:
            return False
        count = self.count()
        if count >= self.max_events:
            return False
        self._buffer[frame_size:frame_size + len(data)] = data
        data_size = self._int(32)
        write_int(self._buffer, 12, count + 1)
        write_int(self._buffer, 32, data_size + len(data))
        write_int(self._buffer, 36, data_size + len(data))
        write_int(self._buffer, 0, frame_size + len(data))
        return True

    def event_at(self, pos: int) -> tuple[bytes, int]:
        """Return the event starting at ``pos`` and the position after it."""
        if pos < 0 or pos + 8 > len(self._buffer):
            raise IndexError(f"no event header at position {pos}")
        event_size = self._int(pos + 4)
        if event_size <= 0 or pos + event_size > len(self._buffer):
            raise ValueError(f"invalid event size {event_size} at position {pos}")
        return bytes(self._buffer[pos:pos + event_size]), pos + event_size

    def init(self, buffer: bytes | bytearray | memoryview) -> None:
        """Load a frame from ``buffer``, whose first word holds the frame size."""
        data = bytes(buffer)
        if len(data) < 4:
            raise ValueError("buffer too short to hold a frame size")
        size = _UINT.unpack_from(data, 0)[0]
        if size > len(data):
            raise ValueError(f"frame declares {size} bytes but buffer holds {len(data)}")
        if size > len(self._buffer):
            self._buffer.extend(bytes(size + HEADER_SIZE - len(self._buffer)))
        self._buffer[:size] = data[:size]

    def count(self) -> int:
        """Number of events in the frame."""
        return self._int(12)

    def size(self) -> int:
        """Size of the frame in bytes, header included."""
        return self._int(0)

    def buffer(self) -> bytes:
        """The frame bytes, header included."""
        return bytes(self._buffer[:self.size()])

    def summary(self) -> str:
        """Print the main header fields and return the printed text."""
        lines = [
            "## data frame summary:",
            f"frame size       : {self._int(0)}",
            f"magic word       : {_UINT.unpack_from(self._buffer, 28)[0]:X}",
            f"number of events : {self._int(12)}",
            f"data length      : {self._int(32)}",
        ]
        text = "\n".join(lines)
        print(text)
        return text

    def __iter__(self) -> Iterator[bytes]:
        position = HEADER_SIZE
        for _ in range(self.count()):
            event, position = self.event_at(position)
            yield event

    def __len__(self) -> int:
        return self.count()