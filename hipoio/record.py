"""Reading HIPO records: header parsing, decompression and event lookup."""

from __future__ import annotations

import os
import struct
import warnings
from dataclasses import dataclass
from itertools import accumulate
from typing import BinaryIO

import lz4.block

from hipoio.utils import Benchmark

HEADER_PROBE_SIZE = 80
MAGIC_LITTLE = 0xC0DA0100
MAGIC_SWAPPED = 0x0001DAC0


class HipoWrongFile(Exception):
    """The input is not a HIPO file."""

    def __init__(self, message: str = "exception: wrong Hipo File format.") -> None:
        super().__init__(message)


class HipoRecordError(Exception):
    """A record could not be parsed."""

    def __init__(self, message: str = "exception: error parsing record") -> None:
        super().__init__(message)


@dataclass
class RecordHeader:
    """Decoded fields of a record header."""

    signature: int = 0
    record_length: int = 0
    record_data_length: int = 0
    record_data_length_compressed: int = 0
    number_of_events: int = 0
    header_length: int = 0
    index_data_length: int = 0
    user_header_length: int = 0
    user_header_length_padding: int = 0
    bit_info: int = 0
    compression_type: int = 0
    compressed_length_padding: int = 0
    data_endianness: int = 0

    @property
    def header_length_bytes(self) -> int:
        return self.header_length * 4

    @property
    def data_buffer_length_bytes(self) -> int:
        """Bytes following the header, padding included."""
        return self.record_length * 4 - self.header_length_bytes

    @property
    def decompressed_length(self) -> int:
        return (
            self.index_data_length
            + self.user_header_length
            + self.user_header_length_padding
            + self.record_data_length
        )

    @property
    def data_offset(self) -> int:
        """Offset of the first event in the decompressed record."""
        return self.index_data_length + self.user_header_length + self.user_header_length_padding


def parse_record_header(buffer: bytes | bytearray | memoryview) -> RecordHeader:
    """Decode the record header at the start of ``buffer``."""
    data = bytes(buffer[:40])
    if len(data) < 40:
        raise HipoRecordError(f"record header needs 40 bytes, got {len(data)}")
    signature = struct.unpack_from("<I", data, 28)[0]
    if signature == MAGIC_SWAPPED:
        order, endianness = ">", 1
        signature = MAGIC_LITTLE
    else:
        order, endianness = "<", 0

    def signed(offset: int) -> int:
        return struct.unpack_from(order + "i", data, offset)[0]

    def unsigned(offset: int) -> int:
        return struct.unpack_from(order + "I", data, offset)[0]

    bit_info = unsigned(20)
    compressed_word = unsigned(36)
    number_of_events = signed(12)
    return RecordHeader(
        signature=signature,
        record_length=signed(0),
        record_data_length=signed(32),
        record_data_length_compressed=compressed_word & 0x0FFFFFFF,
        number_of_events=number_of_events,
        header_length=signed(8),
        index_data_length=4 * number_of_events,
        user_header_length=signed(24),
        user_header_length_padding=(bit_info >> 20) & 0x3,
        bit_info=bit_info,
        compression_type=(compressed_word >> 28) & 0xF,
        compressed_length_padding=(bit_info >> 24) & 0x3,
        data_endianness=endianness,
    )


def decompress(data: bytes | bytearray | memoryview, uncompressed_length: int) -> bytes:
    """Decompress an LZ4 block of known uncompressed length."""
    if uncompressed_length < 0:
        raise HipoRecordError(f"invalid uncompressed length {uncompressed_length}")
    if uncompressed_length == 0:
        return b""
    try:
        return lz4.block.decompress(bytes(data), uncompressed_size=uncompressed_length)
    except (lz4.block.LZ4BlockError, ValueError) as error:
        raise HipoRecordError(f"LZ4 decompression failed: {error}") from error


@dataclass(frozen=True)
class EventData:
    """One event's bytes inside a decompressed record."""

    data: bytes
    offset: int
    size: int
    endianness: int = 0


def _stream_size(stream: BinaryIO) -> int:
    current = stream.tell()
    end = stream.seek(0, os.SEEK_END)
    stream.seek(current)
    return end


class Record:
    """A decompressed record with an index of its events."""

    def __init__(self) -> None:
        self.header = RecordHeader()
        self._buffer = b""
        self._positions: list[int] = []
        self.read_benchmark = Benchmark("read")
        self.unzip_benchmark = Benchmark("unzip")
        self.index_benchmark = Benchmark("index")

    def read_record(
        self,
        stream: BinaryIO,
        position: int,
        data_offset: int = 0,
        input_size: int | None = None,
    ) -> bool:
        """Read the record at ``position``; returns False if it does not fit the input."""
        self.read_benchmark.resume()
        if input_size is None:
            input_size = _stream_size(stream)
        if position + HEADER_PROBE_SIZE >= input_size:
            return False

        stream.seek(position)
        header = parse_record_header(stream.read(HEADER_PROBE_SIZE))
        length = header.data_buffer_length_bytes
        stream.seek(position + header.header_length_bytes)
        if position + length + header.header_length > input_size:
            warnings.warn(
                f"record at position {position} is incomplete", RuntimeWarning, stacklevel=2
            )
            return False

        payload = stream.read(length)
        if len(payload) < length:
            raise HipoRecordError(
                f"record at position {position}: expected {length} bytes, read {len(payload)}"
            )
        self.read_benchmark.pause()
        self._load(header, payload)
        return True

    def read_record_block(self, stream: BinaryIO, position: int, record_length: int) -> None:
        """Read a whole record, header included, of ``record_length`` bytes."""
        stream.seek(position)
        block = stream.read(record_length)
        if len(block) < record_length:
            raise HipoRecordError(
                f"record at position {position}: expected {record_length} bytes, read {len(block)}"
            )
        header = parse_record_header(block)
        start = header.header_length_bytes
        payload = block[start:start + header.data_buffer_length_bytes]
        self._load(header, payload)

    def _load(self, header: RecordHeader, payload: bytes) -> None:
        with self.unzip_benchmark:
            length = header.decompressed_length
            if header.compression_type == 0:
                if len(payload) < length:
                    raise HipoRecordError(
                        f"uncompressed record holds {len(payload)} bytes, needs {length}"
                    )
                body = payload[:length]
            else:
                end = len(payload) - header.compressed_length_padding
                body = decompress(payload[:end], length)
        with self.index_benchmark:
            if len(body) < header.index_data_length:
                raise HipoRecordError("record too short for its index array")
            order = ">" if header.data_endianness == 1 else "<"
            sizes = (
                size
                for (size,) in struct.iter_unpack(order + "i", body[:header.index_data_length])
            )
            positions = list(accumulate(sizes))
        self.header = header
        self._buffer = body
        self._positions = positions

    def event_count(self) -> int:
        """Number of events in the record."""
        return self.header.number_of_events

    def record_size_compressed(self) -> int:
        """Record length in 32-bit words, header included."""
        return self.header.record_length

    def _bounds(self, index: int) -> tuple[int, int]:
        if not 0 <= index < len(self._positions):
            raise IndexError(f"event index {index} out of range (0..{len(self._positions) - 1})")
        first = self._positions[index - 1] if index > 0 else 0
        return first, self._positions[index]

    def get_data(self, index: int) -> EventData:
        """Locate event ``index`` in the decompressed record."""
        first, last = self._bounds(index)
        offset = self.header.data_offset
        start = first + offset
        return EventData(
            data=self._buffer[start:last + offset],
            offset=start,
            size=last - first,
            endianness=self.header.data_endianness,
        )

    def event_bytes(self, index: int) -> bytes:
        """The bytes of event ``index``."""
        return self.get_data(index).data

    def events_map(self) -> list[tuple[int, int]]:
        """Start and end offsets of every event in the decompressed record."""
        offset = self.header.data_offset
        starts = [0, *self._positions[:-1]]
        return [(first + offset, last + offset) for first, last in zip(starts, self._positions)]