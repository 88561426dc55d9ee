import struct

import lz4.block
import pytest

from hipoio.recordbuilder import RecordBuilder


def _header(record: bytes) -> tuple[int, ...]:
    return struct.unpack_from("<10i", record, 0)


def _payload(record: bytes) -> bytes:
    fields = _header(record)
    record_length, header_length, version_word = fields[0], fields[2], fields[5]
    padding = (version_word >> 24) & 3
    start = header_length * 4
    end = record_length * 4 - padding
    return record[start:end]


def test_empty_record_header():
    builder = RecordBuilder()
    builder.build()
    record = builder.record_bytes()
    assert builder.entries() == 0
    assert struct.unpack_from("<I", record, 28)[0] == 0xC0DA0100
    assert _header(record)[2] == 14
    assert len(record) == builder.record_size()


def test_build_round_trip():
    builder = RecordBuilder()
    events = [b"alpha", b"bravo-charlie", b"x" * 300]
    for event in events:
        assert builder.add_event(event)
    builder.build()
    record = builder.record_bytes()
    fields = _header(record)
    assert builder.entries() == len(events)
    assert fields[4] == 4 * len(events)
    assert fields[8] == sum(len(e) for e in events)
    uncompressed = lz4.block.decompress(
        _payload(record), uncompressed_size=fields[4] + fields[8]
    )
    lengths = struct.unpack_from(f"<{len(events)}i", uncompressed, 0)
    assert list(lengths) == [len(e) for e in events]
    assert uncompressed[4 * len(events):] == b"".join(events)


def test_record_size_is_word_aligned_and_compression_word():
    builder = RecordBuilder()
    builder.add_event(b"abcdefg")
    builder.build()
    record = builder.record_bytes()
    assert builder.record_size() % 4 == 0
    compression_word = _header(record)[9]
    assert (compression_word >> 28) & 0xF == 1
    assert (compression_word & 0x0FFFFFFF) * 4 + 56 == builder.record_size()
    assert _header(record)[5] & 0xFF == 6


def test_add_event_slice():
    builder = RecordBuilder()
    assert builder.add_event(b"0123456789", 2, 4)
    builder.build()
    fields = _header(builder.record_bytes())
    out = lz4.block.decompress(_payload(builder.record_bytes()), uncompressed_size=4 + fields[8])
    assert out[4:] == b"2345"


def test_add_event_range_error():
    builder = RecordBuilder()
    with pytest.raises(ValueError):
        builder.add_event(b"abc", 2, 5)


def test_event_count_limit():
    builder = RecordBuilder(max_events=3, max_length=1000)
    assert builder.add_event(b"a")
    assert builder.add_event(b"b")
    assert not builder.add_event(b"c")
    assert len(builder) == 2


def test_length_limit():
    builder = RecordBuilder(max_events=10, max_length=100)
    assert not builder.add_event(b"z" * 100)
    assert builder.add_event(b"z" * 99)
    assert not builder.add_event(b"z")


def test_user_words():
    builder = RecordBuilder()
    assert builder.built_user_word_one() == 0
    builder.user_word_one = 42
    builder.user_word_two = -7
    builder.add_event(b"data")
    builder.build()
    assert builder.built_user_word_one() == 42
    assert builder.built_user_word_two() == -7


def test_reset_clears_events_but_keeps_record():
    builder = RecordBuilder()
    builder.add_event(b"one")
    builder.add_event(b"two")
    builder.build()
    size = builder.record_size()
    builder.reset()
    assert len(builder) == 0
    assert builder.entries() == 2
    assert builder.record_size() == size
    builder.build()
    assert builder.entries() == 0