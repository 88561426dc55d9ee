import struct
from unittest import mock

import pytest

from hipoio.utils import (
    Benchmark,
    find_position,
    ltrim,
    rtrim,
    substring,
    tokenize,
    trim,
    write_byte,
    write_int,
    write_long,
)


def test_tokenize_skips_repeated_and_edge_delimiters():
    assert tokenize("  a b   c  ") == ["a", "b", "c"]


def test_tokenize_multiple_delimiters():
    assert tokenize("x,y;;z", ",;") == ["x", "y", "z"]


def test_tokenize_only_delimiters_is_empty():
    assert tokenize("   ") == []
    assert tokenize("") == []


def test_find_position_points_at_delimiter():
    text = "a:b:c"
    first = find_position(text, ":", 0)
    second = find_position(text, ":", 1)
    assert text[first] == ":"
    assert text[second] == ":"
    assert second > first


def test_find_position_missing_returns_minus_one():
    assert find_position("abc", ":", 0) == -1
    assert find_position("a:b", ":", 1) == -1


def test_substring_by_order():
    text = "[a][bc](d)"
    assert substring(text, "[", "]", 0) == "a"
    assert substring(text, "[", "]", 1) == "bc"
    assert substring(text, "[(", "])", 2) == "d"


def test_substring_missing_delimiters():
    assert substring("[abc", "[", "]", 0) == ""
    assert substring("abc]", "[", "]", 0) == ""
    assert substring("[a]", "[", "]", 3) == ""


def test_trim_functions():
    text = "  x y \n"
    assert ltrim(text) == "x y \n"
    assert rtrim(text) == "  x y"
    assert trim(text) == "x y"


def test_trim_custom_chars_and_all_trimmed():
    assert trim("--x--", "-") == "x"
    assert trim(" \t\n") == ""


def test_write_int_magic_word_bytes():
    buffer = bytearray(8)
    write_int(buffer, 4, 0xC0DA0100)
    assert bytes(buffer[4:8]) == b"\x00\x01\xda\xc0"
    assert bytes(buffer[:4]) == b"\x00\x00\x00\x00"


@pytest.mark.parametrize("value", [0, 1, -1, 2**31 - 1, -(2**31)])
def test_write_int_round_trip(value):
    buffer = bytearray(4)
    write_int(buffer, 0, value)
    assert struct.unpack_from("<i", buffer, 0)[0] == value


@pytest.mark.parametrize("value", [0, 42, -7, 2**63 - 1, -(2**63)])
def test_write_long_round_trip(value):
    buffer = bytearray(16)
    write_long(buffer, 8, value)
    assert struct.unpack_from("<q", buffer, 8)[0] == value


def test_write_byte():
    buffer = bytearray(3)
    write_byte(buffer, 1, 255)
    assert buffer == bytearray(b"\x00\xff\x00")


@pytest.mark.parametrize(
    "writer, position",
    [(write_int, 1), (write_long, 0), (write_byte, 4), (write_int, -1)],
)
def test_write_out_of_range(writer, position):
    buffer = bytearray(4)
    with pytest.raises(IndexError):
        writer(buffer, position, 1)


def test_benchmark_accumulates_time():
    bench = Benchmark("read")
    with mock.patch("time.perf_counter_ns", side_effect=[0, 1_500_000_000]):
        bench.resume()
        bench.pause()
    assert bench.counter == 1
    assert bench.time_ns() == 1_500_000_000
    assert bench.time_sec() == pytest.approx(1.5)


def test_benchmark_context_manager_counts():
    bench = Benchmark()
    with bench:
        pass
    with bench:
        pass
    assert bench.counter == 2
    assert bench.time_ns() >= 0


def test_benchmark_reset():
    bench = Benchmark("x", printout_frequency=10)
    with bench:
        pass
    bench.reset()
    assert bench.counter == 0
    assert bench.time_ns() == 0
    assert bench.printout_frequency == -1


def test_benchmark_pause_without_resume():
    with pytest.raises(RuntimeError):
        Benchmark().pause()


def test_benchmark_show(capsys):
    bench = Benchmark("unzip")
    bench.show()
    out = capsys.readouterr().out
    assert out.startswith("[benchmark] ")
    assert "unzip : time =" in out