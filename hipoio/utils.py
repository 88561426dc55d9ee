"""String helpers, little-endian buffer writers and a simple benchmark timer."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass, field

_WHITESPACE = "\t\n\v\f\r "

_INT = struct.Struct("<I")
_LONG = struct.Struct("<Q")
_BYTE = struct.Struct("<B")


def tokenize(text: str, delimiters: str = " ") -> list[str]:
    """Split ``text`` on any character of ``delimiters``, dropping empty tokens."""
    tokens: list[str] = []
    current: list[str] = []
    for char in text:
        if char in delimiters:
            if current:
                tokens.append("".join(current))
                current.clear()
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


def _find_first_of(text: str, chars: str, start: int) -> int:
    for index in range(start, len(text)):
        if text[index] in chars:
            return index
    return -1


def find_position(text: str, delim: str, order: int) -> int:
    """Return the index of the ``order``-th (0-based) occurrence of any char of ``delim``.

    Returns -1 when there are not enough occurrences.
    """
    position = _find_first_of(text, delim, 0)
    if position < 0:
        return -1
    for _ in range(order):
        position = _find_first_of(text, delim, position + 1)
        if position < 0:
            return -1
    return position


def substring(text: str, start_delim: str, end_delim: str, order: int) -> str:
    """Return the text enclosed between the ``order``-th start delimiter and the next end delimiter."""
    first = find_position(text, start_delim, order)
    if first < 0:
        return ""
    last = _find_first_of(text, end_delim, first + 1)
    if last < 0:
        return ""
    return text[first + 1:last]


def ltrim(text: str, chars: str = _WHITESPACE) -> str:
    """Strip ``chars`` from the start of ``text``."""
    return text.lstrip(chars)


def rtrim(text: str, chars: str = _WHITESPACE) -> str:
    """Strip ``chars`` from the end of ``text``."""
    return text.rstrip(chars)


def trim(text: str, chars: str = _WHITESPACE) -> str:
    """Strip ``chars`` from both ends of ``text``."""
    return ltrim(rtrim(text, chars), chars)


def _pack(codec: struct.Struct, buffer: bytearray | memoryview, position: int, value: int) -> None:
    if position < 0 or position + codec.size > len(buffer):
        raise IndexError(
            f"cannot write {codec.size} bytes at position {position} "
            f"in a buffer of {len(buffer)} bytes"
        )
    codec.pack_into(buffer, position, value)


def write_int(buffer: bytearray | memoryview, position: int, value: int) -> None:
    """Write a 32-bit little-endian integer at ``position``."""
    _pack(_INT, buffer, position, value & 0xFFFFFFFF)


def write_long(buffer: bytearray | memoryview, position: int, value: int) -> None:
    """Write a 64-bit little-endian integer at ``position``."""
    _pack(_LONG, buffer, position, value & 0xFFFFFFFFFFFFFFFF)


def write_byte(buffer: bytearray | memoryview, position: int, value: int) -> None:
    """Write a single byte at ``position``."""
    _pack(_BYTE, buffer, position, value & 0xFF)


@dataclass
class Benchmark:
    """Accumulates elapsed time across resume/pause intervals."""

    name: str = ""
    printout_frequency: int = -1
    counter: int = field(default=0, init=False)
    _running_ns: int = field(default=0, init=False, repr=False)
    _start_ns: int | None = field(default=None, init=False, repr=False)

    def resume(self) -> None:
        """Start a timing interval."""
        self._start_ns = time.perf_counter_ns()
        self.counter += 1

    def pause(self) -> None:
        """End the current interval and add it to the running total."""
        if self._start_ns is None:
            raise RuntimeError("pause() called before resume()")
        self._running_ns += time.perf_counter_ns() - self._start_ns

    def reset(self) -> None:
        """Clear the accumulated time and counter."""
        self._running_ns = 0
        self.counter = 0
        self.printout_frequency = -1
        self._start_ns = None

    def time_ns(self) -> int:
        """Accumulated time in nanoseconds."""
        return self._running_ns

    def time_sec(self) -> float:
        """Accumulated time in seconds."""
        return self._running_ns * 1e-9

    def show(self) -> str:
        """Print the benchmark name and accumulated time, and return that line."""
        line = f"[benchmark] {self.name:>24} : time = {self.time_sec():12.4f} "
        print(line)
        return line

    def __enter__(self) -> Benchmark:
        self.resume()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.pause()