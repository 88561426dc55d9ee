"""ANSI terminal colours, decorations, styles and styled text."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class Color(IntEnum):
    """The sixteen standard terminal colours, plus a reset."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37

    BRIGHT_BLACK = 90
    BRIGHT_RED = 91
    BRIGHT_GREEN = 92
    BRIGHT_YELLOW = 93
    BRIGHT_BLUE = 94
    BRIGHT_MAGENTA = 95
    BRIGHT_CYAN = 96
    BRIGHT_WHITE = 97

    RESET = -1


@dataclass(frozen=True)
class Color256:
    """A colour from the 256-colour palette."""

    id: int


@dataclass(frozen=True)
class RGB:
    """A 24-bit true colour."""

    r: int
    g: int
    b: int


class Decoration(IntEnum):
    """Text attributes selected with SGR codes."""

    RESET = 0
    BOLD = 1
    DIM = 2
    ITALIC = 3
    UNDERLINE = 4
    SLOWBLINK = 5
    RAPIDBLINK = 6
    REVERSED = 7
    CONCEAL = 8
    CROSSED = 9

    NO_BOLD = 22
    NO_DIM = 22
    NO_ITALIC = 23
    NO_UNDERLINE = 24
    NO_BLINK = 25
    NO_REVERSED = 27
    NO_CONCEAL = 28
    NO_CROSSED = 29

    def __str__(self) -> str:
        return f"\x1b[{int(self)}m"

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


ColorSpec = "Color | RGB | Color256"


def _resolve(color: Color | RGB | Color256, *, base: int, reset: str, extended: str) -> str:
    if isinstance(color, Color):
        if color is Color.RESET:
            return reset
        return f"\x1b[{base + int(color)}m"
    if isinstance(color, RGB):
        return f"\x1b[{extended};2;{color.r};{color.g};{color.b}m"
    if isinstance(color, Color256):
        return f"\x1b[{extended};5;{color.id}m"
    raise TypeError(f"unsupported colour specification: {color!r}")


@dataclass(frozen=True)
class Foreground:
    """Escape sequence that sets the foreground colour."""

    code: str

    @staticmethod
    def from_color(color: Color | RGB | Color256) -> Foreground:
        """Build the foreground sequence for a colour."""
        return Foreground(_resolve(color, base=0, reset="\x1b[39m", extended="38"))

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class Background:
    """Escape sequence that sets the background colour."""

    code: str

    @staticmethod
    def from_color(color: Color | RGB | Color256) -> Background:
        """Build the background sequence for a colour."""
        return Background(_resolve(color, base=10, reset="\x1b[49m", extended="48"))

    def __str__(self) -> str:
        return self.code


class Style:
    """Foreground, background and decorations applied to a piece of text."""

    def __init__(self) -> None:
        self._foreground = Foreground.from_color(Color.RESET)
        self._background = Background.from_color(Color.RESET)
        self._decorations: list[Decoration] = []

    @property
    def foreground(self) -> Foreground:
        return self._foreground

    @property
    def background(self) -> Background:
        return self._background

    @property
    def decorations(self) -> tuple[Decoration, ...]:
        return tuple(self._decorations)

    def fg(self, foreground: Foreground) -> Style:
        """Set the foreground; returns the style for chaining."""
        self._foreground = foreground
        return self

    def bg(self, background: Background) -> Style:
        """Set the background; returns the style for chaining."""
        self._background = background
        return self

    def add_decoration(self, decoration: Decoration) -> Style:
        """Append a decoration; returns the style for chaining."""
        self._decorations.append(decoration)
        return self

    def __str__(self) -> str:
        decorations = "".join(str(item) for item in self._decorations)
        return f"{decorations}{self._foreground}{self._background}"

    def __repr__(self) -> str:
        return (
            f"Style(foreground={self._foreground!r}, background={self._background!r}, "
            f"decorations={self._decorations!r})"
        )


@dataclass
class Text:
    """A string rendered with a style and followed by an attribute reset."""

    text: str = ""
    style: Style = field(default_factory=Style)

    def __str__(self) -> str:
        return f"{self.style}{self.text}{Decoration.RESET!s}"