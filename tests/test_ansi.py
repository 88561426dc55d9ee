import pytest

from hipoio.ansi import (
    RGB,
    Background,
    Color,
    Color256,
    Decoration,
    Foreground,
    Style,
    Text,
)


def _code(sequence) -> int:
    text = str(sequence)
    assert text.startswith("\x1b[") and text.endswith("m")
    return int(text[2:-1])


def test_foreground_reset_sequence():
    assert str(Foreground.from_color(Color.RESET)) == "\x1b[39m"


def test_background_reset_sequence():
    assert str(Background.from_color(Color.RESET)) == "\x1b[49m"


@pytest.mark.parametrize("color", [c for c in Color if c is not Color.RESET])
def test_foreground_uses_color_value(color):
    assert _code(Foreground.from_color(color)) == int(color)


@pytest.mark.parametrize("color", [c for c in Color if c is not Color.RESET])
def test_background_offset_from_foreground(color):
    fg = _code(Foreground.from_color(color))
    bg = _code(Background.from_color(color))
    assert bg - fg == 10


def test_rgb_sequences():
    assert str(Foreground.from_color(RGB(1, 2, 3))) == "\x1b[38;2;1;2;3m"
    assert str(Background.from_color(RGB(1, 2, 3))).startswith("\x1b[48;2;")


def test_color256_sequences():
    assert str(Foreground.from_color(Color256(200))) == "\x1b[38;5;200m"
    assert str(Background.from_color(Color256(200))).startswith("\x1b[48;5;")


def test_unsupported_color_raises():
    with pytest.raises(TypeError):
        Foreground.from_color("red")
    with pytest.raises(TypeError):
        Background.from_color(42)


def test_decoration_sequence_uses_attribute_value():
    style = Style().add_decoration(Decoration.UNDERLINE)
    assert str(style) == "\x1b[4m" + "\x1b[39m" + "\x1b[49m"
    assert Decoration.NO_DIM is Decoration.NO_BOLD


def test_default_style_is_reset_colours():
    assert str(Style()) == "\x1b[39m" + "\x1b[49m"


def test_style_chaining_returns_same_object():
    style = Style()
    fg = Foreground.from_color(Color.GREEN)
    bg = Background.from_color(Color.BLUE)
    assert style.fg(fg) is style
    assert style.bg(bg) is style
    assert style.add_decoration(Decoration.BOLD) is style
    assert style.foreground == fg
    assert style.background == bg
    assert style.decorations == (Decoration.BOLD,)


def test_style_renders_decorations_then_colours():
    fg = Foreground.from_color(Color.GREEN)
    bg = Background.from_color(Color.BLUE)
    style = Style().add_decoration(Decoration.BOLD).add_decoration(Decoration.ITALIC).fg(fg).bg(bg)
    expected = str(Decoration.BOLD) + str(Decoration.ITALIC) + str(fg) + str(bg)
    assert str(style) == expected


def test_text_wraps_with_style_and_reset():
    style = Style().fg(Foreground.from_color(Color.RED))
    text = Text("hello", style)
    assert str(text) == str(style) + "hello" + str(Decoration.RESET)


def test_default_text_is_empty_with_default_style():
    assert str(Text()) == str(Style()) + str(Decoration.RESET)