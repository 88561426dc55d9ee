"""Line charts drawn with box-drawing characters for the terminal."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from enum import Enum

from hipoio.ansi import Color, Foreground, Style, Text

PI = 3.14159265358979323846
NOT_A_NUMBER = math.nan
INFINITY = math.inf
NEG_INFINITY = -math.inf

_LINE_SYMBOLS = {
    "empty": " ",
    "center": "┼",
    "axis": "┤",
    "c1": "╶",
    "c2": "╴",
    "parellel": "─",
    "down": "╰",
    "up": "╭",
    "ldown": "╮",
    "lup": "╯",
    "vertical": "│",
}


class ChartType(Enum):
    LINE = 0
    CIRCLE = 1


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _default_styles() -> list[Style]:
    return [
        Style().fg(Foreground.from_color(color))
        for color in (
            Color.RED,
            Color.CYAN,
            Color.MAGENTA,
            Color.YELLOW,
            Color.WHITE,
            Color.BRIGHT_WHITE,
        )
    ]


class Asciichart:
    """Configurable chart of one or more numeric series."""

    def __init__(
        self,
        series: Sequence[float] | Sequence[Sequence[float]] | Mapping[str, Sequence[float]],
    ) -> None:
        self._series = self._init_series(series)
        self._type = ChartType.LINE
        self._height = NOT_A_NUMBER
        self._min = INFINITY
        self._max = NEG_INFINITY
        self._offset = 3
        self._legend_padding = 10
        self._label_width = 0
        self._show_legend = False
        self._styles = _default_styles()
        self._symbols = dict(_LINE_SYMBOLS)

    @staticmethod
    def _init_series(series) -> dict[str, list[float]]:
        if isinstance(series, Mapping):
            return {str(name): list(values) for name, values in series.items()}
        items = list(series)
        if items and all(isinstance(item, Sequence) for item in items):
            return {f"series {n}": list(values) for n, values in enumerate(items)}
        return {"series 0": items}

    def type(self, chart_type: ChartType) -> Asciichart:
        """Select the chart type."""
        self._type = chart_type
        return self

    def height(self, height: float) -> Asciichart:
        """Set the chart height in rows."""
        self._height = height
        return self

    def styles(self, styles: Sequence[Style]) -> Asciichart:
        """Set the styles cycled through by the series."""
        styles = list(styles)
        if not styles:
            raise ValueError("at least one style is required")
        self._styles = styles
        return self

    def min(self, value: float) -> Asciichart:
        """Set the lower bound; ignored when the data go lower."""
        self._min = value
        return self

    def max(self, value: float) -> Asciichart:
        """Set the upper bound; ignored when the data go higher."""
        self._max = value
        return self

    def offset(self, offset: int) -> Asciichart:
        """Set the distance of the axis from the left edge."""
        self._offset = offset
        return self

    def legend_padding(self, padding: int) -> Asciichart:
        """Set the padding between the legend and the labels."""
        self._legend_padding = padding
        return self

    def show_legend(self, show: bool) -> Asciichart:
        """Enable or disable the legend."""
        self._show_legend = show
        return self

    def symbols(self, symbols: Mapping[str, str]) -> Asciichart:
        """Replace the symbols used to draw the chart."""
        self._symbols = dict(symbols)
        return self

    def plot(self) -> str:
        """Render the chart."""
        if self._type is ChartType.LINE:
            return self._plot_line()
        return ""

    def _symbol(self, name: str) -> str:
        return self._symbols.get(name, "")

    def _format_label(self, value: int) -> str:
        width = self._label_width
        if self._show_legend:
            width += self._legend_padding
        return str(value).rjust(width)

    @staticmethod
    def _put_string(screen: list[list[Text]], text: str, style: Style, row: int, col: int) -> None:
        for i, char in enumerate(text):
            if char == "\n":
                row += 1
            else:
                screen[row][col + i] = Text(char, style)

    def _plot_line(self) -> str:
        if any(not trace for trace in self._series.values()) or not self._series:
            raise ValueError("every series must contain at least one value")

        for trace in self._series.values():
            for item in trace:
                self._min = min(item, self._min)
                self._max = max(item, self._max)

        value_range = self._max - self._min
        if value_range == 0:
            value_range = 1

        self._label_width = max(len(str(int(self._max))), len(str(int(self._min))))

        width = max(len(trace) for trace in self._series.values())

        legend_cols = legend_rows = 0
        if self._show_legend:
            legend_rows = len(self._series)
            legend_cols = max(len(name) for name in self._series)

        offset = int(self._offset) + legend_cols
        width += offset

        if math.isnan(self._height):
            self._height = value_range
        self._height = max(float(legend_rows), self._height)

        ratio = self._height / value_range
        min2 = _round(self._min * ratio)
        max2 = _round(self._max * ratio)

        rows = max2 - min2 or 1
        cols = width

        empty = self._symbol("empty")
        screen = [[Text(empty) for _ in range(cols)] for _ in range(rows + 1)]

        axis_style = Style().fg(Foreground.from_color(Color.CYAN))
        for y in range(min2, max2 + 1):
            label = self._format_label(_round(self._min + (y - min2) * value_range / rows))
            row = rows - (y - min2)
            screen[row][legend_cols] = Text(label, axis_style)
            symbol = self._symbol("center") if y == 0 else self._symbol("axis")
            screen[row][offset - 1] = Text(symbol, axis_style)

        if self._show_legend:
            for j, name in enumerate(self._series):
                self._put_string(screen, name, self._styles[j % len(self._styles)], j, 0)

        for j, trace in enumerate(self._series.values()):
            style = self._styles[j % len(self._styles)]
            first = _round(trace[0] * ratio) - min2
            screen[rows - first][offset - 1] = Text(self._symbol("center"), style)

            for i, (current, following) in enumerate(zip(trace, trace[1:])):
                y0 = _round(current * ratio) - min2
                y1 = _round(following * ratio) - min2
                column = i + offset
                if y0 == y1:
                    screen[rows - y0][column] = Text(self._symbol("parellel"), style)
                    continue
                falling = y0 > y1
                screen[rows - y1][column] = Text(
                    self._symbol("down") if falling else self._symbol("up"), style
                )
                screen[rows - y0][column] = Text(
                    self._symbol("ldown") if falling else self._symbol("lup"), style
                )
                for y in range(min(y0, y1) + 1, max(y0, y1)):
                    screen[rows - y][column] = Text(self._symbol("vertical"), style)

        return "".join("".join(str(cell) for cell in line) + "\n" for line in screen)