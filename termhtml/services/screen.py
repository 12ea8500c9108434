from __future__ import annotations

import logging
import re
import sys
from typing import Callable, Iterable, Mapping, Sequence

from pyte import escape as esc

from termhtml.services.cells import Cell, Line
from termhtml.services.elements import Element
from termhtml.services.html_output import render_line
from termhtml.services.style import EMPTY_STYLE, Style

START_OF_LINE = 0
END_OF_LINE = sys.maxsize

_ANSI_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT8_MIN, _INT8_MAX = -128, 127

LineRenderer = Callable[[Sequence[Cell], Mapping[str, Mapping[str, str]]], str]


def ansi_int(value: str) -> int:
    """Parse a cursor-movement count the way terminals tolerate it.

    An omitted count means 1, anything that is not a (signed) decimal means 0
    and values outside a signed byte saturate.
    """
    if value == "":
        return 1
    if not _ANSI_INT_RE.fullmatch(value):
        return 0
    return max(_INT8_MIN, min(_INT8_MAX, int(value)))


class Screen:
    """Lazily-growing grid of cells driven by terminal output.

    Rows and columns only materialise when something is written to them, so
    the cursor may sit beyond the end of the buffer.
    """

    def __init__(self, style: Style = EMPTY_STYLE) -> None:
        self.x = 0
        self.y = 0
        self.lines: list[Line] = []
        self.style = style

    # Cursor movement

    def move_up(self, count: str = "") -> None:
        self.y = max(0, self.y - ansi_int(count))

    def move_down(self, count: str = "") -> None:
        self.y += ansi_int(count)

    def move_forward(self, count: str = "") -> None:
        self.x += ansi_int(count)

    def move_backward(self, count: str = "") -> None:
        self.x = max(0, self.x - ansi_int(count))

    def line_feed(self) -> None:
        self.x = 0
        self.y += 1

    def reverse_line_feed(self) -> None:
        if self.y > 0:
            self.y -= 1

    def carriage_return(self) -> None:
        self.x = 0

    def backspace(self) -> None:
        if self.x > 0:
            self.x -= 1

    # Writing

    def ensure_writable(self) -> Line | None:
        """Grow the buffer so that the cell under the cursor exists.

        Returns ``None`` when the cursor sits at a negative coordinate.
        """
        if self.x < 0 or self.y < 0:
            return None
        while len(self.lines) <= self.y:
            self.lines.append(Line())
        line = self.lines[self.y]
        line.grow(self.x + 1)
        return line

    def write_cell(self, content: str | Element) -> None:
        line = self.ensure_writable()
        if line is None:
            return
        if isinstance(content, Element):
            line.cells[self.x] = Cell(element=content, style=self.style)
        else:
            line.cells[self.x] = Cell(char=content, style=self.style)

    def append_char(self, char: str) -> None:
        self.write_cell(char)
        self.x += 1

    def append_many(self, chars: Iterable[str]) -> None:
        for char in chars:
            self.append_char(char)

    def append_element(self, element: Element) -> None:
        self.write_cell(element)
        self.x += 1

    def set_line_metadata(self, namespace: str, entries: Mapping[str, str]) -> None:
        line = self.ensure_writable()
        if line is None:
            return
        line.merge_metadata(namespace, dict(entries))

    def set_active_color(self, parameters: Sequence[str]) -> None:
        self.style = self.style.color(parameters)

    def clear_range(self, row: int, x_start: int, x_end: int) -> None:
        if row < 0 or row >= len(self.lines):
            return
        self.lines[row].clear(x_start, x_end)

    # Escape dispatch

    def apply_escape(self, code: str, parameters: Sequence[str]) -> None:
        """Apply the control sequence ending in ``code`` to the screen."""
        if not parameters:
            parameters = [""]
        handler = _ESCAPE_HANDLERS.get(code)
        if handler is None:
            logging.debug("Ignoring unsupported escape code %r %r", code, list(parameters))
            return
        handler(self, list(parameters))

    def _select_graphic_rendition(self, parameters: list[str]) -> None:
        self.set_active_color(parameters)

    def _cursor_to_column_zero(self, parameters: list[str]) -> None:
        self.x = 0

    def _erase_in_display(self, parameters: list[str]) -> None:
        mode = parameters[0]
        if mode in ("0", ""):
            self.clear_range(self.y, self.x, END_OF_LINE)
            del self.lines[self.y + 1 :]
        elif mode == "1":
            self.clear_range(self.y, START_OF_LINE, self.x)
            if len(self.lines) > self.y:
                del self.lines[: self.y]
            self.y = 0
        elif mode in ("2", "3"):
            # No scrollback is kept, so 3 behaves like 2.
            self.lines = []
            self.x = 0
            self.y = 0

    def _erase_in_line(self, parameters: list[str]) -> None:
        mode = parameters[0]
        if mode in ("0", ""):
            self.clear_range(self.y, self.x, END_OF_LINE)
        elif mode == "1":
            self.clear_range(self.y, START_OF_LINE, self.x)
        elif mode == "2":
            self.clear_range(self.y, START_OF_LINE, END_OF_LINE)

    def _cursor_up(self, parameters: list[str]) -> None:
        self.move_up(parameters[0])

    def _cursor_down(self, parameters: list[str]) -> None:
        self.move_down(parameters[0])

    def _cursor_forward(self, parameters: list[str]) -> None:
        self.move_forward(parameters[0])

    def _cursor_back(self, parameters: list[str]) -> None:
        self.move_backward(parameters[0])

    # Rendering

    def as_html(self, render: LineRenderer = render_line) -> str:
        return "\n".join(render(line.cells, line.metadata) for line in self.lines)

    def as_plain_text(self) -> str:
        """Flatten the screen to text, dropping embedded elements."""
        rows = ["".join(cell.char for cell in line.cells if not cell.is_element) for line in self.lines]
        return "\n".join(rows).rstrip(" \t")


_ESCAPE_HANDLERS: dict[str, Callable[[Screen, list[str]], None]] = {
    esc.SGR: Screen._select_graphic_rendition,
    esc.CHA: Screen._cursor_to_column_zero,
    esc.ED: Screen._erase_in_display,
    esc.EL: Screen._erase_in_line,
    esc.CUU: Screen._cursor_up,
    esc.CUD: Screen._cursor_down,
    esc.CUF: Screen._cursor_forward,
    esc.CUB: Screen._cursor_back,
}
