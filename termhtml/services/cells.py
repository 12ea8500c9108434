from __future__ import annotations

from dataclasses import dataclass, field

from termhtml.services.elements import Element
from termhtml.services.style import EMPTY_STYLE, Style


@dataclass(frozen=True)
class Cell:
    """One grid position: a character or an embedded element, plus its style."""

    char: str = " "
    element: Element | None = None
    style: Style = EMPTY_STYLE

    @property
    def is_element(self) -> bool:
        return self.element is not None


EMPTY_CELL = Cell()


@dataclass
class Line:
    """A row of cells plus namespaced metadata, e.g. ``{"bk": {"t": "1234"}}``."""

    cells: list[Cell] = field(default_factory=list)
    metadata: dict[str, dict[str, str]] = field(default_factory=dict)

    def grow(self, width: int) -> None:
        # Pad with empty cells so that index ``width - 1`` exists.
        missing = width - len(self.cells)
        if missing > 0:
            self.cells.extend([EMPTY_CELL] * missing)

    def clear(self, x_start: int, x_end: int) -> None:
        """Clear the inclusive column range ``[x_start, x_end]``.

        A range reaching the last cell truncates the row to ``x_start``
        cells; an interior range is blanked in place and keeps the length.
        """
        x_start = max(0, x_start)
        if x_end < x_start:
            return
        if x_start >= len(self.cells):
            return
        if x_end >= len(self.cells) - 1:
            del self.cells[x_start:]
            return
        for idx in range(x_start, x_end + 1):
            self.cells[idx] = EMPTY_CELL

    def merge_metadata(self, namespace: str, entries: dict[str, str]) -> None:
        existing = self.metadata.get(namespace)
        if existing is None:
            self.metadata[namespace] = dict(entries)
            return
        existing.update(entries)
