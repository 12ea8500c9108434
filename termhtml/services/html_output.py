from __future__ import annotations

from html import escape
from itertools import groupby
from typing import Mapping, Sequence

from termhtml.services.cells import Cell
from termhtml.services.style import Style

BLANK_LINE_HTML = "&nbsp;"


def render_line(cells: Sequence[Cell], metadata: Mapping[str, Mapping[str, str]]) -> str:
    """Serialize one screen line to an HTML fragment.

    Runs of cells sharing a style collapse into a single ``<span>``; metadata
    namespaces are emitted first as ``<?namespace key="value"?>`` markers.
    """
    parts = [_metadata_marker(namespace, entries) for namespace, entries in sorted(metadata.items())]
    if not cells:
        parts.append(BLANK_LINE_HTML)
        return "".join(parts)
    for style, run in groupby(cells, key=lambda cell: cell.style):
        parts.append(_wrap(style, "".join(_cell_html(cell) for cell in run)))
    return "".join(parts)


def _cell_html(cell: Cell) -> str:
    if cell.element is not None:
        return cell.element.as_html()
    return escape(cell.char, quote=False)


def _wrap(style: Style, body: str) -> str:
    if style.is_plain:
        return body
    attrs = []
    classes = style.css_classes()
    if classes:
        attrs.append(f'class="{" ".join(classes)}"')
    inline = style.css_style()
    if inline:
        attrs.append(f'style="{inline}"')
    return f"<span {' '.join(attrs)}>{body}</span>"


def _metadata_marker(namespace: str, entries: Mapping[str, str]) -> str:
    pairs = "".join(
        f' {escape(key, quote=True)}="{escape(value, quote=True)}"' for key, value in entries.items()
    )
    return f"<?{escape(namespace, quote=True)}{pairs}?>"
