from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Sequence

from pyte import graphics

_SGR_CODE_RE = re.compile(r"[0-9]+")

# SGR codes that switch a single attribute on.
_ATTRIBUTES_ON = {
    1: "bold",
    2: "faint",
    3: "italic",
    4: "underline",
    5: "blink",
    6: "blink",
    7: "inverse",
    9: "strike",
}

# SGR codes that switch one or more attributes off.
_ATTRIBUTES_OFF = {
    21: ("bold", "faint"),
    22: ("bold", "faint"),
    23: ("italic",),
    24: ("underline",),
    25: ("blink",),
    27: ("inverse",),
    29: ("strike",),
}


@dataclass(frozen=True)
class Style:
    """Graphic rendition stamped onto every cell written while it is active.

    Colours are either a ``pyte.graphics`` colour name (``"red"``,
    ``"brightblue"``) or a ``#rrggbb`` hex string for palette and true colour
    sequences. ``None`` means the terminal default.
    """

    fg: str | None = None
    bg: str | None = None
    bold: bool = False
    faint: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    inverse: bool = False
    strike: bool = False

    @property
    def is_plain(self) -> bool:
        return self == EMPTY_STYLE

    def color(self, parameters: Sequence[str]) -> Style:
        """Return the style that results from applying SGR ``parameters``."""
        codes = [_sgr_code(param) for param in parameters] or [0]
        style = self
        idx = 0
        while idx < len(codes):
            code = codes[idx]
            idx += 1
            if code is None:
                continue
            if code == 0:
                style = EMPTY_STYLE
            elif code in _ATTRIBUTES_ON:
                style = replace(style, **{_ATTRIBUTES_ON[code]: True})
            elif code in _ATTRIBUTES_OFF:
                style = replace(style, **dict.fromkeys(_ATTRIBUTES_OFF[code], False))
            elif code in graphics.FG_ANSI:
                style = replace(style, fg=_named_colour(graphics.FG_ANSI[code]))
            elif code in graphics.BG_ANSI:
                style = replace(style, bg=_named_colour(graphics.BG_ANSI[code]))
            elif 90 <= code <= 97:
                style = replace(style, fg="bright" + graphics.FG_ANSI[code - 60])
            elif 100 <= code <= 107:
                style = replace(style, bg="bright" + graphics.BG_ANSI[code - 60])
            elif code in (graphics.FG_256, graphics.BG_256):
                colour, idx = _extended_colour(codes, idx)
                if colour is None:
                    continue
                if code == graphics.FG_256:
                    style = replace(style, fg=colour)
                else:
                    style = replace(style, bg=colour)
        return style

    def css_classes(self) -> list[str]:
        classes: list[str] = []
        if self.fg and not self.fg.startswith("#"):
            classes.append(f"term-fg-{self.fg}")
        if self.bg and not self.bg.startswith("#"):
            classes.append(f"term-bg-{self.bg}")
        for attribute in ("bold", "faint", "italic", "underline", "blink", "inverse", "strike"):
            if getattr(self, attribute):
                classes.append(f"term-{attribute}")
        return classes

    def css_style(self) -> str:
        declarations: list[str] = []
        if self.fg and self.fg.startswith("#"):
            declarations.append(f"color: {self.fg}")
        if self.bg and self.bg.startswith("#"):
            declarations.append(f"background-color: {self.bg}")
        return ";".join(declarations)


EMPTY_STYLE = Style()


def _sgr_code(param: str) -> int | None:
    if param == "":
        return 0
    if not _SGR_CODE_RE.fullmatch(param):
        return None
    return int(param)


def _named_colour(name: str) -> str | None:
    return None if name == "default" else name


def _extended_colour(codes: list[int | None], idx: int) -> tuple[str | None, int]:
    """Decode a ``5;n`` or ``2;r;g;b`` tail starting at ``codes[idx]``."""
    if idx >= len(codes):
        return None, idx
    mode = codes[idx]
    if mode == 5:
        index = codes[idx + 1] if idx + 1 < len(codes) else None
        if index is None or index >= len(graphics.FG_BG_256):
            return None, min(idx + 2, len(codes))
        return "#" + graphics.FG_BG_256[index], idx + 2
    if mode == 2:
        channels = codes[idx + 1 : idx + 4]
        if len(channels) < 3 or any(channel is None or channel > 255 for channel in channels):
            return None, idx + 1 + len(channels)
        red, green, blue = channels
        return f"#{red:02x}{green:02x}{blue:02x}", idx + 4
    return None, idx + 1
