from __future__ import annotations

import logging
import re
from typing import Callable

from pyte import control as ctrl
from pyte import escape as esc

from termhtml.enums import ElementKind
from termhtml.services.elements import Element
from termhtml.services.screen import Screen

# Printable runs, tab included; every other C0 control and DEL ends a run.
TEXT_RUN_RE = re.compile(r"[^\x00-\x08\x0a-\x1f\x7f]+")
CSI_RE = re.compile(r"([0-?]*)([ -/]*)([@-~])")
CSI_PARTIAL_RE = re.compile(r"[0-?]*[ -/]*")
STRING_TERMINATOR_RE = re.compile(f"{re.escape(ctrl.BEL)}|{re.escape(ctrl.ST_C0)}")
# Metadata namespaces and keys become markup names in the HTML output.
FIELD_NAME_RE = re.compile(r"[A-Za-z0-9_.-]+")

PRIVATE_MARKERS = "<=>?"
CHARSET_DESIGNATORS = "()*+"

OSC_ELEMENT_KINDS = {
    "1338": ElementKind.image,
    "1339": ElementKind.link,
}


class AnsiParser:
    """Scans terminal output and replays it onto a :class:`Screen`."""

    def __init__(self, screen: Screen) -> None:
        self.screen = screen
        self._controls: dict[str, Callable[[], None]] = {
            ctrl.LF: screen.line_feed,
            ctrl.CR: screen.carriage_return,
            ctrl.BS: screen.backspace,
        }

    def feed(self, text: str) -> None:
        pos = 0
        while pos < len(text):
            run = TEXT_RUN_RE.match(text, pos)
            if run:
                self.screen.append_many(run.group())
                pos = run.end()
                continue
            char = text[pos]
            if char == ctrl.ESC:
                pos = self._escape(text, pos + 1)
                continue
            control = self._controls.get(char)
            if control is not None:
                control()
            pos += 1

    def _escape(self, text: str, pos: int) -> int:
        if pos >= len(text):
            return pos
        introducer = text[pos]
        if introducer == ctrl.ESC:
            # Leave the second ESC to start its own sequence.
            return pos
        if introducer == "[":
            return self._csi(text, pos + 1)
        if introducer == "]":
            return self._string(text, pos + 1, self._osc)
        if introducer == "_":
            return self._string(text, pos + 1, self._apc)
        if introducer == esc.RI:
            self.screen.reverse_line_feed()
        elif introducer in CHARSET_DESIGNATORS:
            return pos + 2
        return pos + 1

    def _csi(self, text: str, pos: int) -> int:
        match = CSI_RE.match(text, pos)
        if match is None:
            partial = CSI_PARTIAL_RE.match(text, pos)
            if partial.end() == len(text):
                logging.debug("Discarding truncated control sequence at offset %d", pos)
            # Resume on the byte that broke the sequence.
            return partial.end()
        params, intermediates, final = match.groups()
        if intermediates or (params and params[0] in PRIVATE_MARKERS):
            return match.end()
        self.screen.apply_escape(final, params.split(";") if params else [])
        return match.end()

    def _string(self, text: str, pos: int, handler: Callable[[str], None]) -> int:
        terminator = STRING_TERMINATOR_RE.search(text, pos)
        if terminator is None:
            logging.debug("Discarding unterminated string sequence at offset %d", pos)
            return len(text)
        handler(text[pos : terminator.start()])
        return terminator.end()

    def _osc(self, body: str) -> None:
        code, _, rest = body.partition(";")
        kind = OSC_ELEMENT_KINDS.get(code)
        if kind is None:
            return
        element = Element.from_osc_fields(kind, parse_fields(rest))
        if element is not None:
            self.screen.append_element(element)

    def _apc(self, body: str) -> None:
        namespace, _, rest = body.partition(";")
        entries = parse_fields(rest)
        if not FIELD_NAME_RE.fullmatch(namespace):
            logging.debug("Discarding metadata with invalid namespace %r", namespace)
            return
        if entries:
            self.screen.set_line_metadata(namespace, entries)


def parse_fields(raw: str) -> dict[str, str]:
    """Split ``key=value;key=value`` pairs.

    Entries without a key, or whose key is not a plain name, are skipped.
    """
    fields: dict[str, str] = {}
    for chunk in raw.split(";"):
        key, sep, value = chunk.partition("=")
        if sep and FIELD_NAME_RE.fullmatch(key):
            fields[key] = value
    return fields


def decode_input(data: bytes | str) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def parse_to_screen(screen: Screen, data: bytes | str) -> Screen:
    AnsiParser(screen).feed(decode_input(data))
    return screen
