from __future__ import annotations

from termhtml.config import settings
from termhtml.services.parser import parse_to_screen
from termhtml.services.screen import Screen


class InputTooLargeError(ValueError):
    pass


class TerminalEmulator:
    """Renders raw terminal output (with ANSI) into HTML or plain text."""

    def __init__(self, max_input_bytes: int | None = None) -> None:
        self.max_input_bytes = settings.max_input_bytes if max_input_bytes is None else max_input_bytes

    def screen_for(self, raw: bytes | str) -> Screen:
        size = len(raw.encode("utf-8")) if isinstance(raw, str) else len(raw)
        if size > self.max_input_bytes:
            raise InputTooLargeError(f"Input of {size} bytes exceeds the {self.max_input_bytes} byte limit")
        return parse_to_screen(Screen(), raw)

    def render(self, raw: bytes | str) -> str:
        return self.screen_for(raw).as_html()

    def render_text(self, raw: bytes | str) -> str:
        return self.screen_for(raw).as_plain_text()
