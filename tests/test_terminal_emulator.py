import pytest

from termhtml.services.terminal_emulator import InputTooLargeError, TerminalEmulator


def test_terminal_emulator_strips_ansi_and_renders_lines() -> None:
    raw = "\x1b[31mHello\x1b[0m, \x1b[32mWorld\x1b[0m!\nSecond line\n"
    emulator = TerminalEmulator()
    rendered = emulator.render_text(raw)
    assert rendered.splitlines() == ["Hello, World!", "Second line"]


def test_terminal_emulator_handles_carriage_return() -> None:
    raw = "Loading-\rLoading\\"
    emulator = TerminalEmulator()
    rendered = emulator.render_text(raw)
    # Carriage return rewrites the same line; final spinner glyph should be backslash.
    assert rendered == "Loading\\"


def test_terminal_emulator_renders_html_spans() -> None:
    emulator = TerminalEmulator()
    assert emulator.render(b"\x1b[31mred\x1b[0m plain") == '<span class="term-fg-red">red</span> plain'


def test_terminal_emulator_renders_each_input_on_a_fresh_screen() -> None:
    emulator = TerminalEmulator()
    emulator.render("first\nrun")
    assert emulator.render_text("again") == "again"


def test_terminal_emulator_rejects_oversized_input() -> None:
    emulator = TerminalEmulator(max_input_bytes=4)
    with pytest.raises(InputTooLargeError):
        emulator.render("hello")
    assert emulator.render_text("hell") == "hell"


def test_terminal_emulator_zero_limit_is_honoured() -> None:
    emulator = TerminalEmulator(max_input_bytes=0)
    with pytest.raises(InputTooLargeError):
        emulator.render("a")
    assert emulator.render("") == ""
