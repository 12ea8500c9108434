import pytest

from termhtml.enums import ElementKind
from termhtml.services.cells import EMPTY_CELL, Cell
from termhtml.services.elements import Element
from termhtml.services.screen import END_OF_LINE, Screen, ansi_int
from termhtml.services.style import EMPTY_STYLE

LINK = Element(kind=ElementKind.link, url="https://example.com", content="docs")


def _screen_with(*rows: str) -> Screen:
    screen = Screen()
    for idx, row in enumerate(rows):
        if idx:
            screen.line_feed()
        screen.append_many(row)
    return screen


def _row_text(screen: Screen, row: int) -> str:
    return "".join(cell.char for cell in screen.lines[row].cells)


def test_new_screen_is_empty() -> None:
    screen = Screen()
    assert screen.lines == []
    assert (screen.x, screen.y) == (0, 0)
    assert screen.style == EMPTY_STYLE
    assert screen.as_plain_text() == ""
    assert screen.as_html() == ""


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("", 1),
        ("7", 7),
        ("0", 0),
        ("+4", 4),
        ("-3", -3),
        ("abc", 0),
        (" 3", 0),
        ("1_0", 0),
        ("999", 127),
        ("-999", -128),
    ],
)
def test_ansi_int(value: str, expected: int) -> None:
    assert ansi_int(value) == expected


@pytest.mark.parametrize("count", ["", "0", "1", "5", "127", "999", "-3", "abc", ";"])
def test_upward_and_backward_moves_never_go_negative(count: str) -> None:
    screen = Screen()
    screen.x, screen.y = 2, 2
    screen.move_up(count)
    screen.move_backward(count)
    assert screen.x >= 0
    assert screen.y >= 0


def test_moves_use_parsed_counts() -> None:
    screen = Screen()
    screen.x, screen.y = 4, 4
    screen.move_up("")
    screen.move_backward("abc")
    assert (screen.x, screen.y) == (4, 3)
    screen.move_up("10")
    screen.move_backward("10")
    assert (screen.x, screen.y) == (0, 0)


def test_downward_and_forward_moves_are_unclamped_and_lazy() -> None:
    screen = Screen()
    screen.move_down("3")
    screen.move_forward("200")
    assert (screen.x, screen.y) == (127, 3)
    assert screen.lines == []


def test_write_beyond_bounds_grows_buffer_with_empty_cells() -> None:
    screen = Screen()
    screen.x, screen.y = 3, 2
    screen.append_char("Z")
    assert len(screen.lines) == 3
    assert screen.lines[0].cells == []
    assert screen.lines[1].cells == []
    assert screen.lines[2].cells == [EMPTY_CELL, EMPTY_CELL, EMPTY_CELL, Cell("Z")]
    assert (screen.x, screen.y) == (4, 2)


def test_write_cell_does_not_move_cursor() -> None:
    screen = Screen()
    screen.write_cell("a")
    screen.write_cell("b")
    assert _row_text(screen, 0) == "b"
    assert screen.x == 0


def test_ensure_writable_returns_current_line() -> None:
    screen = Screen()
    screen.x, screen.y = 1, 1
    line = screen.ensure_writable()
    assert line is screen.lines[1]
    assert len(line.cells) == 2


def test_append_element_occupies_one_cell() -> None:
    screen = Screen()
    screen.append_element(LINK)
    screen.append_char("!")
    cells = screen.lines[0].cells
    assert cells[0].is_element
    assert cells[0].element is LINK
    assert not cells[1].is_element
    assert screen.x == 2


def test_cells_are_stamped_with_active_style() -> None:
    screen = Screen()
    screen.append_char("a")
    screen.set_active_color(["1"])
    screen.append_char("b")
    cells = screen.lines[0].cells
    assert cells[0].style == EMPTY_STYLE
    assert cells[1].style.bold
    assert cells[1].style is screen.style


def test_set_line_metadata_merges_namespaces() -> None:
    screen = Screen()
    screen.set_line_metadata("bk", {"t": "1", "a": "x"})
    screen.set_line_metadata("bk", {"t": "2", "b": "y"})
    screen.set_line_metadata("other", {"k": "v"})
    assert screen.lines[0].metadata == {
        "bk": {"t": "2", "a": "x", "b": "y"},
        "other": {"k": "v"},
    }


def test_set_line_metadata_materialises_row_and_copies_entries() -> None:
    screen = Screen()
    screen.y = 1
    entries = {"t": "1"}
    screen.set_line_metadata("bk", entries)
    entries["t"] = "changed"
    assert len(screen.lines) == 2
    assert screen.lines[1].cells == [EMPTY_CELL]
    assert screen.lines[1].metadata == {"bk": {"t": "1"}}


def test_direct_controls() -> None:
    screen = Screen()
    screen.append_many("ab")
    screen.line_feed()
    assert (screen.x, screen.y) == (0, 1)
    screen.reverse_line_feed()
    screen.reverse_line_feed()
    assert screen.y == 0
    screen.backspace()
    assert screen.x == 0
    screen.x = 2
    screen.backspace()
    assert screen.x == 1
    screen.carriage_return()
    assert screen.x == 0


def test_clear_range_to_end_truncates() -> None:
    screen = _screen_with("ABCDE")
    screen.clear_range(0, 1, END_OF_LINE)
    assert _row_text(screen, 0) == "A"


def test_clear_range_reaching_last_column_truncates() -> None:
    screen = _screen_with("ABCDE")
    screen.clear_range(0, 1, 4)
    assert len(screen.lines[0].cells) == 1


def test_clear_range_inside_content_blanks_and_keeps_length() -> None:
    screen = _screen_with("ABCDE")
    screen.clear_range(0, 1, 2)
    assert _row_text(screen, 0) == "A  DE"
    assert screen.lines[0].cells[1] == EMPTY_CELL


def test_clear_range_clamps_negative_start() -> None:
    screen = _screen_with("ABCDE")
    screen.clear_range(0, -4, 1)
    assert _row_text(screen, 0) == "  CDE"


@pytest.mark.parametrize(
    ("row", "x_start", "x_end"),
    [
        (5, 0, 1),
        (-1, 0, 1),
        (0, 5, 9),
        (0, 3, 1),
    ],
)
def test_clear_range_ignores_invalid_ranges(row: int, x_start: int, x_end: int) -> None:
    screen = _screen_with("ABCDE")
    screen.clear_range(row, x_start, x_end)
    assert _row_text(screen, 0) == "ABCDE"


def test_plain_text_drops_elements_and_strips_only_the_end() -> None:
    screen = Screen()
    screen.append_element(LINK)
    screen.line_feed()
    screen.append_many("a  ")
    screen.line_feed()
    screen.append_many("b \t ")
    assert screen.as_plain_text() == "\na  \nb"


def test_as_html_delegates_to_line_renderer() -> None:
    screen = _screen_with("a", "bc")
    seen = []

    def render(cells, metadata):
        seen.append(metadata)
        return str(len(cells))

    assert screen.as_html(render) == "1\n2"
    assert seen == [{}, {}]


def test_negative_column_writes_are_skipped() -> None:
    screen = _screen_with("AB")
    screen.carriage_return()
    screen.move_forward("-1")
    assert screen.ensure_writable() is None
    screen.append_char("Z")
    assert _row_text(screen, 0) == "AB"
    assert screen.x == 0


def test_negative_row_writes_are_skipped() -> None:
    screen = Screen()
    screen.move_down("-1")
    screen.append_char("Z")
    screen.set_line_metadata("bk", {"t": "1"})
    assert screen.lines == []
    assert screen.y == -1


def test_unknown_escape_code_is_a_no_op() -> None:
    screen = _screen_with("AB")
    screen.apply_escape("H", ["5", "5"])
    assert (screen.x, screen.y) == (2, 0)
    assert _row_text(screen, 0) == "AB"
