import pytest

from termscreen.cells import Character, HistoryBuffer, LineProperty
from termscreen.selection import SelectionMixin


def _cells(text):
    return [Character(ord(c)) for c in text]


class Host(SelectionMixin):
    def __init__(self, rows, columns=10, history=()):
        self._columns = columns
        self._screen_lines = [_cells(row) for row in rows]
        self._line_properties = [LineProperty.DEFAULT] * len(rows)
        self._history = HistoryBuffer()
        for text, wrapped in history:
            self._history.add_line(_cells(text), wrapped)
        self._cursor_x = 0
        self._cursor_y = 0
        SelectionMixin.clear_selection(self)


def test_no_selection_reports_cursor_position():
    host = Host(["abc", "def"])
    host._cursor_x, host._cursor_y = 2, 1
    assert SelectionMixin.is_selection_valid(host) is False
    assert SelectionMixin.selection_start(host) == (2, 1)
    assert SelectionMixin.selection_end(host) == (2, 1)
    assert SelectionMixin.selected_text(host, True) == ""


def test_cursor_position_offset_by_history():
    host = Host(["abc"], history=[("old", False)])
    host._cursor_x, host._cursor_y = 1, 0
    assert SelectionMixin.selection_start(host) == (1 + 1, 0 + 1)


def test_start_and_end_define_range():
    host = Host(["hello", "world"])
    SelectionMixin.set_selection_start(host, 1, 0, False)
    SelectionMixin.set_selection_end(host, 3, 1)
    assert SelectionMixin.is_selection_valid(host) is True
    assert SelectionMixin.selection_start(host) == (1, 0)
    assert SelectionMixin.selection_end(host) == (3, 1)
    assert SelectionMixin.is_selected(host, 2, 0) is True
    assert SelectionMixin.is_selected(host, 3, 1) is True
    assert SelectionMixin.is_selected(host, 0, 0) is False
    assert SelectionMixin.is_selected(host, 4, 1) is False


def test_end_before_start_swaps_corners():
    host = Host(["hello", "world"])
    SelectionMixin.set_selection_start(host, 3, 1, False)
    SelectionMixin.set_selection_end(host, 1, 0)
    assert SelectionMixin.selection_start(host) == (1, 0)
    assert SelectionMixin.selection_end(host) == (3, 1)


def test_start_past_right_edge_is_pulled_back():
    host = Host(["hello"], columns=10)
    SelectionMixin.set_selection_start(host, 10, 0, False)
    assert SelectionMixin.selection_start(host) == (9, 0)


def test_end_without_start_is_ignored():
    host = Host(["hello"])
    SelectionMixin.set_selection_end(host, 3, 0)
    assert SelectionMixin.is_selection_valid(host) is False


def test_clear_selection():
    host = Host(["hello"])
    SelectionMixin.set_selection_start(host, 0, 0, False)
    SelectionMixin.set_selection_end(host, 4, 0)
    SelectionMixin.clear_selection(host)
    assert SelectionMixin.is_selection_valid(host) is False
    assert SelectionMixin.selected_text(host, True) == ""


def test_column_mode_membership():
    host = Host(["abcd", "efgh", "ijkl"])
    SelectionMixin.set_selection_start(host, 1, 0, True)
    SelectionMixin.set_selection_end(host, 2, 1)
    assert SelectionMixin.is_selected(host, 1, 1) is True
    assert SelectionMixin.is_selected(host, 2, 0) is True
    assert SelectionMixin.is_selected(host, 3, 0) is False
    assert SelectionMixin.is_selected(host, 0, 1) is False
    assert SelectionMixin.is_selected(host, 1, 2) is False


def test_selected_text_with_and_without_line_breaks():
    host = Host(["hello", "world"])
    SelectionMixin.set_selection_start(host, 0, 0, False)
    SelectionMixin.set_selection_end(host, 4, 1)
    assert SelectionMixin.selected_text(host, True) == "hello\nworld"
    assert SelectionMixin.selected_text(host, False) == "helloworld"


def test_wrapped_line_has_no_break():
    host = Host(["hello", "world"])
    host._line_properties[0] = LineProperty.WRAPPED
    SelectionMixin.set_selection_start(host, 0, 0, False)
    SelectionMixin.set_selection_end(host, 4, 1)
    assert SelectionMixin.selected_text(host, True) == "helloworld"


def test_trailing_whitespace_is_dropped():
    host = Host(["ab   "])
    SelectionMixin.set_selection_start(host, 0, 0, False)
    SelectionMixin.set_selection_end(host, 9, 0)
    assert SelectionMixin.selected_text(host, True) == "ab"


def test_column_mode_text():
    host = Host(["abcd", "efgh"])
    SelectionMixin.set_selection_start(host, 1, 0, True)
    SelectionMixin.set_selection_end(host, 2, 1)
    assert SelectionMixin.selected_text(host, True) == "bc\nfg"


def test_text_range_spans_history_and_screen_and_clears():
    host = Host(["new"], history=[("old", False)])
    assert SelectionMixin.text_range(host, 0, 1) == "old\nnew"
    assert SelectionMixin.is_selection_valid(host) is False


def test_text_range_respects_wrapped_history():
    host = Host(["new"], history=[("old", True)])
    assert SelectionMixin.text_range(host, 0, 1) == "oldnew"


def test_history_line():
    host = Host(["new"], history=[("first", False), ("second", False)])
    assert SelectionMixin.history_line(host, 0) == "first"
    assert SelectionMixin.history_line(host, 1) == "second"
    assert SelectionMixin.history_line(host, 2) == "new"


def test_check_selection_clears_overlap():
    host = Host(["hello", "world"])
    SelectionMixin.set_selection_start(host, 0, 0, False)
    SelectionMixin.set_selection_end(host, 4, 1)
    SelectionMixin.check_selection(host, 2, 3)
    assert SelectionMixin.is_selection_valid(host) is False


def test_check_selection_keeps_disjoint_selection():
    host = Host(["hello", "world"])
    SelectionMixin.set_selection_start(host, 0, 1, False)
    SelectionMixin.set_selection_end(host, 4, 1)
    SelectionMixin.check_selection(host, 0, 3)
    assert SelectionMixin.is_selection_valid(host) is True
    assert SelectionMixin.selected_text(host, True) == "world"


@pytest.mark.parametrize("row", ["x", "abc", "hello"])
def test_full_line_round_trip(row):
    host = Host([row])
    SelectionMixin.set_selection_start(host, 0, 0, False)
    SelectionMixin.set_selection_end(host, 9, 0)
    assert SelectionMixin.selected_text(host, False) == row