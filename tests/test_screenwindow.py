import pytest

from termscreen.cells import LineProperty
from termscreen.screen import Screen
from termscreen.screenwindow import ScreenWindow, ScrollMode

COLUMNS = 10


def _write(screen, text):
    for ch in text:
        screen.show_character(ch)


def _filled_screen():
    screen = Screen(3, COLUMNS)
    screen.set_scroll(None)
    for i in range(5):
        _write(screen, f"line{i}")
        screen.next_line()
    return screen


def _rows(window):
    image = window.get_image()
    cols = window.window_columns()
    return [
        "".join(chr(c.character) for c in image[i:i + cols] if c.character).rstrip()
        for i in range(0, len(image), cols)
    ]


def _window(screen, lines=3):
    window = ScreenWindow(screen)
    window.set_window_lines(lines)
    return window


def test_image_of_fresh_screen_shows_written_text():
    screen = Screen(3, COLUMNS)
    _write(screen, "hi")
    window = _window(screen)
    assert _rows(window) == ["hi", "", ""]
    assert len(window.get_image()) == 3 * COLUMNS


def test_window_larger_than_screen_is_padded():
    screen = Screen(2, COLUMNS)
    _write(screen, "ab")
    window = _window(screen, 4)
    assert len(window.get_image()) == 4 * COLUMNS
    assert _rows(window) == ["ab", "", "", ""]
    assert len(window.get_line_properties()) == 4


def test_line_count_includes_history():
    screen = _filled_screen()
    window = _window(screen)
    assert window.line_count() == screen.history_lines() + screen.lines()
    assert screen.history_lines() == 3


def test_scroll_to_clamps_and_reports():
    screen = _filled_screen()
    window = _window(screen)
    seen = []
    window.scrolled.append(seen.append)
    window.scroll_to(100)
    assert window.current_line() == window.line_count() - window.window_lines()
    assert window.at_end_of_output()
    window.scroll_to(-5)
    assert window.current_line() == 0
    assert seen == [window.line_count() - window.window_lines(), 0]


def test_scrolled_views_show_history_and_screen():
    screen = _filled_screen()
    window = _window(screen)
    window.scroll_to(0)
    assert _rows(window) == ["line0", "line1", "line2"]
    window.scroll_to(3)
    assert _rows(window) == ["line3", "line4", ""]


def test_scroll_count_and_reset():
    screen = _filled_screen()
    window = _window(screen)
    window.scroll_to(2)
    window.scroll_to(1)
    assert window.scroll_count() == 1
    window.reset_scroll_count()
    assert window.scroll_count() == 0


def test_scroll_by_lines_and_pages():
    screen = _filled_screen()
    window = _window(screen, 4)
    window.scroll_to(0)
    window.scroll_by(ScrollMode.LINES, 1)
    assert window.current_line() == 1
    window.scroll_to(0)
    window.scroll_by(ScrollMode.PAGES, 1)
    assert window.current_line() == 4 // 2


def test_notify_output_changed_follows_output_when_tracking():
    screen = _filled_screen()
    window = _window(screen)
    calls = []
    window.output_changed.append(lambda: calls.append(True))
    window.notify_output_changed()
    assert window.at_end_of_output()
    assert calls == [True]


def test_notify_output_changed_keeps_position_when_not_tracking():
    screen = _filled_screen()
    window = _window(screen)
    window.track_output = False
    window.scroll_to(0)
    window.notify_output_changed()
    assert window.current_line() == 0


def test_image_is_cached_until_notified():
    screen = Screen(3, COLUMNS)
    window = _window(screen)
    assert _rows(window) == ["", "", ""]
    _write(screen, "xy")
    assert _rows(window) == ["", "", ""]
    window.notify_output_changed()
    assert _rows(window) == ["xy", "", ""]


def test_selection_through_window():
    screen = _filled_screen()
    window = _window(screen)
    changes = []
    window.selection_changed.append(lambda: changes.append(1))
    window.scroll_to(0)
    window.set_selection_start(0, 0, False)
    window.set_selection_end(COLUMNS - 1, 0)
    assert window.selected_text(True) == "line0"
    assert window.is_selected(2, 0)
    assert not window.is_selected(2, 1)
    assert window.selection_start() == (0, 0)
    assert window.selection_end() == (COLUMNS - 1, 0)
    window.scroll_to(1)
    assert window.selection_start() == (0, -1)
    assert len(changes) == 2


def test_clear_selection_notifies_and_empties_text():
    screen = _filled_screen()
    window = _window(screen)
    window.scroll_to(0)
    window.set_selection_start(0, 0, False)
    window.set_selection_end(3, 0)
    changes = []
    window.selection_changed.append(lambda: changes.append(1))
    window.clear_selection()
    assert window.selected_text(False) == ""
    assert changes == [1]


def test_selected_cells_are_reversed_in_image():
    screen = Screen(3, COLUMNS)
    _write(screen, "ab")
    window = _window(screen)
    plain = window.get_image()
    window.set_selection_start(1, 1, False)
    window.set_selection_end(2, 1)
    image = window.get_image()
    assert image[COLUMNS + 1] == plain[COLUMNS + 1].reversed()
    assert image[0] == plain[0]


def test_cursor_position_matches_screen():
    screen = Screen(3, COLUMNS)
    _write(screen, "abc")
    window = _window(screen)
    assert window.cursor_position() == screen.cursor()


def test_scroll_region_when_not_at_end():
    screen = _filled_screen()
    window = _window(screen)
    window.scroll_to(0)
    assert window.scroll_region() == (0, 0, COLUMNS, 3)


def test_scroll_region_at_end_uses_screen_region():
    screen = _filled_screen()
    window = _window(screen)
    window.scroll_to(100)
    assert window.scroll_region() == screen.last_scrolled_region()


def test_line_properties_length_and_wrapping():
    screen = Screen(3, 4)
    _write(screen, "abcde")
    window = _window(screen)
    props = window.get_line_properties()
    assert len(props) == 3
    assert props[0] & LineProperty.WRAPPED


def test_set_window_lines_rejects_zero():
    window = ScreenWindow(Screen(3, COLUMNS))
    with pytest.raises(ValueError):
        window.set_window_lines(0)


def test_window_columns_follow_screen():
    screen = Screen(3, COLUMNS)
    window = _window(screen)
    screen.resize_image(3, 20)
    assert window.window_columns() == screen.columns()