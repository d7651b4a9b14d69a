"""A scrollable window onto the history and image of a screen."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from termscreen.cells import Character, LineProperty
from termscreen.screen import Screen, blank_cells


class ScrollMode(Enum):
    """Unit of a relative scroll."""

    LINES = "lines"
    PAGES = "pages"


class ScreenWindow:
    """A view of ``window_lines()`` lines of a screen, history included.

    The window keeps a cached copy of the visible cells which is refreshed
    when it scrolls, its selection changes or ``notify_output_changed`` is
    called.  Listeners can be appended to ``output_changed``,
    ``scrolled`` (called with the new top line) and ``selection_changed``.
    """

    def __init__(self, screen: Screen) -> None:
        self.screen = screen
        self.track_output = True
        self.output_changed: list[Callable[[], None]] = []
        self.scrolled: list[Callable[[int], None]] = []
        self.selection_changed: list[Callable[[], None]] = []
        self._window_lines = 1
        self._current_line = 0
        self._scroll_count = 0
        self._buffer: Optional[list[Character]] = None
        self._buffer_needs_update = True

    # Size ----------------------------------------------------------------------

    def set_window_lines(self, lines: int) -> None:
        """Set the number of lines the window shows."""
        if lines <= 0:
            raise ValueError("a window needs at least one line")
        self._window_lines = lines

    def window_lines(self) -> int:
        """Number of lines in the window."""
        return self._window_lines

    def window_columns(self) -> int:
        """Number of columns in the window."""
        return self.screen.columns()

    def line_count(self) -> int:
        """Total number of lines, history and screen together."""
        return self.screen.history_lines() + self.screen.lines()

    def current_line(self) -> int:
        """Index of the line at the top of the window."""
        return max(0, min(self._current_line, self.line_count() - self._window_lines))

    def _end_window_line(self) -> int:
        return min(self.current_line() + self._window_lines - 1, self.line_count() - 1)

    def cursor_position(self) -> tuple[int, int]:
        """The screen cursor as (column, line)."""
        return self.screen.cursor()

    def at_end_of_output(self) -> bool:
        """True if the window shows the bottom of the screen."""
        return self.current_line() == self.line_count() - self._window_lines

    # Contents ------------------------------------------------------------------

    def get_image(self) -> list[Character]:
        """The visible cells, row after row, blanks past the end of the screen."""
        size = self._window_lines * self.window_columns()
        if self._buffer is None or len(self._buffer) != size:
            self._buffer_needs_update = True
        if self._buffer_needs_update or self._buffer is None:
            image = self.screen.get_image(self.current_line(), self._end_window_line())
            image = image[:size]
            image.extend(blank_cells(size - len(image)))
            self._buffer = image
            self._buffer_needs_update = False
        return list(self._buffer)

    def get_line_properties(self) -> list[LineProperty]:
        """Properties of the visible lines, one per window line."""
        result = self.screen.get_line_properties(self.current_line(), self._end_window_line())
        result = result[: self._window_lines]
        result.extend([LineProperty.DEFAULT] * (self._window_lines - len(result)))
        return result

    # Scrolling -----------------------------------------------------------------

    def scroll_to(self, line: int) -> None:
        """Scroll so that ``line`` is at the top of the window."""
        maximum = self.line_count() - self._window_lines
        line = max(0, min(line, maximum))
        delta = line - self._current_line
        self._current_line = line
        self._scroll_count += delta
        self._buffer_needs_update = True
        for listener in list(self.scrolled):
            listener(self._current_line)

    def scroll_by(self, mode: ScrollMode, amount: int) -> None:
        """Scroll by ``amount`` lines or half-window pages; positive scrolls down."""
        if mode is ScrollMode.LINES:
            self.scroll_to(self.current_line() + amount)
        elif mode is ScrollMode.PAGES:
            self.scroll_to(self.current_line() + amount * (self._window_lines // 2))
        else:
            raise ValueError(f"unknown scroll mode {mode!r}")

    def scroll_count(self) -> int:
        """Lines scrolled since the last reset_scroll_count."""
        return self._scroll_count

    def reset_scroll_count(self) -> None:
        """Zero the count returned by scroll_count."""
        self._scroll_count = 0

    def scroll_region(self) -> tuple[int, int, int, int]:
        """(x, y, width, height) of the area last scrolled, usually the whole window."""
        if self.at_end_of_output() and self._window_lines == self.screen.lines():
            return self.screen.last_scrolled_region()
        return (0, 0, self.window_columns(), self._window_lines)

    def notify_output_changed(self) -> None:
        """Tell the window that the screen changed; follows the output if tracking."""
        screen = self.screen
        if self.track_output:
            self._scroll_count -= screen.scrolled_lines()
            self._current_line = max(
                0, screen.history_lines() - (self._window_lines - screen.lines())
            )
        else:
            self._current_line = max(0, self._current_line - screen.dropped_lines())
            self._current_line = min(self._current_line, screen.history_lines())
        self._buffer_needs_update = True
        for listener in list(self.output_changed):
            listener()

    # Selection -----------------------------------------------------------------

    def _notify_selection(self) -> None:
        for listener in list(self.selection_changed):
            listener()

    def _screen_line(self, line: int) -> int:
        return min(line + self.current_line(), self._end_window_line())

    def set_selection_start(self, column: int, line: int, column_mode: bool) -> None:
        """Start a selection at ``column`` and window line ``line``."""
        self.screen.set_selection_start(column, self._screen_line(line), column_mode)
        self._buffer_needs_update = True
        self._notify_selection()

    def set_selection_end(self, column: int, line: int) -> None:
        """Extend the selection to ``column`` and window line ``line``."""
        self.screen.set_selection_end(column, self._screen_line(line))
        self._buffer_needs_update = True
        self._notify_selection()

    def selection_start(self) -> tuple[int, int]:
        """(column, window line) of the selection start."""
        column, line = self.screen.selection_start()
        return column, line - self.current_line()

    def selection_end(self) -> tuple[int, int]:
        """(column, window line) of the selection end."""
        column, line = self.screen.selection_end()
        return column, line - self.current_line()

    def is_selected(self, column: int, line: int) -> bool:
        """True if the cell at ``column`` and window line ``line`` is selected."""
        return self.screen.is_selected(column, self._screen_line(line))

    def clear_selection(self) -> None:
        """Forget the selection."""
        self.screen.clear_selection()
        self._notify_selection()

    def selected_text(self, preserve_line_breaks: bool = True) -> str:
        """The selected text of the screen."""
        return self.screen.selected_text(preserve_line_breaks)