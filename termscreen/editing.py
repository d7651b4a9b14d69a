"""Cursor movement, modes, rendition and in-line editing of a screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from termscreen.cells import (
    DEFAULT_BACK_COLOR,
    DEFAULT_FORE_COLOR,
    Character,
    CharacterColor,
    ColorSpace,
    LineProperty,
    Rendition,
    ScreenMode,
    default_character,
)

_TAB_WIDTH = 8


@dataclass
class _SavedCursor:
    x: int = 0
    y: int = 0
    rendition: Rendition = Rendition.DEFAULT
    foreground: CharacterColor = CharacterColor(ColorSpace.DEFAULT, DEFAULT_FORE_COLOR)
    background: CharacterColor = CharacterColor(ColorSpace.DEFAULT, DEFAULT_BACK_COLOR)


def _make_color(space: int, color: int) -> Optional[CharacterColor]:
    """Build a colour, or return None if it is not a valid one."""
    try:
        result = CharacterColor(ColorSpace(space), color)
    except ValueError:
        return None
    return result if result.is_valid() else None


class EditingMixin:
    """Cursor, mode, rendition and character editing operations of a screen.

    The class that uses this mixin provides ``_lines``, ``_columns``,
    ``_screen_lines`` (lists of Character), ``_line_properties`` and
    ``check_selection`` (see SelectionMixin), and calls ``_init_editing``
    once those are in place.
    """

    def _init_editing(self) -> None:
        """Set cursor, margins, tab stops, modes and rendition to their initial state."""
        self._cursor_x = 0
        self._cursor_y = 0
        self._top_margin = 0
        self._bottom_margin = self._lines - 1
        self._modes = {mode: False for mode in ScreenMode}
        self._saved_modes = {mode: False for mode in ScreenMode}
        self._cu_fg = CharacterColor(ColorSpace.DEFAULT, DEFAULT_FORE_COLOR)
        self._cu_bg = CharacterColor(ColorSpace.DEFAULT, DEFAULT_BACK_COLOR)
        self._cu_re = Rendition.DEFAULT
        self._ef_fg = CharacterColor()
        self._ef_bg = CharacterColor()
        self._ef_re = Rendition.DEFAULT
        self._saved_cursor = _SavedCursor()
        self._init_tab_stops()

    # Cursor movement -------------------------------------------------------

    def cursor_up(self, n: int) -> None:
        """Move the cursor up ``n`` lines (0 means 1), not past the top margin."""
        n = n or 1
        stop = 0 if self._cursor_y < self._top_margin else self._top_margin
        self._cursor_x = min(self._columns - 1, self._cursor_x)
        self._cursor_y = max(stop, self._cursor_y - n)

    def cursor_down(self, n: int) -> None:
        """Move the cursor down ``n`` lines (0 means 1), not past the bottom margin."""
        n = n or 1
        stop = self._lines - 1 if self._cursor_y > self._bottom_margin else self._bottom_margin
        self._cursor_x = min(self._columns - 1, self._cursor_x)
        self._cursor_y = min(stop, self._cursor_y + n)

    def cursor_left(self, n: int) -> None:
        """Move the cursor left ``n`` columns (0 means 1), not past the first column."""
        n = n or 1
        self._cursor_x = max(0, min(self._columns - 1, self._cursor_x) - n)

    def cursor_right(self, n: int) -> None:
        """Move the cursor right ``n`` columns (0 means 1), not past the last column."""
        n = n or 1
        self._cursor_x = min(self._columns - 1, self._cursor_x + n)

    def set_cursor_x(self, x: int) -> None:
        """Put the cursor at 1-based column ``x`` (0 means 1)."""
        x = (x or 1) - 1
        self._cursor_x = max(0, min(self._columns - 1, x))

    def set_cursor_y(self, y: int) -> None:
        """Put the cursor on 1-based line ``y`` (0 means 1), relative to the margin in origin mode."""
        y = (y or 1) - 1
        offset = self._top_margin if self.get_mode(ScreenMode.ORIGIN) else 0
        self._cursor_y = max(0, min(self._lines - 1, y + offset))

    def set_cursor_yx(self, y: int, x: int) -> None:
        """Put the cursor on 1-based line ``y`` and column ``x``."""
        self.set_cursor_y(y)
        self.set_cursor_x(x)

    def set_margins(self, top: int, bottom: int) -> None:
        """Set the 1-based scrolling region; an invalid range is ignored."""
        top = (top or 1) - 1
        bottom = (bottom or self._lines) - 1
        if not 0 <= top < bottom < self._lines:
            return
        self._top_margin = top
        self._bottom_margin = bottom
        self._cursor_x = 0
        self._cursor_y = top if self.get_mode(ScreenMode.ORIGIN) else 0

    def set_default_margins(self) -> None:
        """Make the scrolling region the whole screen."""
        self._top_margin = 0
        self._bottom_margin = self._lines - 1

    def home(self) -> None:
        """Move the cursor to the top left corner."""
        self._cursor_x = 0
        self._cursor_y = 0

    def carriage_return(self) -> None:
        """Move the cursor to the start of its line."""
        self._cursor_x = 0

    def backspace(self) -> None:
        """Move the cursor one column left."""
        self._cursor_x = max(0, min(self._columns - 1, self._cursor_x) - 1)
        line = self._screen_lines[self._cursor_y]
        if len(line) < self._cursor_x + 1:
            self._resize_line(line, self._cursor_x + 1)

    # Tab stops -------------------------------------------------------------

    def tabulate(self, n: int = 1) -> None:
        """Move the cursor right by ``n`` tab stops (0 means 1)."""
        n = n or 1
        last = self._columns - 1
        while n > 0 and self._cursor_x < last:
            self.cursor_right(1)
            while self._cursor_x < last and not self._tab_stops[self._cursor_x]:
                self.cursor_right(1)
            n -= 1

    def back_tabulate(self, n: int) -> None:
        """Move the cursor left by ``n`` tab stops (0 means 1)."""
        n = n or 1
        while n > 0 and self._cursor_x > 0:
            self.cursor_left(1)
            while self._cursor_x > 0 and not self._tab_stops[self._cursor_x]:
                self.cursor_left(1)
            n -= 1

    def clear_tab_stops(self) -> None:
        """Remove every tab stop."""
        self._tab_stops = [False] * self._columns

    def change_tab_stop(self, enabled: bool) -> None:
        """Set or remove the tab stop at the cursor's column."""
        if self._cursor_x >= self._columns:
            return
        self._tab_stops[self._cursor_x] = enabled

    def _init_tab_stops(self) -> None:
        self._tab_stops = [i % _TAB_WIDTH == 0 and i != 0 for i in range(self._columns)]

    # Modes -----------------------------------------------------------------

    def set_mode(self, mode: ScreenMode) -> None:
        """Enable ``mode``; enabling origin mode moves the cursor to the top margin."""
        mode = ScreenMode(mode)
        self._modes[mode] = True
        if mode is ScreenMode.ORIGIN:
            self._cursor_x = 0
            self._cursor_y = self._top_margin

    def reset_mode(self, mode: ScreenMode) -> None:
        """Disable ``mode``; disabling origin mode homes the cursor."""
        mode = ScreenMode(mode)
        self._modes[mode] = False
        if mode is ScreenMode.ORIGIN:
            self._cursor_x = 0
            self._cursor_y = 0

    def save_mode(self, mode: ScreenMode) -> None:
        """Remember the state of ``mode``."""
        mode = ScreenMode(mode)
        self._saved_modes[mode] = self._modes[mode]

    def restore_mode(self, mode: ScreenMode) -> None:
        """Bring back the state of ``mode`` saved by save_mode."""
        mode = ScreenMode(mode)
        self._modes[mode] = self._saved_modes[mode]

    def get_mode(self, mode: ScreenMode) -> bool:
        """True if ``mode`` is enabled."""
        return self._modes[ScreenMode(mode)]

    # Cursor saving ---------------------------------------------------------

    def save_cursor(self) -> None:
        """Remember the cursor position, colours and rendition."""
        self._saved_cursor = _SavedCursor(
            self._cursor_x, self._cursor_y, self._cu_re, self._cu_fg, self._cu_bg
        )

    def restore_cursor(self) -> None:
        """Bring back what save_cursor remembered, clamped to the screen."""
        saved = self._saved_cursor
        self._cursor_x = min(saved.x, self._columns - 1)
        self._cursor_y = min(saved.y, self._lines - 1)
        self._cu_re = saved.rendition
        self._cu_fg = saved.foreground
        self._cu_bg = saved.background
        self._effective_rendition()

    # Rendition -------------------------------------------------------------

    def set_rendition(self, rendition: Rendition) -> None:
        """Add ``rendition`` flags to the current rendition."""
        self._cu_re = Rendition(self._cu_re | rendition)
        self._effective_rendition()

    def reset_rendition(self, rendition: Rendition) -> None:
        """Remove ``rendition`` flags from the current rendition."""
        self._cu_re = Rendition(self._cu_re & ~rendition)
        self._effective_rendition()

    def set_default_rendition(self) -> None:
        """Go back to the default colours and rendition."""
        self.set_fore_color(ColorSpace.DEFAULT, DEFAULT_FORE_COLOR)
        self.set_back_color(ColorSpace.DEFAULT, DEFAULT_BACK_COLOR)
        self._cu_re = Rendition.DEFAULT
        self._effective_rendition()

    def set_fore_color(self, space: int, color: int) -> None:
        """Set the foreground colour; an invalid one selects the default."""
        chosen = _make_color(space, color)
        self._cu_fg = chosen or CharacterColor(ColorSpace.DEFAULT, DEFAULT_FORE_COLOR)
        self._effective_rendition()

    def set_back_color(self, space: int, color: int) -> None:
        """Set the background colour; an invalid one selects the default."""
        chosen = _make_color(space, color)
        self._cu_bg = chosen or CharacterColor(ColorSpace.DEFAULT, DEFAULT_BACK_COLOR)
        self._effective_rendition()

    def _effective_rendition(self) -> None:
        self._ef_re = self._cu_re
        if self._cu_re & Rendition.REVERSE:
            self._ef_fg, self._ef_bg = self._cu_bg, self._cu_fg
        else:
            self._ef_fg, self._ef_bg = self._cu_fg, self._cu_bg
        if self._cu_re & Rendition.BOLD:
            self._ef_fg = self._ef_fg.toggled_intensive()

    # Editing ---------------------------------------------------------------

    def erase_chars(self, n: int) -> None:
        """Overwrite ``n`` characters (0 means 1) from the cursor with spaces."""
        n = n or 1
        end = max(0, min(self._cursor_x + n - 1, self._columns - 1))
        self._clear_image(self._loc(self._cursor_x, self._cursor_y), self._loc(end, self._cursor_y), " ")

    def delete_chars(self, n: int) -> None:
        """Remove ``n`` characters (0 means 1) at the cursor, keeping the line's last one."""
        if n < 0:
            raise ValueError("cannot delete a negative number of characters")
        n = n or 1
        line = self._screen_lines[self._cursor_y]
        x = self._cursor_x
        if x >= len(line):
            return
        if x + n >= len(line):
            n = len(line) - 1 - x
        del line[x:x + n]

    def insert_chars(self, n: int) -> None:
        """Insert ``n`` blanks (0 means 1) at the cursor, truncating at the right edge."""
        n = n or 1
        line = self._screen_lines[self._cursor_y]
        x = self._cursor_x
        if len(line) < x:
            self._resize_line(line, x)
        line[x:x] = [default_character() for _ in range(n)]
        if len(line) > self._columns:
            del line[self._columns:]

    def set_line_property(self, prop: LineProperty, enable: bool) -> None:
        """Set or clear ``prop`` on the cursor's line."""
        y = self._cursor_y
        if enable:
            self._line_properties[y] = LineProperty(self._line_properties[y] | prop)
        else:
            self._line_properties[y] = LineProperty(self._line_properties[y] & ~prop)

    # Helpers shared with the screen ----------------------------------------

    def _loc(self, x: int, y: int) -> int:
        return y * self._columns + x

    @staticmethod
    def _resize_line(line: list, size: int) -> None:
        if len(line) > size:
            del line[size:]
        else:
            line.extend(default_character() for _ in range(size - len(line)))

    def _clear_image(self, start: int, end: int, char: str) -> None:
        """Fill the screen offsets ``start``..``end`` inclusive with ``char``."""
        self.check_selection(start, end)
        columns = self._columns
        top_line = start // columns
        bottom_line = end // columns
        clear_cell = Character(ord(char), self._cu_fg, self._cu_bg, Rendition.DEFAULT)
        is_default = clear_cell == Character()

        for y in range(top_line, bottom_line + 1):
            self._line_properties[y] = LineProperty.DEFAULT
            end_col = end % columns if y == bottom_line else columns - 1
            start_col = start % columns if y == top_line else 0
            line = self._screen_lines[y]
            if is_default and end_col == columns - 1:
                self._resize_line(line, start_col)
            else:
                if len(line) < end_col + 1:
                    self._resize_line(line, end_col + 1)
                line[start_col:end_col + 1] = [clear_cell] * (end_col + 1 - start_col)