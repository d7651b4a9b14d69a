"""The terminal screen image: character lines, scrolling, history and clearing."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Union

from wcwidth import wcwidth

from termscreen.cells import (
    Character,
    HistoryBuffer,
    LineProperty,
    Rendition,
    ScreenMode,
    default_character,
)
from termscreen.editing import EditingMixin
from termscreen.selection import SelectionMixin


def blank_cells(count: int) -> list[Character]:
    """Return ``count`` default (blank) cells."""
    return [default_character()] * count


class Screen(SelectionMixin, EditingMixin):
    """An image of character cells with cursor, margins, selection and history.

    Lines scrolled off the top of the whole-screen scrolling region are kept
    in a history buffer, which by default keeps nothing (see set_scroll).
    """

    def __init__(self, lines: int, columns: int) -> None:
        if lines < 1 or columns < 1:
            raise ValueError("a screen needs at least one line and one column")
        self._lines = lines
        self._columns = columns
        self._screen_lines: list[list[Character]] = [[] for _ in range(lines + 1)]
        self._line_properties: list[LineProperty] = [LineProperty.DEFAULT] * (lines + 1)
        self._history = HistoryBuffer(0)
        self._scrolled_lines = 0
        self._dropped_lines = 0
        self._last_scrolled_region = (0, 0, 0, 0)
        self._last_pos = -1
        self._column_mode = False
        self._init_editing()
        self.clear_selection()
        self.reset()

    # Dimensions and cursor ---------------------------------------------------

    def lines(self) -> int:
        """Number of lines on the screen."""
        return self._lines

    def columns(self) -> int:
        """Number of columns on the screen."""
        return self._columns

    def cursor(self) -> tuple[int, int]:
        """The cursor position as (column, line)."""
        return self._cursor_x, self._cursor_y

    def history_lines(self) -> int:
        """Number of lines kept in the history buffer."""
        return len(self._history)

    def top_margin(self) -> int:
        """Top line of the scrolling region."""
        return self._top_margin

    def bottom_margin(self) -> int:
        """Bottom line of the scrolling region."""
        return self._bottom_margin

    # Line movement -------------------------------------------------------------

    def index(self) -> None:
        """Move down one line, scrolling the region up at the bottom margin."""
        if self._cursor_y == self._bottom_margin:
            self.scroll_up(1)
        elif self._cursor_y < self._lines - 1:
            self._cursor_y += 1

    def reverse_index(self) -> None:
        """Move up one line, scrolling the region down at the top margin."""
        if self._cursor_y == self._top_margin:
            self._scroll_down_from(self._top_margin, 1)
        elif self._cursor_y > 0:
            self._cursor_y -= 1

    def next_line(self) -> None:
        """Move to the start of the next line."""
        self.carriage_return()
        self.index()

    def new_line(self) -> None:
        """Index, returning to the first column first when newline mode is on."""
        if self.get_mode(ScreenMode.NEWLINE):
            self.carriage_return()
        self.index()

    def scroll_up(self, n: int) -> None:
        """Scroll the scrolling region up ``n`` lines (0 means 1)."""
        n = n or 1
        if self._top_margin == 0:
            self._add_hist_line()
        self._scroll_up_from(self._top_margin, n)

    def scroll_down(self, n: int) -> None:
        """Scroll the scrolling region down ``n`` lines (0 means 1)."""
        n = n or 1
        self._scroll_down_from(self._top_margin, n)

    def insert_lines(self, n: int) -> None:
        """Insert ``n`` blank lines (0 means 1) at the cursor line."""
        n = n or 1
        self._scroll_down_from(self._cursor_y, n)

    def delete_lines(self, n: int) -> None:
        """Remove ``n`` lines (0 means 1) at the cursor line."""
        n = n or 1
        self._scroll_up_from(self._cursor_y, n)

    # Characters ----------------------------------------------------------------

    def show_character(self, char: Union[str, int]) -> None:
        """Put a character at the cursor, wrapping first if it does not fit."""
        code = ord(char) if isinstance(char, str) else int(char)
        width = wcwidth(chr(code))
        if width <= 0:
            return

        if self._cursor_x + width > self._columns:
            if self.get_mode(ScreenMode.WRAP):
                y = self._cursor_y
                self._line_properties[y] = LineProperty(
                    self._line_properties[y] | LineProperty.WRAPPED
                )
                self.next_line()
            else:
                self._cursor_x = self._columns - width

        x, y = self._cursor_x, self._cursor_y
        line = self._screen_lines[y]
        if not line and y > 0:
            self._resize_line(line, max(len(self._screen_lines[y - 1]), x + width))
        elif len(line) < x + width:
            self._resize_line(line, x + width)

        if self.get_mode(ScreenMode.INSERT):
            self.insert_chars(width)
            line = self._screen_lines[y]

        self._last_pos = self._loc(x, y)
        self.check_selection(x, y)

        line[x] = Character(code, self._ef_fg, self._ef_bg, self._ef_re)
        for i in range(1, width):
            if len(line) < x + i + 1:
                self._resize_line(line, x + i + 1)
            line[x + i] = Character(0, self._ef_fg, self._ef_bg, self._ef_re)
        self._cursor_x = x + width

    # Resizing ------------------------------------------------------------------

    def resize_image(self, new_lines: int, new_columns: int) -> None:
        """Change the size of the screen, pushing lines above the cursor into history."""
        if new_lines == self._lines and new_columns == self._columns:
            return
        if new_lines < 1 or new_columns < 1:
            raise ValueError("a screen needs at least one line and one column")

        if self._cursor_y > new_lines - 1:
            self._bottom_margin = self._lines - 1
            for _ in range(self._cursor_y - (new_lines - 1)):
                self._add_hist_line()
                self._scroll_up_from(0, 1)

        new_screen: list[list[Character]] = [[] for _ in range(new_lines + 1)]
        for i in range(min(self._lines - 1, new_lines + 1)):
            new_screen[i] = self._screen_lines[i]
        for i in range(self._lines, new_lines + 1):
            self._resize_line(new_screen[i], new_columns)

        properties = self._line_properties[: new_lines + 1]
        properties.extend([LineProperty.DEFAULT] * (new_lines + 1 - len(properties)))
        for i in range(self._lines, new_lines + 1):
            properties[i] = LineProperty.DEFAULT

        self.clear_selection()
        self._screen_lines = new_screen
        self._line_properties = properties
        self._lines = new_lines
        self._columns = new_columns
        self._cursor_x = min(self._cursor_x, new_columns - 1)
        self._cursor_y = min(self._cursor_y, new_lines - 1)
        self._top_margin = 0
        self._bottom_margin = new_lines - 1
        self._init_tab_stops()
        self.clear_selection()

    # Reading the image ---------------------------------------------------------

    def _check_range(self, start_line: int, end_line: int) -> None:
        if start_line < 0:
            raise ValueError("start line must not be negative")
        if not start_line <= end_line < len(self._history) + self._lines:
            raise ValueError(f"line range {start_line}..{end_line} out of bounds")

    def _history_rows(self, start_line: int, count: int) -> list[Character]:
        cells: list[Character] = []
        for line in range(start_line, start_line + count):
            data = self._history.line(line)
            row = list(data[: self._columns])
            row.extend(blank_cells(self._columns - len(row)))
            if self._sel_begin != -1:
                row = [
                    cell.reversed() if self.is_selected(column, line) else cell
                    for column, cell in enumerate(row)
                ]
            cells.extend(row)
        return cells

    def _screen_rows(self, start_line: int, count: int) -> list[Character]:
        cells: list[Character] = []
        hist = len(self._history)
        for line in range(start_line, start_line + count):
            data = self._screen_lines[line]
            for column in range(self._columns):
                cell = data[column] if column < len(data) else default_character()
                if self._sel_begin != -1 and self.is_selected(column, line + hist):
                    cell = cell.reversed()
                cells.append(cell)
        return cells

    def get_image(self, start_line: int, end_line: int) -> list[Character]:
        """Cells of lines ``start_line``..``end_line`` (history first), row after row."""
        self._check_range(start_line, end_line)
        hist = len(self._history)
        merged = end_line - start_line + 1
        in_history = max(0, min(hist - start_line, merged))
        in_screen = merged - in_history

        image: list[Character] = []
        if in_history > 0:
            image.extend(self._history_rows(start_line, in_history))
        if in_screen > 0:
            image.extend(self._screen_rows(start_line + in_history - hist, in_screen))

        if self.get_mode(ScreenMode.SCREEN):
            image = [cell.reversed() for cell in image]

        cursor_index = self._loc(self._cursor_x, self._cursor_y + in_history)
        if self.get_mode(ScreenMode.CURSOR) and cursor_index < self._columns * merged:
            cell = image[cursor_index]
            image[cursor_index] = replace(cell, rendition=Rendition(cell.rendition | Rendition.CURSOR))
        return image

    def get_line_properties(self, start_line: int, end_line: int) -> list[LineProperty]:
        """Properties of lines ``start_line``..``end_line``, history first."""
        self._check_range(start_line, end_line)
        hist = len(self._history)
        merged = end_line - start_line + 1
        in_history = max(0, min(hist - start_line, merged))
        in_screen = merged - in_history

        result = [
            LineProperty.WRAPPED if self._history.is_wrapped(line) else LineProperty.DEFAULT
            for line in range(start_line, start_line + in_history)
        ]
        first = start_line + in_history - hist
        result.extend(self._line_properties[first:first + in_screen])
        return result

    # Reset and clearing ----------------------------------------------------------

    def reset(self, clear_screen: bool = True) -> None:
        """Restore the default modes, margins and rendition, clearing if asked."""
        self.set_mode(ScreenMode.WRAP)
        self.save_mode(ScreenMode.WRAP)
        self.reset_mode(ScreenMode.ORIGIN)
        self.save_mode(ScreenMode.ORIGIN)
        self.reset_mode(ScreenMode.INSERT)
        self.save_mode(ScreenMode.INSERT)
        self.set_mode(ScreenMode.CURSOR)
        self.reset_mode(ScreenMode.SCREEN)
        self.reset_mode(ScreenMode.NEWLINE)
        self._top_margin = 0
        self._bottom_margin = self._lines - 1
        self.set_default_rendition()
        self.save_cursor()
        if clear_screen:
            self.clear()

    def clear(self) -> None:
        """Clear the whole screen and home the cursor."""
        self.clear_entire_screen()
        self.home()

    def clear_entire_screen(self) -> None:
        """Move the screen into history and blank it."""
        for _ in range(self._lines - 1):
            self._add_hist_line()
            self._scroll_up_from(0, 1)
        self._clear_image(self._loc(0, 0), self._loc(self._columns - 1, self._lines - 1), " ")

    def clear_to_end_of_screen(self) -> None:
        """Blank from the cursor to the end of the screen."""
        self._clear_image(
            self._loc(self._cursor_x, self._cursor_y),
            self._loc(self._columns - 1, self._lines - 1),
            " ",
        )

    def clear_to_begin_of_screen(self) -> None:
        """Blank from the start of the screen to the cursor."""
        self._clear_image(self._loc(0, 0), self._loc(self._cursor_x, self._cursor_y), " ")

    def clear_entire_line(self) -> None:
        """Blank the cursor's line."""
        y = self._cursor_y
        self._clear_image(self._loc(0, y), self._loc(self._columns - 1, y), " ")

    def clear_to_end_of_line(self) -> None:
        """Blank from the cursor to the end of its line."""
        y = self._cursor_y
        self._clear_image(self._loc(self._cursor_x, y), self._loc(self._columns - 1, y), " ")

    def clear_to_begin_of_line(self) -> None:
        """Blank from the start of the cursor's line to the cursor."""
        y = self._cursor_y
        self._clear_image(self._loc(0, y), self._loc(self._cursor_x, y), " ")

    def help_align(self) -> None:
        """Fill the screen with the letter E."""
        self._clear_image(self._loc(0, 0), self._loc(self._columns - 1, self._lines - 1), "E")

    # History -------------------------------------------------------------------

    def set_scroll(self, max_lines: Optional[int], copy_previous: bool = True) -> None:
        """Use a history keeping ``max_lines`` lines (None: unlimited, 0: none)."""
        self.clear_selection()
        if copy_previous:
            self._history = self._history.resized(max_lines)
        else:
            self._history = HistoryBuffer(max_lines)

    def has_scroll(self) -> bool:
        """True if lines scrolled off the screen are kept."""
        return self._history.has_scroll()

    def scrolled_lines(self) -> int:
        """Lines scrolled since the last reset; negative when scrolled up."""
        return self._scrolled_lines

    def dropped_lines(self) -> int:
        """Lines dropped from a full history since the last reset."""
        return self._dropped_lines

    def last_scrolled_region(self) -> tuple[int, int, int, int]:
        """(x, y, width, height) of the region last scrolled up."""
        return self._last_scrolled_region

    def reset_scrolled_lines(self) -> None:
        """Zero the count returned by scrolled_lines."""
        self._scrolled_lines = 0

    def reset_dropped_lines(self) -> None:
        """Zero the count returned by dropped_lines."""
        self._dropped_lines = 0

    # Internals -----------------------------------------------------------------

    def _scroll_up_from(self, start: int, n: int) -> None:
        if n <= 0 or start + n > self._bottom_margin:
            return
        self._scrolled_lines -= n
        self._last_scrolled_region = (
            0,
            self._top_margin,
            self._columns - 1,
            self._bottom_margin - self._top_margin,
        )
        self._move_image(
            self._loc(0, start),
            self._loc(0, start + n),
            self._loc(self._columns - 1, self._bottom_margin),
        )
        self._clear_image(
            self._loc(0, self._bottom_margin - n + 1),
            self._loc(self._columns - 1, self._bottom_margin),
            " ",
        )

    def _scroll_down_from(self, start: int, n: int) -> None:
        self._scrolled_lines += n
        if n <= 0 or start > self._bottom_margin:
            return
        if start + n > self._bottom_margin:
            n = self._bottom_margin - start
        self._move_image(
            self._loc(0, start + n),
            self._loc(0, start),
            self._loc(self._columns - 1, self._bottom_margin - n),
        )
        self._clear_image(self._loc(0, start), self._loc(self._columns - 1, start + n - 1), " ")

    def _move_image(self, dest: int, source_begin: int, source_end: int) -> None:
        """Move whole lines between screen offsets, adjusting selection and last position."""
        if source_begin > source_end:
            raise ValueError("source range is reversed")
        columns = self._columns
        count = (source_end - source_begin) // columns
        dest_line = dest // columns
        source_line = source_begin // columns
        order = range(count + 1) if dest < source_begin else reversed(range(count + 1))
        for i in order:
            self._screen_lines[dest_line + i] = list(self._screen_lines[source_line + i])
            self._line_properties[dest_line + i] = self._line_properties[source_line + i]

        diff = dest - source_begin
        if self._last_pos != -1:
            self._last_pos += diff
            if not 0 <= self._last_pos < count * columns:
                self._last_pos = -1

        if self._sel_begin == -1:
            return
        begin_is_tl = self._sel_begin == self._sel_tl
        screen_top = columns * len(self._history)
        srca = source_begin + screen_top
        srce = source_end + screen_top
        desta = srca + diff
        deste = srce + diff

        if srca <= self._sel_tl <= srce:
            self._sel_tl += diff
        elif desta <= self._sel_tl <= deste:
            self._sel_br = -1

        if srca <= self._sel_br <= srce:
            self._sel_br += diff
        elif desta <= self._sel_br <= deste:
            self._sel_br = -1

        if self._sel_br < 0:
            self.clear_selection()
        elif self._sel_tl < 0:
            self._sel_tl = 0

        self._sel_begin = self._sel_tl if begin_is_tl else self._sel_br

    def _add_hist_line(self) -> None:
        """Copy the top screen line into history, keeping the selection in place."""
        if not self.has_scroll():
            return
        columns = self._columns
        old_count = len(self._history)
        self._history.add_line(
            self._screen_lines[0], bool(self._line_properties[0] & LineProperty.WRAPPED)
        )
        new_count = len(self._history)
        begin_is_tl = self._sel_begin == self._sel_tl

        if new_count == old_count:
            self._dropped_lines += 1

        if new_count > old_count and self._sel_begin != -1:
            self._sel_tl += columns
            self._sel_br += columns

        if self._sel_begin != -1:
            top_br = self._loc(0, 1 + new_count)
            if self._sel_tl < top_br:
                self._sel_tl -= columns
            if self._sel_br < top_br:
                self._sel_br -= columns
            if self._sel_br < 0:
                self.clear_selection()
            elif self._sel_tl < 0:
                self._sel_tl = 0
            self._sel_begin = self._sel_tl if begin_is_tl else self._sel_br