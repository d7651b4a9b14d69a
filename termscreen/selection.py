"""Text selection over the history buffer and the screen image."""

from __future__ import annotations

from typing import Optional, Sequence

from termscreen.cells import Character, LineProperty

_MAX_CHARS = 1024


def _decode(cells: Sequence[Character]) -> str:
    """Turn cells into plain text, skipping the placeholders of wide characters."""
    return "".join(chr(cell.character) for cell in cells if cell.character)


class SelectionMixin:
    """Selection handling for a screen.

    Positions are offsets ``line * columns + column`` over the history
    lines followed by the screen lines.  The class that uses this mixin
    provides ``_columns``, ``_screen_lines`` (lists of Character),
    ``_line_properties``, ``_history`` (a HistoryBuffer), ``_cursor_x``
    and ``_cursor_y``.
    """

    _sel_begin: int = -1
    _sel_tl: int = -1
    _sel_br: int = -1
    _column_mode: bool = False

    def clear_selection(self) -> None:
        """Forget the current selection."""
        self._sel_br = -1
        self._sel_tl = -1
        self._sel_begin = -1

    def set_selection_start(self, column: int, line: int, column_mode: bool) -> None:
        """Start a new selection at ``column``, ``line``."""
        begin = line * self._columns + column
        if column == self._columns:
            begin -= 1
        self._sel_begin = begin
        self._sel_br = begin
        self._sel_tl = begin
        self._column_mode = column_mode

    def set_selection_end(self, column: int, line: int) -> None:
        """Extend the selection to ``column``, ``line``."""
        if self._sel_begin == -1:
            return
        end = line * self._columns + column
        if end < self._sel_begin:
            self._sel_tl = end
            self._sel_br = self._sel_begin
        else:
            if column == self._columns:
                end -= 1
            self._sel_tl = self._sel_begin
            self._sel_br = end

    def _cursor_fallback(self) -> tuple[int, int]:
        hist = len(self._history)
        return self._cursor_x + hist, self._cursor_y + hist

    def selection_start(self) -> tuple[int, int]:
        """(column, line) of the selection's top left, or of the cursor if there is none."""
        if self._sel_tl != -1:
            return self._sel_tl % self._columns, self._sel_tl // self._columns
        return self._cursor_fallback()

    def selection_end(self) -> tuple[int, int]:
        """(column, line) of the selection's bottom right, or of the cursor if there is none."""
        if self._sel_br != -1:
            return self._sel_br % self._columns, self._sel_br // self._columns
        return self._cursor_fallback()

    def is_selected(self, column: int, line: int) -> bool:
        """True if the cell at ``column``, ``line`` lies in the selection."""
        columns = self._columns
        if self._column_mode:
            if self._sel_tl % columns < self._sel_br % columns:
                left, right = self._sel_tl, self._sel_br
            else:
                left, right = self._sel_br, self._sel_tl
            return (
                left % columns <= column <= right % columns
                and self._sel_tl // columns <= line <= self._sel_br // columns
            )
        pos = line * columns + column
        return self._sel_tl <= pos <= self._sel_br

    def is_selection_valid(self) -> bool:
        """True if both ends of the selection are set."""
        return self._sel_tl >= 0 and self._sel_br >= 0

    def check_selection(self, start: int, end: int) -> None:
        """Clear the selection if it overlaps the screen offsets ``start``..``end``."""
        if self._sel_begin == -1:
            return
        screen_top = self._columns * len(self._history)
        if self._sel_br > start + screen_top and self._sel_tl < end + screen_top:
            self.clear_selection()

    def selected_text(self, preserve_line_breaks: bool = True) -> str:
        """The selected text, with newlines between lines if asked for."""
        if not self.is_selection_valid():
            return ""
        columns = self._columns
        top, left = divmod(self._sel_tl, columns)
        bottom, right = divmod(self._sel_br, columns)
        parts = []
        for y in range(top, bottom + 1):
            start = left if (y == top or self._column_mode) else 0
            count = right - start + 1 if (y == bottom or self._column_mode) else None
            parts.append(
                self._line_text(y, start, count, y != bottom, preserve_line_breaks)
            )
        return "".join(parts)

    def text_range(self, start_line: int, end_line: int) -> str:
        """Text of the lines ``start_line`` to ``end_line`` inclusive, history first."""
        self._sel_begin = start_line * self._columns
        self._sel_tl = self._sel_begin
        self._sel_br = end_line * self._columns + self._columns - 1
        try:
            return self.selected_text(True)
        finally:
            self.clear_selection()

    def history_line(self, number: int) -> str:
        """Select line ``number`` and return its text without a line break."""
        self._sel_begin = number * self._columns
        self._sel_tl = self._sel_begin
        self._sel_br = number * self._columns + self._columns - 1
        return self.selected_text(False)

    def _line_text(
        self,
        line: int,
        start: int,
        count: Optional[int],
        append_newline: bool,
        preserve_line_breaks: bool,
    ) -> str:
        properties = LineProperty.DEFAULT
        hist_lines = len(self._history)

        if line < hist_lines:
            data = self._history.line(line)
            length = len(data)
            start = min(start, max(0, length - 1))
            if count is None:
                count = length - start
            else:
                count = min(start + count, length) - start
            cells = list(data[start:start + count])
            if self._history.is_wrapped(line):
                properties |= LineProperty.WRAPPED
        else:
            if count is None:
                count = self._columns - start
            screen_line = line - hist_lines
            data = self._screen_lines[screen_line]
            count = max(0, min(count, len(data) - start))
            cells = list(data[start:start + count])
            properties |= self._line_properties[screen_line]

        if len(cells) >= _MAX_CHARS:
            raise ValueError("line too long to copy")

        while cells and chr(cells[-1].character).isspace():
            cells.pop()

        text = _decode(cells)
        omit_break = bool(properties & LineProperty.WRAPPED) or not preserve_line_breaks
        if not omit_break and append_newline and len(cells) + 1 < _MAX_CHARS:
            text += "\n"
        return text