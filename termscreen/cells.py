"""Character cells, colours, rendition flags and the history buffer."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field, replace
from enum import IntEnum, IntFlag
from typing import Iterable, Optional

DEFAULT_FORE_COLOR = 0
DEFAULT_BACK_COLOR = 1


class Rendition(IntFlag):
    """Appearance flags of a character cell."""

    DEFAULT = 0
    BOLD = 1
    BLINK = 2
    UNDERLINE = 4
    REVERSE = 8
    INTENSIVE = 16
    CURSOR = 32
    TRANSPARENT = 64


class LineProperty(IntFlag):
    """Attributes of a whole screen line."""

    DEFAULT = 0
    WRAPPED = 1
    DOUBLEWIDTH = 2
    DOUBLEHEIGHT = 4


class ScreenMode(IntEnum):
    """Screen modes that can be set, reset, saved and restored."""

    ORIGIN = 0
    WRAP = 1
    INSERT = 2
    SCREEN = 3
    CURSOR = 4
    NEWLINE = 5


class ColorSpace(IntEnum):
    """How the value of a CharacterColor is interpreted."""

    UNDEFINED = 0
    DEFAULT = 1
    SYSTEM = 2
    INDEX256 = 3
    RGB = 4


_VALUE_LIMITS = {
    ColorSpace.DEFAULT: 1,
    ColorSpace.SYSTEM: 7,
    ColorSpace.INDEX256: 255,
    ColorSpace.RGB: 0xFFFFFF,
}


@dataclass(frozen=True)
class CharacterColor:
    """A colour in one of the colour spaces, with an intensity flag."""

    space: ColorSpace = ColorSpace.UNDEFINED
    value: int = 0
    intensive: bool = False

    def is_valid(self) -> bool:
        """True if the space is defined and the value lies within it."""
        limit = _VALUE_LIMITS.get(ColorSpace(self.space))
        return limit is not None and 0 <= self.value <= limit

    def toggled_intensive(self) -> "CharacterColor":
        """Return the colour with its intensity flipped.

        Only default and system colours have an intensive variant; other
        colours are returned unchanged.
        """
        if self.space in (ColorSpace.DEFAULT, ColorSpace.SYSTEM):
            return replace(self, intensive=not self.intensive)
        return self


@dataclass(frozen=True)
class Character:
    """One cell of the screen image."""

    character: int = ord(" ")
    foreground: CharacterColor = field(
        default_factory=lambda: CharacterColor(ColorSpace.DEFAULT, DEFAULT_FORE_COLOR)
    )
    background: CharacterColor = field(
        default_factory=lambda: CharacterColor(ColorSpace.DEFAULT, DEFAULT_BACK_COLOR)
    )
    rendition: Rendition = Rendition.DEFAULT

    def reversed(self) -> "Character":
        """Return the cell with foreground and background swapped."""
        return replace(self, foreground=self.background, background=self.foreground)


def default_character() -> Character:
    """The blank cell: a space in the default colours."""
    return Character()


class HistoryBuffer:
    """Lines scrolled off the top of the screen.

    ``max_lines`` of ``None`` keeps every line, ``0`` keeps none, and a
    positive number keeps only that many of the most recent lines.
    """

    def __init__(self, max_lines: Optional[int] = None) -> None:
        if max_lines is not None and max_lines < 0:
            raise ValueError("max_lines must not be negative")
        self.max_lines = max_lines
        self._lines: deque[tuple[tuple[Character, ...], bool]] = deque(maxlen=max_lines)

    def __len__(self) -> int:
        return len(self._lines)

    def has_scroll(self) -> bool:
        """True if this buffer stores any lines at all."""
        return self.max_lines != 0

    def add_line(self, cells: Iterable[Character], wrapped: bool) -> None:
        """Append a line, dropping the oldest one if the buffer is full."""
        if not self.has_scroll():
            return
        self._lines.append((tuple(cells), bool(wrapped)))

    def line(self, index: int) -> tuple[Character, ...]:
        """Return the cells of line ``index``, 0 being the oldest."""
        if not 0 <= index < len(self._lines):
            raise IndexError(f"history line {index} out of range")
        return self._lines[index][0]

    def is_wrapped(self, index: int) -> bool:
        """True if line ``index`` continues on the following line."""
        if not 0 <= index < len(self._lines):
            raise IndexError(f"history line {index} out of range")
        return self._lines[index][1]

    def clear(self) -> None:
        """Forget every stored line."""
        self._lines.clear()

    def resized(self, max_lines: Optional[int]) -> "HistoryBuffer":
        """Return a new buffer of the given capacity holding the most recent lines."""
        result = HistoryBuffer(max_lines)
        for cells, wrapped in self._lines:
            result.add_line(cells, wrapped)
        return result