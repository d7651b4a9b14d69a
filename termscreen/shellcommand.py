"""Splitting command lines and expanding environment variables in them."""

from __future__ import annotations

import os
from typing import Iterable, Mapping, Optional

_QUOTES = ("'", '"')


class ShellCommand:
    """A command line split into a command and its arguments."""

    def __init__(self, full_command: str) -> None:
        self._arguments: list[str] = []
        in_quotes = False
        builder: list[str] = []
        last = len(full_command) - 1

        for i, ch in enumerate(full_command):
            is_last = i == last
            is_quote = ch in _QUOTES
            if not is_last and is_quote:
                in_quotes = not in_quotes
                continue
            if (not ch.isspace() or in_quotes) and not is_quote:
                builder.append(ch)
            if (ch.isspace() and not in_quotes) or is_last:
                self._arguments.append("".join(builder))
                builder.clear()

    @classmethod
    def from_parts(cls, command: str, arguments: Iterable[str]) -> "ShellCommand":
        """Build a command from an argument list whose first item is replaced by ``command``."""
        instance = cls("")
        instance._arguments = list(arguments)
        if instance._arguments:
            instance._arguments[0] = command
        return instance

    def command(self) -> str:
        """The program to run, or an empty string if there is none."""
        return self._arguments[0] if self._arguments else ""

    def arguments(self) -> list[str]:
        """All arguments, the command included."""
        return list(self._arguments)

    def full_command(self) -> str:
        """The arguments joined by single spaces."""
        return " ".join(self._arguments)


def expand(text: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Expand ``$NAME`` references ending at a space, a slash or the end of text.

    A ``$`` preceded by a backslash is left alone, as are references to
    variables that are unset or empty.
    """
    env = os.environ if environ is None else environ
    pos = 0
    while (pos := text.find("$", pos)) != -1:
        if pos > 0 and text[pos - 1] == "\\":
            pos += 1
            continue
        end = text.find(" ", pos + 1)
        slash = text.find("/", pos + 1)
        if end == -1 or (slash != -1 and slash < end):
            end = slash
        if end == -1:
            end = len(text)
        value = env.get(text[pos + 1:end], "")
        if value:
            text = text[:pos] + value + text[end:]
            pos += len(value)
        else:
            pos = end
    return text


def expand_all(items: Iterable[str], environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Expand environment variables in every string of ``items``."""
    return [expand(item, environ) for item in items]