"""Line storage for field buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .state import Cursor


@dataclass(slots=True)
class BufferDocument:
    """Ordered list of lines, never empty.

    Columns are code-point offsets, so slicing a line never splits a
    multi-byte character. Callers are expected to pass positions that were
    clamped with :mod:`field_engine.buffer.validation`; the primitives below
    clamp again rather than raise.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        # Only "\n" separates lines; "\r" stays part of the line text.
        return cls(_lines=text.split("\n"))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def to_text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    def end(self) -> Cursor:
        last = len(self._lines) - 1
        return (last, len(self._lines[last]))

    def insert_char(self, line: int, column: int, ch: str) -> None:
        text = self._lines[line]
        column = min(column, len(text))
        self._lines[line] = text[:column] + ch + text[column:]
        self._touch()

    def char_at(self, line: int, column: int) -> str | None:
        if not 0 <= line < len(self._lines):
            return None
        text = self._lines[line]
        if not 0 <= column < len(text):
            return None
        return text[column]

    def remove_char(self, line: int, column: int) -> str:
        text = self._lines[line]
        removed = text[column]
        self._lines[line] = text[:column] + text[column + 1 :]
        self._touch()
        return removed

    def split_line(self, line: int, column: int) -> None:
        """Break ``line`` at ``column``; the tail becomes the next line."""

        text = self._lines[line]
        column = min(column, len(text))
        self._lines[line] = text[:column]
        self._lines.insert(line + 1, text[column:])
        self._touch()

    def join_with_next(self, line: int) -> str:
        """Append line ``line + 1`` onto ``line`` and return the merged text."""

        following = self._lines.pop(line + 1)
        self._lines[line] += following
        self._touch()
        return following

    def text_range(self, start: Cursor, end: Cursor) -> str:
        (start_line, start_col), (end_line, end_col) = start, end
        if start_line == end_line:
            return self._lines[start_line][start_col:end_col]
        parts = [self._lines[start_line][start_col:]]
        parts.extend(self._lines[start_line + 1 : end_line])
        parts.append(self._lines[end_line][:end_col])
        return "\n".join(parts)

    def delete_range(self, start: Cursor, end: Cursor) -> str:
        """Remove ``[start, end)`` and return the removed text."""

        removed = self.text_range(start, end)
        (start_line, start_col), (end_line, end_col) = start, end
        head = self._lines[start_line][:start_col]
        tail = self._lines[end_line][end_col:]
        self._lines[start_line : end_line + 1] = [head + tail]
        self._touch()
        return removed

    def insert_text(self, position: Cursor, text: str) -> Cursor:
        """Insert possibly multi-line ``text`` and return the position after it."""

        line, column = position
        current = self._lines[line]
        column = min(column, len(current))
        head, tail = current[:column], current[column:]
        pieces = text.split("\n")
        if len(pieces) == 1:
            self._lines[line] = head + text + tail
            self._touch()
            return (line, column + len(text))
        replacement = [head + pieces[0], *pieces[1:-1], pieces[-1] + tail]
        self._lines[line : line + 1] = replacement
        self._touch()
        return (line + len(pieces) - 1, len(pieces[-1]))

    def _touch(self) -> None:
        self.version += 1
