"""Cursor and selection-anchor state for text buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = Tuple[int, int]  # (line, column), column counted in code points
Selection = Tuple[Cursor, Cursor]


def ordered(first: Cursor, second: Cursor) -> Selection:
    """Return ``(first, second)`` sorted so the earlier position comes first."""

    if first <= second:
        return (first, second)
    return (second, first)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + optional selection anchor owned by one buffer."""

    cursor: Cursor = (0, 0)
    anchor: Optional[Cursor] = None

    @property
    def line(self) -> int:
        return self.cursor[0]

    @property
    def column(self) -> int:
        return self.cursor[1]

    def set_cursor(self, line: int, column: int) -> None:
        self.cursor = (line, column)

    def start_selection(self) -> None:
        self.anchor = self.cursor

    def clear_selection(self) -> None:
        self.anchor = None

    def has_selection(self) -> bool:
        return self.anchor is not None and self.anchor != self.cursor

    def selection(self) -> Optional[Selection]:
        if self.anchor is None:
            return None
        return ordered(self.anchor, self.cursor)
