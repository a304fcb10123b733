"""Scroll-window calculations for rendering a buffer into a bordered box.

Nothing here mutates text. Both axes are independent: the vertical offset
keeps the cursor line on screen, the horizontal offset keeps the cursor
column of the *cursor's own line* on screen. Other visible lines are sliced
with the same horizontal offset and clipped, not wrapped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .state import Cursor

BORDER_CELLS = 2  # one cell on each side of the field box


@dataclass(frozen=True, slots=True)
class Rect:
    """Screen area of a field, border included."""

    x: int
    y: int
    width: int
    height: int


@dataclass(slots=True)
class ScrollState:
    line_offset: int = 0
    col_offset: int = 0

    def reset(self) -> None:
        self.line_offset = 0
        self.col_offset = 0


def content_width(viewport_width: int) -> int:
    return max(0, viewport_width - BORDER_CELLS)


def scroll_vertically(scroll: ScrollState, cursor_line: int, viewport_height: int) -> int:
    height = max(1, viewport_height)
    if cursor_line < scroll.line_offset:
        scroll.line_offset = cursor_line
    elif cursor_line >= scroll.line_offset + height:
        scroll.line_offset = cursor_line - (height - 1)
    return scroll.line_offset


def scroll_horizontally(scroll: ScrollState, cursor_col: int, viewport_width: int) -> int:
    width = max(1, content_width(viewport_width))
    if cursor_col < scroll.col_offset:
        scroll.col_offset = cursor_col
    elif cursor_col >= scroll.col_offset + width:
        scroll.col_offset = cursor_col - (width - 1)
    return scroll.col_offset


def slice_visible(
    lines: Sequence[str],
    scroll: ScrollState,
    viewport_height: int,
    viewport_width: int,
) -> Tuple[int, List[str]]:
    """Return the first visible line index and the clipped visible lines."""

    start = min(scroll.line_offset, len(lines))
    end = min(start + max(0, viewport_height), len(lines))
    width = content_width(viewport_width)
    offset = scroll.col_offset

    visible: List[str] = []
    for line in lines[start:end]:
        if offset >= len(line):
            visible.append("")
        else:
            visible.append(line[offset : offset + width])
    return start, visible


def screen_cell(
    lines: Sequence[str],
    cursor: Cursor,
    scroll: ScrollState,
    area: Rect,
    viewport_height: int,
) -> Optional[Tuple[int, int]]:
    """Map ``cursor`` to an ``(x, y)`` terminal cell inside ``area``.

    Returns ``None`` when the cursor is scrolled out of either axis.
    """

    line, column = cursor
    if not 0 <= line < len(lines):
        return None
    top = scroll.line_offset
    if line < top or line >= top + viewport_height:
        return None
    row = line - top
    if row >= area.height - BORDER_CELLS:
        return None

    column = min(column, len(lines[line]))
    if column < scroll.col_offset:
        return None
    visible_col = column - scroll.col_offset
    if visible_col >= content_width(area.width):
        return None

    x = area.x + 1 + visible_col
    y = area.y + 1 + row
    if x >= area.x + area.width or y >= area.y + area.height:
        return None
    return (x, y)


__all__ = [
    "BORDER_CELLS",
    "Rect",
    "ScrollState",
    "content_width",
    "scroll_vertically",
    "scroll_horizontally",
    "slice_visible",
    "screen_cell",
]
