"""Clamping helpers shared across buffer services.

Buffer operations never reject a position; they pull it back into range.
"""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor


def clamp_line(document: BufferDocument, line: int) -> int:
    return max(0, min(line, document.line_count - 1))


def clamp_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    line = clamp_line(document, cursor[0])
    column = max(0, min(cursor[1], document.line_length(line)))
    return (line, column)


def is_valid_cursor(document: BufferDocument, cursor: Cursor) -> bool:
    line, column = cursor
    if not 0 <= line < document.line_count:
        return False
    return 0 <= column <= document.line_length(line)
