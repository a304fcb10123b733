"""Text buffer, selection, undo history and viewport calculations."""

from .buffer import BufferView, TextBuffer, Transaction
from .document import BufferDocument
from .state import BufferState, Cursor, Selection
from .undo import (
    DEFAULT_UNDO_CAPACITY,
    DeleteChar,
    DeleteNewline,
    DeleteRange,
    EditOperation,
    InsertChar,
    InsertNewline,
    InsertRange,
    UndoHistory,
)
from .validation import clamp_cursor
from .viewport import Rect, ScrollState
from .words import is_word_char

__all__ = [
    "BufferDocument",
    "BufferState",
    "BufferView",
    "Cursor",
    "Selection",
    "TextBuffer",
    "Transaction",
    "UndoHistory",
    "EditOperation",
    "InsertChar",
    "DeleteChar",
    "InsertNewline",
    "DeleteNewline",
    "InsertRange",
    "DeleteRange",
    "DEFAULT_UNDO_CAPACITY",
    "Rect",
    "ScrollState",
    "clamp_cursor",
    "is_word_char",
]
