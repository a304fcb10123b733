"""Edit operations and the bounded undo/redo history."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Union

from .document import BufferDocument
from .state import Cursor
from .validation import is_valid_cursor

DEFAULT_UNDO_CAPACITY = 100


@dataclass(frozen=True, slots=True)
class InsertChar:
    line: int
    col: int
    ch: str


@dataclass(frozen=True, slots=True)
class DeleteChar:
    line: int
    col: int
    ch: str


@dataclass(frozen=True, slots=True)
class InsertNewline:
    line: int
    col: int


@dataclass(frozen=True, slots=True)
class DeleteNewline:
    """Backspace at column 0: ``next_line`` was appended to ``line`` at ``col``."""

    line: int
    col: int
    next_line: str


@dataclass(frozen=True, slots=True)
class InsertRange:
    """Insertion of several characters at once (paste); may span lines."""

    start: Cursor
    text: str


@dataclass(frozen=True, slots=True)
class DeleteRange:
    """Removal of a selection; ``text`` may span several lines."""

    start: Cursor
    text: str


EditOperation = Union[
    InsertChar, DeleteChar, InsertNewline, DeleteNewline, InsertRange, DeleteRange
]


def _range_end(start: Cursor, text: str) -> Cursor:
    pieces = text.split("\n")
    if len(pieces) == 1:
        return (start[0], start[1] + len(text))
    return (start[0] + len(pieces) - 1, len(pieces[-1]))


def _holds_range(document: BufferDocument, start: Cursor, text: str) -> bool:
    end = _range_end(start, text)
    if not (is_valid_cursor(document, start) and is_valid_cursor(document, end)):
        return False
    return document.text_range(start, end) == text


def revert(document: BufferDocument, op: EditOperation) -> Optional[Cursor]:
    """Apply the inverse of ``op``.

    Returns the cursor the undo step lands on, or ``None`` when the document
    no longer matches what ``op`` recorded and the step was skipped.
    """

    match op:
        case InsertChar(line=line, col=col, ch=ch):
            if document.char_at(line, col) != ch:
                return None
            document.remove_char(line, col)
            return (line, col)
        case DeleteChar(line=line, col=col, ch=ch):
            if not is_valid_cursor(document, (line, col)):
                return None
            document.insert_char(line, col, ch)
            return (line, col + 1)
        case InsertNewline(line=line, col=col):
            if not 0 <= line < document.line_count - 1:
                return None
            document.join_with_next(line)
            return (line, col)
        case DeleteNewline(line=line, col=col):
            if not is_valid_cursor(document, (line, col)):
                return None
            document.split_line(line, col)
            return (line, col)
        case InsertRange(start=start, text=text):
            if not _holds_range(document, start, text):
                return None
            document.delete_range(start, _range_end(start, text))
            return start
        case DeleteRange(start=start, text=text):
            if not is_valid_cursor(document, start):
                return None
            return document.insert_text(start, text)
        case _:
            raise TypeError(f"Unknown edit operation {op!r}")


def replay(document: BufferDocument, op: EditOperation) -> Optional[Cursor]:
    """Re-apply ``op`` forward; ``None`` when the document has drifted."""

    match op:
        case InsertChar(line=line, col=col, ch=ch):
            if not is_valid_cursor(document, (line, col)):
                return None
            document.insert_char(line, col, ch)
            return (line, col + 1)
        case DeleteChar(line=line, col=col, ch=ch):
            if document.char_at(line, col) != ch:
                return None
            document.remove_char(line, col)
            return (line, col)
        case InsertNewline(line=line, col=col):
            if not is_valid_cursor(document, (line, col)):
                return None
            document.split_line(line, col)
            return (line + 1, 0)
        case DeleteNewline(line=line, col=col):
            if not 0 <= line < document.line_count - 1:
                return None
            if document.line_length(line) != col:
                return None
            document.join_with_next(line)
            return (line, col)
        case InsertRange(start=start, text=text):
            if not is_valid_cursor(document, start):
                return None
            return document.insert_text(start, text)
        case DeleteRange(start=start, text=text):
            if not _holds_range(document, start, text):
                return None
            document.delete_range(start, _range_end(start, text))
            return start
        case _:
            raise TypeError(f"Unknown edit operation {op!r}")


class UndoHistory:
    """Capacity-bounded undo list plus the redo list it feeds."""

    def __init__(self, capacity: int = DEFAULT_UNDO_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("undo capacity must be at least 1")
        self._undo: Deque[EditOperation] = deque(maxlen=capacity)
        self._redo: List[EditOperation] = []

    @property
    def capacity(self) -> int:
        return self._undo.maxlen or DEFAULT_UNDO_CAPACITY

    def __len__(self) -> int:
        return len(self._undo)

    def record(self, op: EditOperation) -> None:
        """Push a fresh edit; the oldest entry falls off once full."""

        self._undo.append(op)
        self._redo.clear()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def pop_undo(self) -> Optional[EditOperation]:
        if not self._undo:
            return None
        return self._undo.pop()

    def pop_redo(self) -> Optional[EditOperation]:
        if not self._redo:
            return None
        return self._redo.pop()

    def push_redo(self, op: EditOperation) -> None:
        self._redo.append(op)

    def push_undo(self, op: EditOperation) -> None:
        """Return a redone edit to the undo list without touching redo."""

        self._undo.append(op)

    def undo_entries(self) -> tuple[EditOperation, ...]:
        return tuple(self._undo)

    def redo_entries(self) -> tuple[EditOperation, ...]:
        return tuple(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()


__all__ = [
    "DEFAULT_UNDO_CAPACITY",
    "InsertChar",
    "DeleteChar",
    "InsertNewline",
    "DeleteNewline",
    "InsertRange",
    "DeleteRange",
    "EditOperation",
    "UndoHistory",
    "revert",
    "replay",
]
