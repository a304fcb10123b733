"""High-level text buffer combining document, cursor state, undo and viewport."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional, Sequence, Tuple

from field_engine.runtime import telemetry

from . import selection as _selection
from . import viewport as _viewport
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
    replay,
    revert,
)
from .validation import clamp_cursor
from .viewport import Rect, ScrollState
from .words import word_left_column, word_right_column


@dataclass(slots=True)
class BufferView:
    """Read-only snapshot handed to hosts."""

    version: int
    text: str
    cursor: Cursor
    selection: Optional[Selection]


class TextBuffer:
    """Multi-line editing buffer backing one input field.

    Every public operation is total: out-of-range positions are clamped and
    the document always keeps at least one line.
    """

    def __init__(
        self,
        *,
        name: str = "field",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        history: Optional[UndoHistory] = None,
        undo_capacity: int = DEFAULT_UNDO_CAPACITY,
    ) -> None:
        self.name = name
        self.document = document if document is not None else BufferDocument()
        self.state = state if state is not None else BufferState()
        self.history = history if history is not None else UndoHistory(undo_capacity)
        self.scroll = ScrollState()
        self._ensure_cursor_valid()

    @classmethod
    def empty(cls, **kwargs: object) -> "TextBuffer":
        return cls(**kwargs)  # type: ignore[arg-type]

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "field",
        undo_capacity: int = DEFAULT_UNDO_CAPACITY,
    ) -> "TextBuffer":
        document = BufferDocument.from_text(text)
        state = BufferState(cursor=document.end())
        return cls(
            name=name, document=document, state=state, undo_capacity=undo_capacity
        )

    # -- inspection -----------------------------------------------------

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def cursor_line(self) -> int:
        return self.state.line

    @property
    def cursor_col(self) -> int:
        return self.state.column

    def to_text(self) -> str:
        return self.document.to_text()

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.to_text(),
            cursor=self.state.cursor,
            selection=self.selection_bounds() if self.has_selection() else None,
        )

    def set_cursor(self, line: int, column: int) -> None:
        """Place the cursor, clamped into the document. The anchor is kept."""

        self.state.cursor = clamp_cursor(self.document, (line, column))

    # -- editing --------------------------------------------------------

    def insert_char(self, ch: str) -> None:
        if len(ch) != 1:
            self.insert_text(ch)
            return
        if ch == "\n":
            self.insert_newline()
            return
        with Transaction(self, "insert_char") as tx:
            self._prepare_edit(tx)
            line, col = self.state.cursor
            self.document.insert_char(line, col, ch)
            self.state.set_cursor(line, col + 1)
            tx.record(InsertChar(line=line, col=col, ch=ch))

    def insert_text(self, text: str) -> None:
        """Insert possibly multi-line ``text`` as a single undo step (paste)."""

        if len(text) <= 1:
            if text:
                self.insert_char(text)
            return
        with Transaction(self, "insert_text") as tx:
            self._prepare_edit(tx)
            start = self.state.cursor
            self.state.cursor = self.document.insert_text(start, text)
            tx.record(InsertRange(start=start, text=text))

    def delete_char(self) -> None:
        """Backspace: remove the selection, the previous char, or a line break."""

        with Transaction(self, "delete_char") as tx:
            if self.has_selection():
                self._delete_selection(tx)
                return
            self._prepare_edit(tx)
            line, col = self.state.cursor
            if col > 0:
                ch = self.document.remove_char(line, col - 1)
                self.state.set_cursor(line, col - 1)
                tx.record(DeleteChar(line=line, col=col - 1, ch=ch))
            elif line > 0:
                join_col = self.document.line_length(line - 1)
                merged = self.document.join_with_next(line - 1)
                self.state.set_cursor(line - 1, join_col)
                tx.record(DeleteNewline(line=line - 1, col=join_col, next_line=merged))

    def delete_forward(self) -> None:
        """Delete key: remove the selection or the character after the cursor."""

        if self.has_selection():
            self.delete_selection()
            return
        self._ensure_cursor_valid()
        line, col = self.state.cursor
        if col < self.document.line_length(line):
            self.state.set_cursor(line, col + 1)
        elif line < self.document.line_count - 1:
            self.state.set_cursor(line + 1, 0)
        else:
            return
        self.state.clear_selection()
        self.delete_char()

    def insert_newline(self) -> None:
        with Transaction(self, "insert_newline") as tx:
            self._prepare_edit(tx)
            line, col = self.state.cursor
            self.document.split_line(line, col)
            self.state.set_cursor(line + 1, 0)
            tx.record(InsertNewline(line=line, col=col))

    # -- cursor motion --------------------------------------------------

    def move_cursor_up(self, extend_selection: bool = False) -> None:
        self._begin_motion(extend_selection)
        line, col = self.state.cursor
        if line > 0:
            line -= 1
            self.state.set_cursor(line, min(col, self.document.line_length(line)))
        elif not extend_selection:
            self.state.clear_selection()

    def move_cursor_down(self, extend_selection: bool = False) -> None:
        self._begin_motion(extend_selection)
        line, col = self.state.cursor
        if line < self.document.line_count - 1:
            line += 1
            self.state.set_cursor(line, min(col, self.document.line_length(line)))
        elif not extend_selection:
            self.state.clear_selection()

    def move_cursor_left(self, extend_selection: bool = False) -> None:
        self._begin_motion(extend_selection)
        line, col = self.state.cursor
        if col > 0:
            self.state.set_cursor(line, col - 1)
        elif line > 0:
            self.state.set_cursor(line - 1, self.document.line_length(line - 1))

    def move_cursor_right(self, extend_selection: bool = False) -> None:
        self._begin_motion(extend_selection)
        line, col = self.state.cursor
        if col < self.document.line_length(line):
            self.state.set_cursor(line, col + 1)
        elif line < self.document.line_count - 1:
            self.state.set_cursor(line + 1, 0)

    def move_cursor_home(self, extend_selection: bool = False) -> None:
        self._begin_motion(extend_selection)
        self.state.set_cursor(self.state.line, 0)

    def move_cursor_end(self, extend_selection: bool = False) -> None:
        self._begin_motion(extend_selection)
        line = self.state.line
        self.state.set_cursor(line, self.document.line_length(line))

    def move_word_left(self, extend_selection: bool = False) -> None:
        self._begin_motion(extend_selection)
        line, col = self.state.cursor
        if col == 0:
            if line > 0:
                self.state.set_cursor(line - 1, self.document.line_length(line - 1))
            return
        self.state.set_cursor(line, word_left_column(self.document.get_line(line), col))

    def move_word_right(self, extend_selection: bool = False) -> None:
        self._begin_motion(extend_selection)
        line, col = self.state.cursor
        if col >= self.document.line_length(line):
            if line < self.document.line_count - 1:
                self.state.set_cursor(line + 1, 0)
            return
        self.state.set_cursor(line, word_right_column(self.document.get_line(line), col))

    # -- selection ------------------------------------------------------

    def start_selection(self) -> None:
        self.state.start_selection()

    def clear_selection(self) -> None:
        self.state.clear_selection()

    def has_selection(self) -> bool:
        return self.state.has_selection()

    def selection_bounds(self) -> Optional[Selection]:
        return _selection.selection_bounds(self.document, self.state)

    def selected_text(self) -> str:
        return _selection.selected_text(self.document, self.state)

    def select_all(self) -> None:
        _selection.select_all(self.document, self.state)

    def delete_selection(self) -> str:
        """Remove the selected range and return it (``""`` when nothing is selected)."""

        with Transaction(self, "delete_selection") as tx:
            return self._delete_selection(tx)

    # -- history --------------------------------------------------------

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> bool:
        """Revert the newest edit. ``False`` only when the history is empty."""

        op = self.history.pop_undo()
        if op is None:
            return False
        with telemetry.span(
            "buffer::undo", component="buffer", metadata={"buffer": self.name}
        ):
            self.state.clear_selection()
            landed = revert(self.document, op)
            if landed is None:
                self._report_skipped("undo", op)
            else:
                self.state.cursor = landed
                self.history.push_redo(op)
            self._ensure_cursor_valid()
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone edit. ``False`` when none is pending."""

        op = self.history.pop_redo()
        if op is None:
            return False
        with telemetry.span(
            "buffer::redo", component="buffer", metadata={"buffer": self.name}
        ):
            self.state.clear_selection()
            landed = replay(self.document, op)
            if landed is None:
                self._report_skipped("redo", op)
            else:
                self.state.cursor = landed
                self.history.push_undo(op)
            self._ensure_cursor_valid()
        return True

    # -- viewport -------------------------------------------------------

    def update_scroll(self, viewport_height: int) -> None:
        _viewport.scroll_vertically(self.scroll, self.state.line, viewport_height)

    def update_horizontal_scroll(self, viewport_width: int) -> None:
        _viewport.scroll_horizontally(self.scroll, self.state.column, viewport_width)

    def visible_lines(
        self, viewport_height: int, viewport_width: int
    ) -> Tuple[int, list[str]]:
        return _viewport.slice_visible(
            self.document.snapshot(), self.scroll, viewport_height, viewport_width
        )

    def cursor_screen_position(
        self, area: Rect, viewport_height: int
    ) -> Optional[Tuple[int, int]]:
        return _viewport.screen_cell(
            self.document.snapshot(), self.state.cursor, self.scroll, area, viewport_height
        )

    # -- internals ------------------------------------------------------

    def _ensure_cursor_valid(self) -> None:
        self.state.cursor = clamp_cursor(self.document, self.state.cursor)

    def _begin_motion(self, extend_selection: bool) -> None:
        self._ensure_cursor_valid()
        if extend_selection:
            if self.state.anchor is None:
                self.state.start_selection()
        elif not self.state.has_selection():
            self.state.clear_selection()

    def _prepare_edit(self, tx: "Transaction") -> None:
        if self.state.has_selection():
            self._delete_selection(tx)
        else:
            # A coincident anchor must not turn into a selection once text moves.
            self.state.clear_selection()
        self._ensure_cursor_valid()

    def _delete_selection(self, tx: "Transaction") -> str:
        bounds = self.selection_bounds()
        self.state.clear_selection()
        if bounds is None or bounds[0] == bounds[1]:
            return ""
        start, end = bounds
        removed = self.document.delete_range(start, end)
        self.state.cursor = start
        tx.record(DeleteRange(start=start, text=removed))
        return removed

    def _report_skipped(self, action: str, op: EditOperation) -> None:
        telemetry.record_event(
            f"buffer.{action}_skipped",
            data={"buffer": self.name, "operation": type(op).__name__},
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Groups one public edit: opens a telemetry span and records its operations."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.operations: list[EditOperation] = []
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def record(self, op: EditOperation) -> None:
        self.operations.append(op)
        self.buffer.history.record(op)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["BufferView", "TextBuffer", "Transaction"]
