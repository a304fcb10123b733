"""Anchor-based selection helpers."""

from __future__ import annotations

from typing import Optional

from .document import BufferDocument
from .state import BufferState, Selection, ordered
from .validation import clamp_cursor


def selection_bounds(document: BufferDocument, state: BufferState) -> Optional[Selection]:
    """Ordered ``(start, end)`` of the anchor/cursor pair, clamped to the text."""

    if state.anchor is None:
        return None
    anchor = clamp_cursor(document, state.anchor)
    cursor = clamp_cursor(document, state.cursor)
    return ordered(anchor, cursor)


def selected_text(document: BufferDocument, state: BufferState) -> str:
    bounds = selection_bounds(document, state)
    if bounds is None:
        return ""
    start, end = bounds
    return document.text_range(start, end)


def select_all(document: BufferDocument, state: BufferState) -> None:
    state.anchor = (0, 0)
    state.cursor = document.end()


__all__ = ["selection_bounds", "selected_text", "select_all"]
