"""Editing verbs bound to keys in every text field."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from .base import ActionContext, ActionResult

if TYPE_CHECKING:
    from field_engine.buffer import TextBuffer
    from field_engine.keymaps import ResolutionMatch


def _move(
    context: ActionContext,
    match: "ResolutionMatch",
    motion: Callable[["TextBuffer", bool], None],
) -> ActionResult:
    extend = match.extend_selection
    motion(context.buffer, extend)
    return ActionResult(consumed=True, status="extend" if extend else "move")


def move_left(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    return _move(context, match, lambda buf, ext: buf.move_cursor_left(ext))


def move_right(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    return _move(context, match, lambda buf, ext: buf.move_cursor_right(ext))


def move_up(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    return _move(context, match, lambda buf, ext: buf.move_cursor_up(ext))


def move_down(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    return _move(context, match, lambda buf, ext: buf.move_cursor_down(ext))


def move_home(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    return _move(context, match, lambda buf, ext: buf.move_cursor_home(ext))


def move_end(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    return _move(context, match, lambda buf, ext: buf.move_cursor_end(ext))


def move_word_left(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    return _move(context, match, lambda buf, ext: buf.move_word_left(ext))


def move_word_right(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    return _move(context, match, lambda buf, ext: buf.move_word_right(ext))


def backspace(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    context.buffer.delete_char()
    return ActionResult(consumed=True, status="edit")


def delete_forward(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    context.buffer.delete_forward()
    return ActionResult(consumed=True, status="edit")


def insert_newline(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    if not context.multiline:
        # Single-line fields leave Enter to the host (next field / submit).
        return ActionResult(consumed=False, status="miss")
    context.buffer.insert_newline()
    return ActionResult(consumed=True, status="edit")


def undo(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    if context.buffer.undo():
        return ActionResult(consumed=True, status="undo")
    return ActionResult(consumed=True, status="noop", message="Nothing to undo")


def redo(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    if context.buffer.redo():
        return ActionResult(consumed=True, status="redo")
    return ActionResult(consumed=True, status="noop", message="Nothing to redo")


def select_all(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    context.buffer.select_all()
    context.bus.emit("field.selection", context.buffer.selection_bounds())
    return ActionResult(consumed=True, status="select")


def copy_selection(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    text = context.buffer.selected_text()
    if not text:
        return ActionResult(consumed=True, status="noop")
    context.clipboard.set_text(text)
    context.bus.emit("field.copy", text)
    return ActionResult(consumed=True, status="copy", message="Copied to clipboard")


def cut_selection(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    text = context.buffer.selected_text()
    if not text:
        return ActionResult(consumed=True, status="noop")
    context.clipboard.set_text(text)
    context.buffer.delete_selection()
    context.bus.emit("field.cut", text)
    return ActionResult(consumed=True, status="cut", message="Cut to clipboard")


def paste(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    text = context.clipboard.get_text()
    if not text:
        return ActionResult(consumed=True, status="noop")
    if not context.multiline:
        text = text.replace("\r\n", " ").replace("\n", " ")
    context.buffer.insert_text(text)
    context.bus.emit("field.paste", text)
    return ActionResult(consumed=True, status="paste")


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_home",
    "move_end",
    "move_word_left",
    "move_word_right",
    "backspace",
    "delete_forward",
    "insert_newline",
    "undo",
    "redo",
    "select_all",
    "copy_selection",
    "cut_selection",
    "paste",
]
