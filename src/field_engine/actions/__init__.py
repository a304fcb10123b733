"""Field editing verbs and the types they exchange with hosts."""

from .base import ActionContext, ActionResult, EventBus, KeyInput
from .editing import (
    backspace,
    copy_selection,
    cut_selection,
    delete_forward,
    insert_newline,
    move_down,
    move_end,
    move_home,
    move_left,
    move_right,
    move_up,
    move_word_left,
    move_word_right,
    paste,
    redo,
    select_all,
    undo,
)

__all__ = [
    "ActionContext",
    "ActionResult",
    "EventBus",
    "KeyInput",
    "backspace",
    "copy_selection",
    "cut_selection",
    "delete_forward",
    "insert_newline",
    "move_down",
    "move_end",
    "move_home",
    "move_left",
    "move_right",
    "move_up",
    "move_word_left",
    "move_word_right",
    "paste",
    "redo",
    "select_all",
    "undo",
]
