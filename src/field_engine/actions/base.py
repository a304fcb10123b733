"""Key input, action context and result types shared by field actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from field_engine.buffer import TextBuffer
from field_engine.clipboard import Clipboard


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed to a field.

    ``text`` carries the printable character produced by the key, if any.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ActionResult:
    """Outcome of feeding one key to a field."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class EventBus:
    """Minimal event bus so hosts can react to copy/cut/paste and friends."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ActionContext:
    """Services every field action can reach."""

    buffer: TextBuffer
    clipboard: Clipboard
    bus: EventBus
    flags: Dict[str, bool] = field(default_factory=dict)

    @property
    def multiline(self) -> bool:
        return bool(self.flags.get("multiline", False))


__all__ = ["KeyInput", "ActionResult", "ActionContext", "EventBus"]
