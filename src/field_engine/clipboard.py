"""Clipboard boundary used by copy/cut/paste actions."""

from __future__ import annotations

from typing import List, Optional, Protocol


class Clipboard(Protocol):
    """Anything that can hold one piece of text (system clipboard, tmux, ...)."""

    def get_text(self) -> Optional[str]:
        ...

    def set_text(self, text: str) -> None:
        ...


class InMemoryClipboard:
    """Process-local clipboard; keeps a short history of copied text."""

    def __init__(self, *, history_size: int = 10) -> None:
        self._history: List[str] = []
        self._history_size = max(1, history_size)

    def get_text(self) -> Optional[str]:
        return self._history[-1] if self._history else None

    def set_text(self, text: str) -> None:
        self._history.append(text)
        del self._history[: -self._history_size]

    def history(self) -> tuple[str, ...]:
        return tuple(self._history)


__all__ = ["Clipboard", "InMemoryClipboard"]
