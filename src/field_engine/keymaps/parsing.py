"""Parse human-written binding strings such as ``Ctrl+Left`` or ``F2``."""

from __future__ import annotations

from .models import MODIFIERS, NAMED_KEYS, KeyStroke


class KeyBindingError(ValueError):
    """Raised for binding strings that do not name a known key."""

    def __init__(self, message: str, *, binding: str | None = None) -> None:
        super().__init__(message)
        self.binding = binding


def parse_key_binding(text: str) -> KeyStroke:
    """Turn ``"Ctrl+Shift+Left"`` into a :class:`KeyStroke`.

    Modifier prefixes are case-insensitive; the key part is a named key
    (``Enter``, ``Esc``, ``PageUp``, ``F1``..``F12``...) or one character.
    ``"Ctrl++"`` binds the plus key.
    """

    raw = text.strip()
    if not raw:
        raise KeyBindingError("empty key binding", binding=text)

    modifiers: list[str] = []
    rest = raw
    while True:
        head, sep, tail = rest.partition("+")
        if not sep or not tail or head.strip().lower() not in MODIFIERS:
            break
        modifiers.append(head.strip().lower())
        rest = tail

    key = rest.strip()
    if len(key) != 1 and key.lower() not in NAMED_KEYS:
        raise KeyBindingError(f"unknown key '{key}' in binding '{text}'", binding=text)
    return KeyStroke(key, tuple(modifiers))


__all__ = ["KeyBindingError", "parse_key_binding"]
