"""Dataclasses describing key strokes, bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIERS = ("alt", "ctrl", "shift")

# Canonical spellings for named keys; anything else must be a single character.
NAMED_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "enter": "enter",
        "return": "enter",
        "esc": "escape",
        "escape": "escape",
        "backspace": "backspace",
        "tab": "tab",
        "space": "space",
        "left": "left",
        "right": "right",
        "up": "up",
        "down": "down",
        "home": "home",
        "end": "end",
        "pageup": "pageup",
        "pagedown": "pagedown",
        "delete": "delete",
        "insert": "insert",
        **{f"f{n}": f"f{n}" for n in range(1, 13)},
    }
)


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def normalize_key(key: str, modifiers: tuple[str, ...] = ()) -> str:
    if key == " ":
        return "space"
    if len(key) == 1:
        # Ctrl+Z and Ctrl+z are the same chord.
        if "ctrl" in modifiers or "alt" in modifiers:
            return key.lower()
        return key
    return NAMED_KEYS.get(key.strip().lower(), key.strip().lower())


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, e.g. ``ctrl+left``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        modifiers = normalize_modifiers(self.modifiers)
        object.__setattr__(self, "modifiers", modifiers)
        object.__setattr__(self, "key", normalize_key(self.key, modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join((*self.modifiers, self.key))
        return self.key

    def without(self, modifier: str) -> "KeyStroke":
        return KeyStroke(
            self.key, tuple(m for m in self.modifiers if m != modifier.lower())
        )


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean flag condition gating a binding (``"multiline"``, ``"!multiline"``)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:], False)
        return cls(expr, True)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with an action.

    ``shift_extends`` lets the same binding fire with Shift held, in which
    case the action receives ``extend_selection=True``.
    """

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    shift_extends: bool = False
    source: str | None = None
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        normalized_when = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", normalized_when)

    @property
    def token(self) -> str:
        return self.stroke.token

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)


__all__ = [
    "MODIFIERS",
    "NAMED_KEYS",
    "KeyStroke",
    "WhenClause",
    "ActionRef",
    "Binding",
    "normalize_key",
    "normalize_modifiers",
]
