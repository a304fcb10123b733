"""Built-in field bindings, seeded from :class:`~field_engine.config.KeyBindingConfig`."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from field_engine.actions import editing
from field_engine.config import KeyBindingConfig

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .parsing import parse_key_binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="cursor.left", handler=editing.move_left, description="Move left"),
    ActionRef(id="cursor.right", handler=editing.move_right, description="Move right"),
    ActionRef(id="cursor.up", handler=editing.move_up, description="Move up"),
    ActionRef(id="cursor.down", handler=editing.move_down, description="Move down"),
    ActionRef(id="cursor.home", handler=editing.move_home, description="Line start"),
    ActionRef(id="cursor.end", handler=editing.move_end, description="Line end"),
    ActionRef(
        id="cursor.word_left",
        handler=editing.move_word_left,
        description="Previous word",
    ),
    ActionRef(
        id="cursor.word_right",
        handler=editing.move_word_right,
        description="Next word",
    ),
    ActionRef(
        id="edit.backspace",
        handler=editing.backspace,
        description="Delete before cursor",
    ),
    ActionRef(
        id="edit.delete",
        handler=editing.delete_forward,
        description="Delete after cursor",
    ),
    ActionRef(
        id="edit.newline",
        handler=editing.insert_newline,
        description="Insert line break",
    ),
    ActionRef(id="history.undo", handler=editing.undo, description="Undo"),
    ActionRef(id="history.redo", handler=editing.redo, description="Redo"),
    ActionRef(
        id="selection.all",
        handler=editing.select_all,
        description="Select everything",
    ),
    ActionRef(
        id="clipboard.copy",
        handler=editing.copy_selection,
        description="Copy selection",
    ),
    ActionRef(
        id="clipboard.cut",
        handler=editing.cut_selection,
        description="Cut selection",
    ),
    ActionRef(id="clipboard.paste", handler=editing.paste, description="Paste"),
)

# (binding id, key, action id) for keys that are not user-configurable.
_FIXED_KEYS: tuple[tuple[str, str, str], ...] = (
    ("field.left", "Left", "cursor.left"),
    ("field.right", "Right", "cursor.right"),
    ("field.up", "Up", "cursor.up"),
    ("field.down", "Down", "cursor.down"),
    ("field.home", "Home", "cursor.home"),
    ("field.end", "End", "cursor.end"),
    ("field.backspace", "Backspace", "edit.backspace"),
    ("field.delete", "Delete", "edit.delete"),
)

# KeyBindingConfig attribute -> action id.
_CONFIGURABLE: tuple[tuple[str, str], ...] = (
    ("word_left", "cursor.word_left"),
    ("word_right", "cursor.word_right"),
    ("undo", "history.undo"),
    ("redo", "history.redo"),
    ("select_all", "selection.all"),
    ("copy", "clipboard.copy"),
    ("cut", "clipboard.cut"),
    ("paste", "clipboard.paste"),
)

_MOTIONS = frozenset(
    {
        "cursor.left",
        "cursor.right",
        "cursor.up",
        "cursor.down",
        "cursor.home",
        "cursor.end",
        "cursor.word_left",
        "cursor.word_right",
    }
)


def default_bindings(config: Optional[KeyBindingConfig] = None) -> tuple[Binding, ...]:
    """Build the field bindings for ``config`` (defaults when omitted).

    Configured chords outrank the fixed keys, so ``Ctrl+Left`` reaches
    word motion even though ``Left`` alone moves one character.
    """

    settings = config or KeyBindingConfig()
    bindings: list[Binding] = []
    for binding_id, key, action_id in _FIXED_KEYS:
        bindings.append(
            Binding(
                id=binding_id,
                stroke=parse_key_binding(key),
                action_id=action_id,
                shift_extends=action_id in _MOTIONS,
                source="default",
            )
        )
    bindings.append(
        Binding(
            id="field.newline",
            stroke=KeyStroke("enter"),
            action_id="edit.newline",
            when=(WhenClause("multiline"),),
            source="default",
        )
    )
    for name, action_id in _CONFIGURABLE:
        bindings.append(
            Binding(
                id=f"field.{name}",
                stroke=parse_key_binding(getattr(settings, name)),
                action_id=action_id,
                shift_extends=action_id in _MOTIONS,
                source="config",
                priority=10,
            )
        )
    return tuple(bindings)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    config: Optional[KeyBindingConfig] = None,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and the bindings derived from ``config``."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if _selected(action.id, allowed_actions):
            registry.register_action(action, replace=replace)

    for binding in default_bindings(config):
        if not _selected(binding.id, allowed_bindings):
            continue
        if not registry.has_action(binding.action_id):
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = ["DEFAULT_ACTIONS", "default_bindings", "load_default_keymaps"]
