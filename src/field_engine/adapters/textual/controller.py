"""Adapter wiring Textual key events into a FieldEditor and frames back out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from field_engine.actions import ActionResult, KeyInput
from field_engine.buffer import Rect
from field_engine.editor import FieldEditor, FieldFrame

_MODIFIER_ALIASES = {"ctrl": "ctrl", "control": "ctrl", "shift": "shift", "alt": "alt", "meta": "alt"}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[FieldFrame], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def translate_textual_key(
    key: str,
    *,
    character: Optional[str] = None,
    modifiers: Iterable[str] = (),
) -> KeyInput:
    """Turn Textual's ``"ctrl+shift+left"`` style names into a :class:`KeyInput`."""

    mods = [_MODIFIER_ALIASES.get(str(m).lower(), str(m).lower()) for m in modifiers]
    parts = key.split("+") if len(key) > 1 else [key]
    while len(parts) > 1 and parts[0].lower() in _MODIFIER_ALIASES:
        mods.append(_MODIFIER_ALIASES[parts.pop(0).lower()])
    name = "+".join(parts)
    if character is not None and (len(character) != 1 or not character.isprintable()):
        character = None
    if name == "space" and character is None and not mods:
        character = " "
    return KeyInput(key=name, modifiers=tuple(dict.fromkeys(mods)), text=character)


class TextualFieldAdapter:
    """Bridges one FieldEditor to Textual-friendly callbacks."""

    def __init__(
        self,
        editor: FieldEditor,
        hooks: TextualUIHooks,
        *,
        area: Rect = Rect(0, 0, 40, 3),
    ) -> None:
        self.editor = editor
        self.hooks = hooks
        self.area = area
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ActionResult:
        key_input = translate_textual_key(key, character=character, modifiers=modifiers)
        self._log_state("key ->", key=key_input.key, mods=key_input.modifiers)
        result = self.editor.handle_key(key_input)
        if result.consumed:
            self.refresh()
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._log_state("result <-", consumed=result.consumed, status=result.status)
        return result

    def resize(self, area: Rect) -> FieldFrame:
        self.area = area
        return self.refresh()

    def refresh(self) -> FieldFrame:
        frame = self.editor.render_frame(self.area)
        self.hooks.update_frame(frame)
        return frame

    def _subscribe_events(self) -> None:
        for event in ("field.copy", "field.cut", "field.paste", "field.selection"):
            self.editor.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        buffer = self.editor.buffer
        snapshot: dict[str, object] = {
            "field": self.editor.name,
            "cursor": buffer.cursor,
            "selection": buffer.selection_bounds() if buffer.has_selection() else None,
            "version": buffer.document.version,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["TextualFieldAdapter", "TextualUIHooks", "translate_textual_key"]
