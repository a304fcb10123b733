"""Field controller: routes key input into one buffer and renders frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from field_engine.actions import ActionContext, ActionResult, EventBus, KeyInput
from field_engine.buffer import Rect, Selection, TextBuffer
from field_engine.buffer.viewport import BORDER_CELLS
from field_engine.clipboard import Clipboard, InMemoryClipboard
from field_engine.config import EngineConfig
from field_engine.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    ResolutionMatch,
    load_default_keymaps,
)
from field_engine.runtime import telemetry

_COMMAND_MODIFIERS = frozenset({"ctrl", "alt"})


@dataclass(slots=True)
class FieldFrame:
    """Everything a renderer needs to paint one field."""

    start_line: int
    lines: List[str]
    cursor: Tuple[int, int]
    cursor_cell: Optional[Tuple[int, int]]
    selection: Optional[Selection]
    scroll_col: int


class FieldEditor:
    """Owns a :class:`TextBuffer` and turns key input into edits.

    Bound keys run their action; unbound printable characters without a
    Ctrl/Alt modifier are typed; everything else is left for the host.
    """

    def __init__(
        self,
        buffer: Optional[TextBuffer] = None,
        *,
        name: str = "field",
        multiline: Optional[bool] = None,
        config: Optional[EngineConfig] = None,
        clipboard: Optional[Clipboard] = None,
        registry: Optional[KeymapRegistry] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.name = name
        if registry is None:
            registry = KeymapRegistry()
            load_default_keymaps(registry, config=self.config.key_bindings)
        self.registry = registry
        self.resolver = KeymapResolver(registry)
        self.context = ActionContext(
            buffer=buffer or TextBuffer(name=name, undo_capacity=self.config.undo_capacity),
            clipboard=clipboard or InMemoryClipboard(),
            bus=bus or EventBus(),
            flags={
                "multiline": self.config.multiline if multiline is None else multiline
            },
        )

    @classmethod
    def from_text(cls, text: str, **kwargs: object) -> "FieldEditor":
        config = kwargs.get("config")
        capacity = (
            config.undo_capacity
            if isinstance(config, EngineConfig)
            else EngineConfig().undo_capacity
        )
        name = str(kwargs.get("name", "field"))
        buffer = TextBuffer.from_text(text, name=name, undo_capacity=capacity)
        return cls(buffer, **kwargs)  # type: ignore[arg-type]

    @property
    def buffer(self) -> TextBuffer:
        return self.context.buffer

    @property
    def multiline(self) -> bool:
        return self.context.multiline

    @property
    def bus(self) -> EventBus:
        return self.context.bus

    def value(self) -> str:
        return self.buffer.to_text()

    def set_value(self, text: str) -> None:
        """Replace the contents, dropping history and scroll position."""

        self.context.buffer = TextBuffer.from_text(
            text, name=self.name, undo_capacity=self.config.undo_capacity
        )

    def handle_key(self, key: KeyInput) -> ActionResult:
        stroke = KeyStroke(key.key, key.modifiers)
        result = self.resolver.resolve(stroke, context=self.context.flags)
        if result.status == "match" and result.match is not None:
            outcome = self._execute(result.match)
            if outcome.consumed:
                return outcome

        if self._is_typing(key):
            self.buffer.insert_char(key.text or "")
            return ActionResult(consumed=True, status="insert")

        return ActionResult(consumed=False, status="miss")

    def render_frame(self, area: Rect) -> FieldFrame:
        """Scroll so the cursor is visible inside ``area`` and slice the text."""

        height = max(0, area.height - BORDER_CELLS)
        self.buffer.update_scroll(height)
        self.buffer.update_horizontal_scroll(area.width)
        start, lines = self.buffer.visible_lines(height, area.width)
        return FieldFrame(
            start_line=start,
            lines=lines,
            cursor=self.buffer.cursor,
            cursor_cell=self.buffer.cursor_screen_position(area, height),
            selection=self.buffer.selection_bounds() if self.buffer.has_selection() else None,
            scroll_col=self.buffer.scroll.col_offset,
        )

    def _execute(self, match: ResolutionMatch) -> ActionResult:
        with telemetry.span(
            "field::execute",
            component="field",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)
        if isinstance(outcome, ActionResult):
            return outcome
        return ActionResult(consumed=True)

    def _is_typing(self, key: KeyInput) -> bool:
        if key.text is None or len(key.text) != 1:
            return False
        if not key.text.isprintable():
            return False
        modifiers = {m.lower() for m in key.modifiers}
        return not modifiers & _COMMAND_MODIFIERS


__all__ = ["FieldEditor", "FieldFrame"]
