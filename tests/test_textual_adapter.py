from __future__ import annotations

from typing import Any, Dict, List

from field_engine.adapters.textual import (
    TextualFieldAdapter,
    TextualUIHooks,
    translate_textual_key,
)
from field_engine.buffer import Rect
from field_engine.editor import FieldEditor, FieldFrame


def make_adapter(
    text: str = "",
    *,
    multiline: bool = False,
    frames: List[FieldFrame] | None = None,
    statuses: List[str] | None = None,
    events: List[Dict[str, Any]] | None = None,
    logs: List[str] | None = None,
) -> TextualFieldAdapter:
    editor = FieldEditor.from_text(text, multiline=multiline)
    hooks = TextualUIHooks(
        update_frame=lambda frame: frames.append(frame) if frames is not None else None,
        update_status=lambda status: statuses.append(status) if statuses is not None else None,
        handle_event=lambda name, payload: (
            events.append({"name": name, "payload": payload}) if events is not None else None
        ),
        log=lambda line: logs.append(line) if logs is not None else None,
    )
    return TextualFieldAdapter(editor, hooks)


def test_translate_splits_modifiers() -> None:
    key_input = translate_textual_key("ctrl+shift+left")

    assert key_input.key == "left"
    assert key_input.modifiers == ("ctrl", "shift")
    assert key_input.text is None


def test_translate_keeps_printable_character_only() -> None:
    assert translate_textual_key("a", character="a").text == "a"
    assert translate_textual_key("ctrl+z", character="\x1a").text is None
    assert translate_textual_key("space", character=" ").text == " "
    assert translate_textual_key("+", character="+").key == "+"


def test_adapter_updates_frame_and_status() -> None:
    frames: List[FieldFrame] = []
    statuses: List[str] = []
    adapter = make_adapter(frames=frames, statuses=statuses)
    assert len(frames) == 1  # initial paint

    adapter.handle_textual_key("h", character="h")
    adapter.handle_textual_key("i", character="i")

    assert frames[-1].lines == ["hi"]
    assert frames[-1].cursor == (0, 2)
    assert statuses[-1] == "insert"


def test_adapter_relays_clipboard_events() -> None:
    events: List[Dict[str, Any]] = []
    statuses: List[str] = []
    adapter = make_adapter("hello", events=events, statuses=statuses)

    adapter.handle_textual_key("ctrl+a", character="\x01")
    adapter.handle_textual_key("ctrl+c", character="\x03")

    names = [event["name"] for event in events]
    assert names == ["field.selection", "field.copy"]
    assert events[-1]["payload"] == "hello"
    assert statuses[-1] == "Copied to clipboard"


def test_unconsumed_enter_is_reported() -> None:
    frames: List[FieldFrame] = []
    adapter = make_adapter("title", frames=frames)
    painted = len(frames)

    result = adapter.handle_textual_key("enter", character="\r")

    assert not result.consumed
    assert len(frames) == painted


def test_adapter_resize_repaints() -> None:
    frames: List[FieldFrame] = []
    adapter = make_adapter("abcdefghijkl", frames=frames)

    frame = adapter.resize(Rect(0, 0, 6, 3))

    assert frames[-1] is frame
    assert frame.scroll_col == 9
    assert frame.lines == ["jkl"]


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(logs=logs)

    adapter.handle_textual_key("x", character="x")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
