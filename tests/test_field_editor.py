from __future__ import annotations

from typing import List, Tuple

from field_engine.actions import KeyInput
from field_engine.buffer import Rect
from field_engine.clipboard import InMemoryClipboard
from field_engine.config import EngineConfig, KeyBindingConfig
from field_engine.editor import FieldEditor


def key(name: str, *modifiers: str, text: str | None = None) -> KeyInput:
    return KeyInput(key=name, modifiers=modifiers, text=text)


def type_text(editor: FieldEditor, text: str) -> None:
    for ch in text:
        editor.handle_key(key(ch, text=ch))


def test_printable_keys_are_typed() -> None:
    editor = FieldEditor()

    type_text(editor, "hi there")

    assert editor.value() == "hi there"
    assert editor.buffer.cursor == (0, 8)


def test_shifted_letters_are_typed() -> None:
    editor = FieldEditor()

    result = editor.handle_key(key("A", "shift", text="A"))

    assert result.consumed
    assert editor.value() == "A"


def test_unbound_ctrl_chord_is_not_typed() -> None:
    editor = FieldEditor.from_text("ab")

    result = editor.handle_key(key("q", "ctrl", text="q"))

    assert not result.consumed
    assert result.status == "miss"
    assert editor.value() == "ab"


def test_shift_arrow_extends_selection() -> None:
    editor = FieldEditor.from_text("hello")
    editor.handle_key(key("home"))

    editor.handle_key(key("right", "shift"))
    result = editor.handle_key(key("right", "shift"))

    assert result.status == "extend"
    assert editor.buffer.selected_text() == "he"


def test_ctrl_left_moves_by_word() -> None:
    editor = FieldEditor.from_text("hello world")

    result = editor.handle_key(key("left", "ctrl"))

    assert result.status == "move"
    assert editor.buffer.cursor == (0, 6)


def test_copy_cut_and_paste_through_clipboard() -> None:
    clipboard = InMemoryClipboard()
    editor = FieldEditor.from_text("hello", clipboard=clipboard)
    events: List[Tuple[str, object]] = []
    for name in ("field.copy", "field.cut", "field.paste"):
        editor.bus.subscribe(name, lambda payload, name=name: events.append((name, payload)))

    editor.handle_key(key("a", "ctrl", text="a"))
    copied = editor.handle_key(key("c", "ctrl", text="c"))
    assert copied.message == "Copied to clipboard"
    assert clipboard.get_text() == "hello"

    editor.handle_key(key("a", "ctrl", text="a"))
    editor.handle_key(key("x", "ctrl", text="x"))
    assert editor.value() == ""

    editor.handle_key(key("v", "ctrl", text="v"))
    editor.handle_key(key("v", "ctrl", text="v"))
    assert editor.value() == "hellohello"
    assert events == [
        ("field.copy", "hello"),
        ("field.cut", "hello"),
        ("field.paste", "hello"),
        ("field.paste", "hello"),
    ]


def test_copy_without_selection_is_noop() -> None:
    clipboard = InMemoryClipboard()
    editor = FieldEditor.from_text("hello", clipboard=clipboard)

    result = editor.handle_key(key("c", "ctrl", text="c"))

    assert result.status == "noop"
    assert clipboard.get_text() is None


def test_paste_into_single_line_field_flattens_newlines() -> None:
    clipboard = InMemoryClipboard()
    clipboard.set_text("a\nb")
    editor = FieldEditor(clipboard=clipboard)

    editor.handle_key(key("v", "ctrl", text="v"))

    assert editor.value() == "a b"


def test_paste_into_multiline_field_keeps_newlines() -> None:
    clipboard = InMemoryClipboard()
    clipboard.set_text("a\nb")
    editor = FieldEditor(clipboard=clipboard, multiline=True)

    editor.handle_key(key("v", "ctrl", text="v"))

    assert list(editor.buffer.lines) == ["a", "b"]


def test_enter_is_left_to_host_in_single_line_field() -> None:
    editor = FieldEditor.from_text("title")

    result = editor.handle_key(key("enter"))

    assert not result.consumed
    assert editor.value() == "title"


def test_enter_inserts_newline_in_multiline_field() -> None:
    editor = FieldEditor.from_text("ab", multiline=True)

    result = editor.handle_key(key("enter"))

    assert result.consumed
    assert list(editor.buffer.lines) == ["ab", ""]


def test_undo_and_redo_keys() -> None:
    editor = FieldEditor()
    type_text(editor, "ab")

    assert editor.handle_key(key("z", "ctrl", text="z")).status == "undo"
    assert editor.value() == "a"
    assert editor.handle_key(key("y", "ctrl", text="y")).status == "redo"
    assert editor.value() == "ab"

    editor.handle_key(key("z", "ctrl", text="z"))
    editor.handle_key(key("z", "ctrl", text="z"))
    result = editor.handle_key(key("z", "ctrl", text="z"))
    assert result.status == "noop"
    assert result.message == "Nothing to undo"


def test_backspace_and_delete_keys() -> None:
    editor = FieldEditor.from_text("abc")
    editor.handle_key(key("left"))

    editor.handle_key(key("backspace"))
    editor.handle_key(key("delete"))

    assert editor.value() == "a"


def test_configured_bindings_replace_defaults() -> None:
    config = EngineConfig(key_bindings=KeyBindingConfig(undo="Alt+u"))
    editor = FieldEditor(config=config)
    type_text(editor, "ab")

    assert not editor.handle_key(key("z", "ctrl", text="z")).consumed
    editor.handle_key(key("u", "alt", text="u"))

    assert editor.value() == "a"


def test_config_sets_undo_capacity_and_multiline() -> None:
    config = EngineConfig(undo_capacity=2, multiline=True)

    editor = FieldEditor.from_text("x", config=config)

    assert editor.buffer.history.capacity == 2
    assert editor.multiline


def test_set_value_replaces_text_and_history() -> None:
    editor = FieldEditor()
    type_text(editor, "draft")

    editor.set_value("final\ntext")

    assert editor.value() == "final\ntext"
    assert editor.buffer.cursor == (1, 4)
    assert not editor.buffer.can_undo()


def test_render_frame_scrolls_to_cursor() -> None:
    editor = FieldEditor.from_text(
        "\n".join(f"line{i}" for i in range(10)), multiline=True
    )

    frame = editor.render_frame(Rect(0, 0, 10, 4))

    assert frame.start_line == 8
    assert frame.lines == ["line8", "line9"]
    assert frame.cursor == (9, 5)
    assert frame.cursor_cell == (6, 2)
    assert frame.selection is None
    assert frame.scroll_col == 0


def test_render_frame_reports_selection() -> None:
    editor = FieldEditor.from_text("hello")
    editor.handle_key(key("left", "shift"))

    frame = editor.render_frame(Rect(0, 0, 20, 3))

    assert frame.selection == ((0, 4), (0, 5))
