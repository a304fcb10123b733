from __future__ import annotations

import pytest

from field_engine.keymaps import KeyBindingError, KeyStroke, WhenClause, parse_key_binding


@pytest.mark.parametrize(
    ("text", "token"),
    [
        ("Ctrl+z", "ctrl+z"),
        ("Ctrl+Z", "ctrl+z"),
        ("Ctrl+Left", "ctrl+left"),
        ("Shift+Ctrl+Left", "ctrl+shift+left"),
        ("Alt+x", "alt+x"),
        ("F2", "f2"),
        ("Return", "enter"),
        ("Esc", "escape"),
        ("Ctrl++", "ctrl++"),
        ("Backspace", "backspace"),
    ],
)
def test_parse_key_binding_tokens(text: str, token: str) -> None:
    assert parse_key_binding(text).token == token


@pytest.mark.parametrize("text", ["", "   ", "Ctrl+Foo", "Hyper+x"])
def test_parse_key_binding_rejects_unknown_keys(text: str) -> None:
    with pytest.raises(KeyBindingError) as excinfo:
        parse_key_binding(text)

    assert excinfo.value.binding == text


def test_key_stroke_normalizes_modifiers_and_space() -> None:
    stroke = KeyStroke(" ", ("Shift", "ctrl", "shift"))

    assert stroke.key == "space"
    assert stroke.modifiers == ("ctrl", "shift")
    assert stroke.without("shift").token == "ctrl+space"


def test_when_clause_parse_and_evaluate() -> None:
    positive = WhenClause.parse("multiline")
    negative = WhenClause.parse("!multiline")

    assert positive.evaluate({"multiline": True})
    assert not positive.evaluate({})
    assert negative.expected is False
    assert negative.evaluate({})
