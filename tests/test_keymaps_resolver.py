from __future__ import annotations

from field_engine.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    WhenClause,
    load_default_keymaps,
    parse_key_binding,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    key: str = "Ctrl+k",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
    shift_extends: bool = False,
) -> Binding:
    return Binding(
        id=binding_id,
        stroke=parse_key_binding(key),
        action_id=action_id,
        when=when,
        priority=priority,
        shift_extends=shift_extends,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_stroke() -> None:
    binding = make_binding("field.kill")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve(KeyStroke("k", ("ctrl",)))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.extend_selection is False


def test_resolver_accepts_token_strings() -> None:
    resolver = KeymapResolver(build_registry([make_binding("field.kill")]))

    assert resolver.resolve("ctrl+k").status == "match"
    assert resolver.resolve("ctrl+j").status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "field.newline",
        key="Enter",
        when=(WhenClause("multiline"),),
        action_id="edit.newline",
    )
    resolver = KeymapResolver(build_registry([gating]))

    miss = resolver.resolve("enter", context={})
    assert miss.status == "miss"

    hit = resolver.resolve("enter", context={"multiline": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding("low", action_id="core.low")
    high = make_binding("high", action_id="core.high", priority=10)
    resolver = KeymapResolver(build_registry([low, high]))

    result = resolver.resolve("ctrl+k")

    assert result.match is not None
    assert result.match.action.id == "core.high"


def test_shift_falls_back_to_extending_binding() -> None:
    motion = make_binding("field.left", key="Left", shift_extends=True)
    resolver = KeymapResolver(build_registry([motion]))

    result = resolver.resolve(KeyStroke("left", ("shift",)))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == "field.left"
    assert result.match.extend_selection is True
    assert result.token == "shift+left"


def test_shift_fallback_ignores_non_extending_bindings() -> None:
    undo = make_binding("field.undo", key="Ctrl+z")
    resolver = KeymapResolver(build_registry([undo]))

    assert resolver.resolve(KeyStroke("z", ("ctrl", "shift"))).status == "miss"


def test_exact_shift_binding_wins_over_fallback() -> None:
    undo = make_binding("field.undo", key="Ctrl+z", action_id="history.undo")
    redo = make_binding("field.redo", key="Ctrl+Shift+z", action_id="history.redo")
    resolver = KeymapResolver(build_registry([undo, redo]))

    result = resolver.resolve(KeyStroke("Z", ("ctrl", "shift")))

    assert result.match is not None
    assert result.match.action.id == "history.redo"
    assert result.match.extend_selection is False


def test_resolver_sees_bindings_registered_later() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("ctrl+x").status == "miss"

    registry.register_action(make_action("clipboard.cut"))
    registry.register_binding(make_binding("field.cut", key="Ctrl+x", action_id="clipboard.cut"))

    match = resolver.resolve("ctrl+x")
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == "field.cut"


def test_default_keymap_routes_ctrl_left_to_word_motion() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    plain = resolver.resolve(KeyStroke("left"))
    word = resolver.resolve(KeyStroke("left", ("ctrl", "shift")))

    assert plain.match is not None and plain.match.action.id == "cursor.left"
    assert word.match is not None and word.match.action.id == "cursor.word_left"
    assert word.match.extend_selection is True
