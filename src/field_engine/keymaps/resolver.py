"""Resolve key strokes to bound actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef
    extend_selection: bool = False


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None
    token: str = ""


class KeymapResolver:
    """Looks strokes up in a registry, honouring ``when`` flags and priority.

    An exact token match wins. Failing that, a stroke carrying Shift falls
    back to the unshifted binding when that binding opts in through
    ``shift_extends``; the match then asks for selection extension.
    """

    def __init__(self, registry: KeymapRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        stroke: KeyStroke | str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        token = stroke.token if isinstance(stroke, KeyStroke) else stroke

        match = self._select(token, ctx, extend=False)
        if match is None and isinstance(stroke, KeyStroke) and "shift" in stroke.modifiers:
            match = self._select(stroke.without("shift").token, ctx, extend=True)

        if match is None:
            return ResolutionResult(status="miss", token=token)
        return ResolutionResult(status="match", match=match, token=token)

    def _select(
        self, token: str, context: Mapping[str, bool], *, extend: bool
    ) -> Optional[ResolutionMatch]:
        candidates = [
            binding
            for binding in self._registry.iter_bindings(token)
            if binding.allows(context) and (binding.shift_extends or not extend)
        ]
        if not candidates:
            return None
        candidates.sort(key=lambda b: (-b.priority, b.id))
        binding = candidates[0]
        return ResolutionMatch(
            binding=binding,
            action=self._registry.get_action(binding.action_id),
            extend_selection=extend,
        )


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
