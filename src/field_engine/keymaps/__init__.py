"""Key binding models, registry, resolver and the default field keymap."""

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .parsing import KeyBindingError, parse_key_binding
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import DEFAULT_ACTIONS, default_bindings, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
    "KeyBindingError",
    "parse_key_binding",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "DEFAULT_ACTIONS",
    "default_bindings",
    "load_default_keymaps",
]
