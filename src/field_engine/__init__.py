"""UI-agnostic text field editing engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "clipboard",
    "config",
    "editor",
    "keymaps",
    "runtime",
]

__version__ = "0.1.0"
