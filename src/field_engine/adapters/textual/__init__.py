"""Textual adapter for field editors."""

from .controller import TextualFieldAdapter, TextualUIHooks, translate_textual_key

__all__ = ["TextualFieldAdapter", "TextualUIHooks", "translate_textual_key"]
