"""Word-boundary scanning used by word-wise cursor motion."""

from __future__ import annotations


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def word_left_column(line: str, column: int) -> int:
    """Column reached by a word-left jump that stays on ``line``.

    Skips whitespace immediately left of ``column``, then the run of word
    characters before it.
    """

    pos = min(column, len(line))
    while pos > 0 and line[pos - 1].isspace():
        pos -= 1
    while pos > 0 and is_word_char(line[pos - 1]):
        pos -= 1
    return pos


def word_right_column(line: str, column: int) -> int:
    """Column reached by a word-right jump that stays on ``line``.

    Skips the run of word characters at ``column``, then any whitespace
    after it. Punctuation stops both scans.
    """

    pos = max(0, column)
    while pos < len(line) and is_word_char(line[pos]):
        pos += 1
    while pos < len(line) and line[pos].isspace():
        pos += 1
    return pos


__all__ = ["is_word_char", "word_left_column", "word_right_column"]
