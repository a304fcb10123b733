from __future__ import annotations

import pytest

from field_engine.buffer import TextBuffer, is_word_char
from field_engine.buffer.words import word_left_column, word_right_column


def test_word_left_from_line_end() -> None:
    buffer = TextBuffer.from_text("hello world")
    assert buffer.cursor == (0, 11)

    buffer.move_word_left()

    assert buffer.cursor_col == 6


def test_word_left_skips_whitespace_then_word() -> None:
    buffer = TextBuffer.from_text("foo   bar")
    buffer.set_cursor(0, 6)

    buffer.move_word_left()

    assert buffer.cursor == (0, 0)


def test_word_right_skips_word_then_whitespace() -> None:
    buffer = TextBuffer.from_text("hello world")
    buffer.set_cursor(0, 0)

    buffer.move_word_right()
    assert buffer.cursor == (0, 6)

    buffer.move_word_right()
    assert buffer.cursor == (0, 11)


def test_word_motion_wraps_between_lines() -> None:
    buffer = TextBuffer.from_text("ab\ncd")
    buffer.set_cursor(0, 2)

    buffer.move_word_right()
    assert buffer.cursor == (1, 0)

    buffer.move_word_left()
    assert buffer.cursor == (0, 2)


def test_word_motion_is_noop_at_document_edges() -> None:
    buffer = TextBuffer.from_text("ab\ncd")

    buffer.move_word_right()
    assert buffer.cursor == (1, 2)

    buffer.set_cursor(0, 0)
    buffer.move_word_left()
    assert buffer.cursor == (0, 0)


def test_word_right_stops_at_punctuation() -> None:
    assert word_right_column("foo.bar", 0) == 3
    assert word_left_column("foo.bar", 7) == 4


def test_word_motion_counts_code_points() -> None:
    buffer = TextBuffer.from_text("héllo wörld")

    buffer.move_word_left()

    assert buffer.cursor == (0, 6)


def test_word_motion_extends_selection() -> None:
    buffer = TextBuffer.from_text("hello world")
    buffer.set_cursor(0, 0)

    buffer.move_word_right(extend_selection=True)

    assert buffer.selected_text() == "hello "


@pytest.mark.parametrize(
    ("ch", "expected"),
    [("a", True), ("Z", True), ("5", True), ("_", True), ("é", True),
     (" ", False), ("-", False), (".", False), ("\t", False)],
)
def test_is_word_char(ch: str, expected: bool) -> None:
    assert is_word_char(ch) is expected
