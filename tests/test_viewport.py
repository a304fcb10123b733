from __future__ import annotations

from field_engine.buffer import Rect, TextBuffer


def make_lines(count: int, prefix: str = "line") -> TextBuffer:
    return TextBuffer.from_text("\n".join(f"{prefix}{i}" for i in range(count)))


def test_visible_lines_respect_offsets_and_border() -> None:
    buffer = make_lines(5)
    buffer.scroll.line_offset = 1

    start, lines = buffer.visible_lines(2, 5)

    assert start == 1
    assert lines == ["lin", "lin"]
    assert all(len(line) <= 3 for line in lines)


def test_vertical_scroll_follows_cursor() -> None:
    buffer = make_lines(10)
    assert buffer.cursor_line == 9

    buffer.update_scroll(3)
    assert buffer.scroll.line_offset == 7

    buffer.set_cursor(8, 0)
    buffer.update_scroll(3)
    assert buffer.scroll.line_offset == 7

    buffer.set_cursor(2, 0)
    buffer.update_scroll(3)
    assert buffer.scroll.line_offset == 2


def test_horizontal_scroll_tracks_cursor_column() -> None:
    buffer = TextBuffer.from_text("abcdefghij")

    buffer.update_horizontal_scroll(6)
    assert buffer.scroll.col_offset == 7
    assert buffer.visible_lines(1, 6) == (0, ["hij"])

    buffer.move_cursor_home()
    buffer.update_horizontal_scroll(6)
    assert buffer.scroll.col_offset == 0


def test_lines_shorter_than_offset_render_empty() -> None:
    buffer = TextBuffer.from_text("short\n" + "x" * 20)

    buffer.update_horizontal_scroll(7)
    start, lines = buffer.visible_lines(2, 7)

    assert buffer.scroll.col_offset == 16
    assert start == 0
    assert lines == ["", "xxxx"]


def test_cursor_screen_position_inside_area() -> None:
    buffer = TextBuffer.from_text("ab\ncd")
    buffer.set_cursor(1, 1)
    buffer.update_scroll(2)

    assert buffer.cursor_screen_position(Rect(10, 5, 20, 4), 2) == (12, 7)


def test_cursor_screen_position_reports_hidden_cursor() -> None:
    buffer = make_lines(10)
    buffer.set_cursor(5, 0)

    assert buffer.cursor_screen_position(Rect(0, 0, 20, 4), 2) is None

    buffer.update_scroll(2)
    assert buffer.cursor_screen_position(Rect(0, 0, 20, 4), 2) == (1, 2)

    buffer.scroll.col_offset = 3
    assert buffer.cursor_screen_position(Rect(0, 0, 20, 4), 2) is None


def test_degenerate_viewport_does_not_fail() -> None:
    buffer = make_lines(3)

    buffer.update_scroll(0)
    buffer.update_horizontal_scroll(0)

    assert buffer.visible_lines(0, 0) == (buffer.scroll.line_offset, [])
    assert buffer.cursor_screen_position(Rect(0, 0, 0, 0), 0) is None


def test_scrolling_never_touches_text() -> None:
    buffer = make_lines(4)
    version = buffer.snapshot().version

    buffer.update_scroll(1)
    buffer.update_horizontal_scroll(3)
    buffer.visible_lines(1, 3)

    assert buffer.snapshot().version == version
    assert buffer.to_text() == "line0\nline1\nline2\nline3"
