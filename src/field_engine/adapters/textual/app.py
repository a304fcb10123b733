"""Executable Textual app editing a title and a multi-line body."""

from __future__ import annotations

import argparse
import os
from typing import Dict, List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use field_engine.adapters.textual.app"
    ) from exc

from field_engine.buffer import Rect
from field_engine.config import EngineConfig
from field_engine.editor import FieldEditor, FieldFrame
from field_engine.runtime import telemetry

from .controller import TextualFieldAdapter, TextualUIHooks

FIELD_ORDER = ("title", "content")


def render_frame_text(frame: FieldFrame) -> Text:
    """Paint visible lines, highlighting the selection and the cursor cell."""

    text = Text()
    selection = frame.selection
    for row, line in enumerate(frame.lines):
        line_no = frame.start_line + row
        segment = Text(line)
        if selection is not None:
            (start_line, start_col), (end_line, end_col) = selection
            if start_line <= line_no <= end_line:
                lo = start_col if line_no == start_line else 0
                hi = end_col if line_no == end_line else len(line) + frame.scroll_col
                lo = max(0, lo - frame.scroll_col)
                hi = max(0, hi - frame.scroll_col)
                if hi > lo:
                    segment.stylize("reverse", lo, hi)
        if frame.cursor[0] == line_no:
            col = frame.cursor[1] - frame.scroll_col
            if col >= len(segment):
                segment.append(" ")
            segment.stylize("underline", col, col + 1)
        text.append_text(segment)
        if row < len(frame.lines) - 1:
            text.append("\n")
    return text


class FieldEngineApp(App[None]):
    """Two-field form (title + content) driven by FieldEditor instances."""

    CSS = """
    Screen {
        layout: vertical;
    }

    .field {
        border: round $secondary;
        padding: 0 0;
    }

    .field.-active {
        border: round $accent;
    }

    #title {
        height: 3;
    }

    #content {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+s", "submit", "Submit"),
    ]

    def __init__(self, *, title: str = "", content: str = "") -> None:
        super().__init__()
        config = EngineConfig.from_env()
        self.editors: Dict[str, FieldEditor] = {
            "title": FieldEditor.from_text(title, name="title", multiline=False, config=config),
            "content": FieldEditor.from_text(
                content, name="content", multiline=True, config=config
            ),
        }
        self.adapters: Dict[str, TextualFieldAdapter] = {}
        self._widgets: Dict[str, Static] = {}
        self._status_widget: Static | None = None
        self._active = FIELD_ORDER[0]
        self.log_lines: List[str] = []

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical():
            for name in FIELD_ORDER:
                widget = Static("", id=name, classes="field")
                widget.border_title = name
                self._widgets[name] = widget
                yield widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        for name in FIELD_ORDER:
            hooks = TextualUIHooks(
                update_frame=lambda frame, field=name: self._paint(field, frame),
                update_status=self._update_status,
                handle_event=self._handle_event,
                log=self.log_lines.append,
            )
            self.adapters[name] = TextualFieldAdapter(
                self.editors[name], hooks, area=self._area_for(name)
            )
        self._focus_field(self._active)

    def on_resize(self, event: events.Resize) -> None:
        del event
        for name, adapter in self.adapters.items():
            adapter.resize(self._area_for(name))

    def on_key(self, event: events.Key) -> None:
        adapter = self.adapters.get(self._active)
        if adapter is None:
            return
        if event.key in {"tab", "shift+tab"}:
            self._cycle_field(forward=event.key == "tab")
            event.stop()
            return
        result = adapter.handle_textual_key(event.key, character=event.character)
        if result.consumed:
            event.stop()
        elif event.key == "enter":
            self._cycle_field(forward=True)
            event.stop()

    def action_submit(self) -> None:
        values = {name: editor.value() for name, editor in self.editors.items()}
        telemetry.record_event("form.submit", level="info", data=values)
        self._update_status(f"saved title={values['title']!r}")

    def _cycle_field(self, *, forward: bool) -> None:
        index = FIELD_ORDER.index(self._active)
        step = 1 if forward else -1
        self._focus_field(FIELD_ORDER[(index + step) % len(FIELD_ORDER)])

    def _focus_field(self, name: str) -> None:
        self._active = name
        for field_name, widget in self._widgets.items():
            widget.set_class(field_name == name, "-active")

    def _area_for(self, name: str) -> Rect:
        widget = self._widgets[name]
        size = widget.size
        return Rect(0, 0, max(3, size.width + 2), max(3, size.height + 2))

    def _paint(self, name: str, frame: FieldFrame) -> None:
        widget = self._widgets.get(name)
        if widget is not None:
            widget.update(render_frame_text(frame))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: object | None) -> None:
        if name in {"field.copy", "field.cut"} and isinstance(payload, str):
            self._update_status(f"{name}: {len(payload)} chars")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the field engine Textual demo.")
    parser.add_argument("--title", default="", help="Initial title text")
    parser.add_argument(
        "--content-file",
        default=os.environ.get("FIELD_ENGINE_DEMO_FILE"),
        help="Load the content field from this file",
    )
    parser.add_argument(
        "--telemetry",
        choices=("development", "production", "quiet"),
        default=None,
        help="Telemetry preset (default: environment driven)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.telemetry:
        telemetry.configure(preset=args.telemetry)
    content = ""
    if args.content_file:
        with open(args.content_file, encoding="utf-8") as handle:
            content = handle.read()
    FieldEngineApp(title=args.title, content=content).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
