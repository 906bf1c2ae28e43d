"""Full-screen prompt_toolkit application for the form converter.

All fields of the selected form variant are shown on one screen with their
error messages underneath. The user moves with Tab/Shift+Tab (leaving a
field counts as a blur), cycles enum fields with Up/Down, generates JSON
with Ctrl+S and copies it with Ctrl+T.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from prompt_toolkit import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.formatted_text import HTML, FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import (
    BufferControl,
    FormattedTextControl,
    HSplit,
    Layout,
    VSplit,
    Window,
)
from prompt_toolkit.layout.controls import UIContent, UIControl
from prompt_toolkit.layout.dimension import Dimension as D
from prompt_toolkit.mouse_events import MouseEvent, MouseEventType
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame, TextArea

from formjson.lib.rules import FieldKind, FieldRule
from formjson.tui.constants import (
    COPY_LABEL,
    ENUM_PLACEHOLDER,
    GENERATE_LABEL,
    OUTPUT_TITLE,
    PHASE_LABELS,
)
from formjson.tui.models import FormSession, start_timer
from formjson.tui.settings import FormSettings, get_settings


# Application style
STYLE = Style.from_dict({
    "title": "bold bg:#005f87 #ffffff",
    "description": "#808080 italic",
    "field-label": "#d7d700",
    "field-input": "bg:#1e1e1e #ffffff",
    "field-input.focused": "bg:#2a2a2a #ffffff",
    "field-input.invalid": "bg:#3a1515 #ff6666",
    "field-help": "#808080 italic",
    "error": "bold #ff0000",
    "success": "bold #00ff00",
    "output": "bg:#1c1c1c #d0d0d0",
    "status-bar": "bg:#005f87 #ffffff",
    "button": "bg:#404040 #ffffff",
    "button.hover": "bg:#005f87 #ffffff bold",
    "button.disabled": "bg:#262626 #606060",
    "dropdown": "#808080",
    "dropdown.selected": "bold #00ff00",
})


class ClickableButton(UIControl):
    """A clickable button control that can be disabled."""

    def __init__(
        self,
        text: str,
        handler: Callable[[], None],
        style: str = "class:button",
        enabled: Callable[[], bool] | None = None,
    ):
        self.text = text
        self.handler = handler
        self.style = style
        self.enabled = enabled or (lambda: True)
        self._hover = False

    def create_content(self, width: int, height: int) -> UIContent:
        if not self.enabled():
            style = "class:button.disabled"
        elif self._hover:
            style = "class:button.hover"
        else:
            style = self.style

        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return [(style, f" {self.text} ")]
            return []

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            if self.enabled():
                self.handler()
        elif mouse_event.event_type == MouseEventType.MOUSE_MOVE:
            self._hover = True
        else:
            self._hover = False

    def is_focusable(self) -> bool:
        return False


class Field:
    """An editable form field bound to one field rule."""

    def __init__(self, rule: FieldRule, idx: int):
        self.rule = rule
        self.idx = idx
        self.name = rule.name
        self.label = rule.label
        self.kind = rule.kind
        # Empty first so an enum can be returned to "not selected"
        self.options = ["", *rule.options] if rule.kind == FieldKind.ENUM else []
        self.buffer = Buffer(name=rule.name, multiline=False)
        self.window: Window | None = None

    @property
    def is_enum(self) -> bool:
        return self.kind == FieldKind.ENUM

    @property
    def value(self) -> str:
        return self.buffer.text

    def cycle(self, step: int) -> None:
        """Select the next (step=1) or previous (step=-1) enum option."""
        if not self.options:
            return
        current = self.buffer.text
        idx = self.options.index(current) if current in self.options else 0
        self.buffer.text = self.options[(idx + step) % len(self.options)]


class EnumSelector(UIControl):
    """Single-line selector for enum fields; Up/Down or click to cycle."""

    def __init__(self, field: Field, on_focus: Callable[[int], None]):
        self.field = field
        self.on_focus = on_focus

    def create_content(self, width: int, height: int) -> UIContent:
        value = self.field.value

        def get_line(i: int) -> list[tuple[str, str]]:
            if i != 0:
                return []
            if value:
                return [("class:dropdown.selected", f"◀ {value} ▶")]
            return [("class:dropdown", f"◀ {ENUM_PLACEHOLDER} ▶")]

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.on_focus(self.field.idx)
            self.field.cycle(1)

    def is_focusable(self) -> bool:
        return True

    def get_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("up")
        def previous_option(event: Any) -> None:
            self.field.cycle(-1)

        @kb.add("down")
        def next_option(event: Any) -> None:
            self.field.cycle(1)

        return kb


class ClickableBufferControl(BufferControl):
    """BufferControl that notifies when it receives focus via click."""

    def __init__(
        self,
        buffer: Buffer,
        field_idx: int,
        on_focus: Callable[[int], None],
        **kwargs: Any,
    ):
        super().__init__(buffer=buffer, focusable=True, **kwargs)
        self.field_idx = field_idx
        self.on_focus = on_focus

    def mouse_handler(self, mouse_event: MouseEvent) -> Any:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.on_focus(self.field_idx)
        return super().mouse_handler(mouse_event)


class FormConverterApp:
    """Full-screen form editor producing JSON.

    Tab/Shift+Tab to move between fields, Up/Down to pick enum values,
    Ctrl+S to generate JSON, Ctrl+T to copy it, Ctrl+Q to quit.
    """

    def __init__(
        self,
        variant: str | None = None,
        settings: FormSettings | None = None,
        session: FormSession | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.session = session or FormSession.from_settings(
            self.settings,
            variant,
            scheduler=self._schedule,
            on_update=self._invalidate,
        )
        self.fields = [Field(rule, idx) for idx, rule in enumerate(self.session.variant.rules)]
        self.current_field_idx = 0
        self.status_message = self.session.variant.title
        self.app: Application | None = None

        for field in self.fields:
            field.buffer.text = self.session.get_value(field.name)
            field.buffer.on_text_changed += self._on_field_changed

        self.output_area = TextArea(
            text=self.session.output,
            read_only=True,
            scrollbar=True,
            style="class:output",
            height=D(min=5),
        )

    def run(self) -> None:
        """Run the full-screen application."""
        self.app = Application(
            layout=self._create_layout(),
            key_bindings=self._create_bindings(),
            style=STYLE,
            full_screen=True,
            mouse_support=True,
        )
        self._focus_current_field()
        try:
            self.app.run()
        finally:
            self.session.close()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _create_layout(self) -> Layout:
        """Create the application layout."""
        variant = self.session.variant

        title = Window(
            content=FormattedTextControl(HTML("<b>{}</b>").format(variant.title)),
            style="class:title",
            height=1,
        )
        description = Window(
            content=FormattedTextControl(FormattedText([("class:description", variant.description)])),
            height=1,
        )

        rows = [self._create_field_row(field) for field in self.fields]

        buttons = VSplit(
            [
                Window(
                    content=ClickableButton(GENERATE_LABEL, self._submit, enabled=lambda: self.session.can_submit),
                    width=D.exact(len(GENERATE_LABEL) * 2 + 2),
                    height=1,
                ),
                Window(
                    content=ClickableButton(COPY_LABEL, self._copy, enabled=lambda: self.session.is_json_output),
                    width=D.exact(len(COPY_LABEL) * 2 + 2),
                    height=1,
                ),
                Window(content=FormattedTextControl(self._get_copy_status), height=1),
            ],
            padding=2,
        )

        status_bar = Window(
            content=FormattedTextControl(self._get_status_bar),
            style="class:status-bar",
            height=1,
        )

        body = HSplit([
            title,
            description,
            HSplit(rows, padding=0),
            Window(height=1),
            buttons,
            Frame(self.output_area, title=OUTPUT_TITLE),
            status_bar,
        ])
        return Layout(body)

    def _create_field_row(self, field: Field) -> HSplit:
        """Create a row for a single field with its error line underneath."""
        label = Window(
            content=FormattedTextControl(FormattedText([("class:field-label", field.label)])),
            width=D(min=20, max=40),
            height=1,
        )

        if field.is_enum:
            control: UIControl = EnumSelector(field, self._on_field_click)
        else:
            control = ClickableBufferControl(
                buffer=field.buffer,
                field_idx=field.idx,
                on_focus=self._on_field_click,
            )

        field.window = Window(
            content=control,
            style=lambda f=field: self._value_style(f),
            height=1,
            width=D(weight=2),
        )

        error_line = Window(
            content=FormattedTextControl(lambda f=field: self._get_field_message(f)),
            height=1,
        )
        return HSplit([VSplit([label, field.window], padding=1), error_line])

    def _value_style(self, field: Field) -> str:
        if self.session.error_for(field.name):
            return "class:field-input.invalid"
        if field.idx == self.current_field_idx:
            return "class:field-input.focused"
        return "class:field-input"

    def _get_field_message(self, field: Field) -> FormattedText:
        """Error for the field, or its hint while it is focused."""
        error = self.session.error_for(field.name)
        if error:
            return FormattedText([("class:error", f"  ⚠ {error}")])
        if field.idx == self.current_field_idx and field.rule.hint:
            return FormattedText([("class:field-help", f"  {field.rule.hint}")])
        return FormattedText([])

    def _get_copy_status(self) -> FormattedText:
        status = self.session.copy_status
        if not status:
            return FormattedText([])
        return FormattedText([("class:success", status)])

    def _get_status_bar(self) -> FormattedText:
        """Get status bar content with keyboard shortcut hints."""
        shortcuts = "Tab:Next  ↑↓:Select  Ctrl+S:Generate  Ctrl+T:Copy  Ctrl+Q:Quit"
        errors = len(self.session.errors)
        problems = f"{errors} error(s)" if errors else "OK"
        phase = PHASE_LABELS[self.session.phase.value]
        return FormattedText([
            ("class:status-bar", f"  {self.status_message}  │  {phase}  │  {problems}  │  {shortcuts}  ")
        ])

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _on_field_changed(self, buffer: Buffer) -> None:
        """Forward an edit to the session."""
        self.session.change(buffer.name, buffer.text)
        self._sync_output()

    def _on_field_click(self, field_idx: int) -> None:
        """Handle a click on a field; leaving the old one is a blur."""
        if field_idx != self.current_field_idx:
            self._move_to(field_idx)

    def _move_to(self, field_idx: int) -> None:
        current = self.fields[self.current_field_idx]
        self.session.blur(current.name)
        self.current_field_idx = field_idx % len(self.fields)
        self._sync_output()
        self._focus_current_field()

    def _submit(self) -> None:
        result = self.session.submit()
        if result.valid:
            self.status_message = "JSON generated"
        else:
            self.status_message = f"{len(result.errors)} field(s) need attention"
        self._sync_output()

    def _copy(self) -> None:
        if not self.session.is_json_output:
            self.status_message = "Generate JSON first"
            return
        self.session.copy_output()
        self._invalidate()

    def _sync_output(self) -> None:
        """Push the session's output text into the output panel."""
        if self.output_area.text != self.session.output:
            self.output_area.text = self.session.output

    def _focus_current_field(self) -> None:
        field = self.fields[self.current_field_idx]
        if self.app and field.window is not None:
            try:
                self.app.layout.focus(field.window)
            except ValueError:
                # Window not in layout
                pass

    def _invalidate(self) -> None:
        if self.app:
            self.app.invalidate()

    def _schedule(self, delay: float, callback: Callable[[], None]) -> Any:
        """Run callback on the application's event loop when it is running."""
        loop = getattr(self.app, "loop", None) if self.app else None
        if isinstance(loop, asyncio.AbstractEventLoop) and loop.is_running():
            return loop.call_later(delay, callback)
        return start_timer(delay, callback)

    def _create_bindings(self) -> KeyBindings:
        """Create key bindings."""
        kb = KeyBindings()

        @kb.add("c-q")
        def quit_(event):
            """Quit the application."""
            event.app.exit()

        @kb.add("c-s")
        def generate_(event):
            """Generate JSON (a rejected attempt reveals every error)."""
            self._submit()

        @kb.add("c-t")
        def copy_(event):
            """Copy generated JSON."""
            self._copy()

        @kb.add("tab")
        def next_field_(event):
            """Move to next field."""
            self._move_to(self.current_field_idx + 1)

        @kb.add("s-tab")
        def prev_field_(event):
            """Move to previous field."""
            self._move_to(self.current_field_idx - 1)

        return kb


def run_form(variant: str | None = None, settings: FormSettings | None = None) -> None:
    """Open the form converter for a variant."""
    FormConverterApp(variant=variant, settings=settings).run()
