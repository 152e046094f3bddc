"""Modal screen showing one node's content and path, with inline editing."""

from __future__ import annotations

import json

from rich.syntax import Syntax
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from .session import EditSession


def render_content(values: dict, indent: int = 2) -> Syntax:
    """Syntax-highlighted JSON for the normalized node values."""
    code = json.dumps(values, indent=indent, ensure_ascii=False)
    return Syntax(code, "json", theme="monokai", word_wrap=True)


class NodeModal(ModalScreen[None]):
    """Content + JSON path of the selected node, editable field by field."""

    DEFAULT_CSS = """
    NodeModal {
        align: center middle;
    }
    #node-modal {
        width: auto;
        min-width: 50;
        max-width: 100;
        height: auto;
        max-height: 90%;
        border: thick $accent;
        background: $surface;
        padding: 0 1;
    }
    #modal-header {
        height: auto;
    }
    #content-title {
        width: 1fr;
        padding: 1 0 0 0;
    }
    #content-view, #fields {
        height: auto;
        max-height: 16;
    }
    #fields {
        display: none;
    }
    #node-modal.editing #fields {
        display: block;
    }
    #node-modal.editing #content-view {
        display: none;
    }
    #path {
        background: $panel;
        padding: 0 1;
    }
    """

    BINDINGS = [("escape", "close", "Close")]

    def __init__(
        self,
        session: EditSession,
        *,
        read_only: bool = False,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.session = session
        self.read_only = read_only

    def compose(self) -> ComposeResult:
        with Vertical(id="node-modal"):
            with Horizontal(id="modal-header"):
                yield Static("[b]Content[/b]", id="content-title")
                yield Button("Edit", id="edit", variant="primary")
                yield Button("Cancel", id="cancel")
                yield Button("Save", id="save", variant="success")
                yield Button("✕", id="close", variant="error")
            with VerticalScroll(id="content-view"):
                yield Static(id="content")
            yield VerticalScroll(id="fields")
            yield Static("[b]JSON Path[/b]")
            yield Static(id="path")

    def on_mount(self) -> None:
        self._refresh_view()

    def _refresh_view(self) -> None:
        editing = self.session.editing
        self.query_one("#node-modal").set_class(editing, "editing")
        self.query_one("#content", Static).update(
            render_content(self.session.display_values(), self.session.indent)
        )
        self.query_one("#path", Static).update(Text(self.session.path_text))
        self.query_one("#edit", Button).display = not editing
        self.query_one("#edit", Button).disabled = (
            self.read_only or not self.session.can_edit
        )
        self.query_one("#cancel", Button).display = editing
        self.query_one("#save", Button).display = editing

    def _show_fields(self) -> None:
        fields = self.query_one("#fields", VerticalScroll)
        fields.remove_children()
        widgets = []
        for key, text in self.session.fields.items():
            widgets.append(Label(Text(key)))
            # Input.name carries the field key; keys are not valid widget ids
            widgets.append(Input(value=text, name=key))
        if widgets:
            fields.mount(*widgets)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.name is not None:
            self.session.set_field(event.input.name, event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "edit":
            if self.session.begin_edit():
                self._show_fields()
        elif button_id == "cancel":
            self.session.cancel()
        elif button_id == "save":
            if self.session.commit():
                self.notify(f"Saved {self.session.path_text}", severity="information")
            else:
                error = self.session.last_error
                self.notify(f"Save failed: {error}", severity="error", timeout=6)
        elif button_id == "close":
            self.action_close()
            return
        self._refresh_view()

    def action_close(self) -> None:
        if self.session.has_unsaved_changes:
            self.notify("Unsaved edits discarded", severity="warning")
        self.session.close()
        self.dismiss(None)
