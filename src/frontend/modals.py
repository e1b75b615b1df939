"""Modal dialogs for the Textual pad."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Markdown, Static

from .constants import HELP_MARKDOWN


class HelpScreen(ModalScreen[None]):
    """Usage notes and keyboard shortcuts."""

    BINDINGS = [("escape", "close", "Close")]

    def compose(self) -> ComposeResult:
        yield Container(
            VerticalScroll(Markdown(HELP_MARKDOWN), classes="modal-body"),
            Horizontal(
                Button("Close", id="help-close"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--help",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)


class _PathScreen(ModalScreen[str | None]):
    """Shared form asking for a file path."""

    HEADING = ""
    CONFIRM_LABEL = ""

    def __init__(self, initial_path: str | None = None) -> None:
        super().__init__()
        self._initial_path = initial_path or ""

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self.HEADING, classes="modal-title"),
            Static("", id="path-error", classes="modal-error"),
            Static("path", classes="form-label"),
            Input(value=self._initial_path, placeholder="post.txt", id="path-input"),
            Horizontal(
                Button(self.CONFIRM_LABEL, id="path-confirm", variant="success"),
                Button("Cancel", id="path-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--form",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "path-cancel":
            self.dismiss(None)
            return
        if event.button.id == "path-confirm":
            self._submit(self.query_one("#path-input", Input).value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit(event.value)

    def _submit(self, value: str) -> None:
        path = value.strip()
        if not path:
            self.query_one("#path-error", Static).update("path is required")
            return
        self.dismiss(path)


class OpenFileScreen(_PathScreen):
    """Ask which text file to load into the pad."""

    HEADING = "Open text file"
    CONFIRM_LABEL = "Open"


class SaveFileScreen(_PathScreen):
    """Ask where to save the pad text."""

    HEADING = "Save text file"
    CONFIRM_LABEL = "Save"
