"""Main Textual app for the chatpad pad."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import Button, ContentSwitcher, Footer, Static, Tab, Tabs

import settings
from adapters.sqlite_storage import SQLiteStorage
from core.config import FormatterSettings
from core.preferences import Preferences
from core.sizing import LIMIT

from .constants import ACCENT
from .modals import HelpScreen, OpenFileScreen, SaveFileScreen
from .state import PadState
from .tabs.guide import GuideTab
from .tabs.log import LogTab
from .tabs.pad import PadTab

LOGGER = logging.getLogger(__name__)


class PadApp(App):
    """Pad with live preview, chat log viewer and guide tabs."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.storage = SQLiteStorage(settings.DB_PATH)
        self.storage.init_db()
        self.preferences = Preferences(self.storage, FormatterSettings())
        self.pad_state = PadState()

    BINDINGS = [
        ("ctrl+s", "save_file", "Save"),
        ("ctrl+o", "open_file", "Open"),
        Binding("f1,ctrl+slash", "help", "Help"),
        ("ctrl+q", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    CSS_PATH = "app.tcss"

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"limit {LIMIT} bytes per message", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static(f"db: {Path(settings.DB_PATH).name}", classes="subtle")
                    yield Static("", id="header-status")
                    yield Horizontal(
                        Button("Open", id="open-btn"),
                        Button("Save", id="save-btn"),
                        Button("Help", id="help-btn"),
                        id="header-actions",
                    )

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Pad", id="pad"),
                    Tab("Log", id="log"),
                    Tab("Guide", id="guide"),
                    id="tabs",
                )

        with ContentSwitcher(id="content", initial="pad"):
            yield PadTab(id="pad")
            yield LogTab(id="log")
            yield GuideTab(id="guide")
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_header()
        self.query_one("#pad-editor").focus()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        switcher = self.query_one("#content", ContentSwitcher)
        switcher.current = tab_id

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "open-btn":
            self.action_open_file()
        elif event.button.id == "save-btn":
            self.action_save_file()
        elif event.button.id == "help-btn":
            self.action_help()

    def action_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_open_file(self) -> None:
        self.push_screen(OpenFileScreen(self.pad_state.file_path), self._handle_open_choice)

    def action_save_file(self) -> None:
        self.push_screen(SaveFileScreen(self.pad_state.file_path), self._handle_save_choice)

    def action_request_quit(self) -> None:
        self.query_one(PadTab).save_draft()
        self.exit()

    def _handle_open_choice(self, path: str | None) -> None:
        if path is None:
            return
        try:
            text = Path(path).expanduser().read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.set_error(f"open failed: {getattr(exc, 'strerror', None) or exc}")
            return
        self.pad_state.file_path = path
        self.query_one(PadTab).load_text(text)
        LOGGER.info("Opened %s", path)

    def _handle_save_choice(self, path: str | None) -> None:
        if path is None:
            return
        try:
            Path(path).expanduser().write_text(self.query_one(PadTab).text, encoding="utf-8")
        except OSError as exc:
            self.set_error(f"save failed: {exc.strerror or exc}")
            return
        self.pad_state.file_path = path
        self.pad_state.error = None
        self._refresh_header()
        self.notify(f"Saved to {path}")
        LOGGER.info("Saved pad to %s", path)

    def set_preference(self, name: str, value: Any) -> bool:
        """Persist one preference; returns False and shows the error on failure."""

        if getattr(self.preferences.settings, name) == value:
            return True
        try:
            self.preferences.set(name, value)
        except sqlite3.Error as exc:
            LOGGER.exception("Failed to save %s", name)
            self.set_error(f"failed to save {name}: {exc}")
            return False
        return True

    def mark_dirty(self) -> None:
        self.pad_state.dirty = True
        self._refresh_header()

    def mark_saved(self) -> None:
        self.pad_state.dirty = False
        self.pad_state.error = None
        self._refresh_header()

    def set_error(self, message: str) -> None:
        self.pad_state.error = message
        self._refresh_header()

    def _refresh_header(self) -> None:
        status = self.query_one("#header-status", Static)

        status.remove_class("status-loaded", "status-modified", "status-error")
        if self.pad_state.error:
            status.update(self.pad_state.error)
            status.add_class("status-error")
        elif self.pad_state.dirty:
            status.update("draft: modified *")
            status.add_class("status-modified")
        else:
            status.update("draft: saved")
            status.add_class("status-loaded")

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("CHAT", ACCENT),
            ("PAD > Pad", "bold"),
        )
