"""Pad tab: text editor with a live message preview."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.timer import Timer
from textual.widgets import (
    Input,
    ListItem,
    ListView,
    RadioButton,
    RadioSet,
    Static,
    Switch,
    TextArea,
)

import settings
from adapters.preview_formatting import format_metadata, render_segment
from core.focus import advance_focus
from core.formatter import format_batch
from core.models import Segment

from ..constants import CHAT_TYPES
from ..validators import parse_custom_prefix

LOGGER = logging.getLogger(__name__)


class PreviewItem(ListItem):
    """One preview entry; selecting it copies the message."""

    def __init__(self, segment: Segment, index: int, total: int) -> None:
        super().__init__(
            Static(render_segment(segment), classes="content"),
            Static(format_metadata(segment, index, total), classes="metadata"),
            classes=f"preview-item {segment.classification}",
        )
        self.segment = segment
        if segment.oversized:
            self.add_class("overlimit")


class PadTab(Container):
    """Editor, chat type selection, formatter switches and preview."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False
        self._autosave_timer: Optional[Timer] = None
        self._chat_type = self._default_chat_type()
        self._custom_prefix: Optional[str] = None
        if self._chat_type == "custom":
            self._custom_prefix = parse_custom_prefix(settings.DEFAULT_PREFIX).normalized

    def compose(self):
        default = self._chat_type
        with Horizontal(id="pad-body"):
            with Vertical(id="pad-left"):
                yield TextArea(id="pad-editor", tab_behavior="indent", soft_wrap=True)
                with Horizontal(id="pad-options"):
                    yield Static("OOC", classes="form-label")
                    yield Switch(id="ooc-toggle")
                    yield Static("Em-dash", classes="form-label")
                    yield Switch(id="emdash-toggle")
            with Vertical(id="pad-right"):
                with RadioSet(id="chat-type"):
                    for key, label, _prefix in CHAT_TYPES:
                        yield RadioButton(label, value=key == default, id=f"chat-{key}")
                yield Input(
                    value=self._custom_prefix or "",
                    placeholder="/tell First Last@World",
                    id="custom-prefix",
                )
                yield Static("", id="custom-prefix-error", classes="settings-error")
                yield ListView(id="preview")

    def on_mount(self) -> None:
        preferences = self.app.preferences
        preferences.subscribe("out_of_character", self._on_preference_changed)
        preferences.subscribe("em_dash_convert", self._on_preference_changed)

        self._loading_form = True
        self.query_one("#ooc-toggle", Switch).value = preferences.settings.out_of_character
        self.query_one("#emdash-toggle", Switch).value = preferences.settings.em_dash_convert
        draft = self.app.storage.load_draft(settings.DRAFT_NAME) or ""
        editor = self.query_one("#pad-editor", TextArea)
        editor.load_text(draft)
        editor.move_cursor(editor.document.end)
        self._loading_form = False
        self.refresh_preview()

    @property
    def text(self) -> str:
        return self.query_one("#pad-editor", TextArea).text

    def load_text(self, text: str) -> None:
        self.query_one("#pad-editor", TextArea).load_text(text)
        self.refresh_preview()

    @property
    def active_prefix(self) -> Optional[str]:
        for key, _label, prefix in CHAT_TYPES:
            if key == self._chat_type:
                return prefix or self._custom_prefix
        return None

    def refresh_preview(self) -> None:
        segments = format_batch(self.text, self.active_prefix, self.app.preferences.settings)
        preview = self.query_one("#preview", ListView)
        preview.clear()
        preview.extend(
            PreviewItem(segment, index, len(segments)) for index, segment in enumerate(segments)
        )

        state = self.app.pad_state
        state.focus, index = advance_focus(state.focus, [segment.text for segment in segments])
        if index is not None:
            self.call_after_refresh(self._apply_focus, index)

    def _apply_focus(self, index: int) -> None:
        preview = self.query_one("#preview", ListView)
        if index < len(preview.children):
            preview.index = index

    def save_draft(self) -> None:
        if self._autosave_timer is not None:
            self._autosave_timer.stop()
            self._autosave_timer = None
        try:
            self.app.storage.save_draft(settings.DRAFT_NAME, self.text)
            self.app.mark_saved()
        except sqlite3.Error as exc:
            LOGGER.exception("Failed to autosave the draft")
            self.app.set_error(f"autosave failed: {exc}")

    @on(TextArea.Changed, "#pad-editor")
    def _on_editor_changed(self) -> None:
        if self._loading_form:
            return
        self.refresh_preview()
        self.app.mark_dirty()
        if self._autosave_timer is not None:
            self._autosave_timer.stop()
        self._autosave_timer = self.set_timer(settings.AUTOSAVE_SECONDS, self.save_draft)

    @on(RadioSet.Changed, "#chat-type")
    def _on_chat_type_changed(self, event: RadioSet.Changed) -> None:
        button_id = event.pressed.id or ""
        self._chat_type = button_id.removeprefix("chat-")
        self.refresh_preview()

    @on(Input.Changed, "#custom-prefix")
    def _on_custom_prefix_changed(self, event: Input.Changed) -> None:
        info = parse_custom_prefix(event.value)
        self.query_one("#custom-prefix-error", Static).update(info.error or "")
        self._custom_prefix = info.normalized
        if self._chat_type == "custom":
            self.refresh_preview()

    @on(Switch.Changed, "#ooc-toggle")
    def _on_ooc_toggled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self.app.set_preference("out_of_character", bool(event.value))

    @on(Switch.Changed, "#emdash-toggle")
    def _on_emdash_toggled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self.app.set_preference("em_dash_convert", bool(event.value))

    @on(ListView.Selected, "#preview")
    def _on_preview_selected(self, event: ListView.Selected) -> None:
        item = event.item
        if not isinstance(item, PreviewItem):
            return
        if item.has_class("copied"):
            item.remove_class("copied")
            return
        item.add_class("copied")
        self.app.copy_to_clipboard(item.segment.text)

    def _on_preference_changed(self, _value: Any) -> None:
        self.refresh_preview()

    @staticmethod
    def _default_chat_type() -> str:
        for key, _label, prefix in CHAT_TYPES:
            if prefix and prefix == settings.DEFAULT_PREFIX:
                return key
        return "custom"
