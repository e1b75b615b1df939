"""Log tab for following a chat log with per-type and per-speaker filters."""

from __future__ import annotations

import logging
from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.timer import Timer
from textual.widgets import Button, Input, RichLog, SelectionList, Static

import settings
from adapters.log_file_tailer import LogFileTailer
from adapters.preview_formatting import render_log_line
from core.classifier import MalformedLogLine
from core.log_tail import LogTailParser, is_visible
from core.models import ChatLogLine

from ..constants import LOG_TAGS

LOGGER = logging.getLogger(__name__)


class LogTab(Container):
    """Tails a growing chat log on a timer and renders the parsed lines."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._tailer: Optional[LogFileTailer] = None
        self._parser: Optional[LogTailParser] = None
        self._timer: Optional[Timer] = None
        self._lines: list[ChatLogLine] = []
        self._speaker_options: set[str] = set()

    def compose(self):
        hidden_tags = self.app.preferences.settings.hidden_tags
        with Vertical(id="log-panel"):
            with Horizontal(id="log-actions"):
                yield Input(value=settings.CHATLOG_PATH or "", placeholder="path/to/chat.log", id="log-path")
                yield Button("Watch", id="log-watch", variant="success")
                yield Button("Stop", id="log-stop")
            yield Static("", id="log-status")
            with Horizontal(id="log-body"):
                yield RichLog(id="log-view", wrap=True, markup=False)
                with Vertical(id="log-filters"):
                    yield Static("types", classes="form-label")
                    yield SelectionList[str](
                        *[(tag, tag, tag not in hidden_tags) for tag in LOG_TAGS],
                        id="tag-filter",
                    )
                    yield Static("speakers", classes="form-label")
                    yield SelectionList[str](id="speaker-filter")

    def on_mount(self) -> None:
        if settings.CHATLOG_PATH:
            self.start_watch(settings.CHATLOG_PATH)
        else:
            self._set_status("not watching")

    def on_unmount(self) -> None:
        self.stop_watch()

    def start_watch(self, path: str) -> None:
        self.stop_watch()
        self._tailer = LogFileTailer(path)
        self._parser = LogTailParser(strict=settings.STRICT_LOG_PARSING)
        self._lines = []
        self.query_one("#log-view", RichLog).clear()
        self._timer = self.set_interval(settings.POLL_SECONDS, self._poll)
        self._set_status(f"watching {path}")
        LOGGER.info("Watching chat log %s", path)
        self._poll()

    def stop_watch(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        if self._tailer is not None:
            self._tailer.close()
            LOGGER.info("Stopped watching %s", self._tailer.path)
            self._tailer = None

    def _poll(self) -> None:
        if self._tailer is None or self._parser is None:
            return
        try:
            chunk = self._tailer.poll()
        except OSError as exc:
            self._set_status(f"read failed: {exc.strerror or exc}")
            self.stop_watch()
            return

        if self._tailer.truncated:
            self._parser.reset()
            self._lines = []
            self.query_one("#log-view", RichLog).clear()

        try:
            parsed = self._parser.feed(chunk)
        except MalformedLogLine as exc:
            self._set_status(str(exc))
            self.stop_watch()
            return

        if not parsed:
            return
        self._lines.extend(parsed)
        view = self.query_one("#log-view", RichLog)
        current = self.app.preferences.settings
        for line in parsed:
            if is_visible(line, current):
                view.write(render_log_line(line))
        self._sync_speakers()
        if self._parser.malformed:
            self._set_status(f"watching {self._tailer.path} ({len(self._parser.malformed)} skipped)")

    def _sync_speakers(self) -> None:
        if self._parser is None:
            return
        hidden = self.app.preferences.settings.hidden_speakers
        speaker_list = self.query_one("#speaker-filter", SelectionList)
        for speaker in self._parser.known_speakers:
            if speaker in self._speaker_options:
                continue
            self._speaker_options.add(speaker)
            speaker_list.add_option((speaker, speaker, speaker not in hidden))

    def _rerender(self) -> None:
        view = self.query_one("#log-view", RichLog)
        view.clear()
        current = self.app.preferences.settings
        for line in self._lines:
            if is_visible(line, current):
                view.write(render_log_line(line))

    @on(Button.Pressed, "#log-watch")
    def _on_watch(self) -> None:
        path = self.query_one("#log-path", Input).value.strip()
        if not path:
            self._set_status("path is required")
            return
        self.start_watch(path)

    @on(Input.Submitted, "#log-path")
    def _on_path_submitted(self) -> None:
        self._on_watch()

    @on(Button.Pressed, "#log-stop")
    def _on_stop(self) -> None:
        self.stop_watch()
        self._set_status("not watching")

    @on(SelectionList.SelectedChanged, "#tag-filter")
    def _on_tag_filter_changed(self, event: SelectionList.SelectedChanged) -> None:
        hidden = frozenset(LOG_TAGS) - frozenset(event.selection_list.selected)
        if hidden == self.app.preferences.settings.hidden_tags:
            return
        if self.app.set_preference("hidden_tags", hidden):
            self._rerender()

    @on(SelectionList.SelectedChanged, "#speaker-filter")
    def _on_speaker_filter_changed(self, event: SelectionList.SelectedChanged) -> None:
        visible = frozenset(event.selection_list.selected)
        previously_hidden = self.app.preferences.settings.hidden_speakers
        # Speakers not seen in this session keep their stored state.
        hidden = (previously_hidden - self._speaker_options) | (self._speaker_options - visible)
        if hidden == previously_hidden:
            return
        if self.app.set_preference("hidden_speakers", frozenset(hidden)):
            self._rerender()

    def _set_status(self, message: str) -> None:
        self.query_one("#log-status", Static).update(message)
