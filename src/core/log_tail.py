"""Incremental chat-log parsing (core domain).

This module is file-agnostic. It consumes text chunks handed over by a tailer
adapter, so the same parser works for a live poll loop or a one-shot read.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from core.classifier import MalformedLogLine, classify_log_line
from core.config import FormatterSettings
from core.models import ChatLogLine

LOGGER = logging.getLogger(__name__)


class LogTailParser:
    """Turns appended log text into structured lines and tracks speakers."""

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict
        self._pending = ""
        # Strict-mode failures keep the unparsed lines and the lines parsed
        # before the error for the next call.
        self._queued: List[str] = []
        self._ready: List[ChatLogLine] = []
        self._last_raw: Optional[str] = None
        self._speakers: Set[str] = set()
        self.malformed: List[str] = []

    @property
    def known_speakers(self) -> List[str]:
        return sorted(self._speakers)

    def reset(self) -> None:
        """Forget the partial line and last raw line, e.g. after truncation."""

        self._pending = ""
        self._queued = []
        self._ready = []
        self._last_raw = None

    def feed(self, chunk: str) -> List[ChatLogLine]:
        """Parse every complete line in ``chunk``.

        A trailing line without a newline is held back until the next chunk
        completes it. Immediately repeated raw lines are dropped because file
        polling can observe the same write twice.

        In strict mode a malformed line raises ``MalformedLogLine``. Nothing is
        lost: lines parsed before the bad one and lines after it are returned
        by the next ``feed`` or ``flush``.
        """

        if not chunk and not self._queued and not self._ready:
            return []

        text = self._pending + chunk
        fresh = text.split("\n")
        self._pending = fresh.pop()
        raw_lines = self._queued + fresh
        self._queued = []

        parsed = self._ready
        self._ready = []
        for index, raw in enumerate(raw_lines):
            raw = raw.rstrip("\r")
            if not raw.strip():
                continue
            if raw == self._last_raw:
                continue
            self._last_raw = raw
            try:
                line = classify_log_line(raw)
            except MalformedLogLine:
                if self._strict:
                    self._queued = raw_lines[index + 1 :]
                    self._ready = parsed
                    raise
                LOGGER.warning("Skipping malformed log line: %r", raw)
                self.malformed.append(raw)
                continue
            self._speakers.add(line.speaker)
            parsed.append(line)
        return parsed

    def flush(self) -> List[ChatLogLine]:
        """Parse a held-back partial line as if it were complete.

        Also returns anything held over by a strict-mode failure.
        """

        if not (self._pending or self._queued or self._ready):
            return []
        return self.feed("\n")


def is_visible(line: ChatLogLine, settings: FormatterSettings) -> bool:
    """Return True when the per-type and per-speaker filters allow ``line``."""

    if line.tag in settings.hidden_tags:
        return False
    return line.speaker not in settings.hidden_speakers
