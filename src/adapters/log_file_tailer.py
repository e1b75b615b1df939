"""Polling reader for a growing chat-log file.

Each poll returns only the text appended since the last successful read. The
caller owns the timer; this adapter never blocks or retries.
"""

from __future__ import annotations

import codecs
import logging
import os

LOGGER = logging.getLogger(__name__)


class LogFileTailer:
    """Pull-based incremental reader with truncation handling."""

    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        self._path = path
        self._encoding = encoding
        self._cursor = 0
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._closed = False
        self.truncated = False

    @property
    def path(self) -> str:
        return self._path

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def closed(self) -> bool:
        return self._closed

    def poll(self) -> str:
        """Return newly appended text, or "" when the file did not grow.

        A size decrease means the file was truncated or replaced, so the
        cursor resets to the start and the whole new content is read.
        ``truncated`` is set for that tick so callers can reset their parser.
        """

        self.truncated = False
        if self._closed:
            return ""

        try:
            size = os.path.getsize(self._path)
        except FileNotFoundError:
            LOGGER.debug("Log file %s not found yet", self._path)
            return ""

        if size < self._cursor:
            LOGGER.info(
                "Log file %s shrank from %s to %s bytes, restarting from the top",
                self._path,
                self._cursor,
                size,
            )
            self._cursor = 0
            self._decoder.reset()
            self.truncated = True

        if size == self._cursor:
            return ""

        with open(self._path, "rb") as handle:
            handle.seek(self._cursor)
            data = handle.read(size - self._cursor)

        self._cursor += len(data)
        return self._decoder.decode(data)

    def close(self) -> None:
        self._closed = True
