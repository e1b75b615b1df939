"""Message classification tables (core domain).

Patterns are not mutually exclusive, so both tables are ordered lists of
(tag, pattern) pairs and the first match wins. Keep the declaration order.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from core.models import (
    ChatLogLine,
    Classification,
    LinkshellChannel,
    TellDirection,
    TellTarget,
)

COMMAND = "command"

ClassificationPattern = Tuple[str, re.Pattern]

OUTBOUND_PATTERNS: List[ClassificationPattern] = [
    ("say", re.compile(r"^(?:/s|/say)\s")),
    ("party", re.compile(r"^(?:/p|/party)\s")),
    ("yell", re.compile(r"^(?:/y|/yell)\s")),
    ("shout", re.compile(r"^(?:/sh|/shout)\s")),
    ("emote", re.compile(r"^(?:/em|/emote)\s")),
    (
        "tell",
        re.compile(
            r"^(?:/t|/tell)\s+(?P<first>[^\s]+)\s+(?P<last>[^\s@]+)@(?P<server>[^\s]+)\s"
        ),
    ),
    ("freecompany", re.compile(r"^(?:/fc|/freecompany)\s")),
    (
        "linkshell",
        re.compile(
            r"^/(?P<kind>ls|linkshell|cwls|crossworldlinkshell)(?P<channel>[0-9])\s"
        ),
    ),
]

_NAME = r"(?P<first>[A-Z][\w'\-]*) (?P<last>[A-Z][\w'\-]*)(?P<server>@[A-Za-z]+)?"

INBOUND_PATTERNS: List[ClassificationPattern] = [
    ("tell", re.compile(r"^(?P<direction>>>) ?" + _NAME + r": (?P<body>.*)$")),
    ("tell", re.compile(r"^" + _NAME + r" (?P<direction>>>) (?P<body>.*)$")),
    ("party", re.compile(r"^\([^\w\s]?" + _NAME + r"\) (?P<body>.*)$")),
    (
        "linkshell",
        re.compile(r"^\[(?P<cwls>CWLS)?(?P<channel>[0-9])\]<[^\w\s]?" + _NAME + r"> (?P<body>.*)$"),
    ),
    ("freecompany", re.compile(r"^\[FC\]<[^\w\s]?" + _NAME + r"> (?P<body>.*)$")),
    ("yell", re.compile(r"^" + _NAME + r" yells: (?P<body>.*)$")),
    ("shout", re.compile(r"^" + _NAME + r" shouts: (?P<body>.*)$")),
    ("say", re.compile(r"^" + _NAME + r": (?P<body>.*)$")),
    ("emote", re.compile(r"^" + _NAME + r" (?P<body>.*)$")),
]

# A bracketed token is only a timestamp when it carries an H:MM time, so
# channel markers like "[1]" or "[FC]" survive.
_TIMESTAMP = re.compile(r"^\[[^\]]*\d:\d\d[^\]]*\]\s*")


class MalformedLogLine(ValueError):
    """Raised when an inbound line matches none of the inbound patterns."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Malformed log line: {line!r}")
        self.line = line


def match_outbound(text: str) -> Classification:
    """Classify an outbound segment, exposing tell/linkshell captures.

    This is total: text that matches no pattern is tagged ``command``.
    """

    for tag, pattern in OUTBOUND_PATTERNS:
        found = pattern.match(text)
        if not found:
            continue
        if tag == "tell":
            return Classification(
                tag,
                TellTarget(
                    first_name=found.group("first"),
                    last_name=found.group("last"),
                    server=found.group("server"),
                ),
            )
        if tag == "linkshell":
            return Classification(
                tag,
                LinkshellChannel(
                    channel=int(found.group("channel")),
                    cross_world=found.group("kind") in {"cwls", "crossworldlinkshell"},
                ),
            )
        return Classification(tag)
    return Classification(COMMAND)


def classify(text: str) -> str:
    """Return the speech-act tag for an outbound segment."""

    return match_outbound(text).tag


def tell_prefix_length(text: str) -> Optional[int]:
    """Return the length of the tell command and address, if ``text`` is a tell."""

    for tag, pattern in OUTBOUND_PATTERNS:
        found = pattern.match(text)
        if not found:
            continue
        if tag != "tell":
            return None
        # The pattern consumes one trailing whitespace character.
        return found.end() - 1
    return None


def strip_timestamp(line: str) -> str:
    """Remove a leading bracketed timestamp token, if present."""

    return _TIMESTAMP.sub("", line, count=1)


def classify_log_line(text: str) -> ChatLogLine:
    """Parse one inbound chat-log line into a structured record.

    Unlike outbound classification this is partial: inbound lines are expected
    to be well-formed, so an unmatched line raises ``MalformedLogLine``.
    """

    line = strip_timestamp(text.rstrip("\r\n"))
    for tag, pattern in INBOUND_PATTERNS:
        found = pattern.match(line)
        if not found:
            continue
        return ChatLogLine(
            tag=tag,
            speaker_first=found.group("first"),
            speaker_last=found.group("last"),
            server=found.group("server"),
            body=found.group("body"),
            extra=_inbound_extra(tag, found, line),
        )
    raise MalformedLogLine(text)


def _inbound_extra(tag: str, found: re.Match, line: str):
    if tag == "tell":
        # ">> Name: body" is a tell we sent; "Name >> body" is one we received.
        direction = "to" if line.startswith(">>") else "from"
        return TellDirection(direction)
    if tag == "linkshell":
        return LinkshellChannel(
            channel=int(found.group("channel")),
            cross_world=found.group("cwls") is not None,
        )
    return None
