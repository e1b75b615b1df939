"""Shared preview formatting helpers.

Keeping formatting here prevents drift between the pad preview, the log view
and the CLI, so a segment looks the same wherever it is shown.
"""

from __future__ import annotations

from typing import Optional

from rich.text import Text

from core.classifier import match_outbound
from core.models import ChatLogLine, LinkshellChannel, Segment, TellDirection, TellTarget

TAG_STYLES = {
    "say": "#f7f7f7",
    "party": "#66e5ff",
    "yell": "#ffff00",
    "shout": "#ffa666",
    "emote": "#bafff0",
    "tell": "#ffb8de",
    "freecompany": "#abdbe5",
    "linkshell": "#d4ff7d",
    "command": "#8a8a8a",
}

OVERLIMIT_STYLE = "bold white on #8b0000"


def format_channel_label(channel: LinkshellChannel) -> str:
    """Return a short label like "LS3" or "CWLS1"."""

    kind = "CWLS" if channel.cross_world else "LS"
    return f"{kind}{channel.channel}"


def format_target_label(text: str) -> Optional[str]:
    """Return the addressee of a tell or linkshell segment, if it has one."""

    details = match_outbound(text).details
    if isinstance(details, TellTarget):
        return f"to {details.address}"
    if isinstance(details, LinkshellChannel):
        return format_channel_label(details)
    return None


def format_metadata(segment: Segment, index: int, total: int) -> str:
    """Return the "<bytes>\\n<i>/<total>" label shown beside a preview item."""

    return f"{segment.byte_length}\n{index + 1}/{total}"


def render_segment(segment: Segment) -> Text:
    """Render one segment as styled text, marking oversized ones."""

    style = TAG_STYLES.get(segment.classification, TAG_STYLES["command"])
    text = Text(segment.text, style=style)
    if segment.oversized:
        text.stylize(OVERLIMIT_STYLE)
    label = format_target_label(segment.text)
    if label:
        text.append(f"  [{label}]", style="dim")
    return text


def format_log_line(line: ChatLogLine) -> str:
    """Return a plain one-line rendering of an inbound record."""

    speaker = line.speaker + (line.server or "")
    extra = line.extra
    if isinstance(extra, TellDirection):
        if extra.direction == "to":
            return f">> {speaker}: {line.body}"
        return f"{speaker} >> {line.body}"
    if isinstance(extra, LinkshellChannel):
        return f"[{format_channel_label(extra)}]<{speaker}> {line.body}"
    if line.tag == "party":
        return f"({speaker}) {line.body}"
    if line.tag == "freecompany":
        return f"[FC]<{speaker}> {line.body}"
    if line.tag == "emote":
        return f"{speaker} {line.body}"
    if line.tag in {"yell", "shout"}:
        return f"{speaker} {line.tag}s: {line.body}"
    return f"{speaker}: {line.body}"


def render_log_line(line: ChatLogLine) -> Text:
    """Render an inbound record styled by its tag."""

    return Text(format_log_line(line), style=TAG_STYLES.get(line.tag, TAG_STYLES["say"]))
