"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to the terminal UI or any storage-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from core.sizing import LIMIT


@dataclass(frozen=True)
class TellTarget:
    """Recipient address captured from an outbound tell."""

    first_name: str
    last_name: str
    server: str

    @property
    def address(self) -> str:
        return f"{self.first_name} {self.last_name}@{self.server}"


@dataclass(frozen=True)
class LinkshellChannel:
    """Linkshell channel number and whether it is cross-world."""

    channel: int
    cross_world: bool


@dataclass(frozen=True)
class TellDirection:
    """Direction of an inbound tell relative to the log owner ("to" or "from")."""

    direction: str


OutboundDetails = Union[TellTarget, LinkshellChannel, None]
InboundExtra = Union[TellDirection, LinkshellChannel, None]


@dataclass(frozen=True)
class Classification:
    """Outbound classification result with tag-specific details."""

    tag: str
    details: OutboundDetails = None


@dataclass(frozen=True)
class Segment:
    """One finalized outbound message."""

    text: str
    classification: str
    byte_length: int

    @property
    def oversized(self) -> bool:
        # Only a single word longer than the budget can produce this.
        return self.byte_length > LIMIT


@dataclass(frozen=True)
class ChatLogLine:
    """Structured record parsed from one inbound chat-log line."""

    tag: str
    speaker_first: str
    speaker_last: str
    server: Optional[str]
    body: str
    extra: InboundExtra = None

    @property
    def speaker(self) -> str:
        return f"{self.speaker_first} {self.speaker_last}"
