"""State container for the pad draft and preview focus."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.focus import FocusState


@dataclass
class PadState:
    focus: FocusState = field(default_factory=FocusState)
    dirty: bool = False
    error: str | None = None
    file_path: str | None = None
