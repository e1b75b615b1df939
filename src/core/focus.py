"""Diff/focus tracking between successive rendered batches.

The tracker holds no hidden state: callers pass the previous ``FocusState`` in
and keep the one returned for the next pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from core.formatter import strip_enumeration


@dataclass(frozen=True)
class FocusState:
    """Last rendered batch and the focus index chosen for it."""

    previous: Tuple[str, ...] = ()
    index: Optional[int] = None


def focus_index(previous: Sequence[str], current: Sequence[str]) -> Optional[int]:
    """Return the first index where ``current`` differs from ``previous``.

    Enumeration suffixes are ignored, so adding a segment that renumbers the
    whole batch only focuses the segment that actually changed.
    """

    for index, text in enumerate(current):
        if index >= len(previous):
            return index
        if strip_enumeration(previous[index]) != strip_enumeration(text):
            return index
    return None


def advance_focus(state: FocusState, current: Sequence[str]) -> Tuple[FocusState, Optional[int]]:
    """Pick the focus target for ``current`` and return the next state.

    When nothing changed, the prior focus is kept as long as it still points
    into the current batch.
    """

    index = focus_index(state.previous, current)
    if index is None and state.index is not None and state.index < len(current):
        index = state.index
    return FocusState(previous=tuple(current), index=index), index
