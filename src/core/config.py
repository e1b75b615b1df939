"""Core configuration dataclasses.

We keep persistence outside the core, but these dataclasses define the shape
the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, FrozenSet


@dataclass(frozen=True)
class FormatterSettings:
    """User-toggled settings consumed by the formatter and the log view."""

    out_of_character: bool = False
    em_dash_convert: bool = True
    hidden_tags: FrozenSet[str] = field(default_factory=frozenset)
    hidden_speakers: FrozenSet[str] = field(default_factory=frozenset)


_SET_FIELDS = {"hidden_tags", "hidden_speakers"}


def settings_to_dict(settings: FormatterSettings) -> dict[str, Any]:
    """Return a JSON-friendly dict for persistence."""

    payload: dict[str, Any] = {}
    for item in fields(settings):
        value = getattr(settings, item.name)
        if item.name in _SET_FIELDS:
            value = sorted(value)
        payload[item.name] = value
    return payload


def settings_from_dict(raw: dict[str, Any], defaults: FormatterSettings) -> FormatterSettings:
    """Overlay stored values onto defaults, ignoring unknown keys."""

    known = {item.name for item in fields(FormatterSettings)}
    values: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            continue
        if key in _SET_FIELDS:
            values[key] = frozenset(value or [])
        else:
            values[key] = bool(value)
    return replace(defaults, **values)
