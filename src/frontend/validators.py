"""Validation helpers for pad inputs."""

from __future__ import annotations

import re
from dataclasses import dataclass

_COMMAND = re.compile(r"^/[a-zA-Z0-9]+$")


@dataclass
class PrefixInfo:
    normalized: str | None
    error: str | None = None


def parse_custom_prefix(raw_value: str) -> PrefixInfo:
    """Validate the custom chat prefix, e.g. "/tell Jane Doe@World"."""

    parts = raw_value.split()
    if not parts:
        # The formatter shows a placeholder for an unset prefix.
        return PrefixInfo(None)

    if not _COMMAND.match(parts[0]):
        return PrefixInfo(None, "prefix must start with /command")

    return PrefixInfo(" ".join(parts))
