"""Byte-accurate size model for outbound chat messages."""

from __future__ import annotations

# Chat protocol limit, measured in encoded bytes rather than characters.
LIMIT = 500

# Worst-case room for an enumeration suffix: " (99/99)".
ENUM_OVERHEAD = 8


def byte_length(text: str) -> int:
    """Return the UTF-8 encoded size of ``text``."""

    return len(text.encode("utf-8"))
