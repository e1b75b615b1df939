"""Ports (interfaces) used by the core.

Ports define the minimal contracts for persistence adapters so that the core
can be reused with different backends.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol


class PreferencesStorePort(Protocol):
    """Persistence required by ``Preferences``."""

    def load_preferences(self) -> dict[str, Any]:
        ...

    def save_preferences(self, values: dict[str, Any]) -> None:
        ...


class DraftStorePort(Protocol):
    """Persistence for the pad's autosaved text."""

    def load_draft(self, name: str) -> Optional[str]:
        ...

    def save_draft(self, name: str, content: str) -> None:
        ...
