"""Persisted formatter settings with change notification."""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Callable, Dict, List

from core.config import FormatterSettings, settings_from_dict, settings_to_dict
from core.ports import PreferencesStorePort

LOGGER = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class Preferences:
    """Observer list over a plain ``FormatterSettings`` record.

    Every write is an explicit three-step command: set the field, persist the
    whole record, then notify the handlers subscribed to that field.
    """

    def __init__(self, store: PreferencesStorePort, defaults: FormatterSettings) -> None:
        self._store = store
        self._settings = settings_from_dict(store.load_preferences(), defaults)
        self._handlers: Dict[str, List[Handler]] = {}

    @property
    def settings(self) -> FormatterSettings:
        return self._settings

    def subscribe(self, name: str, handler: Handler) -> None:
        self._check_name(name)
        self._handlers.setdefault(name, []).append(handler)

    def set(self, name: str, value: Any) -> None:
        """Update one field, persist, and notify its subscribers."""

        self._check_name(name)
        self._settings = replace(self._settings, **{name: value})
        self.save()
        LOGGER.debug("Preference %s set to %r", name, value)
        for handler in self._handlers.get(name, []):
            handler(value)

    def save(self) -> None:
        self._store.save_preferences(settings_to_dict(self._settings))

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in {item.name for item in fields(FormatterSettings)}:
            raise KeyError(f"Unknown preference: {name}")
