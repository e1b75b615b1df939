from __future__ import annotations

from pathlib import Path

from adapters.sqlite_storage import SQLiteStorage
from core.config import FormatterSettings
from core.preferences import Preferences


def _storage(tmp_path: Path) -> SQLiteStorage:
    storage = SQLiteStorage(str(tmp_path / "chatpad.db"))
    storage.init_db()
    return storage


def test_draft_upsert(tmp_path: Path) -> None:
    storage = _storage(tmp_path)
    assert storage.load_draft("padContent") is None

    storage.save_draft("padContent", "first draft")
    storage.save_draft("padContent", "second draft\n/em waves.")
    assert storage.load_draft("padContent") == "second draft\n/em waves."


def test_preferences_roundtrip_through_sqlite(tmp_path: Path) -> None:
    storage = _storage(tmp_path)
    preferences = Preferences(storage, FormatterSettings())
    preferences.set("out_of_character", True)
    preferences.set("hidden_speakers", frozenset({"Jane Doe"}))

    reloaded = Preferences(_storage(tmp_path), FormatterSettings())
    assert reloaded.settings.out_of_character is True
    assert reloaded.settings.hidden_speakers == frozenset({"Jane Doe"})


def test_init_db_is_idempotent(tmp_path: Path) -> None:
    storage = _storage(tmp_path)
    storage.save_draft("padContent", "kept")
    storage.init_db()
    assert storage.load_draft("padContent") == "kept"
