"""SQLite storage adapter.

Implements the core PreferencesStorePort and DraftStorePort using a simple
SQLite database.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any, Optional


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the core storage ports."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - drafts: autosaved pad text, one row per draft name
        - preferences: user-toggled formatter settings
        """

        with self._connect() as conn:
            # drafts keeps the last autosaved pad buffer so the text survives
            # restarts.
            # Fields:
            # - name: draft name, "padContent" by default (PRIMARY KEY)
            # - content: raw pad text exactly as typed
            # - updated_at: timestamp of the last autosave
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS drafts (
                    name TEXT PRIMARY KEY,
                    content TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )
            # preferences stores one JSON value per settings field.
            # Fields:
            # - key: FormatterSettings field name (PRIMARY KEY)
            # - value: JSON-encoded value
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def load_draft(self, name: str) -> Optional[str]:
        """Return the stored draft text, if any."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT content FROM drafts WHERE name = ?",
                (name,),
            ).fetchone()
        return str(row["content"]) if row else None

    def save_draft(self, name: str, content: str) -> None:
        """Upsert the draft text."""

        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO drafts (name, content, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    content = excluded.content,
                    updated_at = excluded.updated_at
                """,
                (name, content, now.isoformat()),
            )

    def load_preferences(self) -> dict[str, Any]:
        """Return all stored preferences keyed by field name."""

        with self._connect() as conn:
            rows = conn.execute("SELECT key, value FROM preferences").fetchall()
        return {row["key"]: json.loads(row["value"]) for row in rows}

    def save_preferences(self, values: dict[str, Any]) -> None:
        """Upsert every preference in ``values``."""

        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO preferences (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                [(key, json.dumps(value)) for key, value in values.items()],
            )
