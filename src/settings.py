"""Static configuration for chatpad.

Paths, pad defaults, log tailing and logging live in a single JSON file for
quick edits without touching Python. Formatter toggles (OOC, em-dash, log
filters) are user preferences and are persisted in SQLite instead.
"""

import json
import os

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# CHATPAD_CONFIG lets a .env file point at a config outside the checkout.
CONFIG_PATH = os.getenv("CHATPAD_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json; a missing file means every default applies."""

    if not os.path.exists(CONFIG_PATH):
        return {}

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        loaded = json.load(handle)
    if not isinstance(loaded, dict):
        raise ValueError(f"Config root must be an object: {CONFIG_PATH}")
    return loaded


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Where to store the SQLite database (drafts + preferences).
_database = _CONFIG.get("database", {})
DB_PATH = _resolve_path(_database.get("path", "chatpad.db"))

# Pad defaults.
# - DEFAULT_PREFIX: ambient chat type selected on startup
# - DRAFT_NAME: key of the autosaved draft row
# - AUTOSAVE_SECONDS: idle delay before the draft is written
_pad = _CONFIG.get("pad", {})
DEFAULT_PREFIX = _pad.get("default_prefix", "/say")
DRAFT_NAME = _pad.get("draft_name", "padContent")
AUTOSAVE_SECONDS = float(_pad.get("autosave_seconds", 1.0))

# Chat log tailing; the path may also come from CHATLOG_PATH.
_log_tail = _CONFIG.get("log_tail", {})
_chatlog_path = _log_tail.get("path") or os.getenv("CHATLOG_PATH")
CHATLOG_PATH = _resolve_path(_chatlog_path) if _chatlog_path else None
POLL_SECONDS = float(_log_tail.get("poll_seconds", 1.0))
# Strict mode stops on the first malformed line instead of skipping it.
STRICT_LOG_PARSING = bool(_log_tail.get("strict", False))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
