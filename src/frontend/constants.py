"""Shared constants for the Textual UI."""

from __future__ import annotations

from pathlib import Path

ACCENT = "#d4af37"
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# (radio id, label, prefix); an empty prefix means "use the custom input".
CHAT_TYPES = [
    ("say", "Say", "/say"),
    ("party", "Party", "/p"),
    ("yell", "Yell", "/y"),
    ("shout", "Shout", "/sh"),
    ("emote", "Emote", "/em"),
    ("freecompany", "Free Company", "/fc"),
    ("linkshell", "Linkshell 1", "/ls1"),
    ("cwls", "CWLS 1", "/cwls1"),
    ("custom", "Custom", ""),
]

LOG_TAGS = ["say", "party", "yell", "shout", "emote", "tell", "freecompany", "linkshell"]

HELP_MARKDOWN = """\
# chatpad

Type or paste your post on the left. The preview on the right shows the
messages to send, each at most 500 bytes.

- Every non-blank line starts a new message.
- A line starting with a slash command (`/p`, `/em`, `/t First Last@World`)
  uses that command instead of the selected chat type.
- Long lines are split on spaces; follow-up messages are marked with `|`.
- When there is more than one message, each gets a `(k/n)` counter.
  Other commands (`/wave`, `/gpose`) are sent as-is and never counted.
- A single word longer than a whole message (a long URL, say) cannot be
  split. It gets its own red, over-limit entry, and the command before it is
  left as a bare entry such as `/say`. Edit the line before sending either.
- **OOC** wraps messages in `(( ))`. **Em-dash** turns `--` into an em-dash.
- Select a preview entry to copy it to the clipboard.

| key | action |
| --- | --- |
| `ctrl+s` | save the pad to a file |
| `ctrl+o` | open a text file |
| `f1` / `ctrl+/` | this help |
| `ctrl+q` / `ctrl+c` | quit (the draft is autosaved) |
"""
