from __future__ import annotations

from core.config import FormatterSettings
from core.prefix import PLACEHOLDER_PREFIX, normalize_prefix, resolve_line


def test_ambient_prefix_applies_to_plain_line() -> None:
    resolved = resolve_line("hello   there", "/p", FormatterSettings())
    assert resolved.prefix == "/p"
    assert resolved.body == "hello there"
    assert resolved.total_offset == len("/p") + 1
    assert resolved.finish(resolved.body) == "/p hello there"


def test_explicit_slash_command_overrides_ambient_prefix() -> None:
    resolved = resolve_line("/em waves.", "/say", FormatterSettings())
    assert resolved.prefix == "/em"
    assert resolved.body == "waves."


def test_blank_prefix_resolves_to_placeholder() -> None:
    assert normalize_prefix("") == PLACEHOLDER_PREFIX
    assert normalize_prefix("   ") == PLACEHOLDER_PREFIX
    assert normalize_prefix(None) == PLACEHOLDER_PREFIX
    resolved = resolve_line("hello", "", FormatterSettings())
    assert resolved.finish(resolved.body) == "/??? hello"


def test_out_of_character_wraps_body_and_reserves_bytes() -> None:
    resolved = resolve_line("hello ", "/say", FormatterSettings(out_of_character=True))
    assert resolved.out_of_character
    assert resolved.total_offset == len("/say") + 1 + 4
    assert resolved.finish(resolved.body) == "/say ((hello))"


def test_out_of_character_skips_command_lines() -> None:
    resolved = resolve_line("/gpose", "/say", FormatterSettings(out_of_character=True))
    assert not resolved.out_of_character
    assert resolved.total_offset == len("/gpose") + 1
    assert resolved.finish(resolved.body) == "/gpose"


def test_continued_adds_marker_and_two_bytes() -> None:
    resolved = resolve_line("hello", "/say", FormatterSettings())
    continued = resolved.continued()
    assert continued.prefix == "/say |"
    assert continued.total_offset == resolved.total_offset + 2
    assert continued.finish("more") == "/say | more"


def test_tell_target_moves_into_prefix() -> None:
    resolved = resolve_line("/t Jane Doe@Server hello there", "/say", FormatterSettings())
    assert resolved.prefix == "/t Jane Doe@Server"
    assert resolved.body == "hello there"
    assert resolved.continued().finish("x") == "/t Jane Doe@Server | x"


def test_multibyte_prefix_counts_bytes() -> None:
    resolved = resolve_line("hi", "/é", FormatterSettings())
    assert resolved.total_offset == 3 + 1
