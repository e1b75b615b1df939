from __future__ import annotations

from frontend.validators import parse_custom_prefix


def test_custom_prefix_is_normalized() -> None:
    info = parse_custom_prefix("  /tell   Jane Doe@Server ")
    assert info.normalized == "/tell Jane Doe@Server"
    assert info.error is None


def test_blank_custom_prefix_is_unset_not_an_error() -> None:
    info = parse_custom_prefix("   ")
    assert info.normalized is None
    assert info.error is None


def test_custom_prefix_must_be_a_command() -> None:
    info = parse_custom_prefix("say hello")
    assert info.normalized is None
    assert info.error == "prefix must start with /command"
