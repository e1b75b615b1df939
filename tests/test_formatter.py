from __future__ import annotations

import logging
import re

from core.config import FormatterSettings
from core.formatter import EM_DASH, format_batch, logical_lines, strip_enumeration
from core.sizing import LIMIT

_SUFFIX = re.compile(r" \((\d+)/(\d+)\)$")


def _long_words(count: int) -> str:
    return " ".join(["lorem"] * count)


def test_single_line_has_no_enumeration() -> None:
    segments = format_batch("hello world", "/say", FormatterSettings())
    assert [segment.text for segment in segments] == ["/say hello world"]
    assert segments[0].classification == "say"
    assert segments[0].byte_length == len("/say hello world")


def test_single_command_line_has_no_enumeration() -> None:
    segments = format_batch("/gpose", "/say", FormatterSettings())
    assert [segment.text for segment in segments] == ["/gpose"]
    assert segments[0].classification == "command"


def test_two_lines_are_enumerated() -> None:
    segments = format_batch("first\n\n   \nsecond", "/p", FormatterSettings())
    assert [segment.text for segment in segments] == ["/p first (1/2)", "/p second (2/2)"]


def test_command_segments_keep_position_without_suffix() -> None:
    text = "hello\n/wave\n/em waves back.\nbye"
    segments = format_batch(text, "/say", FormatterSettings())
    assert [segment.text for segment in segments] == [
        "/say hello (1/3)",
        "/wave",
        "/em waves back. (2/3)",
        "/say bye (3/3)",
    ]
    assert [segment.classification for segment in segments] == ["say", "command", "emote", "say"]


def test_enumeration_is_contiguous_over_non_command_segments() -> None:
    text = "\n".join([_long_words(200), "/gpose", _long_words(120), "/wave"])
    segments = format_batch(text, "/say", FormatterSettings())
    ranks = []
    for segment in segments:
        found = _SUFFIX.search(segment.text)
        if segment.classification == "command":
            assert found is None
            continue
        assert found is not None
        ranks.append((int(found.group(1)), int(found.group(2))))
    total = len(ranks)
    assert total > 1
    assert ranks == [(rank, total) for rank in range(1, total + 1)]


def test_every_segment_fits_the_limit() -> None:
    text = "\n".join([_long_words(400), "short one", _long_words(90)])
    for settings in (FormatterSettings(), FormatterSettings(out_of_character=True)):
        segments = format_batch(text, "/fc", settings)
        assert all(segment.byte_length <= LIMIT for segment in segments)
        assert not any(segment.oversized for segment in segments)


def test_long_say_word_splits_into_two_segments() -> None:
    segments = format_batch("/say " + "X" * 600, "/p", FormatterSettings())
    assert len(segments) == 2
    assert segments[1].text.startswith("/say | ")
    assert segments[0].byte_length <= LIMIT
    assert segments[1].oversized
    assert not segments[0].oversized
    assert [(segment.text, segment.classification) for segment in segments] == [
        ("/say", "command"),
        ("/say | " + "X" * 600, "say"),
    ]


def test_em_dash_conversion_is_optional() -> None:
    converted = format_batch("wait--what", "/say", FormatterSettings())
    kept = format_batch("wait--what", "/say", FormatterSettings(em_dash_convert=False))
    assert converted[0].text == f"/say wait{EM_DASH}what"
    assert kept[0].text == "/say wait--what"


def test_out_of_character_batch() -> None:
    segments = format_batch("hi\n/dance", "/say", FormatterSettings(out_of_character=True))
    assert [segment.text for segment in segments] == ["/say ((hi))", "/dance"]


def test_logical_lines_normalizes_whitespace_and_newlines() -> None:
    lines = logical_lines("a\t\tb\r\n\r\n  \rc", FormatterSettings())
    assert lines == ["a b", "c"]


def test_empty_input_gives_no_segments() -> None:
    assert format_batch("", "/say", FormatterSettings()) == []
    assert format_batch(" \n\t\n", None, FormatterSettings()) == []


def test_reformatting_joined_bodies_keeps_boundaries() -> None:
    settings = FormatterSettings()
    first = format_batch(_long_words(300), "/say", settings)
    bodies = [
        strip_enumeration(segment.text).split(" ", 1)[1].removeprefix("| ")
        for segment in first
    ]
    second = format_batch(" ".join(bodies), "/say", settings)
    assert [segment.text for segment in second] == [segment.text for segment in first]


def test_strip_enumeration() -> None:
    assert strip_enumeration("/say hi (3/12)") == "/say hi"
    assert strip_enumeration("/say hi") == "/say hi"


def test_wide_counters_are_logged(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="core.formatter"):
        segments = format_batch("\n".join(["hi"] * 100), "/say", FormatterSettings())
    assert segments[-1].text == "/say hi (100/100)"
    assert "Batch of 100 messages" in caplog.text


def test_two_digit_counters_are_not_logged(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="core.formatter"):
        format_batch("\n".join(["hi"] * 99), "/say", FormatterSettings())
    assert "Batch of" not in caplog.text
