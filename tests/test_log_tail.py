from __future__ import annotations

import pytest

from core.classifier import MalformedLogLine
from core.config import FormatterSettings
from core.log_tail import LogTailParser, is_visible


def test_feed_parses_complete_lines_and_holds_partial() -> None:
    parser = LogTailParser()
    first = parser.feed("[12:00] Jane Doe: hi\n[12:01] John Roe@Ultros: hel")
    assert [line.body for line in first] == ["hi"]

    second = parser.feed("lo\n")
    assert [line.body for line in second] == ["hello"]
    assert second[0].server == "@Ultros"


def test_feed_drops_immediately_repeated_lines() -> None:
    parser = LogTailParser()
    lines = parser.feed("Jane Doe: hi\nJane Doe: hi\nJohn Roe: yo\nJane Doe: hi\n")
    assert [line.body for line in lines] == ["hi", "yo", "hi"]


def test_repeat_detection_spans_chunks() -> None:
    parser = LogTailParser()
    parser.feed("Jane Doe: hi\n")
    assert parser.feed("Jane Doe: hi\n") == []


def test_known_speakers_are_tracked() -> None:
    parser = LogTailParser()
    parser.feed("Jane Doe: hi\n(John Roe) party\n[FC]<Jane Doe> again\n")
    assert parser.known_speakers == ["Jane Doe", "John Roe"]


def test_malformed_lines_are_collected_when_not_strict() -> None:
    parser = LogTailParser()
    lines = parser.feed("garbage line\nJane Doe: hi\n")
    assert [line.body for line in lines] == ["hi"]
    assert parser.malformed == ["garbage line"]


def test_malformed_lines_raise_when_strict() -> None:
    parser = LogTailParser(strict=True)
    with pytest.raises(MalformedLogLine):
        parser.feed("garbage line\n")


def test_strict_failure_keeps_lines_around_the_bad_one() -> None:
    parser = LogTailParser(strict=True)
    with pytest.raises(MalformedLogLine) as excinfo:
        parser.feed("Jane Doe: a\nbad line!!\nJohn Roe: b\nJane Doe: par")
    assert excinfo.value.line == "bad line!!"

    resumed = parser.feed("")
    assert [(line.speaker, line.body) for line in resumed] == [
        ("Jane Doe", "a"),
        ("John Roe", "b"),
    ]
    assert parser.known_speakers == ["Jane Doe", "John Roe"]
    assert parser.feed("tial\n")[0].body == "partial"


def test_flush_returns_lines_held_after_strict_failure() -> None:
    parser = LogTailParser(strict=True)
    with pytest.raises(MalformedLogLine):
        parser.feed("bad line!!\nJohn Roe: b\n")
    assert [line.body for line in parser.flush()] == ["b"]
    assert parser.flush() == []


def test_flush_parses_pending_line() -> None:
    parser = LogTailParser()
    assert parser.feed("Jane Doe: no newline") == []
    assert [line.body for line in parser.flush()] == ["no newline"]
    assert parser.flush() == []


def test_reset_forgets_partial_and_last_line() -> None:
    parser = LogTailParser()
    parser.feed("Jane Doe: hi\nJane Doe: par")
    parser.reset()
    assert [line.body for line in parser.feed("Jane Doe: hi\n")] == ["hi"]


def test_is_visible_applies_tag_and_speaker_filters() -> None:
    parser = LogTailParser()
    say, party = parser.feed("Jane Doe: hi\n(John Roe) party\n")
    settings = FormatterSettings(hidden_tags=frozenset({"party"}))
    assert is_visible(say, settings)
    assert not is_visible(party, settings)
    settings = FormatterSettings(hidden_speakers=frozenset({"Jane Doe"}))
    assert not is_visible(say, settings)
    assert is_visible(party, settings)
