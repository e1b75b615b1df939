"""Batch formatting pipeline.

The formatter enforces a strict order:
1) Optional em-dash conversion over the whole buffer
2) Whitespace normalization and logical line splitting
3) Per-line prefix resolution and segmentation
4) Classification of every segment
5) Global enumeration of non-command segments when there is more than one

The formatter is total over all string inputs and never mutates its input.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from core.classifier import COMMAND, classify
from core.config import FormatterSettings
from core.models import Segment
from core.prefix import resolve_line
from core.segmenter import segment_line
from core.sizing import ENUM_OVERHEAD, byte_length

LOGGER = logging.getLogger(__name__)

EM_DASH = "—"

_HORIZONTAL_SPACE = re.compile(r"[ \t]+")
_ENUMERATION = re.compile(r" ?\(\d+/\d+\)$")


def logical_lines(raw_text: str, settings: FormatterSettings) -> List[str]:
    """Return the non-blank lines of ``raw_text`` after normalization."""

    text = raw_text
    if settings.em_dash_convert:
        text = text.replace("--", EM_DASH)

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _HORIZONTAL_SPACE.sub(" ", text)
    return [line for line in text.split("\n") if line.strip()]


def format_batch(
    raw_text: str,
    active_prefix: Optional[str],
    settings: FormatterSettings,
) -> List[Segment]:
    """Split ``raw_text`` into enumerated, classified chat segments."""

    lines = logical_lines(raw_text, settings)
    singular = len(lines) == 1

    texts: List[str] = []
    for line in lines:
        resolved = resolve_line(line, active_prefix, settings)
        texts.extend(segment_line(resolved, singular))

    tags = [classify(text) for text in texts]
    total = sum(1 for tag in tags if tag != COMMAND)

    if total > 99:
        LOGGER.warning(
            "Batch of %s messages: counters are wider than the %s reserved bytes",
            total,
            ENUM_OVERHEAD,
        )

    if total > 1:
        rank = 0
        for index, tag in enumerate(tags):
            if tag == COMMAND:
                continue
            rank += 1
            texts[index] = f"{texts[index].rstrip()} ({rank}/{total})"

    segments = [
        Segment(text=text, classification=tag, byte_length=byte_length(text))
        for text, tag in zip(texts, tags)
    ]
    oversized = sum(1 for segment in segments if segment.oversized)
    if oversized:
        LOGGER.debug("Batch contains %s oversized segment(s)", oversized)
    return segments


def strip_enumeration(text: str) -> str:
    """Remove a trailing " (k/n)" suffix, if present."""

    return _ENUMERATION.sub("", text)
