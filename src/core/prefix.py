"""Prefix resolution for one logical line (core domain)."""

from __future__ import annotations

from dataclasses import dataclass, replace
import re

from core.classifier import COMMAND, classify, tell_prefix_length
from core.config import FormatterSettings
from core.sizing import byte_length

PLACEHOLDER_PREFIX = "/???"
CONTINUATION_MARKER = "|"

# Extra bytes for the "((" and "))" wrapped around out-of-character bodies.
OOC_OVERHEAD = 4

_SLASH_COMMAND = re.compile(r"^(/[a-zA-Z0-9]+)(?:\s+|$)")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ResolvedLine:
    """A logical line split into its active prefix and body, with byte budget."""

    prefix: str
    body: str
    total_offset: int
    out_of_character: bool

    def finish(self, body: str) -> str:
        """Join the prefix and a body chunk into a final message."""

        if self.out_of_character:
            return f"{self.prefix} (({body.rstrip()}))"
        return f"{self.prefix} {body}".strip()

    def continued(self) -> "ResolvedLine":
        """Return the resolution used for every segment after the first split."""

        return replace(
            self,
            prefix=f"{self.prefix} {CONTINUATION_MARKER}",
            total_offset=self.total_offset + 2,
        )


def normalize_prefix(prefix: str | None) -> str:
    """Return the ambient prefix, or a visible placeholder when it is unset."""

    if prefix is None or not prefix.strip():
        return PLACEHOLDER_PREFIX
    return _WHITESPACE.sub(" ", prefix.strip())


def resolve_line(line: str, ambient_prefix: str | None, settings: FormatterSettings) -> ResolvedLine:
    """Determine the prefix for ``line`` and the bytes it consumes.

    A leading slash-command overrides the ambient prefix for this line only.
    Lines that classify as ``command`` are never wrapped out-of-character.
    """

    body = _WHITESPACE.sub(" ", line).strip()
    prefix = normalize_prefix(ambient_prefix)

    explicit = _SLASH_COMMAND.match(body)
    if explicit:
        prefix = explicit.group(1)
        body = body[explicit.end():]

    joined = f"{prefix} {body}"
    tell_end = tell_prefix_length(joined)
    if tell_end is not None:
        # Keep the recipient on every continuation segment.
        prefix = joined[:tell_end]
        body = joined[tell_end:].strip()

    total_offset = byte_length(prefix) + 1
    out_of_character = settings.out_of_character and classify(joined) != COMMAND
    if out_of_character:
        total_offset += OOC_OVERHEAD

    return ResolvedLine(
        prefix=prefix,
        body=body,
        total_offset=total_offset,
        out_of_character=out_of_character,
    )
