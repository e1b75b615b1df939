"""Split one resolved logical line into limit-respecting segments."""

from __future__ import annotations

import logging
from typing import List

from core.prefix import ResolvedLine
from core.sizing import ENUM_OVERHEAD, LIMIT, byte_length

LOGGER = logging.getLogger(__name__)


def segment_line(resolved: ResolvedLine, singular: bool) -> List[str]:
    """Return the finished segments for one logical line.

    Matching logic:
    - A line that is the only one in the batch may use the whole limit,
      since it will never be enumerated.
    - Otherwise a line that fits with room for an enumeration suffix stays
      whole.
    - Longer lines are word-wrapped greedily. After the first break every
      further segment carries the continuation marker in its prefix.
    - A single word larger than the budget is emitted whole; the caller
      flags the resulting segment as oversized.
    """

    size = byte_length(resolved.body)

    if singular and size + resolved.total_offset <= LIMIT:
        return [resolved.finish(resolved.body)]

    if size + resolved.total_offset + ENUM_OVERHEAD <= LIMIT:
        return [resolved.finish(resolved.body)]

    LOGGER.debug("Wrapping %s byte line with offset %s", size, resolved.total_offset)

    current = resolved
    is_split = False
    results: List[str] = []
    open_segment = ""

    for word in resolved.body.split(" "):
        budget = byte_length(open_segment + word) + 1 + ENUM_OVERHEAD + current.total_offset
        if budget > LIMIT:
            results.append(current.finish(open_segment))
            open_segment = ""
            if not is_split:
                is_split = True
                current = current.continued()
        open_segment = f"{open_segment}{word} "

    results.append(current.finish(open_segment.rstrip(" ")))
    return results
