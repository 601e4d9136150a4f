"""Counter resolution for voice commands.

Maps the free-text counter name captured by the parser onto one of the
caller's counters. Matching runs in three tiers (exact, substring, keyword)
and returns the first counter in list order at the first tier that hits.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from stitchcount.voice.models import CounterRef

logger = logging.getLogger(__name__)

# Category keyword → spoken variants that select it
COUNTER_KEYWORDS: dict[str, list[str]] = {
    "row": ["row", "rows"],
    "round": ["round", "rounds", "rnd"],
    "stitch": ["stitch", "stitches", "st"],
}


def resolve_counter(
    counters: Sequence[CounterRef],
    query: str | None = None,
) -> CounterRef | None:
    """Find the counter a spoken name refers to.

    Returns None when no query is given; the caller applies its own
    default-counter policy in that case.
    """
    if not query:
        return None

    normalized = query.lower()

    found = (
        match_exact(counters, normalized)
        or match_substring(counters, normalized)
        or match_keyword(counters, normalized)
    )
    if found is None:
        logger.debug("No counter matched %r among %d counters", query, len(counters))
    return found


def match_exact(counters: Sequence[CounterRef], query: str) -> CounterRef | None:
    """Case-insensitive label equality."""
    query = query.lower()
    for counter in counters:
        if counter.label.lower() == query:
            return counter
    return None


def match_substring(counters: Sequence[CounterRef], query: str) -> CounterRef | None:
    """Label contains the query, or the query contains the label."""
    query = query.lower()
    for counter in counters:
        label = counter.label.lower()
        if query in label or label in query:
            return counter
    return None


def match_keyword(counters: Sequence[CounterRef], query: str) -> CounterRef | None:
    """Match through the row/round/stitch synonym table.

    For each category whose variants appear in the query, the first counter
    whose label contains the category key wins.
    """
    query = query.lower()
    for key, variants in COUNTER_KEYWORDS.items():
        if any(v in query for v in variants):
            for counter in counters:
                if key in counter.label.lower():
                    return counter
    return None
