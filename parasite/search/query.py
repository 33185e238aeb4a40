"""Multi-word substring filtering over indexed segments."""

from __future__ import annotations

from collections.abc import Iterable

from parasite.captions.models import Segment


def tokenize_query(query: str) -> list[str]:
    """Split *query* on whitespace into lowercase words."""
    return [word.lower() for word in query.split()]


def filter_segments(query: str, segments: Iterable[Segment]) -> list[Segment]:
    """Return the segments whose text contains every word of *query*.

    Matching is case-insensitive plain substring containment, so ``cat``
    matches ``category``. An empty or whitespace-only query keeps every
    segment. Relative order is preserved.

    Args:
        query: Raw query text as typed.
        segments: Segments in index order.

    Returns:
        The matching segments, in their original order.
    """
    words = tokenize_query(query)
    if not words:
        return list(segments)
    return [
        segment
        for segment in segments
        if all(word in segment.text.lower() for word in words)
    ]
