"""Expansion of query matches into the flattened display list.

Each match is surrounded by up to *depth* context lines on each side. A
context line is dropped when it is itself one of the current matches, so it
is only shown once, as a match. Context lines are not compared with each
other: two matches whose windows overlap both show the shared neighbour.
"""

from __future__ import annotations

from collections.abc import Sequence

from parasite.captions.models import ContextLine, DisplayLine, Segment
from parasite.utils.constant import (
    CONTEXT_AFTER_MARKER,
    CONTEXT_BEFORE_MARKER,
    DUPLICATE_TOLERANCE_MS,
    MAX_CONTEXT_LINES,
)

__all__ = ["expand_matches", "is_same_line"]


def is_same_line(
    text_a: str,
    start_a: int,
    end_a: int,
    text_b: str,
    start_b: int,
    end_b: int,
) -> bool:
    """Return True when two timed lines have equal text and near-equal times.

    Both the starts and the ends must differ by less than
    ``DUPLICATE_TOLERANCE_MS``.
    """
    if text_a != text_b:
        return False
    return (
        abs(start_a - start_b) < DUPLICATE_TOLERANCE_MS
        and abs(end_a - end_b) < DUPLICATE_TOLERANCE_MS
    )


MatchTimes = dict[str, list[tuple[int, int]]]


def _match_times_by_text(matches: Sequence[Segment]) -> MatchTimes:
    by_text: MatchTimes = {}
    for m in matches:
        by_text.setdefault(m.text, []).append((m.start, m.end))
    return by_text


def _is_shown_as_match(entry: ContextLine, match_times: MatchTimes) -> bool:
    return any(
        is_same_line(entry.text, start, end, entry.text, entry.start, entry.end)
        for start, end in match_times.get(entry.text, ())
    )


def _context_display_line(entry: ContextLine, marker: str, segment: Segment) -> DisplayLine:
    return DisplayLine(
        text=f"{marker} {entry.text}",
        file=segment.file,
        start=entry.start,
        end=entry.end,
        is_match=False,
        original_start=entry.start,
        original_end=entry.end,
    )


def expand_matches(matches: Sequence[Segment], depth: int) -> list[DisplayLine]:
    """Flatten *matches* and their context into display lines.

    For each match, in order: the nearest *depth* preceding context lines
    (oldest first), the match itself, then the first *depth* following
    context lines. Every call builds a fresh list.

    Args:
        matches: Filtered segments in display order.
        depth: Context lines per side, between 0 and ``MAX_CONTEXT_LINES``.

    Returns:
        The flattened list with original times equal to the current times.

    Raises:
        ValueError: If *depth* is outside the allowed range.
    """
    if not 0 <= depth <= MAX_CONTEXT_LINES:
        raise ValueError(f"Context depth must be between 0 and {MAX_CONTEXT_LINES}, got {depth}")

    match_times = _match_times_by_text(matches)
    flat: list[DisplayLine] = []
    for segment in matches:
        if depth > 0:
            for entry in segment.context_before[-depth:]:
                if not _is_shown_as_match(entry, match_times):
                    flat.append(_context_display_line(entry, CONTEXT_BEFORE_MARKER, segment))

        flat.append(
            DisplayLine(
                text=segment.text,
                file=segment.file,
                start=segment.start,
                end=segment.end,
                is_match=True,
                original_start=segment.start,
                original_end=segment.end,
            )
        )

        if depth > 0:
            for entry in segment.context_after[:depth]:
                if not _is_shown_as_match(entry, match_times):
                    flat.append(_context_display_line(entry, CONTEXT_AFTER_MARKER, segment))
    return flat
