"""Parser for WebVTT-style caption files.

Every non-blank line that is not a timing line becomes a candidate segment,
timed by the nearest timing line above it. Lines whose timing cannot be
resolved are skipped silently; a malformed cue never aborts the file.
"""

from __future__ import annotations

from pathlib import Path

from parasite.captions.models import ContextLine, Segment
from parasite.utils.constant import MAX_CONTEXT_LINES

__all__ = [
    "TIMING_SEPARATOR",
    "parse_captions",
    "parse_time_range",
    "parse_timestamp",
]

TIMING_SEPARATOR = "-->"

TimeRange = tuple[int, int]


def _parse_field(value: str) -> int | None:
    value = value.strip()
    if not (value.isascii() and value.isdecimal()):
        return None
    return int(value)


def parse_timestamp(timestamp: str) -> int | None:
    """Parse ``HH:MM:SS.mmm`` into milliseconds.

    The millisecond field is read as a plain integer, so ``01.5`` is one
    second and five milliseconds.

    Args:
        timestamp: A single timestamp, surrounding whitespace allowed.

    Returns:
        The timestamp in milliseconds, or ``None`` if any field is missing,
        extra, or not a non-negative ASCII integer.
    """
    parts = timestamp.split(":")
    if len(parts) != 3:
        return None

    hours = _parse_field(parts[0])
    minutes = _parse_field(parts[1])

    seconds_parts = parts[2].split(".")
    if len(seconds_parts) != 2:
        return None

    seconds = _parse_field(seconds_parts[0])
    millis = _parse_field(seconds_parts[1])

    if hours is None or minutes is None or seconds is None or millis is None:
        return None
    return hours * 3_600_000 + minutes * 60_000 + seconds * 1000 + millis


def parse_time_range(line: str) -> TimeRange | None:
    """Parse a ``start --> end`` timing line into a millisecond range.

    Cue settings after the end timestamp are not supported and make the line
    unparsable.

    Returns:
        ``(start, end)`` or ``None`` when either side is malformed.
    """
    parts = line.split(TIMING_SEPARATOR)
    if len(parts) != 2:
        return None

    start = parse_timestamp(parts[0].strip())
    end = parse_timestamp(parts[1].strip())
    if start is None or end is None:
        return None
    return start, end


def _preceding_ranges(lines: list[str]) -> list[TimeRange | None]:
    """Return, for every line index, the range of the nearest timing line above it.

    An index maps to ``None`` when no timing line precedes it or when the
    nearest one is malformed; earlier timing lines are never consulted.
    """
    ranges: list[TimeRange | None] = []
    current: TimeRange | None = None
    for line in lines:
        ranges.append(current)
        if TIMING_SEPARATOR in line:
            current = parse_time_range(line)
    return ranges


def _split_lines(content: str) -> list[str]:
    """Split on LF and CRLF only; other Unicode line breaks stay inside a line."""
    return [line.removesuffix("\r") for line in content.split("\n")]


def _is_text_line(line: str) -> bool:
    return TIMING_SEPARATOR not in line and bool(line.strip())


def _context_line(
    lines: list[str], ranges: list[TimeRange | None], index: int
) -> ContextLine | None:
    if not _is_text_line(lines[index]):
        return None
    time_range = ranges[index]
    if time_range is None:
        return None
    return ContextLine(text=lines[index].strip(), start=time_range[0], end=time_range[1])


def _collect_context(
    lines: list[str],
    ranges: list[TimeRange | None],
    indices: range,
) -> list[ContextLine]:
    collected: list[ContextLine] = []
    for index in indices:
        if len(collected) >= MAX_CONTEXT_LINES:
            break
        entry = _context_line(lines, ranges, index)
        if entry is not None:
            collected.append(entry)
    return collected


def parse_captions(content: str, file: Path) -> list[Segment]:
    """Turn the text of one caption file into segments in file order.

    The header sits on the first line and has no timing line above it, so it
    never produces a segment. Context is gathered from the surrounding text
    lines regardless of cue boundaries; each context line carries the time of
    its own cue.

    Args:
        content: Decoded caption file contents.
        file: Path recorded on every produced segment.

    Returns:
        One segment per timed text line; empty when nothing could be timed.
    """
    lines = _split_lines(content)
    ranges = _preceding_ranges(lines)

    segments: list[Segment] = []
    for index, line in enumerate(lines):
        if not _is_text_line(line):
            continue
        time_range = ranges[index]
        if time_range is None:
            continue

        before = _collect_context(lines, ranges, range(index - 1, -1, -1))
        before.reverse()
        after = _collect_context(lines, ranges, range(index + 1, len(lines)))

        segments.append(
            Segment(
                file=file,
                text=line.strip(),
                start=time_range[0],
                end=time_range[1],
                context_before=tuple(before),
                context_after=tuple(after),
            )
        )
    return segments
