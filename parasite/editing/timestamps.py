"""Nudging the start and end time of one line of the flattened list.

Only the selected line is ever changed. A rejected adjustment leaves every
line untouched and reports why through the returned outcome; none of these
functions raise for boundary violations.

Bounds enforced on each call:

* start never goes below 0 and stays more than ``MIN_GAP_MS`` before end;
* end stays at least ``MIN_GAP_MS`` after start and never passes the start
  of the next line (or ``LAST_LINE_END_CEILING_MS`` past its current value
  on the last line).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from parasite.captions.models import DisplayLine
from parasite.utils.constant import LAST_LINE_END_CEILING_MS, MIN_GAP_MS

__all__ = ["EditOutcome", "NO_SELECTION", "adjust_end", "adjust_start", "reset_times"]

NO_SELECTION = "No line selected"


@dataclass(frozen=True)
class EditOutcome:
    """Result of an edit request.

    Attributes:
        applied: Whether the selected line was modified.
        message: Status text describing what happened.

    """

    applied: bool
    message: str


def _selected(
    lines: Sequence[DisplayLine], index: int | None
) -> tuple[int, DisplayLine] | None:
    if index is None or not 0 <= index < len(lines):
        return None
    return index, lines[index]


def _signed(value: int) -> str:
    return f"{'+' if value >= 0 else '-'}{abs(value)}ms"


def adjust_start(
    lines: Sequence[DisplayLine], index: int | None, delta_ms: int
) -> EditOutcome:
    """Move the start of the selected line by *delta_ms*.

    Args:
        lines: The flattened list.
        index: Selected position in *lines*, or None.
        delta_ms: Signed change in milliseconds.

    Returns:
        The outcome; ``applied`` is False when the move was rejected.
    """
    selection = _selected(lines, index)
    if selection is None:
        return EditOutcome(False, NO_SELECTION)
    _, line = selection

    candidate = line.start + delta_ms
    if candidate < 0:
        return EditOutcome(False, "Start time already at minimum (0)")
    if line.end - candidate <= MIN_GAP_MS:
        return EditOutcome(False, "Cannot adjust: Start time would exceed end time")

    line.start = candidate
    return EditOutcome(
        True,
        f"Start time adjusted by {_signed(delta_ms)} "
        f"({_signed(candidate - line.original_start)} from original)",
    )


def adjust_end(
    lines: Sequence[DisplayLine], index: int | None, delta_ms: int
) -> EditOutcome:
    """Move the end of the selected line by *delta_ms*.

    The upper bound is the start of the following line, read at call time,
    or the current end plus ``LAST_LINE_END_CEILING_MS`` for the last line.

    Args:
        lines: The flattened list.
        index: Selected position in *lines*, or None.
        delta_ms: Signed change in milliseconds.

    Returns:
        The outcome; ``applied`` is False when the move was rejected.
    """
    selection = _selected(lines, index)
    if selection is None:
        return EditOutcome(False, NO_SELECTION)
    position, line = selection

    current = line.end
    if position + 1 < len(lines):
        max_end = lines[position + 1].start
    else:
        max_end = current + LAST_LINE_END_CEILING_MS

    candidate = current + delta_ms
    min_end = line.start + MIN_GAP_MS
    if candidate < min_end:
        return EditOutcome(False, "Cannot adjust: End time would precede start time")
    if candidate > max_end:
        return EditOutcome(
            False,
            f"Cannot adjust: End time would exceed maximum ({max_end / 1000:.2f}s)",
        )

    line.end = max(min_end, min(max_end, candidate))
    return EditOutcome(
        True,
        f"End time adjusted by {_signed(delta_ms)} "
        f"({_signed(line.end - line.original_end)} from original)",
    )


def reset_times(lines: Sequence[DisplayLine], index: int | None) -> EditOutcome:
    """Restore the selected line's start and end to their original values."""
    selection = _selected(lines, index)
    if selection is None:
        return EditOutcome(False, NO_SELECTION)
    _, line = selection

    line.start = line.original_start
    line.end = line.original_end
    return EditOutcome(True, "Timestamps reset to original values.")
