"""Common data models for time-stamped transcript lines.

This module defines pydantic models that are shared across caption parsing,
searching, context expansion and timestamp editing. All times are integer
milliseconds.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "ContextLine",
    "Segment",
    "DisplayLine",
]


class ContextLine(BaseModel):
    """A neighbouring transcript line captured next to a segment."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Stripped text of the neighbouring line.")
    start: int = Field(..., description="Start time of its cue (milliseconds).")
    end: int = Field(..., description="End time of its cue (milliseconds).")


class Segment(BaseModel):
    """One time-stamped text line of a caption file, with its context.

    ``end > start`` is not enforced; inverted ranges survive parsing and are
    rejected only when audio is cut or previewed.
    """

    model_config = ConfigDict(frozen=True)

    file: Path = Field(..., description="Caption file the line was read from.")
    text: str = Field(..., description="Stripped text of the line.")
    start: int = Field(..., description="Cue start time (milliseconds).")
    end: int = Field(..., description="Cue end time (milliseconds).")
    context_before: tuple[ContextLine, ...] = Field(
        default=(),
        description="Up to five preceding lines, oldest first.",
    )
    context_after: tuple[ContextLine, ...] = Field(
        default=(),
        description="Up to five following lines, nearest first.",
    )


class DisplayLine(BaseModel):
    """A selectable row of the flattened result list.

    ``start`` and ``end`` are edited in place by the timestamp editor; the
    ``original_*`` values are frozen and used to reset them.
    """

    text: str = Field(..., description="Rendered text, with a marker for context lines.")
    file: Path = Field(..., description="Caption file the line came from.")
    start: int = Field(..., description="Current start time (milliseconds).")
    end: int = Field(..., description="Current end time (milliseconds).")
    is_match: bool = Field(..., description="True for query matches, False for context.")
    original_start: int = Field(..., frozen=True, description="Start time at flatten time.")
    original_end: int = Field(..., frozen=True, description="End time at flatten time.")

    @property
    def duration_ms(self) -> int:
        """Current length of the line, or 0 when the range is inverted."""
        return max(self.end - self.start, 0)

    @property
    def kind(self) -> str:
        return "match" if self.is_match else "context"
