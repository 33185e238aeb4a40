"""Boundary-safe editing of display line timestamps."""

from parasite.editing.timestamps import (
    EditOutcome,
    adjust_end,
    adjust_start,
    reset_times,
)

__all__ = ["EditOutcome", "adjust_end", "adjust_start", "reset_times"]
