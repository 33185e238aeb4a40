"""Caption parsing and the data models shared across the engine."""

from parasite.captions.models import ContextLine, DisplayLine, Segment
from parasite.captions.parser import parse_captions, parse_time_range, parse_timestamp

__all__ = [
    "ContextLine",
    "DisplayLine",
    "Segment",
    "parse_captions",
    "parse_time_range",
    "parse_timestamp",
]
