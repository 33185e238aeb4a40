"""Transcript index, query filtering and context expansion."""

from parasite.search.context import expand_matches, is_same_line
from parasite.search.index import TranscriptIndex
from parasite.search.query import filter_segments, tokenize_query

__all__ = [
    "TranscriptIndex",
    "expand_matches",
    "filter_segments",
    "is_same_line",
    "tokenize_query",
]
