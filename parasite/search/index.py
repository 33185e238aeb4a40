"""In-memory index of every segment found in the loaded caption files."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path

from parasite.captions.models import Segment
from parasite.captions.parser import parse_captions
from parasite.utils.logging_config import get_logger

logger = get_logger(__name__)


class TranscriptIndex:
    """Ordered collection of segments across a set of caption files.

    Loading is all-or-nothing: if any file cannot be read the error
    propagates and the previously loaded state is kept unchanged.
    """

    def __init__(self) -> None:
        self._files: list[Path] = []
        self._segments: list[Segment] = []

    @property
    def files(self) -> list[Path]:
        return list(self._files)

    @property
    def segments(self) -> list[Segment]:
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def load(self, paths: Sequence[Path]) -> int:
        """Parse *paths* in order and replace the indexed segments.

        Args:
            paths: Caption files to read (UTF-8).

        Returns:
            Number of segments now held by the index.

        Raises:
            OSError: If any file cannot be read.
            UnicodeDecodeError: If any file is not valid UTF-8.
        """
        segments: list[Segment] = []
        for path in paths:
            content = path.read_text(encoding="utf-8")
            parsed = parse_captions(content, path)
            logger.debug("Parsed %d segments from %s", len(parsed), path)
            segments.extend(parsed)

        self._files = list(paths)
        self._segments = segments
        logger.info("Indexed %d segments from %d caption files", len(segments), len(paths))
        return len(segments)

    @classmethod
    def from_files(cls, paths: Sequence[Path]) -> TranscriptIndex:
        index = cls()
        index.load(paths)
        return index
