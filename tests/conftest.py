"""Shared test fixtures for the parasite test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tests.fakes import RecordingClips

THREE_CUES_VTT = """WEBVTT

00:00:01.000 --> 00:00:02.000
hello world

00:00:02.000 --> 00:00:03.000
foo bar

00:00:03.000 --> 00:00:04.000
baz hello
"""


@pytest.fixture
def clips() -> RecordingClips:
    """Return a recording clip service that always succeeds."""
    return RecordingClips()


@pytest.fixture
def write_vtt(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing caption text to ``<tmp_path>/<name>``."""

    def _write(content: str, name: str = "talk.vtt") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def three_cues_file(write_vtt: Callable[[str, str], Path]) -> Path:
    """Caption file with three single-line cues: two mention 'hello'."""
    return write_vtt(THREE_CUES_VTT, "talk.vtt")
