"""Audio clip extraction and preview through FFmpeg.

The session talks to an :class:`AudioClipService`; the default
implementation shells out to ``ffmpeg`` (lossless stream copy) and
``ffplay`` (headless playback). Tests substitute a recording fake.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from parasite.utils.constant import FFMPEG_BINARY, FFPLAY_BINARY
from parasite.utils.logging_config import get_logger

__all__ = [
    "AudioClipService",
    "AudioProcessingError",
    "FfmpegClipService",
    "format_seconds",
]

logger = get_logger(__name__)


class AudioProcessingError(RuntimeError):
    """Raised when a clip cannot be cut or previewed."""


class AudioClipService(Protocol):
    """Cuts and plays ``[start, end)`` ranges of an audio file."""

    def extract(self, audio_path: Path, start_ms: int, end_ms: int, output_path: Path) -> None:
        """Write the range to *output_path*, overwriting any existing file."""
        ...

    def preview(self, audio_path: Path, start_ms: int, end_ms: int) -> None:
        """Start playing the range and return without waiting for it."""
        ...


def format_seconds(ms: int) -> str:
    """Render milliseconds as a seconds argument for FFmpeg (``1.250``)."""
    return f"{ms / 1000:.3f}"


def _check_clip(audio_path: Path, start_ms: int, end_ms: int) -> None:
    if not audio_path.exists():
        raise AudioProcessingError(f"WAV file not found: {audio_path}")
    if end_ms <= start_ms:
        raise AudioProcessingError("Invalid time range: end time must be after start time")


def _require_binary(binary: str) -> str:
    resolved = shutil.which(binary)
    if resolved is None:
        raise AudioProcessingError(f"{binary} is not installed or not in PATH.")
    return resolved


class FfmpegClipService:
    """:class:`AudioClipService` backed by the FFmpeg command-line tools.

    No timeout is applied to ``ffmpeg``; a hung process blocks extraction.
    Previews are never cancelled, so several may play at once.
    """

    def __init__(self, ffmpeg: str = FFMPEG_BINARY, ffplay: str = FFPLAY_BINARY) -> None:
        self.ffmpeg = ffmpeg
        self.ffplay = ffplay

    def extract(self, audio_path: Path, start_ms: int, end_ms: int, output_path: Path) -> None:
        _check_clip(audio_path, start_ms, end_ms)
        ffmpeg = _require_binary(self.ffmpeg)

        cmd = [
            ffmpeg,
            "-i",
            str(audio_path),
            "-ss",
            format_seconds(start_ms),
            "-t",
            format_seconds(end_ms - start_ms),
            "-c:a",
            "copy",
            str(output_path),
            "-y",
        ]
        logger.debug("Running %s", " ".join(cmd))
        try:
            subprocess.run(cmd, capture_output=True, check=True)
        except subprocess.CalledProcessError as exc:
            raise AudioProcessingError(
                f"ffmpeg error: {exc.stderr.decode(errors='ignore')}"
            ) from exc
        except OSError as exc:
            raise AudioProcessingError(f"Could not run ffmpeg: {exc}") from exc
        logger.info("Extracted %s [%d, %d) to %s", audio_path, start_ms, end_ms, output_path)

    def preview(self, audio_path: Path, start_ms: int, end_ms: int) -> None:
        _check_clip(audio_path, start_ms, end_ms)
        ffplay = _require_binary(self.ffplay)

        cmd = [
            ffplay,
            "-nodisp",
            "-autoexit",
            "-loglevel",
            "quiet",
            "-ss",
            format_seconds(start_ms),
            "-t",
            format_seconds(end_ms - start_ms),
            str(audio_path),
        ]
        logger.debug("Spawning %s", " ".join(cmd))
        try:
            # Not waited on; the terminal UI stays responsive while it plays.
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise AudioProcessingError(f"Could not run ffplay: {exc}") from exc
