"""Unit tests for the FFmpeg-backed clip service."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from parasite.audio import clips as clips_mod
from parasite.audio.clips import AudioProcessingError, FfmpegClipService, format_seconds


@pytest.fixture
def wav(tmp_path: Path) -> Path:
    """An existing (dummy) companion audio file."""
    path = tmp_path / "talk.wav"
    path.write_bytes(b"RIFF")
    return path


@pytest.fixture(autouse=True)
def _tools_on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend ffmpeg and ffplay are installed under /usr/bin."""
    monkeypatch.setattr(clips_mod.shutil, "which", lambda name: f"/usr/bin/{name}")


def test_format_seconds() -> None:
    """Milliseconds render as seconds with three decimals."""
    assert format_seconds(1250) == "1.250"
    assert format_seconds(0) == "0.000"


def test_extract_runs_lossless_copy(
    monkeypatch: pytest.MonkeyPatch, wav: Path, tmp_path: Path
) -> None:
    """Extraction stream-copies the range and overwrites the output."""
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess:
        calls.append(cmd)
        assert kwargs["check"] is True
        return subprocess.CompletedProcess(cmd, 0, b"", b"")

    monkeypatch.setattr(clips_mod.subprocess, "run", fake_run)
    out = tmp_path / "hello_world.wav"

    FfmpegClipService().extract(wav, 1000, 2500, out)

    assert calls == [
        [
            "/usr/bin/ffmpeg",
            "-i",
            str(wav),
            "-ss",
            "1.000",
            "-t",
            "1.500",
            "-c:a",
            "copy",
            str(out),
            "-y",
        ]
    ]


def test_extract_reports_ffmpeg_stderr(
    monkeypatch: pytest.MonkeyPatch, wav: Path, tmp_path: Path
) -> None:
    """A non-zero exit becomes an AudioProcessingError carrying stderr."""

    def fake_run(cmd: list[str], **_kwargs: object) -> None:
        raise subprocess.CalledProcessError(1, cmd, output=b"", stderr=b"Invalid data")

    monkeypatch.setattr(clips_mod.subprocess, "run", fake_run)

    with pytest.raises(AudioProcessingError, match="ffmpeg error: Invalid data"):
        FfmpegClipService().extract(wav, 0, 1000, tmp_path / "x.wav")


def test_extract_requires_audio_file(tmp_path: Path) -> None:
    """A missing companion file is reported before running anything."""
    with pytest.raises(AudioProcessingError, match="WAV file not found"):
        FfmpegClipService().extract(tmp_path / "none.wav", 0, 1000, tmp_path / "x.wav")


@pytest.mark.parametrize(("start", "end"), [(1000, 1000), (2000, 1000)])
def test_extract_rejects_empty_or_inverted_range(
    wav: Path, tmp_path: Path, start: int, end: int
) -> None:
    """End must be after start."""
    with pytest.raises(AudioProcessingError, match="Invalid time range"):
        FfmpegClipService().extract(wav, start, end, tmp_path / "x.wav")


def test_extract_requires_ffmpeg_on_path(
    monkeypatch: pytest.MonkeyPatch, wav: Path, tmp_path: Path
) -> None:
    """A missing binary is an audio processing error, not a crash."""
    monkeypatch.setattr(clips_mod.shutil, "which", lambda name: None)

    with pytest.raises(AudioProcessingError, match="not installed"):
        FfmpegClipService().extract(wav, 0, 1000, tmp_path / "x.wav")


def test_preview_spawns_player_without_waiting(
    monkeypatch: pytest.MonkeyPatch, wav: Path
) -> None:
    """Preview starts a quiet, windowless ffplay and returns immediately."""
    spawned: list[tuple[list[str], dict[str, object]]] = []

    class FakePopen:
        def __init__(self, cmd: list[str], **kwargs: object) -> None:
            spawned.append((cmd, kwargs))

        def wait(self) -> None:  # pragma: no cover - must not be called
            raise AssertionError("preview must not wait for the player")

    monkeypatch.setattr(clips_mod.subprocess, "Popen", FakePopen)

    FfmpegClipService().preview(wav, 250, 1000)

    ((cmd, kwargs),) = spawned
    assert cmd == [
        "/usr/bin/ffplay",
        "-nodisp",
        "-autoexit",
        "-loglevel",
        "quiet",
        "-ss",
        "0.250",
        "-t",
        "0.750",
        str(wav),
    ]
    assert kwargs["stdout"] is subprocess.DEVNULL
    assert kwargs["stderr"] is subprocess.DEVNULL


def test_preview_wraps_spawn_failure(monkeypatch: pytest.MonkeyPatch, wav: Path) -> None:
    """OSError while spawning surfaces as AudioProcessingError."""

    def broken_popen(*_args: object, **_kwargs: object) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(clips_mod.subprocess, "Popen", broken_popen)

    with pytest.raises(AudioProcessingError, match="Could not run ffplay"):
        FfmpegClipService().preview(wav, 0, 1000)
