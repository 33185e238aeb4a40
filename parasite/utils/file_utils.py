"""Utilities for caption discovery, companion audio lookup, and sample naming.

The module exposes:
• `discover_caption_files` – expand directories / wildcard patterns into
  concrete caption file paths
• `companion_audio_path` – the audio file that belongs to a caption file
• `sample_name` / `sample_output_path` – where an extracted clip is written
• `ensure_directory` – create a session directory when it is missing
"""

from __future__ import annotations

import pathlib
from collections.abc import Iterable
from glob import glob

from parasite.utils.constant import AUDIO_EXTENSION, CAPTION_EXTENSION

PathLike = str | pathlib.Path

# Number of leading words of a line's text used to name its sample
SAMPLE_NAME_WORDS = 3

__all__ = [
    "companion_audio_path",
    "discover_caption_files",
    "ensure_directory",
    "sample_name",
    "sample_output_path",
]


def _is_caption_file(path: pathlib.Path, ext: str) -> bool:
    """Return *True* if *path* is an existing file with the caption suffix."""
    return path.is_file() and path.suffix.lower() == ext


def discover_caption_files(
    patterns: Iterable[PathLike] | PathLike,
    *,
    caption_ext: str = CAPTION_EXTENSION,
    recursive: bool = True,
) -> list[pathlib.Path]:
    """Expand file/directory/wildcard patterns into caption file paths.

    Directories are walked recursively by default and their matches are
    sorted so that repeated loads see the files in the same order. Duplicates
    are removed while preserving insertion order; non-existent patterns are
    ignored.

    Args:
        patterns: One or more file, directory, or glob patterns to resolve.
        caption_ext: Caption suffix to accept (dot-prefixed, case-insensitive).
        recursive: If True, search directories recursively; otherwise only
            top-level files are considered.

    Returns:
        Existing caption file paths in load order.
    """
    if isinstance(patterns, (str, pathlib.Path)):
        patterns = [patterns]

    ext = caption_ext.lower()
    resolved: list[pathlib.Path] = []
    seen: set[pathlib.Path] = set()

    def _add(p: pathlib.Path) -> None:
        if p not in seen and _is_caption_file(p, ext):
            seen.add(p)
            resolved.append(p)

    for patt in patterns:
        p = pathlib.Path(patt).expanduser()
        if p.is_dir():
            walker = p.rglob("*") if recursive else p.glob("*")
            for child in sorted(walker):
                _add(child)
        else:
            # Use glob for wildcard expansion; if no wildcard, treat as literal
            for m in sorted(glob(str(p), recursive=True)):
                _add(pathlib.Path(m))
    return resolved


def companion_audio_path(
    caption_path: PathLike, audio_ext: str = AUDIO_EXTENSION
) -> pathlib.Path:
    """Return the audio file expected next to *caption_path*.

    The base name is kept and only the extension is swapped. The file is not
    required to exist.
    """
    return pathlib.Path(caption_path).with_suffix(audio_ext)


def sample_name(text: str) -> str:
    """Build a sample name from the first words of a display line's text.

    Context markers count as words, so ``"↑ foo bar baz"`` becomes
    ``"↑_foo_bar"``.

    Args:
        text: Display line text.

    Returns:
        The first three whitespace-separated words joined with ``_`` and
        lowercased.
    """
    return "_".join(text.split()[:SAMPLE_NAME_WORDS]).lower()


def sample_output_path(output_dir: PathLike, text: str) -> pathlib.Path:
    """Return ``<output_dir>/<sample_name>.wav`` for a display line.

    Existing files at that path are overwritten by extraction; no numbered
    suffix is added.
    """
    return pathlib.Path(output_dir) / f"{sample_name(text)}.wav"


def ensure_directory(path: PathLike) -> bool:
    """Create *path* (and parents) when missing.

    Returns:
        True if the directory had to be created, False if it already existed.
    """
    directory = pathlib.Path(path)
    if directory.is_dir():
        return False
    directory.mkdir(parents=True, exist_ok=True)
    return True
