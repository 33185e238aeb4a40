"""Project-wide constants for convenient reuse."""

from __future__ import annotations

import os
import pathlib
import sys
from typing import Final

from parasite.utils.env_loader import load_project_env

# Ensure .env is loaded exactly once at import time for the whole project
if "pytest" not in sys.modules:
    load_project_env()


# Repository root resolved relative to this file (utils/constant.py → package → repo)
REPO_ROOT: Final[pathlib.Path] = pathlib.Path(__file__).resolve().parents[2]

# Default path of the dotenv file containing runtime overrides
ENV_FILE: Final[pathlib.Path] = REPO_ROOT / ".env"

# Session directories (searched recursively for captions / receives clips)
DEFAULT_INPUT_DIR: Final[str] = os.getenv("PARASITE_INPUT_DIR", "data")
DEFAULT_OUTPUT_DIR: Final[str] = os.getenv("PARASITE_OUTPUT_DIR", "output")

# Caption files and their companion audio share a stem
CAPTION_EXTENSION: Final[str] = os.getenv("CAPTION_EXTENSION", ".vtt").lower()
AUDIO_EXTENSION: Final[str] = os.getenv("AUDIO_EXTENSION", ".wav").lower()

# External media tools
FFMPEG_BINARY: Final[str] = os.getenv("FFMPEG_BINARY", "ffmpeg")
FFPLAY_BINARY: Final[str] = os.getenv("FFPLAY_BINARY", "ffplay")

# Logging configuration
PARASITE_LOG_LEVEL: Final[str] = os.getenv("PARASITE_LOG_LEVEL", "WARNING").upper()

# Context lines captured per side at parse time, and the maximum display depth
MAX_CONTEXT_LINES: Final[int] = 5

# Timestamp nudge magnitudes (milliseconds)
NORMAL_TIME_ADJUST_MS: Final[int] = 100
FINE_TIME_ADJUST_MS: Final[int] = 25

# Smallest allowed distance between a line's start and end (milliseconds)
MIN_GAP_MS: Final[int] = 10

# Context lines within this distance of a match (on both ends) are duplicates
DUPLICATE_TOLERANCE_MS: Final[int] = 10

# Extra room granted to the end time of the last line in the flattened list
LAST_LINE_END_CEILING_MS: Final[int] = 30_000

# Markers prefixed to context lines in the flattened list
CONTEXT_BEFORE_MARKER: Final[str] = "↑"
CONTEXT_AFTER_MARKER: Final[str] = "↓"
