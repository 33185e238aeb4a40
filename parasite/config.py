"""Configuration dataclasses for a browsing session.

This module defines configuration objects that group related settings so
the CLI hands a single object to the session instead of loose arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from parasite.utils.constant import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR


@dataclass
class SessionConfig:
    """Groups directory and display settings of a session.

    Attributes:
        input_dir: Directory searched recursively for caption files.
        output_dir: Directory receiving extracted samples.
        context_depth: Context lines shown around each match at startup.

    """

    input_dir: Path = Path(DEFAULT_INPUT_DIR)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    context_depth: int = 0


@dataclass
class UIConfig:
    """Groups UI and logging settings.

    Attributes:
        verbose: Enable detailed diagnostic output.
        quiet: Suppress non-error output.
        log_file: Where to write log records while the browser owns the terminal.

    """

    verbose: bool = False
    quiet: bool = False
    log_file: Path | None = None
