"""Centralized logging configuration for Parasite.

This module provides consistent logging setup across the interactive
browser and the one-shot CLI commands. Configuration respects environment
variables and provides sensible defaults for a program that owns the
terminal while it runs.
"""

from __future__ import annotations

import logging
import pathlib
import sys
from typing import Literal

from parasite.utils.constant import PARASITE_LOG_LEVEL

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_third_party_log_levels(*, log_level: int) -> None:
    """Set explicit levels for noisy third-party loggers.

    Args:
        log_level: Effective root log level chosen for the application.
    """
    # Rich pulls in markdown-it lazily; its debug output is never useful here.
    logging.getLogger("markdown_it").setLevel(max(log_level, logging.WARNING))


def configure_logging(
    *,
    level: LogLevel | None = None,
    verbose: bool = False,
    quiet: bool = False,
    format_string: str | None = None,
    log_file: pathlib.Path | None = None,
) -> None:
    """Configure centralized logging for the application.

    Should be called once at application startup (CLI entry).

    Args:
        level: Explicit log level (overrides verbose/quiet).
        verbose: Enable verbose logging (DEBUG level).
        quiet: Suppress all non-critical logs.
        format_string: Custom log format (uses default if None).
        log_file: Write records to this file instead of stderr. The
            interactive browser draws over the whole terminal, so logs
            emitted during a session should go here.

    Examples:
        >>> # CLI verbose mode
        >>> configure_logging(verbose=True)

        >>> # Browser session logging to a file
        >>> configure_logging(level="DEBUG", log_file=Path("parasite.log"))
    """
    # Determine effective log level
    if level is not None:
        log_level = getattr(logging, level.upper())
    elif verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.CRITICAL
    else:
        log_level = getattr(logging, PARASITE_LOG_LEVEL, logging.WARNING)

    if format_string is None:
        format_string = DEFAULT_FORMAT

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=log_level,
            format=format_string,
            datefmt="%Y-%m-%d %H:%M:%S",
            filename=str(log_file),
            encoding="utf-8",
            force=True,
        )
    else:
        logging.basicConfig(
            level=log_level,
            format=format_string,
            datefmt="%Y-%m-%d %H:%M:%S",
            stream=sys.stderr,
            force=True,  # Reconfigure even if already configured
        )
    _configure_third_party_log_levels(log_level=log_level)

    if not quiet:
        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={logging.getLevelName(log_level)}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of calling module).

    Returns:
        Configured logger instance.

    Examples:
        >>> logger = get_logger(__name__)
        >>> logger.info("Loading captions")
    """
    return logging.getLogger(name)
