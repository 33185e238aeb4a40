"""Command-line interface for Parasite using Typer.

Features:
- `browse` command for the interactive search / trim / extract session.
- `search` command for printing matches with context without a session.
- Verbose mode and log file for detailed logging.
"""

from __future__ import annotations

import pathlib
from typing import Annotated

import typer
from rich.console import Console

from parasite import __version__
from parasite.audio.clips import FfmpegClipService
from parasite.config import SessionConfig, UIConfig
from parasite.search.context import expand_matches
from parasite.search.index import TranscriptIndex
from parasite.search.query import filter_segments
from parasite.session.app import run_session
from parasite.session.state import start_session
from parasite.session.view import build_results_table
from parasite.utils.constant import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR, MAX_CONTEXT_LINES
from parasite.utils.file_utils import discover_caption_files, ensure_directory
from parasite.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show the application's version and exit.

    Args:
        value: When True, print the version and exit.

    Raises:
        typer.Exit: Always raised after printing when value is True.

    """
    if value:
        print(f"parasite version: {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="parasite",
    help="Vocal sample pack creator: search VTT transcripts and cut matching WAV clips.",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the application's version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Print help when no subcommand is given.

    Args:
        ctx: Typer context.
        version: Whether to print version and exit.

    Raises:
        typer.Exit: Raised to terminate after displaying help or version.

    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _prepare_directories(config: SessionConfig) -> None:
    if ensure_directory(config.input_dir):
        typer.secho(
            f"Warning: Input directory '{config.input_dir}' did not exist and was created.",
            fg=typer.colors.YELLOW,
            err=True,
        )
        typer.secho(
            f"Please place your VTT and WAV files in the '{config.input_dir}' directory.",
            err=True,
        )
    ensure_directory(config.output_dir)


def _load_index(input_dir: pathlib.Path) -> TranscriptIndex:
    """Load every caption file under *input_dir*, exiting on read failure."""
    caption_files = discover_caption_files(input_dir)
    logger.info("Found %d caption files under %s", len(caption_files), input_dir)
    index = TranscriptIndex()
    try:
        index.load(caption_files)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Loading captions failed: %s", exc)
        typer.secho(f"Error: could not load captions: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    return index


def _check_context(value: int) -> int:
    if not 0 <= value <= MAX_CONTEXT_LINES:
        raise typer.BadParameter(f"must be between 0 and {MAX_CONTEXT_LINES}")
    return value


@app.command()
def browse(
    input_dir: Annotated[
        pathlib.Path,
        typer.Option(
            "--input-dir",
            "-i",
            help="Directory containing VTT and WAV files (searched recursively).",
            file_okay=False,
            dir_okay=True,
        ),
    ] = pathlib.Path(DEFAULT_INPUT_DIR),
    output_dir: Annotated[
        pathlib.Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for saving extracted samples.",
            file_okay=False,
            dir_okay=True,
        ),
    ] = pathlib.Path(DEFAULT_OUTPUT_DIR),
    context: Annotated[
        int,
        typer.Option(
            "--context",
            help="Context lines shown above and below each match at startup (0-5).",
            callback=_check_context,
        ),
    ] = 0,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Enable verbose logging (requires --log-file).",
        ),
    ] = False,
    log_file: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--log-file",
            help="Write log records to this file while the browser is open.",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Open the interactive browser over the captions in INPUT_DIR.

    Args:
        input_dir: Directory searched for caption files.
        output_dir: Directory receiving extracted samples.
        context: Initial context depth.
        verbose: Enable verbose logging.
        log_file: Optional log destination.

    Raises:
        typer.Exit: With code 1 when the captions cannot be loaded.

    """
    # Records on stderr would be drawn over the browser, so without a log file
    # only critical ones are let through.
    ui = UIConfig(
        verbose=verbose and log_file is not None,
        quiet=log_file is None,
        log_file=log_file,
    )
    configure_logging(verbose=ui.verbose, quiet=ui.quiet, log_file=ui.log_file)

    config = SessionConfig(input_dir=input_dir, output_dir=output_dir, context_depth=context)
    _prepare_directories(config)
    index = _load_index(config.input_dir)

    state = start_session(index, config)
    run_session(state, FfmpegClipService())


@app.command()
def search(
    query: Annotated[
        str,
        typer.Argument(help="Words that must all appear in a line (case-insensitive)."),
    ] = "",
    input_dir: Annotated[
        pathlib.Path,
        typer.Option(
            "--input-dir",
            "-i",
            help="Directory containing VTT files (searched recursively).",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ] = pathlib.Path(DEFAULT_INPUT_DIR),
    context: Annotated[
        int,
        typer.Option(
            "--context",
            help="Context lines shown above and below each match (0-5).",
            callback=_check_context,
        ),
    ] = 0,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Print the lines matching QUERY, with context, as a table.

    Raises:
        typer.Exit: With code 1 when the captions cannot be loaded.

    """
    configure_logging(verbose=verbose)
    index = _load_index(input_dir)
    matches = filter_segments(query, index)
    lines = expand_matches(matches, context)
    Console().print(build_results_table(lines, match_count=len(matches)))
