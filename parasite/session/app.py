"""Terminal loop of the interactive browser.

Draws the session with a full-screen Rich ``Live`` display, reads one
keystroke at a time and feeds the resulting commands to the reducer.
"""

from __future__ import annotations

from collections.abc import Callable

import click
from rich.console import Console
from rich.live import Live

from parasite.audio.clips import AudioClipService
from parasite.session.keymap import map_key
from parasite.session.state import Command, CommandKind, SessionState, apply_command
from parasite.session.view import render_screen
from parasite.utils.logging_config import get_logger

logger = get_logger(__name__)

KeyReader = Callable[[], str]


def _read_key_or_quit(read_key: KeyReader) -> str | None:
    try:
        return read_key()
    except (KeyboardInterrupt, EOFError):
        # click.getchar turns Ctrl-C / Ctrl-D into these exceptions.
        return None


def run_session(
    state: SessionState,
    clips: AudioClipService,
    *,
    console: Console | None = None,
    read_key: KeyReader = click.getchar,
) -> SessionState:
    """Run the browser until the user quits.

    Args:
        state: Initial session state.
        clips: Service used for preview and extraction.
        console: Console to draw on; a new one is created when omitted.
        read_key: Returns the next keystroke; defaults to ``click.getchar``.

    Returns:
        The final session state.
    """
    console = console or Console()
    logger.debug("Session started with %d lines", len(state.lines))

    with Live(
        render_screen(state, console.size.height),
        console=console,
        screen=True,
        auto_refresh=False,
        transient=True,
    ) as live:
        while state.running:
            key = _read_key_or_quit(read_key)
            command = Command(CommandKind.QUIT) if key is None else map_key(key)
            if command is None:
                continue
            apply_command(state, command, clips)
            live.update(render_screen(state, console.size.height), refresh=True)

    logger.debug("Session ended")
    return state
