"""Session state and the command reducer that drives it.

The whole interactive state lives in one :class:`SessionState`. The terminal
loop turns keys into :class:`Command` values and hands them to
:func:`apply_command`, which runs each command to completion before the next
one is read. Nothing here touches the terminal, so every command can be
exercised directly in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from parasite.audio.clips import AudioClipService, AudioProcessingError
from parasite.captions.models import DisplayLine, Segment
from parasite.config import SessionConfig
from parasite.editing.timestamps import (
    NO_SELECTION,
    adjust_end,
    adjust_start,
    reset_times,
)
from parasite.search.context import expand_matches
from parasite.search.index import TranscriptIndex
from parasite.search.query import filter_segments
from parasite.utils.constant import MAX_CONTEXT_LINES
from parasite.utils.file_utils import companion_audio_path, sample_output_path
from parasite.utils.logging_config import get_logger

logger = get_logger(__name__)

__all__ = [
    "Command",
    "CommandKind",
    "SessionState",
    "apply_command",
    "change_context",
    "refilter",
    "reflatten",
    "start_session",
]


class CommandKind(str, Enum):
    """Every action the browser understands."""

    APPEND_CHAR = "append_char"
    BACKSPACE = "backspace"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MORE_CONTEXT = "more_context"
    LESS_CONTEXT = "less_context"
    ADJUST_START = "adjust_start"
    ADJUST_END = "adjust_end"
    RESET = "reset"
    PREVIEW = "preview"
    EXTRACT = "extract"
    QUIT = "quit"


@dataclass(frozen=True)
class Command:
    """A single user command.

    Attributes:
        kind: What to do.
        char: Character appended to the query (``APPEND_CHAR`` only).
        delta_ms: Signed nudge for ``ADJUST_START`` / ``ADJUST_END``.

    """

    kind: CommandKind
    char: str = ""
    delta_ms: int = 0


@dataclass
class SessionState:
    """Everything the browser knows about the current session.

    ``filtered`` and ``lines`` are rebuilt from ``index`` whenever the query
    or context depth changes; edits made to ``lines`` are lost at that point.
    """

    index: TranscriptIndex
    output_dir: Path
    query: str = ""
    context_depth: int = 0
    filtered: list[Segment] = field(default_factory=list)
    lines: list[DisplayLine] = field(default_factory=list)
    selected: int | None = None
    status: str = ""
    running: bool = True

    @property
    def selected_line(self) -> DisplayLine | None:
        if self.selected is None or not 0 <= self.selected < len(self.lines):
            return None
        return self.lines[self.selected]


def reflatten(state: SessionState) -> SessionState:
    """Rebuild the display list from the filtered matches.

    The selection keeps its position when it is still inside the new list
    and is clamped to the last line otherwise.
    """
    state.lines = expand_matches(state.filtered, state.context_depth)
    if not state.lines:
        state.selected = None
    elif state.selected is not None:
        state.selected = min(state.selected, len(state.lines) - 1)
    return state


def refilter(state: SessionState) -> SessionState:
    """Re-run the query over the index, rebuild the list and select its first line."""
    state.filtered = filter_segments(state.query, state.index)
    reflatten(state)
    state.selected = 0 if state.lines else None
    state.status = (
        f"Found {len(state.filtered)} matches, {len(state.lines)} total lines with context"
    )
    logger.debug("Query %r matched %d segments", state.query, len(state.filtered))
    return state


def change_context(state: SessionState, step: int) -> SessionState:
    """Grow or shrink the context depth by *step*, staying within ``[0, 5]``."""
    depth = state.context_depth + step
    if depth > MAX_CONTEXT_LINES:
        state.status = f"Maximum context lines reached ({MAX_CONTEXT_LINES})"
        return state
    if depth < 0:
        state.status = "Context lines already at minimum (0)"
        return state

    state.context_depth = depth
    reflatten(state)
    state.status = f"Context set to {depth} lines"
    return state


def start_session(index: TranscriptIndex, config: SessionConfig) -> SessionState:
    """Build the initial state for an already loaded *index*."""
    state = SessionState(
        index=index,
        output_dir=config.output_dir,
        context_depth=config.context_depth,
    )
    refilter(state)
    state.status = (
        f"Loaded {len(index)} samples from {config.input_dir}. Saving to {config.output_dir}."
    )
    return state


def _append_char(state: SessionState, command: Command, _clips: AudioClipService) -> None:
    state.query += command.char
    refilter(state)


def _backspace(state: SessionState, _command: Command, _clips: AudioClipService) -> None:
    state.query = state.query[:-1]
    refilter(state)


def _move_up(state: SessionState, _command: Command, _clips: AudioClipService) -> None:
    if state.selected is None:
        state.selected = 0 if state.lines else None
    elif state.selected > 0:
        state.selected -= 1


def _move_down(state: SessionState, _command: Command, _clips: AudioClipService) -> None:
    if state.selected is None:
        state.selected = 0 if state.lines else None
    elif state.selected + 1 < len(state.lines):
        state.selected += 1


def _more_context(state: SessionState, _command: Command, _clips: AudioClipService) -> None:
    change_context(state, 1)


def _less_context(state: SessionState, _command: Command, _clips: AudioClipService) -> None:
    change_context(state, -1)


def _adjust_start(state: SessionState, command: Command, _clips: AudioClipService) -> None:
    state.status = adjust_start(state.lines, state.selected, command.delta_ms).message


def _adjust_end(state: SessionState, command: Command, _clips: AudioClipService) -> None:
    state.status = adjust_end(state.lines, state.selected, command.delta_ms).message


def _reset(state: SessionState, _command: Command, _clips: AudioClipService) -> None:
    state.status = reset_times(state.lines, state.selected).message


def _preview(state: SessionState, _command: Command, clips: AudioClipService) -> None:
    line = state.selected_line
    if line is None:
        state.status = NO_SELECTION
        return
    try:
        clips.preview(companion_audio_path(line.file), line.start, line.end)
    except AudioProcessingError as exc:
        logger.warning("Preview failed for %s: %s", line.file, exc)
        state.status = f"Preview error: {exc}"
        return
    state.status = (
        f'Preview playing ({line.kind}): "{line.text}" ({line.duration_ms / 1000:.2f}s)'
    )


def _extract(state: SessionState, _command: Command, clips: AudioClipService) -> None:
    line = state.selected_line
    if line is None:
        state.status = NO_SELECTION
        return
    output_path = sample_output_path(state.output_dir, line.text)
    try:
        clips.extract(companion_audio_path(line.file), line.start, line.end, output_path)
    except AudioProcessingError as exc:
        logger.warning("Extraction failed for %s: %s", line.file, exc)
        state.status = f"Error: {exc}"
        return
    state.status = (
        f"Sample saved: {output_path} ({line.kind}, {line.duration_ms / 1000:.2f}s)"
    )


def _quit(state: SessionState, _command: Command, _clips: AudioClipService) -> None:
    state.running = False


_HANDLERS: dict[CommandKind, Callable[[SessionState, Command, AudioClipService], None]] = {
    CommandKind.APPEND_CHAR: _append_char,
    CommandKind.BACKSPACE: _backspace,
    CommandKind.MOVE_UP: _move_up,
    CommandKind.MOVE_DOWN: _move_down,
    CommandKind.MORE_CONTEXT: _more_context,
    CommandKind.LESS_CONTEXT: _less_context,
    CommandKind.ADJUST_START: _adjust_start,
    CommandKind.ADJUST_END: _adjust_end,
    CommandKind.RESET: _reset,
    CommandKind.PREVIEW: _preview,
    CommandKind.EXTRACT: _extract,
    CommandKind.QUIT: _quit,
}


def apply_command(
    state: SessionState, command: Command, clips: AudioClipService
) -> SessionState:
    """Apply *command* to *state* and return the updated state.

    Audio failures are reported through ``state.status``; the display list
    and selection are left as they were.

    Args:
        state: Current session state, updated in place.
        command: Command to run.
        clips: Service used for preview and extraction.

    Returns:
        The same state object, for chaining.
    """
    _HANDLERS[command.kind](state, command, clips)
    return state
