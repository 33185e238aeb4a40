"""Mapping of terminal keystrokes to session commands.

Keys arrive as the strings returned by :func:`click.getchar`: a single
character for ordinary keys and an escape sequence for arrows.
"""

from __future__ import annotations

from parasite.session.state import Command, CommandKind
from parasite.utils.constant import FINE_TIME_ADJUST_MS, NORMAL_TIME_ADJUST_MS

__all__ = ["HELP_TEXT", "KEY_BINDINGS", "map_key"]

KEY_UP = ("\x1b[A", "\x1bOA")
KEY_DOWN = ("\x1b[B", "\x1bOB")
KEY_ESCAPE = "\x1b"
KEY_TAB = "\t"
KEY_ENTER = ("\r", "\n")
KEY_BACKSPACE = ("\x7f", "\x08")
KEY_QUIT = ("\x11", "\x03")  # Ctrl-Q, Ctrl-C

# Unshifted keys nudge by the normal step, their shifted twins by the fine step.
KEY_BINDINGS: dict[str, Command] = {
    "+": Command(CommandKind.MORE_CONTEXT),
    "-": Command(CommandKind.LESS_CONTEXT),
    ",": Command(CommandKind.ADJUST_START, delta_ms=-NORMAL_TIME_ADJUST_MS),
    ".": Command(CommandKind.ADJUST_START, delta_ms=NORMAL_TIME_ADJUST_MS),
    "<": Command(CommandKind.ADJUST_START, delta_ms=-FINE_TIME_ADJUST_MS),
    ">": Command(CommandKind.ADJUST_START, delta_ms=FINE_TIME_ADJUST_MS),
    "[": Command(CommandKind.ADJUST_END, delta_ms=-NORMAL_TIME_ADJUST_MS),
    "]": Command(CommandKind.ADJUST_END, delta_ms=NORMAL_TIME_ADJUST_MS),
    "{": Command(CommandKind.ADJUST_END, delta_ms=-FINE_TIME_ADJUST_MS),
    "}": Command(CommandKind.ADJUST_END, delta_ms=FINE_TIME_ADJUST_MS),
    KEY_ESCAPE: Command(CommandKind.RESET),
    KEY_TAB: Command(CommandKind.PREVIEW),
    **{key: Command(CommandKind.MOVE_UP) for key in KEY_UP},
    **{key: Command(CommandKind.MOVE_DOWN) for key in KEY_DOWN},
    **{key: Command(CommandKind.EXTRACT) for key in KEY_ENTER},
    **{key: Command(CommandKind.BACKSPACE) for key in KEY_BACKSPACE},
    **{key: Command(CommandKind.QUIT) for key in KEY_QUIT},
}

HELP_TEXT = (
    "Type to search | +/-: context ({depth}) | ,/./[/]: adjust time | "
    "</>/{{/}}: fine adjust | Esc: reset time | Tab: preview | Enter: extract | "
    "Ctrl-Q: quit"
)


def map_key(key: str) -> Command | None:
    """Translate one keystroke into a command.

    Bound keys win over query input, so ``+`` or ``,`` can never be typed
    into the search. Any other printable character extends the query.

    Returns:
        The command, or None for keys that do nothing.
    """
    command = KEY_BINDINGS.get(key)
    if command is not None:
        return command
    if len(key) == 1 and key.isprintable():
        return Command(CommandKind.APPEND_CHAR, char=key)
    return None
