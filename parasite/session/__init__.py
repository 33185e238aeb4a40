"""Interactive browsing session: state, key bindings, rendering and loop."""

from parasite.session.keymap import map_key
from parasite.session.state import Command, CommandKind, SessionState, apply_command, start_session

__all__ = [
    "Command",
    "CommandKind",
    "SessionState",
    "apply_command",
    "map_key",
    "start_session",
]
