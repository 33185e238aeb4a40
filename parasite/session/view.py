"""Rich renderables for the browser screen and the ``search`` command."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from parasite.captions.models import DisplayLine
from parasite.session.keymap import HELP_TEXT
from parasite.session.state import SessionState

__all__ = [
    "build_results_table",
    "format_timestamp",
    "render_screen",
    "visible_window",
]

MAX_FILENAME_CHARS = 30

# Status line, search box (3) and help footer, plus the table title, borders and header
_CHROME_ROWS = 1 + 3 + 1 + 5


def format_timestamp(ms: int) -> str:
    """Convert non-negative milliseconds to ``HH:MM:SS.mmm``."""
    seconds, millis = divmod(ms, 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def _truncate_filename(name: str) -> str:
    if len(name) > MAX_FILENAME_CHARS:
        return f"{name[: MAX_FILENAME_CHARS - 3]}..."
    return name


def visible_window(total: int, selected: int | None, height: int) -> range:
    """Return the slice of rows to draw so that *selected* stays on screen.

    Args:
        total: Number of rows in the list.
        selected: Selected row, or None.
        height: Rows available for drawing (at least one is used).

    Returns:
        A range of row indices, at most *height* long.
    """
    height = max(height, 1)
    if total <= height:
        return range(total)
    anchor = selected or 0
    first = min(max(anchor - height // 2, 0), total - height)
    return range(first, first + height)


def build_results_table(
    lines: Sequence[DisplayLine],
    *,
    match_count: int,
    selected: int | None = None,
    rows: range | None = None,
) -> Table:
    """Render display lines as a table of file, times, length and text.

    Context lines are dimmed and the selected line is highlighted.
    """
    table = Table(
        title=f"Results ({match_count} matches, {len(lines)} total lines)",
        show_header=True,
        header_style="bold",
        expand=True,
    )
    table.add_column("File", no_wrap=True)
    table.add_column("Start", justify="right", no_wrap=True)
    table.add_column("End", justify="right", no_wrap=True)
    table.add_column("Length", justify="right", no_wrap=True)
    table.add_column("Text", ratio=1)

    for idx in rows if rows is not None else range(len(lines)):
        line = lines[idx]
        if idx == selected:
            style = "bold on grey23"
        elif line.is_match:
            style = "white"
        else:
            style = "grey50"
        prefix = "> " if idx == selected else "  "
        table.add_row(
            _truncate_filename(line.file.name),
            format_timestamp(max(line.start, 0)),
            format_timestamp(max(line.end, 0)),
            f"{line.duration_ms / 1000:.2f}s",
            f"{prefix}{line.text}",
            style=style,
        )
    return table


def render_screen(state: SessionState, height: int) -> Group:
    """Compose the full browser screen for a terminal *height* rows tall."""
    status = Text(state.status, style="cyan")

    query_display = f"Search: {state.query}" if state.query else "Type to search..."
    search_box = Panel(Text(query_display, style="bold yellow"), title="Search")

    rows = visible_window(len(state.lines), state.selected, height - _CHROME_ROWS)
    table = build_results_table(
        state.lines,
        match_count=len(state.filtered),
        selected=state.selected,
        rows=rows,
    )

    help_line = Text(
        HELP_TEXT.format(depth=f"Context: {state.context_depth} lines"),
        justify="center",
    )
    return Group(status, search_box, table, help_line)
