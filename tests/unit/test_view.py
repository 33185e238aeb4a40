"""Unit tests for Rich rendering helpers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from rich.console import Console

from parasite.captions.models import DisplayLine
from parasite.search.index import TranscriptIndex
from parasite.session.state import SessionState, refilter
from parasite.session.view import (
    build_results_table,
    format_timestamp,
    render_screen,
    visible_window,
)


def _render(renderable: object, width: int = 160) -> str:
    console = Console(width=width, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_format_timestamp() -> None:
    """Milliseconds render as HH:MM:SS.mmm."""
    assert format_timestamp(0) == "00:00:00.000"
    assert format_timestamp(3_723_004) == "01:02:03.004"


def test_visible_window_keeps_selection_on_screen() -> None:
    """The window is centred on the selection and clamped to the list."""
    assert visible_window(5, 0, 10) == range(5)
    assert visible_window(100, 0, 10) == range(0, 10)
    assert visible_window(100, 50, 10) == range(45, 55)
    assert visible_window(100, 99, 10) == range(90, 100)
    assert visible_window(100, None, 0) == range(0, 1)


def test_results_table_lists_lines() -> None:
    """The table shows file name, times, length and text."""
    line = DisplayLine(
        text="hello world",
        file=Path("data/talk.vtt"),
        start=1000,
        end=2500,
        is_match=True,
        original_start=1000,
        original_end=2500,
    )

    output = _render(build_results_table([line], match_count=1, selected=0))

    assert "Results (1 matches, 1 total lines)" in output
    assert "talk.vtt" in output
    assert "00:00:01.000" in output
    assert "1.50s" in output
    assert "> hello world" in output


def test_results_table_truncates_long_file_names() -> None:
    """File names longer than 30 characters end in an ellipsis."""
    line = DisplayLine(
        text="x",
        file=Path("a" * 40 + ".vtt"),
        start=0,
        end=10,
        is_match=False,
        original_start=0,
        original_end=10,
    )

    output = _render(build_results_table([line], match_count=0))

    assert "a" * 27 + "..." in output
    assert "a" * 28 not in output


def test_screen_fits_terminal_height(write_vtt: Callable[..., Path]) -> None:
    """A long result list is cut so the whole screen, footer included, fits."""
    cues = "".join(
        f"00:00:{n:02d}.000 --> 00:00:{n:02d}.500\nline {n}\n\n" for n in range(49)
    )
    path = write_vtt(f"WEBVTT\n\n{cues}")
    state = refilter(SessionState(index=TranscriptIndex.from_files([path]), output_dir=path.parent))
    state.selected = 48

    output = _render(render_screen(state, height=30), width=200)

    rendered = output.rstrip("\n").split("\n")
    assert len(rendered) == 30
    assert "line 48" in output
    assert rendered[-1].strip().startswith("Type to search")
