"""Build the rich renderable for one frame of the interactive UI."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..presenter import build_report_table
from .state import TuiState
from .status_feed import StatusFeed

NORMAL_HELP = (
    "NORMAL: i=insert | Tab=switch panes | j/k=navigate history | Enter=search/load | ESC=quit"
)
INSERT_HELP = "INSERT: Type to search | Up/Down=select | Tab=accept/switch | ESC=normal mode"
STATUS_LINES = 2

_SEVERITY_STYLES = {
    "INFO": "white",
    "WARN": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}


def render_input_text(state: TuiState) -> Text:
    """Search box contents with a block cursor (insert) or bracketed char (normal)."""
    text = state.editor.text
    cursor = min(state.editor.cursor, len(text))
    before, after = text[:cursor], text[cursor:]
    rendered = Text(style="yellow")
    rendered.append(before)
    if state.mode == "insert" or not after:
        rendered.append("█")
        rendered.append(after)
    else:
        rendered.append(f"[{after[0]}]", style="bold yellow")
        rendered.append(after[1:])
    return rendered


def build_frame(state: TuiState, status: StatusFeed | None = None) -> Layout:
    layout = Layout(name="root")
    layout.split_column(
        Layout(_build_header(state, status), name="header", size=3),
        Layout(name="main", minimum_size=10),
        Layout(_build_footer(state, status), name="footer", size=3 + STATUS_LINES),
    )
    layout["main"].split_row(
        Layout(_build_main_panel(state), name="content", ratio=7),
        Layout(_build_history_panel(state), name="history", ratio=3),
    )
    return layout


def _build_header(state: TuiState, status: StatusFeed | None) -> Panel:
    mode_text = " -- NORMAL --" if state.mode == "normal" else " -- INSERT --"
    title = Text(f"🌤  Weather TUI Search{mode_text}", style="bold cyan")
    problems = _problem_count(status)
    if problems:
        title.append(f"  ⚠ {problems} warning(s)", style="yellow")
    return Panel(
        title,
        border_style="cyan",
    )


def _build_main_panel(state: TuiState) -> RenderableType:
    if state.screen == "loading":
        return Panel(
            Text("Loading weather data...", style="yellow"),
            title="Status",
        )
    if state.screen == "display" and state.report is not None:
        return Panel(
            build_report_table(state.report),
            title="Weather Information (Press 'i' to search again, 'q' to quit)",
        )
    if state.screen == "error":
        return Panel(
            Text(state.error_message, style="red"),
            title="Error (Press 'i' to try again)",
        )
    return _build_search_panel(state)


def _build_search_panel(state: TuiState) -> RenderableType:
    mode_label = "NORMAL" if state.mode == "normal" else "INSERT"
    search = Panel(
        render_input_text(state),
        title=f"Search City (Mode: {mode_label})",
        border_style="yellow" if state.pane == "search" else "white",
        height=3,
    )
    if not state.suggestions_visible:
        return search

    table = Table.grid()
    table.add_column(overflow="ellipsis", no_wrap=True)
    for index, suggestion in enumerate(state.suggestions):
        style = "black on yellow" if index == state.selected_suggestion else "white"
        table.add_row(Text(suggestion.suggestion_label, style=style))
    suggestions = Panel(
        table,
        title="Suggestions (Up/Down to select, Tab to accept)",
    )
    return Group(search, suggestions)


def _build_history_panel(state: TuiState) -> Panel:
    table = Table.grid()
    table.add_column(overflow="ellipsis", no_wrap=True)
    focused = state.pane == "history"
    for index, query in enumerate(state.history):
        if focused and index == state.selected_history:
            style = "black on yellow"
        else:
            style = "grey70"
        table.add_row(Text(query, style=style))
    if not state.history:
        table.add_row(Text("No searches yet", style="dim"))
    return Panel(
        table,
        title="History (Tab to switch, j/k to navigate, Enter to load)",
        border_style="yellow" if focused else "white",
    )


def _problem_count(status: StatusFeed | None) -> int:
    if status is None:
        return 0
    return sum(status.count(severity) for severity in ("WARN", "ERROR", "CRITICAL"))


def _build_footer(state: TuiState, status: StatusFeed | None) -> Panel:
    lines = Text(INSERT_HELP if state.mode == "insert" else NORMAL_HELP, style="white")
    recent = status.snapshot(newest_first=True)[:STATUS_LINES] if status is not None else []
    for event in recent:
        lines.append("\n")
        lines.append(event.label, style=_SEVERITY_STYLES[event.severity])
    return Panel(lines)
