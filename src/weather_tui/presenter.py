"""Render a weather report for the terminal."""

from __future__ import annotations

import errno
import json
from datetime import UTC

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .exceptions import RenderError
from .history import HistoryEntry
from .weather.models import WeatherReport

LABEL_STYLE = "cyan"


class ReportConsole(Console):
    """Console that reports a closed output pipe instead of exiting.

    rich answers `BrokenPipeError` by pointing stdout at /dev/null and
    raising `SystemExit(1)`; re-raising lets the presenter turn it into
    `RenderError`.
    """

    def on_broken_pipe(self) -> None:
        raise BrokenPipeError(errno.EPIPE, "output pipe closed")


def format_temperature(value: float, unit: str) -> str:
    return f"{value:.1f}{unit}"


def build_report_lines(report: WeatherReport) -> list[tuple[str, str]]:
    """Return (label, value) rows in display order."""
    record = report.record
    units = record.units
    return [
        ("Location", report.location.display_name),
        ("Condition", record.condition),
        ("Temperature", format_temperature(record.temperature, units.temperature)),
        ("Feels like", format_temperature(record.apparent_temperature, units.temperature)),
        ("Humidity", f"{record.humidity:.0f}%"),
        ("Pressure", f"{record.pressure:.1f} {units.pressure}"),
        ("Wind Speed", f"{record.wind_speed:.1f} {units.wind_speed}"),
        ("Precipitation", f"{record.precipitation:.1f} {units.precipitation}"),
        ("Observed", record.timestamp.astimezone(UTC).strftime("%Y-%m-%d %H:%M UTC")),
    ]


def build_report_table(report: WeatherReport) -> Table:
    table = Table.grid(padding=(0, 1))
    table.add_column(style=LABEL_STYLE)
    table.add_column()
    value_styles = {
        "Location": "bold white",
        "Condition": "yellow",
        "Temperature": "bold green",
        "Feels like": "green",
        "Observed": "dim",
    }
    for label, value in build_report_lines(report):
        table.add_row(f"{label}:", Text(value, style=value_styles.get(label, "white")))
    return table


class TerminalPresenter:
    """Writes weather reports to a rich console in one of three formats."""

    def __init__(self, console: Console, *, output_format: str = "rich") -> None:
        if output_format not in {"rich", "plain", "json"}:
            raise ValueError(f"Unknown output format {output_format!r}.")
        self.console = console
        self.output_format = output_format

    def render(self, report: WeatherReport) -> None:
        """Render a report; write failures raise RenderError."""
        try:
            if self.output_format == "json":
                self._write(json.dumps(report.model_dump(mode="json"), ensure_ascii=False))
            elif self.output_format == "plain":
                for label, value in build_report_lines(report):
                    self._write(f"{label}: {value}")
            else:
                self.console.print(
                    Panel(
                        build_report_table(report),
                        title="Weather Information",
                        border_style="blue",
                    )
                )
        except OSError as exc:
            raise RenderError(f"Failed writing weather report: {exc}") from exc

    def render_history(self, entries: list[HistoryEntry]) -> None:
        try:
            if self.output_format == "json":
                self._write(
                    json.dumps(
                        [entry.model_dump(mode="json") for entry in entries],
                        ensure_ascii=False,
                    )
                )
                return
            if not entries:
                self._write("No search history yet.")
                return
            for entry in entries:
                self._write(entry.query)
        except OSError as exc:
            raise RenderError(f"Failed writing search history: {exc}") from exc

    def _write(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False, soft_wrap=True)
