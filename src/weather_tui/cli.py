"""weather-tui entry point: one-shot lookup or interactive search."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from rich.console import Console

from . import __version__
from .config import load_settings
from .exceptions import ConfigError, InvalidLocation, RenderError, WeatherProviderError
from .history import SearchHistory
from .log_setup import setup_logger
from .presenter import ReportConsole, TerminalPresenter
from .resolver import LocationResolver
from .service import WeatherService
from .tui.app import WeatherTUI
from .weather.openmeteo import OpenMeteoClient

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_INVALID_LOCATION = 3
EXIT_WEATHER_SERVICE = 4
EXIT_RENDER = 5
EXIT_UNEXPECTED = 99


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse weather-tui arguments."""
    parser = argparse.ArgumentParser(
        prog="weather-tui",
        description=(
            "Show current weather for a city, postal code or 'lat,lon'. "
            "Run without a location for the interactive search screen."
        ),
    )
    parser.add_argument(
        "location",
        nargs="*",
        help="Location to look up; multiple words are joined with spaces.",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print the report as JSON.")
    output.add_argument("--plain", action="store_true", help="Print the report without styling.")
    parser.add_argument(
        "--units",
        choices=["metric", "imperial"],
        default=None,
        help="Unit system (overrides WEATHER_TUI_*_UNIT settings).",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not record this search in the history file.",
    )
    parser.add_argument(
        "--history",
        action="store_true",
        help="Print saved search history and exit.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level for JSON logs on stderr.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _output_format(args: argparse.Namespace) -> str:
    if args.json:
        return "json"
    if args.plain:
        return "plain"
    return "rich"


def _run_once(
    query: str,
    *,
    service: WeatherService,
    history: SearchHistory,
    presenter: TerminalPresenter,
    record_history: bool,
) -> None:
    report = service.lookup(query)
    presenter.render(report)
    if record_history:
        history.add(report.location.query)


def _is_interactive(console: Console) -> bool:
    return sys.stdin.isatty() and console.is_terminal


def _report_render_error(exc: RenderError, err_console: Console) -> int:
    err_console.print(f"Error: {exc}", markup=False, highlight=False)
    if isinstance(exc.__cause__, BrokenPipeError):
        _discard_stdout()
    return EXIT_RENDER


def _discard_stdout() -> None:
    """Point fd 1 at /dev/null so the exit-time flush of stdout cannot fail again."""
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, ValueError, OSError):
        # stdout replaced by an object with no descriptor.
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def main(argv: Sequence[str] | None = None) -> int:
    """Run weather-tui and return the process exit code."""
    args = parse_args(argv)
    err_console = Console(stderr=True)

    try:
        settings = load_settings()
    except ConfigError as exc:
        err_console.print(f"Error: {exc}", markup=False, highlight=False)
        return EXIT_USAGE
    if args.units:
        settings = settings.with_unit_system(args.units)

    logger = setup_logger(level=args.log_level or settings.log_level)
    logger.debug("Loaded settings: %s", settings.safe_summary())
    console = ReportConsole()
    presenter = TerminalPresenter(console, output_format=_output_format(args))
    history = SearchHistory.open(settings.history_path, limit=settings.history_limit, logger=logger)

    if args.history:
        try:
            presenter.render_history(history.entries)
        except RenderError as exc:
            return _report_render_error(exc, err_console)
        return EXIT_OK

    interactive = not args.location
    if interactive and not _is_interactive(console):
        err_console.print(
            "Error: the interactive search needs a terminal; pass a location instead.",
            markup=False,
            highlight=False,
        )
        return EXIT_USAGE

    try:
        with OpenMeteoClient(settings=settings, logger=logger) as client:
            resolver = LocationResolver(
                client,
                logger,
                autocomplete_min_chars=settings.autocomplete_min_chars,
                autocomplete_count=settings.autocomplete_count,
            )
            service = WeatherService(resolver=resolver, client=client, logger=logger)
            if interactive:
                return WeatherTUI(
                    service=service,
                    history=history,
                    console=console,
                    logger=logger,
                    record_history=not args.no_history,
                ).run()
            _run_once(
                " ".join(args.location),
                service=service,
                history=history,
                presenter=presenter,
                record_history=not args.no_history,
            )
    except InvalidLocation as exc:
        logger.info("Invalid location: %s", exc)
        err_console.print(f"Error: {exc}", markup=False, highlight=False)
        return EXIT_INVALID_LOCATION
    except WeatherProviderError as exc:
        logger.info("Weather service failure: %s", exc)
        err_console.print(f"Error: {exc}", markup=False, highlight=False)
        return EXIT_WEATHER_SERVICE
    except RenderError as exc:
        logger.info("Render failure: %s", exc)
        return _report_render_error(exc, err_console)
    except Exception as exc:  # pragma: no cover
        logger.exception("Unexpected weather-tui failure: %s", exc)
        return EXIT_UNEXPECTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
