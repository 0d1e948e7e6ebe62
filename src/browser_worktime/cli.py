"""Command-line interface for browser work-time inference."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import NoReturn, Optional

import typer

from .config import InferenceSettings, ReportSettings
from .history import HistoryFileNotFoundError, HistoryFormatError
from .models import DayWindow
from .paths import get_log_path, resolve_history_path

app = typer.Typer(help="Infer daily working hours from a browser history export.")

logger = logging.getLogger(__name__)

HISTORY_ARGUMENT = typer.Argument(
    None,
    help="History CSV export. Defaults to the last history*.csv in the current directory.",
)
START_OPTION = typer.Option(None, "--start", help="First day (YYYY-MM-DD) to evaluate.")
END_OPTION = typer.Option(None, "--end", help="Last day (YYYY-MM-DD) to evaluate.")
ABSENCE_OPTION = typer.Option(
    20.0,
    "--absence-minutes",
    min=0.0,
    help="Gaps longer than this many minutes count as absence.",
)
WORK_START_OPTION = typer.Option(
    "07:00",
    "--work-start",
    help="Earliest clock time (HH:MM) that can start a work day.",
)


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also append logs to the per-user log file."
    ),
) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(get_log_path(), encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=handlers,
    )


@app.command()
def report(
    history: Optional[Path] = HISTORY_ARGUMENT,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        path_type=Path,
        help="Directory for the report file. Defaults to the current directory.",
    ),
    absence_minutes: float = ABSENCE_OPTION,
    work_start: str = WORK_START_OPTION,
) -> None:
    """Write the per-day report to a timestamped text file."""
    from .reporting import render_report, write_report

    windows = _evaluate(history, start, end, absence_minutes, work_start)
    settings = ReportSettings(output_dir=output_dir) if output_dir else ReportSettings()
    path = write_report(render_report(windows), settings)
    typer.echo(f"Report written to {path}")


@app.command()
def summary(
    history: Optional[Path] = HISTORY_ARGUMENT,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    absence_minutes: float = ABSENCE_OPTION,
    work_start: str = WORK_START_OPTION,
) -> None:
    """Print the per-day report to the console."""
    from .reporting import SummaryPrinter

    windows = _evaluate(history, start, end, absence_minutes, work_start)
    SummaryPrinter(windows).print_summary()


@app.command()
def web(
    history: Optional[Path] = HISTORY_ARGUMENT,
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the dashboard."),
    port: int = typer.Option(
        8766, "--port", min=1, max=65535, help="TCP port for the dashboard."
    ),
    absence_minutes: float = ABSENCE_OPTION,
    work_start: str = WORK_START_OPTION,
    open_browser: bool = typer.Option(
        True,
        "--open-browser/--no-open-browser",
        help="Automatically open the day overview in your default browser.",
    ),
) -> None:
    """Serve the inferred work days as a local JSON API."""
    from .server_runner import run_dashboard

    try:
        history_path = resolve_history_path(history)
    except HistoryFileNotFoundError as exc:
        _fail(str(exc))
    run_dashboard(
        history_path=history_path,
        host=host,
        port=port,
        settings=_settings(absence_minutes, work_start),
        open_browser=open_browser,
    )


def _evaluate(
    history: Optional[Path],
    start: Optional[str],
    end: Optional[str],
    absence_minutes: float,
    work_start: str,
) -> list[DayWindow]:
    from .evaluation import evaluate_file

    settings = _settings(absence_minutes, work_start)
    try:
        path = resolve_history_path(history)
        logger.debug("Reading history from %s", path)
        return evaluate_file(
            path, start=_parse_day(start), end=_parse_day(end), settings=settings
        )
    except HistoryFileNotFoundError as exc:
        _fail(str(exc))
    except HistoryFormatError as exc:
        _fail(f"Invalid history file: {exc}")
    except ValueError as exc:
        _fail(str(exc))


def _settings(absence_minutes: float, work_start: str) -> InferenceSettings:
    try:
        return InferenceSettings.from_values(
            absence_minutes=absence_minutes, work_day_start=work_start
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--work-start") from exc


def _parse_day(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid date {value!r}; expected YYYY-MM-DD") from exc


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)
