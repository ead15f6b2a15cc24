"""Command-line interface for the work watcher."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from .config import TrackerSettings
from .errors import ErrorReporter
from .paths import get_activity_log_path, get_error_log_dir

app = typer.Typer(help="Record which window holds focus, one CSV line per session.")


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def run(
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        path_type=Path,
        help="CSV file that receives one line per focus session.",
    ),
    error_dir: Optional[Path] = typer.Option(
        None,
        "--error-dir",
        path_type=Path,
        help="Directory for the day-named error logs.",
    ),
    sample_seconds: float = typer.Option(
        1.0,
        "--interval",
        min=0.1,
        help="Sampling interval in seconds.",
    ),
    min_duration_seconds: float = typer.Option(
        5.0,
        "--min-duration",
        min=0.0,
        help="Sessions shorter than this many seconds are not recorded.",
    ),
    grace_seconds: float = typer.Option(
        2.0,
        "--grace",
        min=0.0,
        help="Seconds the log writer gets to drain pending sessions on stop.",
    ),
) -> None:
    """Track focus in the foreground until interrupted with Ctrl+C."""
    from .probe import create_default_probe
    from .tracker import ActivityTracker

    reporter = ErrorReporter(error_dir or get_error_log_dir())
    settings = TrackerSettings.from_intervals(
        sample_seconds=sample_seconds,
        min_duration_seconds=min_duration_seconds,
        grace_seconds=grace_seconds,
    )
    try:
        tracker = ActivityTracker(
            probe=create_default_probe(),
            log_path=log_file or get_activity_log_path(),
            settings=settings,
            reporter=reporter,
        )
        typer.echo("Activity tracking started. Press Ctrl+C to quit.")
        tracker.run_forever()
    except Exception as exc:
        reporter.report(exc)
        typer.echo(f"An error occurred: {exc}", err=True)
        typer.echo("Activity tracking stopped.")
        raise typer.Exit(code=1)

    if tracker.failed:
        typer.echo(f"An error occurred: {tracker.sampler.error}", err=True)
    typer.echo("Activity tracking stopped.")
    if tracker.failed:
        raise typer.Exit(code=1)


@app.command()
def summary(
    date: Optional[str] = typer.Option(
        None,
        "--date",
        help="Date (YYYY-MM-DD) to summarize. Defaults to today.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        path_type=Path,
        help="CSV activity log to read.",
    ),
) -> None:
    """Print a high-level summary for a specific day."""
    from .reporting import SummaryPrinter

    target = datetime.strptime(date, "%Y-%m-%d") if date else datetime.now()
    summary_printer = SummaryPrinter(log_path=log_file or get_activity_log_path())
    summary_printer.print_daily_summary(target)
