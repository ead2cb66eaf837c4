"""Watch command implementation.

Rescans the desktop at a fixed interval, prints the score whenever it
changes, and warns (at most once a day) when too many files pile up.
"""

import logging
import time
from pathlib import Path
from typing import Annotated

import typer

from deskctl.cli.types import build_coordinator, load_settings
from deskctl.desktop.errors import DirectoryUnavailableError
from deskctl.desktop.models import ScanState
from deskctl.utils.formatting import console, format_score_line, print_info, print_warning

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Keep rescanning the desktop and report changes.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def watch_desktop(
    ctx: typer.Context,
    interval: Annotated[
        int | None,
        typer.Option(
            "--interval",
            "-i",
            min=1,
            help="Seconds between scans (default: watch_interval_seconds setting).",
        ),
    ] = None,
    count: Annotated[
        int,
        typer.Option(
            "--count",
            "-c",
            min=0,
            help="Stop after this many scans (0 = run until interrupted).",
        ),
    ] = 0,
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory to watch instead of the desktop."),
    ] = None,
) -> None:
    """Watch the desktop until interrupted.

    Examples:
        deskctl watch                    # Rescan every 5 minutes
        deskctl watch --interval 60      # Rescan every minute
        deskctl watch --count 1          # One scan with notification check
    """
    if ctx.invoked_subcommand is not None:
        return

    config = load_settings()
    delay = interval if interval is not None else config.watch_interval_seconds
    last_line: list[str] = []

    def report(state: ScanState) -> None:
        # Selection-only updates carry no new scan
        if state.refreshed_at is None:
            return
        line = format_score_line(state.score)
        if last_line and last_line[0] == line:
            return
        last_line[:] = [line]
        stamp = state.refreshed_at.astimezone().strftime("%H:%M:%S")
        console.print(f"[dim]{stamp}[/dim] {line}")

    with build_coordinator(config, directory=directory) as coordinator:
        unsubscribe = coordinator.subscribe(report)
        print_info(f"Watching {coordinator.directory} every {delay}s (Ctrl+C to stop)")
        scans = 0
        try:
            while True:
                try:
                    coordinator.refresh()
                except DirectoryUnavailableError as e:
                    print_warning(str(e))
                scans += 1
                if count and scans >= count:
                    break
                time.sleep(delay)
        except KeyboardInterrupt:
            logger.debug("Watch interrupted after %d scan(s)", scans)
            console.print()
        finally:
            unsubscribe()

    print_info(f"Stopped after {scans} scan(s).")
