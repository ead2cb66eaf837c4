"""Scan command implementation.

Lists the desktop files that are old enough to clean up, together with
the cleanliness score.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from deskctl.cli.types import OutputFormat, build_coordinator, load_settings, refresh_or_exit
from deskctl.desktop.models import DesktopItem, ScanState, SortOption
from deskctl.utils.formatting import (
    console,
    create_items_table,
    format_item_row,
    format_score_line,
    format_size,
    print_success,
)

app = typer.Typer(
    help="Scan the desktop for files to clean up.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_desktop(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--dir",
            "-d",
            help="Directory to scan instead of the configured desktop.",
        ),
    ] = None,
    min_age: Annotated[
        int | None,
        typer.Option(
            "--min-age",
            "-a",
            help="Minimum file age in days (clamped to 1-2000).",
        ),
    ] = None,
    sort: Annotated[
        SortOption | None,
        typer.Option(
            "--sort",
            "-s",
            help="Sort order for the listing.",
            case_sensitive=False,
        ),
    ] = None,
    show_ignored: Annotated[
        bool,
        typer.Option(
            "--ignored",
            "-i",
            help="List ignored files instead of cleanup candidates.",
        ),
    ] = False,
    score_only: Annotated[
        bool,
        typer.Option(
            "--score",
            help="Only show the cleanliness score.",
        ),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of files to display.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Scan the desktop and display cleanup candidates.

    Examples:
        deskctl scan                        # Files older than the configured age
        deskctl scan --min-age 30           # Files older than 30 days
        deskctl scan --sort size-desc       # Biggest files first
        deskctl scan --ignored              # Show the ignored files
        deskctl scan --score                # Score only
        deskctl scan --format json          # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    config = load_settings()
    with build_coordinator(
        config, directory=directory, min_age_days=min_age, sort_option=sort
    ) as coordinator:
        state = refresh_or_exit(coordinator)
        old_threshold = coordinator.old_age_threshold

    items = state.ignored_items if show_ignored else state.items
    display_items = items[:limit] if limit else items

    if output_format == OutputFormat.JSON:
        _print_json(state, display_items, show_ignored)
        return

    console.print(format_score_line(state.score))
    console.print(f"[muted]{state.score.description}[/]")

    if score_only:
        return

    if not items:
        if show_ignored:
            print_success("No ignored files on the desktop.")
        else:
            print_success(
                f"Desktop is clean. No files older than {state.min_age_days} day(s) found."
            )
        return

    title = "Ignored Files" if show_ignored else f"Files Older Than {state.min_age_days} Days"
    table = create_items_table(title=f"{title} ({state.sort_option.label})")
    for item in display_items:
        table.add_row(*format_item_row(item, old_threshold, ignored=show_ignored))
    console.print(table)

    total_size = sum(item.size_bytes for item in items)
    console.print(f"\n[dim]Found {len(items)} file(s) ({format_size(total_size)} total)[/dim]")
    if not show_ignored and state.oldest_age_description:
        console.print(f"[dim]Oldest file: {state.oldest_age_description}[/dim]")
    if state.skipped:
        console.print(f"[dim]{len(state.skipped)} unreadable entries skipped[/dim]")
    if limit and len(display_items) < len(items):
        console.print(
            f"[dim](showing {len(display_items)} of {len(items)}, limited to {limit})[/dim]"
        )


def _item_to_dict(item: DesktopItem) -> dict[str, object]:
    return {
        "path": str(item.path),
        "name": item.name,
        "type": item.extension,
        "age_days": item.age_days,
        "size_bytes": item.size_bytes,
        "last_modified": item.last_modified.isoformat(),
    }


def _print_json(
    state: ScanState,
    items: tuple[DesktopItem, ...],
    show_ignored: bool,
) -> None:
    """Display the scan result as JSON."""
    data = {
        "directory": str(state.directory),
        "min_age_days": state.min_age_days,
        "sort": state.sort_option.value,
        "score": {
            "file_count": state.score.file_count,
            "old_file_count": state.score.old_file_count,
            "average_age_days": state.score.average_age_days,
            "score": state.score.score,
            "level": state.score.level.value,
        },
        "ignored" if show_ignored else "items": [_item_to_dict(i) for i in items],
    }
    console.print_json(json.dumps(data))
