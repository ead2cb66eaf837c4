"""Cleanup commands.

Moves desktop files to the trash, into an existing folder, or into a
newly created folder. Files can be named explicitly or selected with
--all; only files that are currently cleanup candidates are affected.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer

from deskctl.cli.types import (
    build_coordinator,
    load_settings,
    refresh_or_exit,
    resolve_item_path,
)
from deskctl.desktop.coordinator import ScanCoordinator
from deskctl.desktop.errors import RescanFailedError
from deskctl.desktop.models import DesktopItem
from deskctl.desktop.operator import BulkActionResult
from deskctl.utils.formatting import (
    console,
    create_items_table,
    format_item_row,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Trash or move old desktop files.",
    no_args_is_help=True,
)

PathsArgument = Annotated[
    list[str] | None,
    typer.Argument(help="Files to clean (names are relative to the desktop)."),
]
AllOption = Annotated[
    bool,
    typer.Option("--all", "-a", help="Clean every cleanup candidate."),
]
YesOption = Annotated[
    bool,
    typer.Option("--yes", "-y", help="Skip confirmation prompt."),
]
DirOption = Annotated[
    Path | None,
    typer.Option("--dir", "-d", help="Directory to clean instead of the configured desktop."),
]


@app.command()
def trash(
    paths: PathsArgument = None,
    select_all: AllOption = False,
    yes: YesOption = False,
    directory: DirOption = None,
) -> None:
    """Move files to the trash.

    Examples:
        deskctl clean trash notes.txt old.pdf
        deskctl clean trash --all --yes
    """
    _run_cleanup(
        paths,
        select_all,
        yes,
        directory,
        verb="Move to trash",
        action=lambda c: c.move_all_to_trash() if select_all else c.move_selected_to_trash(),
    )


@app.command()
def move(
    destination: Annotated[
        Path,
        typer.Argument(help="Existing folder to move the files into."),
    ],
    paths: PathsArgument = None,
    select_all: AllOption = False,
    yes: YesOption = False,
    directory: DirOption = None,
) -> None:
    """Move files into an existing folder.

    Name collisions are resolved by appending a number ("report 1.pdf").
    """
    target = destination.expanduser().absolute()
    _run_cleanup(
        paths,
        select_all,
        yes,
        directory,
        verb=f"Move to {target}",
        action=lambda c: c.move_selected_to_folder(target),
    )


@app.command()
def folder(
    name: Annotated[
        str,
        typer.Argument(help="Name of the folder to create."),
    ],
    paths: PathsArgument = None,
    select_all: AllOption = False,
    parent: Annotated[
        Path | None,
        typer.Option("--parent", "-p", help="Create the folder here instead of on the desktop."),
    ] = None,
    yes: YesOption = False,
    directory: DirOption = None,
) -> None:
    """Create a folder and move files into it.

    An existing folder with the same name is reused.
    """
    parent_dir = parent.expanduser().absolute() if parent is not None else None
    _run_cleanup(
        paths,
        select_all,
        yes,
        directory,
        verb=f"Move to new folder '{name}'",
        action=lambda c: c.create_folder_and_move(name, parent_dir),
    )


# === Private helper functions ===


def _run_cleanup(
    paths: list[str] | None,
    select_all: bool,
    yes: bool,
    directory: Path | None,
    *,
    verb: str,
    action: Callable[[ScanCoordinator], BulkActionResult],
) -> None:
    """Scan, select, confirm and run a bulk action."""
    if not paths and not select_all:
        print_error("Specify files to clean or use --all.")
        raise typer.Exit(code=1)

    config = load_settings()
    with build_coordinator(config, directory=directory) as coordinator:
        refresh_or_exit(coordinator)

        if select_all:
            coordinator.select_all()
        else:
            _select_named(coordinator, paths or [])

        selected = coordinator.state.selected_items
        if not selected:
            print_info("Nothing to clean.")
            return

        _print_plan(selected, verb, coordinator.old_age_threshold)

        if not yes:
            confirmed = typer.confirm(
                f"\n{verb}: {len(selected)} file(s)?",
                default=False,
            )
            if not confirmed:
                print_info("Aborted.")
                raise typer.Exit(code=0)

        try:
            result = action(coordinator)
        except RescanFailedError as e:
            if e.action_error is not None:
                print_error(str(e.action_error))
            print_warning(f"{e.processed} of {len(selected)} file(s) processed.")
            print_error(f"Rescan after cleanup failed: {e}")
            raise typer.Exit(code=1) from e

    _print_result(result, len(selected))
    if not result.success:
        raise typer.Exit(code=1)


def _select_named(coordinator: ScanCoordinator, paths: list[str]) -> None:
    """Select the named files, warning about names that are not candidates."""
    resolved = [resolve_item_path(p, coordinator.directory) for p in paths]
    coordinator.select_paths(resolved)

    candidates = {item.path for item in coordinator.state.items}
    for original, path in zip(paths, resolved, strict=True):
        if path not in candidates:
            if coordinator.is_ignored(path):
                print_warning(f"Skipping ignored file: {original}")
            else:
                print_warning(f"Not a cleanup candidate: {original}")


def _print_plan(items: tuple[DesktopItem, ...], verb: str, old_threshold: int) -> None:
    """Display the files about to be cleaned."""
    table = create_items_table(title=f"Planned: {verb}")
    for item in items:
        table.add_row(*format_item_row(item, old_threshold))
    console.print(table)
    total = sum(item.size_bytes for item in items)
    console.print(f"[dim]{len(items)} file(s), {format_size(total)} total[/dim]")


def _print_result(result: BulkActionResult, total: int) -> None:
    """Display the outcome of a bulk action."""
    if result.success:
        where = result.destination if result.destination else "the trash"
        print_success(f"Moved {result.processed} file(s) to {where}.")
        return

    print_error(str(result.error))
    if result.processed:
        print_warning(f"{result.processed} of {total} file(s) processed before the error.")
