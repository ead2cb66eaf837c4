"""Ignore list commands.

Ignored files are never suggested for cleanup and do not count toward
the cleanliness score.
"""

from pathlib import Path
from typing import Annotated

import typer

from deskctl.cli.types import build_coordinator, load_settings, resolve_item_path
from deskctl.desktop.errors import DirectoryUnavailableError, IgnoreStoreError
from deskctl.desktop.ignore import IgnoreStore
from deskctl.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Manage files excluded from cleanup.",
    no_args_is_help=True,
)

PathsArgument = Annotated[
    list[str],
    typer.Argument(help="Files to change (names are relative to the desktop)."),
]
DirOption = Annotated[
    Path | None,
    typer.Option("--dir", "-d", help="Directory the names refer to instead of the desktop."),
]


@app.command("add")
def add(paths: PathsArgument, directory: DirOption = None) -> None:
    """Exclude files from cleanup suggestions."""
    _set_ignored(paths, directory, ignored=True)


@app.command("remove")
def remove(paths: PathsArgument, directory: DirOption = None) -> None:
    """Make ignored files cleanup candidates again."""
    _set_ignored(paths, directory, ignored=False)


@app.command("list")
def list_ignored() -> None:
    """Show the ignore list."""
    paths = sorted(IgnoreStore().load())
    if not paths:
        print_info("No ignored files.")
        return

    for path in paths:
        marker = "" if Path(path).exists() else " [dim](missing)[/dim]"
        console.print(f"{path}{marker}", highlight=False)
    console.print(f"\n[dim]{len(paths)} ignored file(s)[/dim]")


def _set_ignored(paths: list[str], directory: Path | None, *, ignored: bool) -> None:
    """Apply one ignore status to every path and persist it."""
    config = load_settings()
    with build_coordinator(config, directory=directory) as coordinator:
        for value in paths:
            path = resolve_item_path(value, coordinator.directory)
            if coordinator.is_ignored(path) == ignored:
                state = "already ignored" if ignored else "not ignored"
                print_info(f"{path} is {state}.")
                continue
            try:
                coordinator.set_ignored(path, ignored)
            except IgnoreStoreError as e:
                print_error(str(e))
                raise typer.Exit(code=1) from e
            except DirectoryUnavailableError as e:
                # The ignore list is already saved at this point.
                print_warning(f"Saved, but the rescan failed: {e}")
            verb = "Ignoring" if ignored else "No longer ignoring"
            print_success(f"{verb} {path}")
