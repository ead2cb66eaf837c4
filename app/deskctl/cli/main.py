"""deskctl command-line entry point.

Global flags control logging; every command group lives in its own module
under ``deskctl.cli.commands``.
"""

import logging
from typing import Annotated

import typer

from deskctl import __version__
from deskctl.cli.commands import clean, config, ignore, scan, watch

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    name="deskctl",
    help="Keep your desktop clean.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)
app.add_typer(scan.app, name="scan")
app.add_typer(ignore.app, name="ignore")
app.add_typer(clean.app, name="clean")
app.add_typer(config.app, name="config")
app.add_typer(watch.app, name="watch")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"deskctl version {__version__}")
        raise typer.Exit()


def _log_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug details to stderr.")
    ] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors.")] = False,
) -> None:
    """deskctl - Keep your desktop clean.

    Finds files that have been sitting on the desktop for too long, scores
    how cluttered it is, and moves old files to the trash or into folders.
    """
    logging.basicConfig(level=_log_level(verbose, quiet), format=LOG_FORMAT, force=True)


if __name__ == "__main__":
    app()
