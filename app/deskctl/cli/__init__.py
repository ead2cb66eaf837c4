"""CLI package for deskctl.

This package contains the Typer application and all subcommands.
"""

from deskctl.cli.main import app

__all__ = ["app"]
