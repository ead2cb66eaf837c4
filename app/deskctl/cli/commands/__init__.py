"""CLI commands for deskctl.

This package contains all subcommand implementations.
"""

from deskctl.cli.commands import clean, config, ignore, scan, watch

__all__ = ["clean", "config", "ignore", "scan", "watch"]
