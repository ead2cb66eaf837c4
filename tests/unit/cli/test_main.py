"""Unit tests for the main CLI application."""

import logging
from pathlib import Path

from deskctl import __version__
from deskctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options and command registration."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"deskctl version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        """--help lists every command group."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("scan", "ignore", "clean", "config", "watch"):
            assert command in result.output

    def test_no_args_shows_help(self) -> None:
        """Running without a command shows usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_verbose_enables_debug_logging(self, desktop: Path) -> None:
        """--verbose switches the root logger to DEBUG."""
        result = runner.invoke(app, ["--verbose", "scan", "--dir", str(desktop)])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_quiet_raises_log_level(self, desktop: Path) -> None:
        """--quiet only lets errors through."""
        runner.invoke(app, ["--quiet", "scan", "--dir", str(desktop)])

        assert logging.getLogger().level == logging.ERROR
