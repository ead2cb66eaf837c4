"""Unit tests for the watch command."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from deskctl.cli.main import app
from deskctl.core.paths import get_config_path
from typer.testing import CliRunner

runner = CliRunner()


class TestWatch:
    """Tests for deskctl watch."""

    def test_single_scan(self, desktop: Path, make_recent_file: Callable[..., Path]) -> None:
        """--count 1 scans once and stops without sleeping."""
        make_recent_file(desktop, "old.txt", 30)

        with patch("deskctl.cli.commands.watch.time.sleep") as mock_sleep:
            result = runner.invoke(app, ["watch", "--dir", str(desktop), "--count", "1"])

        assert result.exit_code == 0
        assert "Watching" in result.output
        assert "1 files" in result.output
        assert "Stopped after 1 scan(s)" in result.output
        mock_sleep.assert_not_called()

    def test_sleeps_between_scans(self, desktop: Path) -> None:
        """The interval is used between scans; unchanged scores print once."""
        with patch("deskctl.cli.commands.watch.time.sleep") as mock_sleep:
            result = runner.invoke(
                app, ["watch", "--dir", str(desktop), "--count", "3", "--interval", "9"]
            )

        assert result.exit_code == 0
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(9)
        assert result.output.count("100% Clean Desktop") == 1

    def test_default_interval_from_config(self, desktop: Path) -> None:
        """Without --interval the configured interval is used."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text("watch_interval_seconds = 60\n")

        with patch("deskctl.cli.commands.watch.time.sleep") as mock_sleep:
            runner.invoke(app, ["watch", "--dir", str(desktop), "--count", "2"])

        mock_sleep.assert_called_once_with(60)

    def test_notifies_when_cluttered(
        self,
        desktop: Path,
        make_recent_file: Callable[..., Path],
    ) -> None:
        """The clutter warning is printed once per day, not per scan."""
        for i in range(3):
            make_recent_file(desktop, f"f{i}.txt", 20)
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text("notify_threshold = 1\n")

        with patch("deskctl.cli.commands.watch.time.sleep"):
            result = runner.invoke(app, ["watch", "--dir", str(desktop), "--count", "2"])

        assert result.output.count("getting cluttered") == 1

    def test_missing_directory_keeps_watching(self, tmp_path: Path) -> None:
        """An unavailable directory is reported and the loop continues."""
        with patch("deskctl.cli.commands.watch.time.sleep"):
            result = runner.invoke(
                app, ["watch", "--dir", str(tmp_path / "gone"), "--count", "2"]
            )

        assert result.exit_code == 0
        assert "does not exist" in result.output
        assert "Stopped after 2 scan(s)" in result.output

    def test_interrupt_stops_cleanly(self, desktop: Path) -> None:
        """Ctrl+C ends the loop with exit code 0."""
        with patch("deskctl.cli.commands.watch.time.sleep", side_effect=KeyboardInterrupt):
            result = runner.invoke(app, ["watch", "--dir", str(desktop)])

        assert result.exit_code == 0
        assert "Stopped after 1 scan(s)" in result.output
