"""Unit tests for IgnoreStore persistence."""

import json
from pathlib import Path

import pytest
from deskctl.desktop.errors import IgnoreStoreError
from deskctl.desktop.ignore import IgnoreStore


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "ignored.json"


class TestIgnoreStore:
    """Tests for IgnoreStore."""

    def test_default_path(self, isolated_xdg: Path) -> None:
        """The default file lives in the XDG state directory."""
        assert IgnoreStore().path == isolated_xdg / "state" / "deskctl" / "ignored.json"

    def test_missing_file_is_empty(self, store_path: Path) -> None:
        """A missing file means nothing is ignored."""
        assert IgnoreStore(store_path).load() == set()

    def test_save_creates_sorted_array(self, store_path: Path) -> None:
        """save writes a sorted JSON array and creates parent directories."""
        store = IgnoreStore(store_path)

        store.save({"/d/b.txt", "/d/a.txt"})

        assert json.loads(store_path.read_text()) == ["/d/a.txt", "/d/b.txt"]
        assert store.load() == {"/d/a.txt", "/d/b.txt"}

    def test_save_leaves_no_temp_files(self, store_path: Path) -> None:
        """The atomic write cleans up after itself."""
        IgnoreStore(store_path).save({"/d/a"})

        assert [p.name for p in store_path.parent.iterdir()] == ["ignored.json"]

    def test_corrupt_file_is_empty(self, store_path: Path) -> None:
        """Invalid JSON is treated as an empty list."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json")

        assert IgnoreStore(store_path).load() == set()

    def test_non_array_is_empty(self, store_path: Path) -> None:
        """A JSON value other than an array is treated as empty."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text('{"paths": ["/d/a"]}')

        assert IgnoreStore(store_path).load() == set()

    def test_invalid_entries_dropped(self, store_path: Path) -> None:
        """Non-string, empty and duplicate entries are dropped."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps(["/d/a", 3, "", None, "/d/a", "/d/b"]))

        assert IgnoreStore(store_path).load() == {"/d/a", "/d/b"}

    def test_save_failure_raises(self, tmp_path: Path) -> None:
        """Write failures raise IgnoreStoreError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = IgnoreStore(blocker / "ignored.json")

        with pytest.raises(IgnoreStoreError, match="Failed to write ignore list"):
            store.save({"/d/a"})
