"""Tests for walletbook.store.files."""

import json
from pathlib import Path

import pytest

from walletbook.domain.models import TransactionType
from walletbook.domain.results import Err, ErrorKind
from walletbook.store.directory import WalletDirectory
from walletbook.store.files import get_data_path, get_export_path, load_directory, save_directory, write_snapshot


class TestPaths:
    """Tests for XDG data paths."""

    def test_uses_xdg_data_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should place files under $XDG_DATA_HOME/walletbook."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert get_data_path() == tmp_path / "walletbook" / "wallets.json"
        assert get_export_path("alice") == tmp_path / "walletbook" / "exports" / "alice.json"

    def test_falls_back_to_local_share(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should use ~/.local/share without XDG_DATA_HOME."""
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert get_data_path() == tmp_path / ".local" / "share" / "walletbook" / "wallets.json"


class TestWriteSnapshot:
    """Tests for write_snapshot."""

    def test_creates_parents_and_writes_json(self, tmp_path: Path) -> None:
        """Should create missing directories and leave no temp file."""
        target = tmp_path / "nested" / "dir" / "snap.json"

        write_snapshot(target, {"budgets": {"café": 1}})

        assert json.loads(target.read_text(encoding="utf-8")) == {"budgets": {"café": 1}}
        assert list(target.parent.iterdir()) == [target]


class TestLoadSaveDirectory:
    """Tests for load_directory and save_directory."""

    def test_missing_file_is_empty_directory(self, tmp_path: Path) -> None:
        """Should start empty when there is no data file."""
        result = load_directory(tmp_path / "wallets.json")

        assert len(result.unwrap()) == 0

    def test_save_then_load(self, tmp_path: Path) -> None:
        """Should persist wallets across a save and load."""
        path = tmp_path / "wallets.json"
        directory = WalletDirectory()
        wallet = directory.create("alice").unwrap()
        wallet.ledger.append(12.5, "food", TransactionType.EXPENSE, "2025-01-02")
        wallet.budgets.set_limit("food", 20)

        assert save_directory(directory, path) == path
        loaded = load_directory(path).unwrap()

        restored = loaded.get("alice")
        assert restored is not None
        assert restored.ledger.spent("food") == 12.5
        assert restored.budgets.remaining("food") == 7.5

    def test_corrupt_file_is_malformed(self, tmp_path: Path) -> None:
        """Should report a corrupt data file instead of discarding it."""
        path = tmp_path / "wallets.json"
        path.write_text('{"wallets": {"alice": ', encoding="utf-8")

        result = load_directory(path)

        assert isinstance(result, Err)
        assert result.kind is ErrorKind.MALFORMED_INPUT
        assert path.read_text(encoding="utf-8") == '{"wallets": {"alice": '

    def test_default_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should use the XDG data path when no path is given."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        directory = WalletDirectory()
        directory.create("bob")

        save_directory(directory)

        assert (tmp_path / "walletbook" / "wallets.json").exists()
        assert load_directory().unwrap().user_ids() == ["bob"]
