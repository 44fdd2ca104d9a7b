"""End-to-end tests for the walletbook CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from walletbook.cli import app
from walletbook.commands import session
from walletbook.config import get_setting

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr(session.console, "width", 300)
    return tmp_path


@pytest.fixture
def alice_and_bob() -> None:
    assert runner.invoke(app, ["user", "add", "alice", "--default"]).exit_code == 0
    assert runner.invoke(app, ["user", "add", "bob"]).exit_code == 0


class TestInitAndUsers:
    """Tests for init and user management."""

    def test_init_creates_config_and_data(self, isolated_home: Path) -> None:
        """Should create the config and an empty data file."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (isolated_home / "config" / "walletbook" / "config.toml").exists()
        data = json.loads((isolated_home / "data" / "walletbook" / "wallets.json").read_text())
        assert data == {"wallets": {}}

    def test_init_refuses_to_overwrite(self) -> None:
        """Should fail on a second init without --force."""
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "Config already exists" in result.output

    def test_user_add_sets_default(self, alice_and_bob: None) -> None:
        """Should store the default user in config."""
        assert get_setting("default_user") == "alice"

    def test_duplicate_user_fails(self, alice_and_bob: None) -> None:
        """Should refuse to create an existing user."""
        result = runner.invoke(app, ["user", "add", "Alice"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_user_list(self, alice_and_bob: None) -> None:
        """Should list every user."""
        result = runner.invoke(app, ["user", "list"])

        assert result.exit_code == 0
        assert "alice" in result.output
        assert "bob" in result.output

    def test_user_remove(self, alice_and_bob: None) -> None:
        """Should delete a wallet and fail for unknown users."""
        assert runner.invoke(app, ["user", "remove", "bob"]).exit_code == 0
        assert runner.invoke(app, ["user", "remove", "bob"]).exit_code == 1

    def test_command_without_user_fails(self) -> None:
        """Should explain how to pick a user."""
        result = runner.invoke(app, ["stats"])

        assert result.exit_code == 1
        assert "No user selected" in result.output


class TestTransactions:
    """Tests for add, list and stats."""

    def test_add_and_stats(self, alice_and_bob: None) -> None:
        """Should record transactions and show totals."""
        assert runner.invoke(app, ["add", "income", "1000", "salary", "--date", "2025-01-01"]).exit_code == 0
        assert runner.invoke(app, ["add", "EXPENSE", "200", "food"]).exit_code == 0

        result = runner.invoke(app, ["stats"])

        assert result.exit_code == 0
        assert "1,000.00" in result.output
        assert "800.00" in result.output
        assert "salary" in result.output

    def test_add_normalizes_day_first_dates(self, alice_and_bob: None) -> None:
        """Should accept DD/MM/YYYY on the command line."""
        result = runner.invoke(app, ["add", "expense", "12.5", "books", "-d", "10/01/2025"])

        assert result.exit_code == 0
        assert "2025-01-10" in result.output

    def test_add_rejects_zero_amount(self, alice_and_bob: None) -> None:
        """Should print the validation message and exit 1."""
        result = runner.invoke(app, ["add", "expense", "0", "food"])

        assert result.exit_code == 1
        assert "amount must be a positive finite number" in result.output

    def test_add_for_unknown_user(self, alice_and_bob: None) -> None:
        """Should fail for a user without a wallet."""
        result = runner.invoke(app, ["add", "expense", "5", "food", "--user", "carol"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_add_reports_budget_warning(self, alice_and_bob: None) -> None:
        """Should print the threshold alert after a spend."""
        runner.invoke(app, ["budget", "set", "food", "100"])

        result = runner.invoke(app, ["add", "expense", "85", "food"])

        assert "Budget warning (≥80%): food used 85%" in result.output

    def test_list(self, alice_and_bob: None) -> None:
        """Should list the user's transactions."""
        runner.invoke(app, ["add", "expense", "5", "coffee"])

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "coffee" in result.output

    def test_negative_balance_warning(self, alice_and_bob: None) -> None:
        """Should warn when spending exceeds income."""
        runner.invoke(app, ["add", "expense", "5", "coffee"])

        result = runner.invoke(app, ["stats"])

        assert "Your wallet is negative" in result.output


class TestQuery:
    """Tests for the query command."""

    def test_swaps_inverted_bounds(self, alice_and_bob: None) -> None:
        """Should swap and report an inverted range."""
        runner.invoke(app, ["add", "expense", "20", "food", "-d", "2025-01-10"])
        runner.invoke(app, ["add", "expense", "30", "books", "-d", "2025-03-10"])

        result = runner.invoke(app, ["query", "--from", "2025-01-31", "--to", "2025-01-01"])

        assert result.exit_code == 0
        assert "swapping bounds" in result.output
        assert "food" in result.output
        assert "books" not in result.output

    def test_comma_separated_categories(self, alice_and_bob: None) -> None:
        """Should split comma-separated categories."""
        runner.invoke(app, ["add", "expense", "20", "food"])
        runner.invoke(app, ["add", "expense", "30", "books"])
        runner.invoke(app, ["add", "expense", "40", "rent"])

        result = runner.invoke(app, ["query", "-c", "food,books"])

        assert "Total expenses: 50.00" in result.output
        assert "rent" not in result.output

    def test_empty_result(self, alice_and_bob: None) -> None:
        """Should say when nothing matched."""
        result = runner.invoke(app, ["query", "-c", "travel"])

        assert result.exit_code == 0
        assert "No expense data" in result.output


class TestBudgets:
    """Tests for budget subcommands."""

    def test_set_update_status(self, alice_and_bob: None) -> None:
        """Should set, update and report budgets."""
        runner.invoke(app, ["add", "expense", "120", "food"])
        assert runner.invoke(app, ["budget", "set", "food", "200"]).exit_code == 0
        assert runner.invoke(app, ["budget", "update", "food", "100"]).exit_code == 0

        result = runner.invoke(app, ["budget", "status"])

        assert result.exit_code == 0
        assert "Budget exceeded: food by 20.00" in result.output

    def test_update_missing_category(self, alice_and_bob: None) -> None:
        """Should fail and list existing categories."""
        runner.invoke(app, ["budget", "set", "rent", "500"])

        result = runner.invoke(app, ["budget", "update", "food", "10"])

        assert result.exit_code == 1
        assert "Existing categories: rent" in result.output

    def test_set_rejects_negative_limit(self, alice_and_bob: None) -> None:
        """Should reject an invalid limit."""
        result = runner.invoke(app, ["budget", "set", "food", "--", "-5"])

        assert result.exit_code == 1

    def test_rename_and_remove(self, alice_and_bob: None) -> None:
        """Should rename a category, keep its spend across commands, then remove it."""
        runner.invoke(app, ["add", "expense", "30", "cafe"])
        runner.invoke(app, ["budget", "set", "cafe", "40"])

        assert runner.invoke(app, ["budget", "rename", "cafe", "coffee"]).exit_code == 0

        status = runner.invoke(app, ["budget", "status"])
        assert "coffee" in status.output
        assert "30.00" in status.output
        assert "10.00" in status.output

        assert runner.invoke(app, ["budget", "remove", "cafe"]).exit_code == 1
        assert runner.invoke(app, ["budget", "remove", "coffee"]).exit_code == 0


class TestTransfer:
    """Tests for the transfer command."""

    def test_transfer(self, alice_and_bob: None) -> None:
        """Should move money to another user."""
        result = runner.invoke(app, ["transfer", "bob", "25", "--memo", "pizza"])

        assert result.exit_code == 0
        assert "transfer to bob | pizza" in result.output

        bob_stats = runner.invoke(app, ["stats", "--user", "bob"])
        assert "transfer from alice | pizza" in bob_stats.output

    def test_transfer_to_self_rejected(self, alice_and_bob: None) -> None:
        """Should refuse a self-transfer."""
        result = runner.invoke(app, ["transfer", "ALICE", "5"])

        assert result.exit_code == 1
        assert "cannot transfer money to self" in result.output

    def test_transfer_to_unknown_user(self, alice_and_bob: None) -> None:
        """Should refuse an unknown receiver."""
        result = runner.invoke(app, ["transfer", "carol", "5"])

        assert result.exit_code == 1
        assert "unknown receiver: carol" in result.output


class TestSnapshots:
    """Tests for export and import."""

    def test_export_then_import_into_other_user(self, alice_and_bob: None, tmp_path: Path) -> None:
        """Should copy a wallet and skip duplicates on re-import."""
        runner.invoke(app, ["add", "expense", "20", "food", "-d", "2025-01-10"])
        runner.invoke(app, ["budget", "set", "food", "100"])
        target = tmp_path / "alice.json"

        assert runner.invoke(app, ["export", str(target)]).exit_code == 0
        assert json.loads(target.read_text())["budgets"] == {"food": 100}

        first = runner.invoke(app, ["import", str(target), "--user", "bob"])
        second = runner.invoke(app, ["import", str(target), "--user", "bob"])

        assert first.exit_code == 0
        assert "transactions: +1" in first.output
        assert "budgets updated: 1" in first.output
        assert "duplicates skipped: 1" in second.output

    def test_export_default_path(self, alice_and_bob: None, isolated_home: Path) -> None:
        """Should export to the data directory by default."""
        assert runner.invoke(app, ["export"]).exit_code == 0
        assert (isolated_home / "data" / "walletbook" / "exports" / "alice.json").exists()

    def test_import_malformed_file(self, alice_and_bob: None, tmp_path: Path) -> None:
        """Should report where the JSON is broken and merge nothing."""
        broken = tmp_path / "broken.json"
        broken.write_text('{"transactions": [{"title" "food"}]}')

        result = runner.invoke(app, ["import", str(broken)])

        assert result.exit_code == 1
        assert "malformed" in result.output
        assert "line 1" in result.output

    def test_import_missing_file(self, alice_and_bob: None, tmp_path: Path) -> None:
        """Should fail when the snapshot does not exist."""
        result = runner.invoke(app, ["import", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "No wallet backup found" in result.output
