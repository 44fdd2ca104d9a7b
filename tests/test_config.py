"""Tests for walletbook.config."""

import stat
from pathlib import Path

import pytest

from walletbook.config import (
    DEFAULTS,
    create_default_config,
    get_config_path,
    get_setting,
    load_config,
    set_setting,
)


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path


class TestConfigPath:
    """Tests for get_config_path."""

    def test_uses_xdg_config_home(self, config_home: Path) -> None:
        """Should place config under $XDG_CONFIG_HOME/walletbook."""
        assert get_config_path() == config_home / "walletbook" / "config.toml"


class TestDefaultConfig:
    """Tests for create_default_config."""

    def test_writes_defaults_with_private_permissions(self, config_home: Path) -> None:
        """Should write the defaults readable by the owner only."""
        create_default_config()

        path = get_config_path()
        assert load_config() == DEFAULTS
        assert stat.S_IMODE(path.stat().st_mode) == 0o600


class TestSettings:
    """Tests for get_setting and set_setting."""

    def test_missing_file_falls_back_to_defaults(self, config_home: Path) -> None:
        """Should return defaults or None without a config file."""
        assert get_setting("log_level") == "WARNING"
        assert get_setting("default_user") is None

    def test_set_creates_file(self, config_home: Path) -> None:
        """Should create the file and keep defaults alongside the new key."""
        set_setting("default_user", "alice")

        assert get_setting("default_user") == "alice"
        assert load_config()["currency_symbol"] == ""

    def test_set_overwrites(self, config_home: Path) -> None:
        """Should replace an existing value."""
        set_setting("currency_symbol", "£")
        set_setting("currency_symbol", "€")

        assert get_setting("currency_symbol") == "€"

    def test_explicit_path(self, tmp_path: Path) -> None:
        """Should honour an explicit config path."""
        path = tmp_path / "custom.toml"

        set_setting("data_file", "/tmp/wallets.json", path)

        assert get_setting("data_file", path) == "/tmp/wallets.json"
