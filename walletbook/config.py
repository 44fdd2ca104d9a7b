"""Settings for walletbook, stored as TOML under the XDG config directory.

Known keys:
- data_file: wallet directory file (default: XDG data path)
- default_user: user acting when --user is omitted
- log_level: level for the walletbook logger
- currency_symbol: prefix used when printing amounts
"""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULTS: dict[str, Any] = {
    "log_level": "WARNING",
    "currency_symbol": "",
}


def get_xdg_config_home() -> Path:
    """XDG config directory, ~/.config when XDG_CONFIG_HOME is unset."""
    configured = os.environ.get("XDG_CONFIG_HOME")
    return Path(configured) if configured else Path.home() / ".config"


def get_config_path() -> Path:
    """Location of walletbook's config.toml."""
    return get_xdg_config_home() / "walletbook" / "config.toml"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read the settings table.

    Args:
        config_path: Config file, the XDG location if None.

    Returns:
        Settings as stored, without defaults applied.

    Raises:
        FileNotFoundError: If there is no config file yet.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(config_path or get_config_path(), "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Write the settings table, readable by the owner only.

    Args:
        config: Settings to store.
        config_path: Config file, the XDG location if None.
    """
    target = config_path or get_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "wb") as f:
        tomli_w.dump(config, f)
    os.chmod(target, 0o600)


def create_default_config(config_path: Path | None = None) -> None:
    """Write a fresh config holding only the defaults."""
    save_config(dict(DEFAULTS), config_path)


def get_setting(key: str, config_path: Path | None = None) -> Any:
    """Look up one setting.

    Returns:
        The stored value, else its default, else None. A missing config file
        behaves like an empty one.
    """
    try:
        stored = load_config(config_path)
    except FileNotFoundError:
        stored = {}
    return stored.get(key, DEFAULTS.get(key))


def set_setting(key: str, value: Any, config_path: Path | None = None) -> None:
    """Store one setting, creating the config file from defaults if needed."""
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = dict(DEFAULTS)
    config[key] = value
    save_config(config, config_path)
