"""File storage for snapshots and the wallet directory."""

import json
import os
from pathlib import Path
from typing import Any

from walletbook.domain.results import Err, Ok, Result
from walletbook.domain.snapshot import parse_snapshot
from walletbook.store.directory import WalletDirectory


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_data_path() -> Path:
    """Get the default wallet directory file path (XDG compliant)."""
    return get_xdg_data_home() / "walletbook" / "wallets.json"


def get_export_path(user_id: str) -> Path:
    """Get the default snapshot export path for a user."""
    return get_xdg_data_home() / "walletbook" / "exports" / f"{user_id}.json"


def read_bytes(path: Path) -> bytes:
    """Read a snapshot document.

    Raises:
        OSError: If the file cannot be read.
    """
    return path.read_bytes()


def write_snapshot(path: Path, document: dict[str, Any]) -> None:
    """Write a snapshot or directory document, creating parent directories.

    The file is written next to its final location and renamed into place so a
    failed write never leaves a truncated document behind.

    Raises:
        OSError: If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
        f.write("\n")
    os.replace(tmp_path, path)


def load_directory(path: Path | None = None) -> Result[WalletDirectory]:
    """Load the wallet directory, or an empty one if the file does not exist.

    Args:
        path: Directory file. If None, uses default location.

    Returns:
        Ok with the directory, or Err(MALFORMED_INPUT) if the file is not valid JSON.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    if path is None:
        path = get_data_path()

    if not path.exists():
        return Ok(WalletDirectory())

    parsed = parse_snapshot(read_bytes(path))
    if isinstance(parsed, Err):
        return parsed
    return Ok(WalletDirectory.from_document(parsed.value))


def save_directory(directory: WalletDirectory, path: Path | None = None) -> Path:
    """Persist the wallet directory.

    Returns:
        Path written to.

    Raises:
        OSError: If the file cannot be written.
    """
    if path is None:
        path = get_data_path()
    write_snapshot(path, directory.to_document())
    return path
