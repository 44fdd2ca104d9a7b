"""Shared helpers for commands: loading the directory, picking the user, output."""

import sys
from pathlib import Path
from typing import NoReturn

import pandas as pd
from rich.console import Console

from walletbook.config import get_setting
from walletbook.domain.results import Err
from walletbook.store import Wallet, WalletDirectory, get_data_path, load_directory, save_directory

console = Console()


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def get_directory_path() -> Path:
    """Data file from config, or the XDG default."""
    data_file = get_setting("data_file")
    if data_file:
        return Path(data_file).expanduser()
    return get_data_path()


def open_directory() -> WalletDirectory:
    """Load the wallet directory or exit with a readable error."""
    path = get_directory_path()
    try:
        result = load_directory(path)
    except OSError as e:
        fail(f"Could not read {path}: {e}")
    if isinstance(result, Err):
        fail(f"Data file {path} is corrupt: {result.message}")
    return result.value


def store_directory(directory: WalletDirectory) -> None:
    """Save the wallet directory or exit with a readable error."""
    try:
        save_directory(directory, get_directory_path())
    except OSError as e:
        fail(f"Could not save data: {e}")


def resolve_user(user: str | None) -> str:
    """Pick the --user option or the configured default user."""
    chosen = user or get_setting("default_user")
    if not chosen:
        fail("No user selected. Pass --user or run 'walletbook user add NAME --default'.")
    return str(chosen)


def open_wallet(directory: WalletDirectory, user: str | None) -> tuple[str, Wallet]:
    """Resolve the acting user and their wallet, or exit."""
    user_id = resolve_user(user)
    wallet = directory.get(user_id)
    if wallet is None:
        fail(f"User '{user_id}' not found. Run 'walletbook user add {user_id}' first.")
    return user_id, wallet


def normalize_date_option(raw_date: str | None) -> str | None:
    """Normalize a user-typed date to YYYY-MM-DD.

    Uses pandas.to_datetime so the CLI accepts ISO, European and other common
    formats; the domain itself only accepts YYYY-MM-DD.

    Args:
        raw_date: Date as typed, or None.

    Returns:
        Date in YYYY-MM-DD format, or None if not given.
    """
    if raw_date is None or not raw_date.strip():
        return None
    try:
        return pd.to_datetime(raw_date.strip(), dayfirst=True).strftime("%Y-%m-%d")
    except (ValueError, pd.errors.ParserError) as e:
        fail(f"Invalid date '{raw_date}': {e}")


def format_amount(amount: float, include_sign: bool = False) -> str:
    """Format an amount with the configured currency symbol.

    Args:
        amount: Amount in major units.
        include_sign: Whether to prefix + or -.

    Returns:
        Formatted string (e.g. "-£12.50" or "12.50").
    """
    symbol = get_setting("currency_symbol") or ""
    formatted = f"{symbol}{abs(amount):,.2f}"
    if include_sign:
        return f"-{formatted}" if amount < 0 else f"+{formatted}"
    return f"-{formatted}" if amount < 0 else formatted
