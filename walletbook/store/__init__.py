"""Store layer - provides persistence for the application.

This module re-exports the public storage functions for easy importing.
"""

from walletbook.store.directory import Wallet, WalletDirectory, normalize_user_id
from walletbook.store.files import (
    get_data_path,
    get_export_path,
    load_directory,
    read_bytes,
    save_directory,
    write_snapshot,
)

__all__ = [
    # Directory
    "Wallet",
    "WalletDirectory",
    "normalize_user_id",
    # Files
    "get_data_path",
    "get_export_path",
    "load_directory",
    "read_bytes",
    "save_directory",
    "write_snapshot",
]
