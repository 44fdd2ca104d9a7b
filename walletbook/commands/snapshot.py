"""Export and import commands for wallet snapshots."""

from pathlib import Path

from walletbook.commands.session import console, fail, open_directory, open_wallet, store_directory
from walletbook.domain.results import Err
from walletbook.domain.snapshot import export_snapshot, import_snapshot
from walletbook.store import get_export_path, read_bytes, write_snapshot


def export_command(path: str | None = None, user: str | None = None) -> None:
    """Export the user's wallet as a JSON snapshot."""
    directory = open_directory()
    user_id, wallet = open_wallet(directory, user)

    target = Path(path).expanduser() if path else get_export_path(user_id)
    if target.exists() and target.is_dir():
        fail(f"Cannot export to {target}: it is a directory")

    try:
        write_snapshot(target, export_snapshot(wallet.ledger, wallet.budgets))
    except OSError as e:
        fail(f"Export failed: {e}")

    console.print(f"[green]✓[/green] Saved wallet to {target.resolve()}")
    console.print(f"  [dim]{len(wallet.ledger)} transaction(s), {len(wallet.budgets.limits())} budget(s)[/dim]")


def import_command(path: str | None = None, user: str | None = None) -> None:
    """Merge a JSON snapshot into the user's wallet, skipping duplicates."""
    directory = open_directory()
    user_id, wallet = open_wallet(directory, user)

    source = Path(path).expanduser() if path else get_export_path(user_id)
    if not source.exists():
        fail(f"No wallet backup found: {source.resolve()}")

    try:
        raw = read_bytes(source)
    except OSError as e:
        fail(f"Import failed: {e}")

    result = import_snapshot(wallet.ledger, wallet.budgets, raw)
    if isinstance(result, Err):
        fail(f"{result.message} in file: {source.resolve()}")

    store_directory(directory)

    stats = result.value
    console.print(
        f"[green]✓[/green] Loaded from {source.resolve()} | transactions: +{stats.imported}, "
        f"duplicates skipped: {stats.skipped_duplicates}, budgets updated: {stats.budgets_updated}"
    )
    if stats.rejected:
        console.print(f"[yellow]{stats.rejected} invalid transaction(s) skipped[/yellow]")
