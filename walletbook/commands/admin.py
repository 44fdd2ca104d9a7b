"""Admin commands for init and managing users' wallets."""

from rich.table import Table

from walletbook.commands.session import console, fail, get_directory_path, open_directory, store_directory
from walletbook.config import create_default_config, get_config_path, get_setting, set_setting
from walletbook.domain.results import Err
from walletbook.store import WalletDirectory, save_directory


def init_command(force: bool = False) -> None:
    """Initialize walletbook config and data file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'walletbook init --force' to overwrite[/yellow]")
        fail("Nothing changed.")

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        data_path = get_directory_path()
        if force or not data_path.exists():
            save_directory(WalletDirectory(), data_path)
            console.print(f"[green]✓[/green] Data file created: {data_path}")
    except OSError as e:
        fail(f"Filesystem error: {e}")

    console.print("\n[green]Initialization complete![/green]", style="bold")


def user_add_command(user_id: str, default: bool = False) -> None:
    """Create an empty wallet for a user."""
    directory = open_directory()
    created = directory.create(user_id)
    if isinstance(created, Err):
        fail(created.message)
    store_directory(directory)
    console.print(f"[green]✓[/green] Created wallet for {user_id.strip().lower()}")

    if default:
        set_setting("default_user", user_id.strip().lower())
        console.print("[dim]Set as default user[/dim]")


def user_list_command() -> None:
    """List users with their balances."""
    directory = open_directory()
    if not len(directory):
        console.print("[yellow]No users found[/yellow]")
        return

    default_user = get_setting("default_user")
    table = Table(title=f"Users ({len(directory)})")
    table.add_column("User", style="cyan")
    table.add_column("Transactions", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("Default", justify="center")

    for user_id in directory.user_ids():
        wallet = directory.get(user_id)
        assert wallet is not None
        table.add_row(
            user_id,
            str(len(wallet.ledger)),
            f"{wallet.ledger.balance():,.2f}",
            "✓" if user_id == default_user else "",
        )

    console.print(table)


def user_remove_command(user_id: str) -> None:
    """Delete a user's wallet and all of its data."""
    directory = open_directory()
    if not directory.remove(user_id):
        fail(f"User '{user_id}' not found")
    store_directory(directory)
    console.print(f"[green]✓[/green] Removed wallet for {user_id.strip().lower()}")
