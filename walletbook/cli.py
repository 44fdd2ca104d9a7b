"""CLI entry point for walletbook."""

import typer

from walletbook.commands import budget as budget_commands
from walletbook.commands.admin import init_command, user_add_command, user_list_command, user_remove_command
from walletbook.commands.report import query_command, stats_command
from walletbook.commands.snapshot import export_command, import_command
from walletbook.commands.transactions import add_command, list_command
from walletbook.commands.transfer import transfer_command
from walletbook.config import get_setting
from walletbook.domain.models import TransactionType
from walletbook.logging_utils import configure_logging

app = typer.Typer(
    name="walletbook",
    help="Personal multi-user wallet: transactions, budgets, transfers",
    add_completion=False,
)
user_app = typer.Typer(help="Manage users' wallets.")
budget_app = typer.Typer(help="Manage category budgets.")
app.add_typer(user_app, name="user")
app.add_typer(budget_app, name="budget")

USER_OPTION = typer.Option(None, "--user", "-u", help="Acting user (default: configured default_user)")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Personal multi-user wallet: transactions, budgets, transfers."""
    configure_logging("DEBUG" if verbose else get_setting("log_level") or "WARNING")


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config and data file"),
) -> None:
    """Initialize walletbook configuration and data file."""
    init_command(force)


@user_app.command(name="add")
def user_add(
    user_id: str,
    default: bool = typer.Option(False, "--default", help="Make this the default user"),
) -> None:
    """Create an empty wallet for a user."""
    user_add_command(user_id, default)


@user_app.command(name="list")
def user_list() -> None:
    """List users and their balances."""
    user_list_command()


@user_app.command(name="remove")
def user_remove(user_id: str) -> None:
    """Delete a user's wallet."""
    user_remove_command(user_id)


@app.command()
def add(
    type: TransactionType = typer.Argument(..., case_sensitive=False, help="INCOME or EXPENSE"),
    amount: float = typer.Argument(..., help="Amount (positive)"),
    title: str = typer.Argument(..., help="Title, also the budget category"),
    date: str = typer.Option(None, "--date", "-d", help="Date (default: today)"),
    user: str = USER_OPTION,
) -> None:
    """Add an income or expense."""
    add_command(type, amount, title, date, user)


@app.command(name="list")
def list_transactions(
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
    user: str = USER_OPTION,
) -> None:
    """List your transactions."""
    list_command(user, limit, all)


@app.command()
def stats(user: str = USER_OPTION) -> None:
    """Show totals, balance, categories, budgets and alerts."""
    stats_command(user)


@app.command()
def query(
    from_date: str = typer.Option(None, "--from", help="From date, inclusive"),
    to_date: str = typer.Option(None, "--to", help="To date, inclusive"),
    category: list[str] = typer.Option(None, "--category", "-c", help="Category (repeat or comma-separate)"),
    type: TransactionType = typer.Option(None, "--type", case_sensitive=False, help="Only list this type"),
    user: str = USER_OPTION,
) -> None:
    """Show statistics for a period and set of categories."""
    query_command(from_date, to_date, category, type, user)


@budget_app.command(name="set")
def budget_set(category: str, limit: float, user: str = USER_OPTION) -> None:
    """Set or overwrite a category limit."""
    budget_commands.set_command(category, limit, user)


@budget_app.command(name="update")
def budget_update(category: str, limit: float, user: str = USER_OPTION) -> None:
    """Change the limit of an existing category."""
    budget_commands.update_command(category, limit, user)


@budget_app.command(name="remove")
def budget_remove(category: str, user: str = USER_OPTION) -> None:
    """Remove a category limit."""
    budget_commands.remove_command(category, user)


@budget_app.command(name="rename")
def budget_rename(old_name: str, new_name: str, user: str = USER_OPTION) -> None:
    """Rename a category, moving its limit and spent amount."""
    budget_commands.rename_command(old_name, new_name, user)


@budget_app.command(name="status")
def budget_status(user: str = USER_OPTION) -> None:
    """Show budget limits, spending and alerts."""
    budget_commands.status_command(user)


@app.command()
def transfer(
    receiver: str,
    amount: float,
    memo: str = typer.Option(None, "--memo", "-m", help="Note added to both transactions"),
    user: str = USER_OPTION,
) -> None:
    """Transfer money to another user."""
    transfer_command(receiver, amount, memo, user)


@app.command(name="export")
def export(
    path: str = typer.Argument(None, help="Snapshot file (default: data dir/exports/USER.json)"),
    user: str = USER_OPTION,
) -> None:
    """Export your wallet to a JSON snapshot."""
    export_command(path, user)


@app.command(name="import")
def import_(
    path: str = typer.Argument(None, help="Snapshot file (default: data dir/exports/USER.json)"),
    user: str = USER_OPTION,
) -> None:
    """Import a JSON snapshot, skipping duplicates."""
    import_command(path, user)


if __name__ == "__main__":
    app()
