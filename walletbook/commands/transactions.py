"""Transaction commands (add, list)."""

from rich.table import Table

from walletbook.commands.session import (
    console,
    fail,
    format_amount,
    normalize_date_option,
    open_directory,
    open_wallet,
    store_directory,
)
from walletbook.domain.models import TransactionType
from walletbook.domain.results import Err


def add_command(
    type: TransactionType,
    amount: float,
    title: str,
    date: str | None = None,
    user: str | None = None,
) -> None:
    """Add an income or expense to the user's ledger.

    Args:
        type: INCOME or EXPENSE.
        amount: Positive amount.
        title: Title, also used as the budget category.
        date: Optional date (YYYY-MM-DD, DD/MM/YYYY, or other formats), today if omitted.
        user: User id, defaults to the configured default user.
    """
    directory = open_directory()
    user_id, wallet = open_wallet(directory, user)

    result = wallet.ledger.append(amount, title, type, normalize_date_option(date))
    if isinstance(result, Err):
        fail(f"Invalid transaction: {result.message}")

    store_directory(directory)

    txn = result.value
    console.print(f"[green]✓[/green] {txn.type.value.title()} added for {user_id}:")
    console.print(f"  Date: {txn.date}")
    console.print(f"  Title: {txn.title}")
    console.print(f"  Amount: {format_amount(txn.amount)}")

    if txn.is_expense:
        limit = wallet.budgets.limit(txn.title)
        if limit is not None:
            console.print(
                f"  [dim]Spent in {txn.title}: {format_amount(wallet.budgets.spent(txn.title))}, "
                f"remaining: {format_amount(wallet.budgets.remaining(txn.title))}[/dim]"
            )
        for alert in wallet.budgets.alerts():
            if alert.category == txn.title:
                console.print(f"[yellow]! {alert}[/yellow]")


def list_command(user: str | None = None, limit: int = 50, all: bool = False) -> None:
    """List the user's transactions, newest last."""
    directory = open_directory()
    user_id, wallet = open_wallet(directory, user)

    transactions = wallet.ledger.find()
    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    if not all:
        transactions = transactions[-limit:]

    table = Table(title=f"Transactions for {user_id} (showing {len(transactions)} of {len(wallet.ledger)})")
    table.add_column("Date", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("ID", style="dim")

    for txn in transactions:
        if txn.is_expense:
            amount_display = f"[red]{format_amount(-txn.amount, include_sign=True)}[/red]"
        else:
            amount_display = f"[green]{format_amount(txn.amount, include_sign=True)}[/green]"
        table.add_row(txn.date, txn.title, amount_display, txn.id[:8])

    console.print(table)
