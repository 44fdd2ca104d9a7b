"""Stats and query commands for viewing ledger data."""

from rich.table import Table

from walletbook.commands.session import (
    console,
    fail,
    format_amount,
    normalize_date_option,
    open_directory,
    open_wallet,
)
from walletbook.dates import order_bounds, parse_iso_date
from walletbook.domain.budget import AlertLevel
from walletbook.domain.models import CategoryName, TransactionType
from walletbook.domain.queries import summarize
from walletbook.store import Wallet


def render_totals(title: str, totals: dict[CategoryName, float], empty: str) -> None:
    """Render a per-category totals block."""
    if not totals:
        console.print(f"[dim]{empty}[/dim]")
        return
    if title:
        console.print(f"[bold]{title}[/bold]")
    for category, amount in totals.items():
        console.print(f"  {category:30} {format_amount(amount):>14}")


def render_budget_status(wallet: Wallet) -> None:
    """Render the budget table followed by threshold alerts."""
    statuses = wallet.budgets.status()
    if not statuses:
        console.print("[dim]No budgets yet[/dim]")
        return

    table = Table(title="Budgets")
    table.add_column("Category", style="cyan")
    table.add_column("Limit", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")

    for status in statuses:
        remaining = format_amount(status.remaining)
        if status.remaining < 0:
            remaining = f"[red]{remaining}[/red]"
        table.add_row(status.category, format_amount(status.limit), format_amount(status.spent), remaining)

    console.print(table)

    for alert in wallet.budgets.alerts():
        colour = "red" if alert.level is AlertLevel.EXCEEDED else "yellow"
        console.print(f"[{colour}]! {alert}[/{colour}]")


def stats_command(user: str | None = None) -> None:
    """Show totals, balance, per-category breakdown, budgets and alerts."""
    directory = open_directory()
    user_id, wallet = open_wallet(directory, user)
    ledger = wallet.ledger

    console.print(f"\n[bold cyan]Wallet statistics for {user_id}[/bold cyan]\n")
    console.print(f"Total income:  [green]{format_amount(ledger.sum_income()):>14}[/green]")
    console.print(f"Total expense: [red]{format_amount(ledger.sum_expense()):>14}[/red]")

    balance = ledger.balance()
    console.print(f"Balance:       [bold]{format_amount(balance):>14}[/bold]")
    if balance == 0:
        console.print("[yellow]! Your wallet balance is zero.[/yellow]")
    elif balance < 0:
        console.print("[red]! Your wallet is negative![/red]")

    console.print()
    render_totals("Income by category", ledger.totals_by_category(TransactionType.INCOME), "No income yet")
    render_totals("Expenses by category", ledger.totals_by_category(TransactionType.EXPENSE), "No expenses yet")
    console.print()
    render_budget_status(wallet)


def query_command(
    from_date: str | None = None,
    to_date: str | None = None,
    categories: list[str] | None = None,
    type: TransactionType | None = None,
    user: str | None = None,
) -> None:
    """Show statistics for a period and set of categories.

    Args:
        from_date: Optional inclusive lower bound.
        to_date: Optional inclusive upper bound.
        categories: Optional categories; comma-separated values are split.
        type: Optional type restricting the transaction list.
        user: User id, defaults to the configured default user.
    """
    directory = open_directory()
    _, wallet = open_wallet(directory, user)

    lower_text = normalize_date_option(from_date)
    upper_text = normalize_date_option(to_date)
    try:
        lower = parse_iso_date(lower_text) if lower_text else None
        upper = parse_iso_date(upper_text) if upper_text else None
    except ValueError as e:
        fail(str(e))

    lower, upper, swapped = order_bounds(lower, upper)
    if swapped:
        console.print("[yellow]TO is before FROM, swapping bounds.[/yellow]")

    wanted = [part for value in categories or [] for part in value.split(",")]
    summary = summarize(wallet.ledger, lower, upper, wanted)

    console.print("\n[bold]Expenses[/bold]")
    if summary.total_expense == 0:
        console.print("[dim]No expense data for selected period/categories.[/dim]")
    else:
        render_totals("", summary.expense_by_category, "")
        console.print(f"  Total expenses: {format_amount(summary.total_expense)}")

    console.print("\n[bold]Income[/bold]")
    if summary.total_income == 0:
        console.print("[dim]No income data for selected period/categories.[/dim]")
    else:
        render_totals("", summary.income_by_category, "")
        console.print(f"  Total income: {format_amount(summary.total_income)}")

    transactions = [t for t in summary.transactions if type is None or t.type is type]
    console.print("\n[bold]Transactions[/bold]")
    if not transactions:
        console.print("[dim]No transactions for selected conditions.[/dim]")
        return

    table = Table()
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Amount", justify="right")
    for txn in transactions:
        table.add_row(txn.date, txn.type.value, txn.title, format_amount(txn.amount))
    console.print(table)
