"""Budget commands for managing category limits."""

from walletbook.commands.report import render_budget_status
from walletbook.commands.session import console, fail, format_amount, open_directory, open_wallet, store_directory
from walletbook.domain.results import Err
from walletbook.store import Wallet


def print_category_line(wallet: Wallet, category: str) -> None:
    """Print limit, spent and remaining for one category."""
    limit = wallet.budgets.limit(category)
    spent = wallet.budgets.spent(category)
    remaining = wallet.budgets.remaining(category)
    limit_display = format_amount(limit) if limit is not None else "-"
    console.print(
        f"  [dim]{category}: limit {limit_display}, spent {format_amount(spent)}, "
        f"remaining {format_amount(remaining)}[/dim]"
    )


def set_command(category: str, limit: float, user: str | None = None) -> None:
    """Set or overwrite a category limit."""
    directory = open_directory()
    _, wallet = open_wallet(directory, user)

    result = wallet.budgets.set_limit(category, limit)
    if isinstance(result, Err):
        fail(f"Invalid budget: {result.message}")

    store_directory(directory)
    console.print(f"[green]✓[/green] Budget set: {category.strip()} = {format_amount(result.value)}")
    print_category_line(wallet, category)


def update_command(category: str, limit: float, user: str | None = None) -> None:
    """Change the limit of an existing budget category."""
    directory = open_directory()
    _, wallet = open_wallet(directory, user)

    result = wallet.budgets.update_limit(category, limit)
    if isinstance(result, Err):
        fail(f"Invalid budget: {result.message}")
    if not result.value:
        existing = ", ".join(wallet.budgets.categories()) or "none"
        fail(f"Category '{category}' has no budget. Existing categories: {existing}")

    store_directory(directory)
    console.print(f"[green]✓[/green] Budget updated: {category.strip()} -> {format_amount(limit)}")
    print_category_line(wallet, category)


def remove_command(category: str, user: str | None = None) -> None:
    """Remove a category limit."""
    directory = open_directory()
    _, wallet = open_wallet(directory, user)

    if not wallet.budgets.remove_limit(category):
        fail(f"Category '{category}' not found in budgets.")

    store_directory(directory)
    console.print(f"[green]✓[/green] Budget removed: {category.strip()}")


def rename_command(old_name: str, new_name: str, user: str | None = None) -> None:
    """Rename a category, moving its limit and spent amount."""
    directory = open_directory()
    _, wallet = open_wallet(directory, user)

    if old_name.strip() == new_name.strip():
        fail("Old and new names are the same.")

    if not wallet.budgets.rename_category(old_name, new_name):
        fail("Nothing changed. Category not found or invalid names.")

    store_directory(directory)
    console.print(f"[green]✓[/green] Category renamed: {old_name.strip()} -> {new_name.strip()}")
    print_category_line(wallet, new_name.strip())
    console.print("[dim]Existing transactions keep their original title.[/dim]")


def status_command(user: str | None = None) -> None:
    """Show budget status and alerts."""
    directory = open_directory()
    _, wallet = open_wallet(directory, user)
    render_budget_status(wallet)
