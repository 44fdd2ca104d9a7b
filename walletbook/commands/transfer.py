"""Transfer command for moving money to another user."""

from walletbook.commands.session import console, fail, format_amount, open_directory, resolve_user, store_directory
from walletbook.domain.transfer import Rejected


def transfer_command(receiver: str, amount: float, memo: str | None = None, user: str | None = None) -> None:
    """Transfer money from the acting user to another user.

    Args:
        receiver: Receiving user id.
        amount: Positive amount.
        memo: Optional note added to both transaction titles.
        user: Sending user id, defaults to the configured default user.
    """
    directory = open_directory()
    sender = resolve_user(user)

    outcome = directory.transfer(sender, receiver, amount, memo)
    if isinstance(outcome, Rejected):
        fail(f"Transfer rejected: {outcome.reason}")

    store_directory(directory)
    console.print(f"[green]✓[/green] Transferred {format_amount(outcome.amount)} to {outcome.receiver}")
    console.print(f"  [dim]{outcome.sender}: {outcome.expense.title}[/dim]")
    console.print(f"  [dim]{outcome.receiver}: {outcome.income.title}[/dim]")

    wallet = directory.get(sender)
    if wallet is not None and wallet.ledger.balance() < 0:
        console.print("[red]! Your wallet is negative![/red]")
