"""Money transfers between two users' ledgers.

A transfer either commits both legs (an EXPENSE for the sender and an INCOME
for the receiver) or is rejected before anything is appended. Both legs are
built and validated before the first append, and appending a validated
transaction cannot fail, so no rollback is needed.
"""

from dataclasses import dataclass
from typing import NoReturn

from walletbook.domain.ledger import Ledger
from walletbook.domain.models import Transaction, TransactionType, create_transaction, is_valid_amount
from walletbook.domain.results import Err, ErrorKind, ValidationError
from walletbook.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Committed:
    """Both legs of the transfer were appended."""

    sender: str
    receiver: str
    amount: float
    expense: Transaction
    income: Transaction

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The transfer was refused; neither ledger changed."""

    reason: str
    kind: ErrorKind = ErrorKind.VALIDATION

    @property
    def ok(self) -> bool:
        return False

    def raise_error(self) -> NoReturn:
        raise ValidationError(self.reason)


TransferOutcome = Committed | Rejected


def transfer_titles(sender_id: str, receiver_id: str, memo: str | None = None) -> tuple[str, str]:
    """Build the (outgoing, incoming) titles for a transfer.

    Args:
        sender_id: Sender identifier.
        receiver_id: Receiver identifier.
        memo: Optional free text appended after " | " when not blank.

    Returns:
        Tuple of (sender_title, receiver_title).
    """
    outgoing = f"transfer to {receiver_id}"
    incoming = f"transfer from {sender_id}"
    if memo is not None and memo.strip():
        outgoing = f"{outgoing} | {memo.strip()}"
        incoming = f"{incoming} | {memo.strip()}"
    return outgoing, incoming


def transfer(
    sender_ledger: Ledger | None,
    receiver_ledger: Ledger | None,
    sender_id: str | None,
    receiver_id: str | None,
    amount: float,
    memo: str | None = None,
) -> TransferOutcome:
    """Move money from one ledger to another as a single logical operation.

    Checks run in order and the first failure wins: identifiers present, no
    self-transfer, positive finite amount, sender exists, receiver exists.

    Args:
        sender_ledger: Sender's ledger, None if the sender is unknown.
        receiver_ledger: Receiver's ledger, None if the receiver is unknown.
        sender_id: Sender identifier, used in the receiver's title.
        receiver_id: Receiver identifier, used in the sender's title.
        amount: Amount moved.
        memo: Optional note added to both titles.

    Returns:
        Committed with both transactions, or Rejected with the reason.
    """
    if sender_id is None or receiver_id is None or not sender_id.strip() or not receiver_id.strip():
        return Rejected("sender and receiver must not be empty")
    if sender_id.strip() == receiver_id.strip():
        return Rejected("cannot transfer money to self")
    if not is_valid_amount(amount):
        return Rejected("amount must be a positive finite number")
    if sender_ledger is None:
        return Rejected(f"unknown sender: {sender_id}")
    if receiver_ledger is None:
        return Rejected(f"unknown receiver: {receiver_id}")

    sender_id, receiver_id = sender_id.strip(), receiver_id.strip()
    outgoing_title, incoming_title = transfer_titles(sender_id, receiver_id, memo)

    expense = create_transaction(amount, outgoing_title, TransactionType.EXPENSE)
    if isinstance(expense, Err):
        return Rejected(expense.message)
    income = create_transaction(amount, incoming_title, TransactionType.INCOME, expense.value.date)
    if isinstance(income, Err):
        return Rejected(income.message)

    sender_ledger.add(expense.value)
    receiver_ledger.add(income.value)
    logger.debug("Transferred %.2f from %s to %s", amount, sender_id, receiver_id)

    return Committed(
        sender=sender_id,
        receiver=receiver_id,
        amount=float(amount),
        expense=expense.value,
        income=income.value,
    )
