"""Domain types for walletbook.

These NewTypes provide semantic clarity and help with type checking:
- Amount: A positive monetary amount in major units (e.g. 12.50)
- CategoryName: Budget category, which is always a transaction title
- UserId: Identifier of a wallet owner in the directory
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import NewType

from walletbook.dates import normalize_iso_date
from walletbook.domain.results import Ok, Result, invalid

Amount = NewType("Amount", float)

CategoryName = NewType("CategoryName", str)

UserId = NewType("UserId", str)


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

    @classmethod
    def parse(cls, value: "str | TransactionType") -> "TransactionType":
        """Coerce arbitrary casing into a transaction type.

        Raises:
            ValueError: If the value is not income or expense.
        """
        if isinstance(value, TransactionType):
            return value
        try:
            return cls(value.strip().upper())
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Unsupported transaction type: {value!r}") from e


def new_transaction_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, eq=False)
class Transaction:
    """Immutable ledger entry. Identity is the id alone."""

    amount: Amount
    title: CategoryName
    type: TransactionType
    date: str
    id: str = field(default_factory=new_transaction_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE


def is_valid_amount(amount: object) -> bool:
    """Check that an amount is a real, finite, strictly positive number."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    try:
        value = float(amount)
    except OverflowError:
        return False
    return math.isfinite(value) and value > 0


def create_transaction(
    amount: float,
    title: str | None,
    type: TransactionType | str | None,
    date: str | date | None = None,
    id: str | None = None,
) -> Result[Transaction]:
    """Validate fields and build a Transaction.

    Args:
        amount: Positive finite amount.
        title: Category/title text, trimmed before storing.
        type: TransactionType or case-insensitive "income"/"expense".
        date: YYYY-MM-DD string or date; None/blank means today.
        id: Existing identifier to keep; a new uuid is generated if None/blank.

    Returns:
        Ok with the new Transaction, or Err(VALIDATION) naming the bad field.
    """
    if not is_valid_amount(amount):
        return invalid("amount must be a positive finite number")

    if title is None or not isinstance(title, str) or not title.strip():
        return invalid("title must not be blank")

    if type is None:
        return invalid("type must not be empty")
    try:
        txn_type = TransactionType.parse(type)
    except ValueError as e:
        return invalid(str(e))

    try:
        date_iso = normalize_iso_date(date)
    except ValueError as e:
        return invalid(str(e))

    txn_id = id.strip() if id and id.strip() else new_transaction_id()

    return Ok(
        Transaction(
            amount=Amount(float(amount)),
            title=CategoryName(title.strip()),
            type=txn_type,
            date=date_iso,
            id=txn_id,
        )
    )
