"""The per-user transaction ledger.

A Ledger owns an insertion-ordered, append-only sequence of transactions and a
cache of expense totals per category. The cache always equals the sum of
EXPENSE amounts grouped by title, except that category renames move cached
spend to the new name without relabelling historical transactions.
"""

import math
from collections.abc import Iterable, Iterator, Mapping
from datetime import date

from walletbook.domain.models import (
    Amount,
    CategoryName,
    Transaction,
    TransactionType,
    create_transaction,
)
from walletbook.domain.queries import filter_transactions
from walletbook.domain.results import Err, Ok, Result
from walletbook.logging_utils import get_logger

logger = get_logger(__name__)


class Ledger:
    """Ordered transaction log belonging to one user."""

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._transactions: list[Transaction] = []
        self._ids: set[str] = set()
        self._spent: dict[CategoryName, Amount] = {}
        for transaction in transactions:
            self.add(transaction)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    def append(
        self,
        amount: float,
        title: str | None,
        type: TransactionType | str | None,
        date: str | date | None = None,
    ) -> Result[Transaction]:
        """Validate and append a new transaction.

        Args:
            amount: Positive finite amount.
            title: Title, also the category key.
            type: Income or expense.
            date: Optional YYYY-MM-DD date, today if omitted.

        Returns:
            Ok with the appended Transaction, or the validation Err (ledger untouched).
        """
        result = create_transaction(amount, title, type, date)
        if isinstance(result, Err):
            return result
        return Ok(self.add(result.value))

    def add(self, transaction: Transaction) -> Transaction:
        """Append an already validated transaction and update the spend cache."""
        self._transactions.append(transaction)
        self._ids.add(transaction.id)
        if transaction.is_expense:
            self._spent[transaction.title] = Amount(self._spent.get(transaction.title, 0.0) + transaction.amount)
        logger.debug(
            "Appended %s %.2f '%s' on %s",
            transaction.type.value,
            transaction.amount,
            transaction.title,
            transaction.date,
        )
        return transaction

    def has_id(self, transaction_id: str) -> bool:
        return transaction_id in self._ids

    def balance(self) -> float:
        """Sum of income minus sum of expenses, recomputed by full scan."""
        return self.sum_income() - self.sum_expense()

    def sum_income(self) -> float:
        return sum(t.amount for t in self._transactions if t.is_income)

    def sum_expense(self) -> float:
        return sum(t.amount for t in self._transactions if t.is_expense)

    def totals_by_category(self, type: TransactionType | str) -> dict[CategoryName, float]:
        """Sum amounts per title for one transaction type, in first-appearance order."""
        txn_type = TransactionType.parse(type)
        totals: dict[CategoryName, float] = {}
        for transaction in self._transactions:
            if transaction.type is txn_type:
                totals[transaction.title] = totals.get(transaction.title, 0.0) + transaction.amount
        return totals

    def spent(self, category: str) -> float:
        """Cached expense total for a category, 0 when nothing was spent."""
        return self._spent.get(CategoryName(category), 0.0)

    def spent_by_category(self) -> dict[CategoryName, float]:
        return dict(self._spent)

    def move_spent(self, old: CategoryName, new: CategoryName) -> bool:
        """Move cached spend from one category to another, merging by addition.

        Returns:
            True if the old category had cached spend.
        """
        if old not in self._spent:
            return False
        moved = self._spent.pop(old)
        self._spent[new] = Amount(self._spent.get(new, 0.0) + moved)
        return True

    def restore_spent(self, totals: Mapping[str, object]) -> None:
        """Replace the spend cache with totals saved alongside the transactions.

        Saved totals carry spend moved by category renames, which the
        transaction titles alone cannot reproduce. Entries that are not
        finite, non-negative numbers are dropped.
        """
        restored: dict[CategoryName, Amount] = {}
        for category, amount in totals.items():
            if not isinstance(category, str) or not category.strip():
                continue
            if isinstance(amount, bool) or not isinstance(amount, (int, float)):
                continue
            try:
                value = float(amount)
            except OverflowError:
                continue
            if math.isfinite(value) and value >= 0:
                restored[CategoryName(category.strip())] = Amount(value)
        self._spent = restored

    def find(
        self,
        from_date: str | date | None = None,
        to_date: str | date | None = None,
        categories: Iterable[str | None] | None = None,
        type: TransactionType | str | None = None,
    ) -> list[Transaction]:
        """Filter this ledger's transactions, see ``queries.filter_transactions``."""
        return filter_transactions(self._transactions, from_date, to_date, categories, type)
