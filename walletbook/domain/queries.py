"""Pure functions for filtering and aggregating transactions.

This module contains the functional core for queries:
- No I/O operations
- Never mutates the ledger
- Results sorted by date, stable for equal dates

Bounds are inclusive. An inverted range (to before from) matches nothing;
swapping bounds is left to the caller (see ``walletbook.dates.order_bounds``).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from walletbook.dates import parse_iso_date
from walletbook.domain.models import CategoryName, Transaction, TransactionType


@dataclass(frozen=True)
class QuerySummary:
    """Immutable statistics for a date range and category set."""

    total_income: float
    total_expense: float
    income_by_category: dict[CategoryName, float]
    expense_by_category: dict[CategoryName, float]
    transactions: list[Transaction]


def normalize_categories(categories: Iterable[str | None] | None) -> frozenset[str]:
    """Drop None/blank entries and trim the rest.

    Args:
        categories: Optional category names.

    Returns:
        Normalized set; empty means "all categories".
    """
    if not categories:
        return frozenset()
    return frozenset(c.strip() for c in categories if c is not None and c.strip())


def _bound(value: str | date | None) -> date | None:
    return None if value is None else parse_iso_date(value)


def filter_transactions(
    transactions: Iterable[Transaction],
    from_date: str | date | None = None,
    to_date: str | date | None = None,
    categories: Iterable[str | None] | None = None,
    type: TransactionType | str | None = None,
) -> list[Transaction]:
    """Filter transactions by type, inclusive date range and category set.

    Args:
        transactions: Transactions in insertion order.
        from_date: Optional inclusive lower bound.
        to_date: Optional inclusive upper bound.
        categories: Optional titles to keep; None/empty keeps all.
        type: Optional transaction type.

    Returns:
        Matching transactions sorted ascending by date, ties in insertion order.

    Raises:
        ValueError: If a bound is not a valid YYYY-MM-DD date.
    """
    lower = _bound(from_date)
    upper = _bound(to_date)
    wanted = normalize_categories(categories)
    txn_type = TransactionType.parse(type) if type is not None else None

    matches = []
    for transaction in transactions:
        if txn_type is not None and transaction.type is not txn_type:
            continue
        day = parse_iso_date(transaction.date)
        if lower is not None and day < lower:
            continue
        if upper is not None and day > upper:
            continue
        if wanted and transaction.title.strip() not in wanted:
            continue
        matches.append(transaction)

    return sorted(matches, key=lambda t: t.date)


def sum_amounts(
    transactions: Iterable[Transaction],
    from_date: str | date | None = None,
    to_date: str | date | None = None,
    categories: Iterable[str | None] | None = None,
    type: TransactionType | str | None = None,
) -> float:
    """Sum amounts over the filtered transactions."""
    return sum(t.amount for t in filter_transactions(transactions, from_date, to_date, categories, type))


def group_by_category(
    transactions: Iterable[Transaction],
    from_date: str | date | None = None,
    to_date: str | date | None = None,
    categories: Iterable[str | None] | None = None,
    type: TransactionType | str | None = None,
) -> dict[CategoryName, float]:
    """Sum amounts per trimmed title over the filtered transactions.

    Returns:
        Dictionary in order of first appearance in the date-sorted result.
    """
    totals: dict[CategoryName, float] = {}
    for transaction in filter_transactions(transactions, from_date, to_date, categories, type):
        key = CategoryName(transaction.title.strip())
        totals[key] = totals.get(key, 0.0) + transaction.amount
    return totals


def summarize(
    transactions: Iterable[Transaction],
    from_date: str | date | None = None,
    to_date: str | date | None = None,
    categories: Iterable[str | None] | None = None,
) -> QuerySummary:
    """Build income/expense statistics for a period and category set."""
    items = list(transactions)
    return QuerySummary(
        total_income=sum_amounts(items, from_date, to_date, categories, TransactionType.INCOME),
        total_expense=sum_amounts(items, from_date, to_date, categories, TransactionType.EXPENSE),
        income_by_category=group_by_category(items, from_date, to_date, categories, TransactionType.INCOME),
        expense_by_category=group_by_category(items, from_date, to_date, categories, TransactionType.EXPENSE),
        transactions=filter_transactions(items, from_date, to_date, categories),
    )
