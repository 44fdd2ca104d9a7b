"""Per-category spending budgets.

This module contains the budget half of a wallet:
- Limits per category, kept in insertion order for display
- Spent amounts read from the ledger's cache
- Threshold alerts at 80%, 90% and 100% of a limit

An unset limit counts as 0 for ``remaining``, so all spend in an unbudgeted
category shows as over budget.
"""

import math
from dataclasses import dataclass
from enum import Enum

from walletbook.domain.ledger import Ledger
from walletbook.domain.models import Amount, CategoryName
from walletbook.domain.results import Err, Ok, Result, invalid

WARNING_80 = 0.8
WARNING_90 = 0.9
EXCEEDED = 1.0


class AlertLevel(str, Enum):
    """Alert severities, highest first."""

    EXCEEDED = "exceeded"
    WARNING_90 = "warning_90"
    WARNING_80 = "warning_80"


@dataclass(frozen=True)
class BudgetAlert:
    """Immutable threshold alert for one category."""

    category: CategoryName
    level: AlertLevel
    limit: float
    spent: float

    @property
    def used(self) -> float:
        return self.spent / self.limit

    @property
    def overage(self) -> float:
        return self.spent - self.limit

    @property
    def message(self) -> str:
        if self.level is AlertLevel.EXCEEDED:
            return f"Budget exceeded: {self.category} by {self.overage:.2f}"
        threshold = "90" if self.level is AlertLevel.WARNING_90 else "80"
        return f"Budget warning (≥{threshold}%): {self.category} used {round(self.used * 100)}%"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class BudgetCategoryStatus:
    """Immutable budget status for a single category."""

    category: CategoryName
    limit: float
    spent: float
    remaining: float


def classify_usage(spent: float, limit: float) -> AlertLevel | None:
    """Pick the highest alert level for a spent/limit pair.

    Args:
        spent: Amount spent in the category.
        limit: Budget limit; limits <= 0 never alert.

    Returns:
        AlertLevel or None when below 80% or unlimited.
    """
    if limit <= 0:
        return None
    used = spent / limit
    if used >= EXCEEDED:
        return AlertLevel.EXCEEDED
    if used >= WARNING_90:
        return AlertLevel.WARNING_90
    if used >= WARNING_80:
        return AlertLevel.WARNING_80
    return None


def _validate_limit(category: str | None, limit: float) -> Err | None:
    if category is None or not category.strip():
        return invalid("category must not be blank")
    if isinstance(limit, bool) or not isinstance(limit, (int, float)):
        return invalid("limit must be a number")
    try:
        value = float(limit)
    except OverflowError:
        return invalid("limit must be a finite number >= 0")
    if not math.isfinite(value) or value < 0:
        return invalid("limit must be a finite number >= 0")
    return None


class BudgetTracker:
    """Category limits for one wallet, reading spend from its Ledger."""

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger
        self._limits: dict[CategoryName, Amount] = {}

    def set_limit(self, category: str, limit: float) -> Result[float]:
        """Set or overwrite the limit for a category.

        Returns:
            Ok with the stored limit, or Err(VALIDATION).
        """
        error = _validate_limit(category, limit)
        if error:
            return error
        self._limits[CategoryName(category.strip())] = Amount(float(limit))
        return Ok(float(limit))

    def update_limit(self, category: str, limit: float) -> Result[bool]:
        """Change the limit of a category that already has one.

        Returns:
            Ok(True) if updated, Ok(False) if the category has no limit, or Err(VALIDATION).
        """
        error = _validate_limit(category, limit)
        if error:
            return error
        key = CategoryName(category.strip())
        if key not in self._limits:
            return Ok(False)
        self._limits[key] = Amount(float(limit))
        return Ok(True)

    def limit(self, category: str) -> float | None:
        return self._limits.get(CategoryName(category.strip()))

    def limits(self) -> dict[CategoryName, float]:
        return dict(self._limits)

    def categories(self) -> list[CategoryName]:
        return list(self._limits)

    def spent(self, category: str) -> float:
        return self._ledger.spent(category.strip())

    def remaining(self, category: str) -> float:
        """Limit minus spent, with an unset limit counted as 0."""
        return (self.limit(category) or 0.0) - self.spent(category)

    def remove_limit(self, category: str) -> bool:
        """Remove a category limit; False if there was none."""
        return self._limits.pop(CategoryName(category.strip()), None) is not None

    def rename_category(self, old_name: str | None, new_name: str | None) -> bool:
        """Move a category's limit and cached spend to a new name.

        A limit already present under the new name is overwritten; spend is
        merged by addition. Historical transaction titles are not rewritten.

        Args:
            old_name: Current category name.
            new_name: Target category name.

        Returns:
            True if a limit or spent amount was moved.
        """
        if old_name is None or new_name is None:
            return False
        old = CategoryName(old_name.strip())
        new = CategoryName(new_name.strip())
        if not old or not new or old == new:
            return False

        changed = False
        if old in self._limits:
            self._limits[new] = self._limits.pop(old)
            changed = True

        if self._ledger.move_spent(old, new):
            changed = True

        return changed

    def alerts(self) -> list[BudgetAlert]:
        """One alert per category at or above 80% of a positive limit."""
        alerts: list[BudgetAlert] = []
        for category, limit in self._limits.items():
            spent = self._ledger.spent(category)
            level = classify_usage(spent, limit)
            if level is not None:
                alerts.append(BudgetAlert(category=category, level=level, limit=limit, spent=spent))
        return alerts

    def status(self) -> list[BudgetCategoryStatus]:
        """Limit, spent and remaining for every budgeted category."""
        return [
            BudgetCategoryStatus(
                category=category,
                limit=limit,
                spent=self._ledger.spent(category),
                remaining=limit - self._ledger.spent(category),
            )
            for category, limit in self._limits.items()
        ]
