"""Domain core for walletbook.

This package contains the functional core:
- No I/O operations (no files, no console)
- Ledger, budgets, queries, transfers and snapshot merging
- Failures returned as Ok/Err values
"""

from walletbook.domain.budget import BudgetTracker
from walletbook.domain.ledger import Ledger
from walletbook.domain.models import Amount, CategoryName, Transaction, TransactionType, UserId
from walletbook.domain.results import Err, ErrorKind, Ok, Result

__all__ = [
    "Amount",
    "BudgetTracker",
    "CategoryName",
    "Err",
    "ErrorKind",
    "Ledger",
    "Ok",
    "Result",
    "Transaction",
    "TransactionType",
    "UserId",
]
