"""Snapshot export and import-merge for a wallet.

A snapshot is the JSON document form of a ledger plus its budgets::

    {"transactions": [{"id", "date", "type", "title", "amount"}, ...],
     "budgets": {"<category>": <limit>}}

Importing is all-or-nothing for syntax errors and forgiving per record: a
defective transaction entry or budget value is skipped while the rest of the
batch is merged. Incoming transactions are deduplicated by id, or by
signature when they carry no id.
"""

import json
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from walletbook.dates import normalize_iso_date
from walletbook.domain.budget import BudgetTracker
from walletbook.domain.ledger import Ledger
from walletbook.domain.models import Transaction, TransactionType, create_transaction
from walletbook.domain.results import Err, ErrorKind, Ok, Result
from walletbook.logging_utils import get_logger

logger = get_logger(__name__)

Signature = tuple[str, str, str, Decimal]

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class ImportStats:
    """Counters reported after merging a snapshot."""

    imported: int
    skipped_duplicates: int
    budgets_updated: int
    rejected: int = 0


def round_amount(amount: float) -> Decimal:
    """Round half-up to cents using the shortest decimal form of the float."""
    return Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP)


def signature(date: str, type: TransactionType | str, title: str, amount: float) -> Signature:
    """Fallback identity for transactions without an id.

    Returns:
        Tuple of (date, TYPE, trimmed title, amount rounded to 2 decimals).
    """
    return (date.strip(), TransactionType.parse(type).value, title.strip(), round_amount(amount))


def transaction_signature(transaction: Transaction) -> Signature:
    return signature(transaction.date, transaction.type, transaction.title, transaction.amount)


# --- Parsing ---


def _reject_constant(name: str) -> float:
    raise ValueError(f"Invalid JSON constant {name}")


def json_path_at(document: str, position: int) -> str:
    """Best-effort JSON path of the value being read at a character offset.

    Args:
        document: JSON text, possibly malformed after ``position``.
        position: Offset of the parse error.

    Returns:
        Path such as ``$.transactions[3].title``.
    """
    # Each frame is [container, key or index, expecting_key]
    frames: list[list[Any]] = []
    i = 0
    end = min(position, len(document))

    while i < end:
        ch = document[i]
        if ch == '"':
            j = i + 1
            while j < len(document) and document[j] != '"':
                j += 2 if document[j] == "\\" else 1
            literal = document[i : j + 1]
            if frames and frames[-1][0] == "object" and frames[-1][2]:
                try:
                    frames[-1][1] = json.loads(literal)
                except ValueError:
                    frames[-1][1] = literal.strip('"')
                frames[-1][2] = False
            i = j + 1
            continue
        if ch == "{":
            frames.append(["object", None, True])
        elif ch == "[":
            frames.append(["array", 0, False])
        elif ch in "}]":
            if frames:
                frames.pop()
        elif ch == "," and frames:
            if frames[-1][0] == "array":
                frames[-1][1] += 1
            else:
                frames[-1][1] = None
                frames[-1][2] = True
        i += 1

    path = "$"
    for container, key, _ in frames:
        if container == "array":
            path += f"[{key}]"
        elif key is not None:
            path += f".{key}"
    return path


def describe_decode_error(document: str, error: json.JSONDecodeError) -> str:
    """Human-readable location of a JSON syntax error.

    Returns:
        Message with line, column and path, e.g.
        ``line 4, column 12, path $.transactions[0].title: Expecting ':' delimiter``.
    """
    location = f"line {error.lineno}, column {error.colno}"
    try:
        location += f", path {json_path_at(document, error.pos)}"
    except (IndexError, TypeError, ValueError):
        pass
    return f"{location}: {error.msg}"


def parse_snapshot(raw: str | bytes) -> Result[dict[str, Any]]:
    """Parse snapshot text strictly.

    Args:
        raw: JSON document as text or UTF-8 bytes.

    Returns:
        Ok with the decoded object, or Err(MALFORMED_INPUT) describing where parsing failed.
    """
    try:
        document = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as e:
        return Err(ErrorKind.MALFORMED_INPUT, f"Snapshot is not valid UTF-8: {e}")

    try:
        root = json.loads(document, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        message = f"Snapshot JSON is malformed ({describe_decode_error(document, e)})"
        logger.warning(message)
        return Err(ErrorKind.MALFORMED_INPUT, message)
    except ValueError as e:
        logger.warning("Snapshot JSON is malformed: %s", e)
        return Err(ErrorKind.MALFORMED_INPUT, f"Snapshot JSON is malformed ({e})")

    if not isinstance(root, dict):
        return Err(ErrorKind.MALFORMED_INPUT, "Snapshot JSON is malformed (root must be an object)")

    return Ok(root)


# --- Record extraction ---


def _get_str(entry: dict[str, Any], key: str) -> str | None:
    value = entry.get(key)
    if not isinstance(value, str):
        return None
    return value.strip()


def _get_amount(entry: dict[str, Any], key: str) -> float | None:
    value = entry.get(key)
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        return float(value.strip() if isinstance(value, str) else value)
    except (OverflowError, ValueError):
        return None


@dataclass(frozen=True)
class _Record:
    id: str | None
    date: str
    type: TransactionType
    title: str
    amount: float


def read_record(entry: Any) -> _Record | None:
    """Extract a transaction record from a snapshot entry.

    Args:
        entry: One element of the snapshot's transaction list.

    Returns:
        The record, or None if a required field is missing or invalid.
    """
    if not isinstance(entry, dict):
        return None

    type_text = _get_str(entry, "type")
    title = _get_str(entry, "title")
    amount = _get_amount(entry, "amount")
    if type_text is None or not title or amount is None:
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None

    try:
        txn_type = TransactionType.parse(type_text)
    except ValueError:
        return None

    # "dateIso" is the key older exports used
    date_text = _get_str(entry, "date") or _get_str(entry, "dateIso")
    try:
        date = normalize_iso_date(date_text)
    except ValueError:
        return None

    return _Record(id=_get_str(entry, "id") or None, date=date, type=txn_type, title=title, amount=amount)


# --- Merge ---


def merge_snapshot(ledger: Ledger, budgets: BudgetTracker, document: dict[str, Any]) -> ImportStats:
    """Merge a parsed snapshot into a live wallet.

    Args:
        ledger: Target ledger.
        budgets: Target budget tracker (bound to the same ledger).
        document: Parsed snapshot object.

    Returns:
        ImportStats with imported, duplicate, budget and rejected counts.
    """
    seen_ids = {t.id for t in ledger}
    seen_signatures = {transaction_signature(t) for t in ledger}

    imported = 0
    duplicates = 0
    rejected = 0

    entries = document.get("transactions")
    if entries is not None and not isinstance(entries, list):
        logger.warning("Ignoring 'transactions': expected a list, got %s", type(entries).__name__)
        entries = None

    for entry in entries or []:
        record = read_record(entry)
        if record is None:
            rejected += 1
            continue

        sig = signature(record.date, record.type, record.title, record.amount)
        if record.id is not None and record.id in seen_ids:
            duplicates += 1
            continue
        if record.id is None and sig in seen_signatures:
            duplicates += 1
            continue

        result = create_transaction(record.amount, record.title, record.type, record.date, record.id)
        if isinstance(result, Err):
            rejected += 1
            continue

        ledger.add(result.value)
        seen_ids.add(result.value.id)
        seen_signatures.add(sig)
        imported += 1

    budgets_updated = 0
    limits = document.get("budgets")
    if limits is not None and not isinstance(limits, dict):
        logger.warning("Ignoring 'budgets': expected an object, got %s", type(limits).__name__)
        limits = None

    for category, limit in (limits or {}).items():
        if isinstance(limit, bool) or not isinstance(limit, (int, float)):
            continue
        if isinstance(budgets.set_limit(category, limit), Ok):
            budgets_updated += 1

    stats = ImportStats(
        imported=imported,
        skipped_duplicates=duplicates,
        budgets_updated=budgets_updated,
        rejected=rejected,
    )
    logger.debug("Merged snapshot: %s", stats)
    return stats


def import_snapshot(ledger: Ledger, budgets: BudgetTracker, raw: str | bytes) -> Result[ImportStats]:
    """Parse and merge a snapshot document.

    Returns:
        Ok with ImportStats, or Err(MALFORMED_INPUT) with nothing merged.
    """
    parsed = parse_snapshot(raw)
    if isinstance(parsed, Err):
        return parsed
    return Ok(merge_snapshot(ledger, budgets, parsed.value))


# --- Export ---


def export_snapshot(ledger: Ledger, budgets: BudgetTracker) -> dict[str, Any]:
    """Serialize a wallet to the snapshot schema."""
    return {
        "transactions": [
            {
                "id": t.id,
                "date": t.date,
                "type": t.type.value,
                "title": t.title,
                "amount": t.amount,
            }
            for t in ledger
        ],
        "budgets": budgets.limits(),
    }


def dumps_snapshot(ledger: Ledger, budgets: BudgetTracker) -> str:
    """Export a wallet as pretty-printed JSON text."""
    return json.dumps(export_snapshot(ledger, budgets), indent=2, ensure_ascii=False)
