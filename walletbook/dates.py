"""Date utilities for walletbook.

Pure functions for parsing ISO dates and ordering query bounds.
"""

import re
from datetime import date, datetime

ISO_FORMAT = "%Y-%m-%d"

_ISO_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def today_iso() -> str:
    """Today's date in YYYY-MM-DD format."""
    return date.today().strftime(ISO_FORMAT)


def parse_iso_date(value: str | date) -> date:
    """Parse a strict YYYY-MM-DD string into a date.

    Args:
        value: Date string (surrounding whitespace ignored) or a date.

    Returns:
        The parsed calendar date.

    Raises:
        ValueError: If the value is not a real calendar date in YYYY-MM-DD form.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")

    text = value.strip()
    if not _ISO_PATTERN.match(text):
        raise ValueError(f"Invalid date '{text}', expected YYYY-MM-DD")
    return datetime.strptime(text, ISO_FORMAT).date()


def normalize_iso_date(value: str | date | None) -> str:
    """Normalize an optional date to YYYY-MM-DD, defaulting to today.

    Args:
        value: Date string, date, or None/blank for today.

    Returns:
        Date in YYYY-MM-DD format.

    Raises:
        ValueError: If a non-blank value does not parse.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return today_iso()
    return parse_iso_date(value).strftime(ISO_FORMAT)


def order_bounds(from_date: date | None, to_date: date | None) -> tuple[date | None, date | None, bool]:
    """Swap an inverted date range for display layers.

    The query functions treat an inverted range as empty; callers that want to be
    forgiving swap the bounds here and tell the user.

    Args:
        from_date: Optional lower bound.
        to_date: Optional upper bound.

    Returns:
        Tuple of (from_date, to_date, swapped).
    """
    if from_date is not None and to_date is not None and to_date < from_date:
        return to_date, from_date, True
    return from_date, to_date, False
