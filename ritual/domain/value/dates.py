"""Calendar date keys.

Progress is bucketed by local calendar day. Date keys are ISO ``YYYY-MM-DD``
strings so they survive JSON round-trips and compare lexically in date order.
"""

from datetime import date, datetime
from typing import Any

DateKey = str


def date_key(value: date | datetime) -> DateKey:
    """Return the date key for a date or local datetime."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_date_key(value: Any) -> date | None:
    """Parse a date key, returning None for anything malformed."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def normalize_date_key(value: Any) -> DateKey | None:
    """Coerce a stored value to a canonical date key or None."""
    parsed = parse_date_key(value)
    return parsed.isoformat() if parsed else None


def day_difference(earlier: DateKey, later: DateKey) -> int | None:
    """Whole calendar days from ``earlier`` to ``later``.

    Computed on calendar dates, not elapsed time, so a midnight crossing
    always counts as one day.
    """
    start = parse_date_key(earlier)
    end = parse_date_key(later)
    if start is None or end is None:
        return None
    return (end - start).days


def latest_date_key(*values: DateKey | None) -> DateKey | None:
    """Most recent valid date key among the values."""
    valid = [key for key in (normalize_date_key(v) for v in values) if key]
    return max(valid) if valid else None
