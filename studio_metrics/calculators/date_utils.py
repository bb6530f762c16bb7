"""Date utilities for the metrics engine.

This module provides the date arithmetic behind cycle times, monthly
bucketing and renewal countdowns:
- Parsing raw store values into datetimes
- Exact day spans between two datetimes
- ``YYYY-MM`` bucket keys and short month labels
- Days remaining until a date, relative to an injected ``today``

Functions here never read the system clock; callers pass "now" in.
"""

import calendar
import datetime as dt
from decimal import Decimal
from typing import Any, Optional

from studio_metrics.calculators.number_utils import round_to_int
from studio_metrics.models.coercion import coerce_datetime

MICROSECONDS_PER_DAY = Decimal(86_400_000_000)


def parse_date(value: Any) -> Optional[dt.datetime]:
    """Parse a raw date value, returning None when absent or invalid.

    Example:
        >>> parse_date("2024-03-10")
        datetime.datetime(2024, 3, 10, 0, 0)
        >>> parse_date("2024-13-45") is None
        True
    """
    return coerce_datetime(value)


def days_between(start: dt.datetime, end: dt.datetime) -> Decimal:
    """Calculate the exact number of days from start to end.

    Args:
        start: Start datetime
        end: End datetime

    Returns:
        Fractional day count (negative when end precedes start)

    Example:
        >>> days_between(dt.datetime(2024, 1, 1), dt.datetime(2024, 2, 15))
        Decimal('45')
    """
    delta = end - start
    microseconds = delta // dt.timedelta(microseconds=1)
    return Decimal(microseconds) / MICROSECONDS_PER_DAY


def cycle_days(
    start: Optional[dt.datetime], end: Optional[dt.datetime]
) -> Optional[int]:
    """Whole days between start and end, or None if either is missing.

    Example:
        >>> cycle_days(dt.datetime(2024, 1, 1), dt.datetime(2024, 2, 15))
        45
        >>> cycle_days(None, dt.datetime(2024, 2, 15)) is None
        True
    """
    if start is None or end is None:
        return None
    return round_to_int(days_between(start, end))


def month_key(value: dt.date) -> str:
    """Return the ``YYYY-MM`` bucket key for a date.

    Keys sort chronologically as plain strings.

    Example:
        >>> month_key(dt.date(2024, 3, 10))
        '2024-03'
    """
    return f"{value.year:04d}-{value.month:02d}"


def month_label(key: str) -> str:
    """Convert a ``YYYY-MM`` key into a short month label.

    Args:
        key: Month key as produced by :func:`month_key`

    Returns:
        Abbreviated month name (``"Mar"``), or ``"Invalid"`` for a key that
        does not parse

    Example:
        >>> month_label("2024-03")
        'Mar'
    """
    try:
        year_str, month_str = key.split("-")
        year = int(year_str)
        month = int(month_str)
    except ValueError:
        return "Invalid"

    if year < 1 or not 1 <= month <= 12:
        return "Invalid"
    return calendar.month_abbr[month]


def days_until(target: Any, today: dt.date) -> Optional[int]:
    """Whole days from ``today`` until ``target``.

    Used for renewal countdowns. A negative result means the date has passed.

    Args:
        target: Raw or parsed target date
        today: The current date, injected by the caller

    Returns:
        Day count, or None when the target date is absent or invalid

    Example:
        >>> days_until("2024-07-01", dt.date(2024, 6, 1))
        30
    """
    parsed = coerce_datetime(target)
    if parsed is None:
        return None
    start = dt.datetime(today.year, today.month, today.day)
    return round_to_int(days_between(start, parsed))


def days_elapsed(since: Any, today: dt.date) -> Optional[int]:
    """Whole days elapsed since ``since``; None when the date is absent."""
    remaining = days_until(since, today)
    if remaining is None:
        return None
    return -remaining
