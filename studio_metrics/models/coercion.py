"""Lenient coercion of raw store values into numbers and dates.

Rows arrive from the data store as loosely typed JSON. The metrics engine
never fails on a malformed field: a value that cannot be read as a finite
number becomes ``Decimal("0")`` and a value that cannot be read as a date
becomes ``None``.
"""

import datetime as dt
import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def coerce_decimal(value: Any) -> Decimal:
    """Convert a raw numeric value to a finite Decimal.

    Args:
        value: Raw value from the store (number, numeric string, None, ...)

    Returns:
        The value as a Decimal, or ``Decimal("0")`` when absent or malformed

    Example:
        >>> coerce_decimal("1250.50")
        Decimal('1250.50')
        >>> coerce_decimal(None)
        Decimal('0')
        >>> coerce_decimal(float("nan"))
        Decimal('0')
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        text = str(value).strip()
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            logger.debug(f"Treating non-numeric value {value!r} as 0")
            return ZERO
    else:
        logger.debug(f"Treating unsupported value {value!r} as 0")
        return ZERO

    # Values beyond the float range (1e400) are Infinity for the store
    if not result.is_finite() or math.isinf(float(result)):
        logger.debug(f"Treating non-finite value {value!r} as 0")
        return ZERO
    return result


def coerce_datetime(value: Any) -> Optional[dt.datetime]:
    """Convert a raw date or timestamp value to a naive UTC datetime.

    Accepts ``date``/``datetime`` objects and ISO 8601 strings
    (``2024-03-01``, ``2024-03-01T10:00:00Z``, ``2024-03-01T10:00:00+02:00``).
    Aware values are converted to UTC and made naive so that all dates can be
    subtracted from each other.

    Args:
        value: Raw value from the store

    Returns:
        Parsed datetime, or None when absent or unparseable

    Example:
        >>> coerce_datetime("2024-02-15")
        datetime.datetime(2024, 2, 15, 0, 0)
        >>> coerce_datetime("not a date") is None
        True
    """
    if value is None:
        return None

    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            logger.debug(f"Treating unparseable date {value!r} as absent")
            return None
    else:
        logger.debug(f"Treating unsupported date value {value!r} as absent")
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return parsed
