"""Numeric helpers shared by the calculators.

All money is carried as Decimal. Rounding is always half-up on the exact
decimal value, so 33.45 rounds to 33.5 and 2.5 days round to 3.
"""

from decimal import ROUND_HALF_UP, Context, Decimal, getcontext
from typing import Iterable

ZERO = Decimal("0")
HUNDRED = Decimal("100")
ONE_DECIMAL = Decimal("0.1")
WHOLE = Decimal("1")


def round_half_up(value: Decimal, exponent: Decimal = WHOLE) -> Decimal:
    """Round a Decimal half-up to the given exponent.

    Args:
        value: The value to round
        exponent: Quantization exponent (``Decimal("1")`` for whole numbers,
            ``Decimal("0.1")`` for one decimal place)

    Returns:
        Rounded value

    Example:
        >>> round_half_up(Decimal("33.45"), ONE_DECIMAL)
        Decimal('33.5')
        >>> round_half_up(Decimal("2.5"))
        Decimal('3')
    """
    # Negative halves round away from zero: -2.5 becomes -3, not -2.
    # quantize needs room for every digit of the result, which a margin on a
    # tiny price (-1E+36 at one decimal) exceeds under the default precision.
    digits = max(value.adjusted(), 0) - exponent.as_tuple().exponent + 2
    context = Context(prec=max(getcontext().prec, digits))
    return value.quantize(exponent, rounding=ROUND_HALF_UP, context=context)


def round_to_int(value: Decimal) -> int:
    """Round half-up to a whole number and return it as int."""
    return int(round_half_up(value, WHOLE))


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100``, or 0 when ``whole`` is not positive.

    Example:
        >>> percentage(Decimal("6000"), Decimal("10000"))
        Decimal('60.0')
        >>> percentage(Decimal("-500"), Decimal("0"))
        Decimal('0')
    """
    if whole <= ZERO:
        return ZERO
    return (part / whole) * HUNDRED


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum Decimals, returning ``Decimal("0")`` for an empty iterable."""
    return sum(values, ZERO)
