"""Payment statistics and advance/final split calculations.

Projects are billed in two instalments: an advance when work starts and a
final payment on completion. The default split is 40/60.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Union

from studio_metrics.calculators.number_utils import HUNDRED, ZERO
from studio_metrics.models.coercion import coerce_decimal
from studio_metrics.models.payment import Payment

DEFAULT_ADVANCE_PERCENTAGE = Decimal("40")


@dataclass(frozen=True)
class PaymentStats:
    """Totals of received and outstanding payments.

    Attributes:
        total_received: Sum of amounts with status ``paid``
        total_pending: Sum of all other amounts
    """

    total_received: Decimal
    total_pending: Decimal


@dataclass(frozen=True)
class PaymentSplit:
    """Advance and final amounts for a project price."""

    advance: Decimal
    final: Decimal


def summarize_payments(payments: Iterable[Payment]) -> PaymentStats:
    """Partition payments by status and sum their amounts.

    Project status plays no part; every payment row is counted exactly once.

    Args:
        payments: Payment rows

    Returns:
        PaymentStats with received and pending totals

    Example:
        >>> stats = summarize_payments([
        ...     Payment(id="1", type="advance", amount=4000, status="paid"),
        ...     Payment(id="2", type="final", amount=6000, status="pending"),
        ... ])
        >>> stats.total_received, stats.total_pending
        (Decimal('4000'), Decimal('6000'))
    """
    received = pending = ZERO

    for payment in payments:
        if payment.is_paid:
            received += payment.amount
        else:
            pending += payment.amount

    return PaymentStats(total_received=received, total_pending=pending)


def split_payment(
    price: Union[Decimal, int, float, str],
    advance_percentage: Union[Decimal, int, float, str] = DEFAULT_ADVANCE_PERCENTAGE,
) -> PaymentSplit:
    """Split a project price into advance and final payments.

    The final amount is the remainder of the price, so both parts always
    add up to the price exactly.

    Args:
        price: Project price
        advance_percentage: Share of the price due upfront (0-100)

    Returns:
        PaymentSplit with advance and final amounts

    Raises:
        ValueError: If advance_percentage is not a number between 0 and 100

    Example:
        >>> split_payment(10000)
        PaymentSplit(advance=Decimal('4000'), final=Decimal('6000'))
    """
    try:
        share = Decimal(str(advance_percentage).strip())
    except InvalidOperation as e:
        raise ValueError(
            f"advance_percentage must be a number, got {advance_percentage!r}"
        ) from e

    if not share.is_finite() or not ZERO <= share <= HUNDRED:
        raise ValueError(
            f"advance_percentage must be between 0 and 100, got {advance_percentage}"
        )

    total = coerce_decimal(price)
    advance = total * share / HUNDRED
    return PaymentSplit(advance=advance, final=total - advance)
