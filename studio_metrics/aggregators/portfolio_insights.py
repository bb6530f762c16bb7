"""Views derived from a built portfolio for the finance and report screens.

Every helper here is a pure function of a ``Portfolio``:
- Average margin across the whole portfolio
- Margin per service type
- Project rankings (most profitable, lowest margin, longest cycle)
"""

from decimal import Decimal
from typing import Dict, List

from studio_metrics.aggregators.portfolio_aggregator import Portfolio
from studio_metrics.calculators.number_utils import (
    ONE_DECIMAL,
    percentage,
    round_half_up,
    round_to_int,
)
from studio_metrics.calculators.project_metrics import ProjectMetric

LOW_MARGIN_THRESHOLD = Decimal("50")
TOP_PROJECTS_LIMIT = 5
LONG_CYCLE_DAYS = 40


def average_margin(portfolio: Portfolio) -> Decimal:
    """Portfolio profit as a percentage of revenue, rounded to one decimal.

    Example:
        >>> average_margin(Portfolio())
        Decimal('0.0')
    """
    return round_half_up(
        percentage(portfolio.total_profit, portfolio.total_revenue), ONE_DECIMAL
    )


def service_type_margins(portfolio: Portfolio) -> Dict[str, int]:
    """Whole-percent margin per service type, 0 for a bucket without revenue."""
    return {
        key: round_to_int(percentage(totals.profit, totals.revenue))
        for key, totals in portfolio.profit_by_service_type.items()
    }


def top_profitable_projects(
    portfolio: Portfolio, limit: int = TOP_PROJECTS_LIMIT
) -> List[ProjectMetric]:
    """Projects with a positive profit, most profitable first.

    Args:
        portfolio: Built portfolio
        limit: Maximum number of projects returned

    Returns:
        Up to ``limit`` project metrics; ties keep input order
    """
    profitable = [m for m in portfolio.project_metrics if m.profit > 0]
    profitable.sort(key=lambda m: m.profit, reverse=True)
    return profitable[:limit]


def low_margin_projects(
    portfolio: Portfolio, threshold: Decimal = LOW_MARGIN_THRESHOLD
) -> List[ProjectMetric]:
    """Projects whose margin is below ``threshold`` percent, lowest first.

    Projects without a price have a margin of 0 and are included.
    """
    low = [m for m in portfolio.project_metrics if m.margin < threshold]
    low.sort(key=lambda m: m.margin)
    return low


def long_cycle_projects(
    portfolio: Portfolio, min_days: int = LONG_CYCLE_DAYS
) -> List[ProjectMetric]:
    """Projects whose cycle took more than ``min_days`` days, longest first.

    Projects without a known cycle are left out.
    """
    long_running = [
        m
        for m in portfolio.project_metrics
        if m.cycle_days is not None and m.cycle_days > min_days
    ]
    long_running.sort(key=lambda m: m.cycle_days, reverse=True)
    return long_running
