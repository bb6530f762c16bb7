"""Portfolio metrics builder for the dashboard, finance and report views.

This module combines every project metric into the portfolio summary:
- Revenue, cost and profit totals
- Received and pending payment totals
- Profit breakdown by service type
- Monthly revenue/expense series (most recent non-empty months)
- Burn rate and average cycle time

Months without any project start produce no bucket; the monthly series keeps
the last ``month_window`` buckets that exist rather than the last calendar
months.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from studio_metrics.calculators.cost_calculator import aggregate_costs
from studio_metrics.calculators.date_utils import days_between, month_key, month_label
from studio_metrics.calculators.number_utils import ZERO, decimal_sum, round_to_int
from studio_metrics.calculators.payment_calculator import summarize_payments
from studio_metrics.calculators.project_metrics import (
    ProjectMetric,
    build_project_metric,
    group_by_project,
)
from studio_metrics.models.cost import Cost
from studio_metrics.models.payment import Payment
from studio_metrics.models.project import Project

logger = logging.getLogger(__name__)

DEFAULT_MONTH_WINDOW = 6


@dataclass
class ServiceTypeTotals:
    """Revenue, cost and profit accumulated for one service type."""

    revenue: Decimal = ZERO
    cost: Decimal = ZERO
    profit: Decimal = ZERO

    def to_dict(self) -> Dict[str, float]:
        return {
            "revenue": float(self.revenue),
            "cost": float(self.cost),
            "profit": float(self.profit),
        }


@dataclass(frozen=True)
class MonthlyTotals:
    """Revenue and expenses of projects started in one calendar month.

    Attributes:
        period: Bucket key in ``YYYY-MM`` form
        month: Short display label (``"Mar"``)
        revenue: Sum of prices of projects started that month
        expenses: Sum of costs of projects started that month
    """

    period: str
    month: str
    revenue: Decimal
    expenses: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "month": self.month,
            "revenue": float(self.revenue),
            "expenses": float(self.expenses),
        }


@dataclass
class Portfolio:
    """Portfolio-wide financial summary.

    Attributes:
        total_revenue: Sum of all project prices
        total_received: Sum of paid payment amounts
        total_pending: Sum of unpaid payment amounts
        total_costs: Sum of all project costs
        total_profit: Sum of all project profits
        profit_by_service_type: Totals keyed by service type
        burn_rate: Total cost per month with at least one project start
        active_projects_count: Number of active projects
        completed_projects_count: Number of completed projects
        avg_cycle_time_days: Mean cycle time of projects with a known cycle
        revenue_by_month: Most recent monthly buckets, oldest first
        project_metrics: Per-project metrics in input order
    """

    total_revenue: Decimal = ZERO
    total_received: Decimal = ZERO
    total_pending: Decimal = ZERO
    total_costs: Decimal = ZERO
    total_profit: Decimal = ZERO
    profit_by_service_type: Dict[str, ServiceTypeTotals] = field(default_factory=dict)
    burn_rate: int = 0
    active_projects_count: int = 0
    completed_projects_count: int = 0
    avg_cycle_time_days: int = 0
    revenue_by_month: List[MonthlyTotals] = field(default_factory=list)
    project_metrics: List[ProjectMetric] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape consumed by the dashboard views."""
        return {
            "totalRevenue": float(self.total_revenue),
            "totalReceived": float(self.total_received),
            "totalPending": float(self.total_pending),
            "totalCosts": float(self.total_costs),
            "totalProfit": float(self.total_profit),
            "profitByServiceType": {
                key: totals.to_dict()
                for key, totals in self.profit_by_service_type.items()
            },
            "burnRate": self.burn_rate,
            "activeProjectsCount": self.active_projects_count,
            "completedProjectsCount": self.completed_projects_count,
            "avgCycleTimeDays": self.avg_cycle_time_days,
            "revenueByMonth": [bucket.to_dict() for bucket in self.revenue_by_month],
            "projectMetrics": [metric.to_dict() for metric in self.project_metrics],
        }


def _average_cycle_time(projects: Sequence[Project]) -> int:
    """Mean day span of projects with both a start and a final payment date."""
    spans = [
        days_between(project.start_date, project.final_payment_date)
        for project in projects
        if project.start_date is not None and project.final_payment_date is not None
    ]
    if not spans:
        return 0
    return round_to_int(decimal_sum(spans) / len(spans))


def _monthly_series(
    projects: Sequence[Project],
    cost_totals: Dict[str, Decimal],
    month_window: int,
) -> List[MonthlyTotals]:
    buckets: Dict[str, Dict[str, Decimal]] = defaultdict(
        lambda: {"revenue": ZERO, "expenses": ZERO}
    )

    for project in projects:
        if project.start_date is None:
            continue
        key = month_key(project.start_date)
        buckets[key]["revenue"] += project.price
        buckets[key]["expenses"] += cost_totals[project.id]

    recent_keys = sorted(buckets)[-month_window:]

    return [
        MonthlyTotals(
            period=key,
            month=month_label(key),
            revenue=buckets[key]["revenue"],
            expenses=buckets[key]["expenses"],
        )
        for key in recent_keys
    ]


def build_portfolio(
    projects: Sequence[Project],
    payments: Sequence[Payment],
    costs: Sequence[Cost],
    month_window: int = DEFAULT_MONTH_WINDOW,
) -> Portfolio:
    """Build the portfolio summary from raw project, payment and cost rows.

    Args:
        projects: All project rows
        payments: All payment rows
        costs: All cost rows
        month_window: Number of most recent monthly buckets to keep

    Returns:
        Portfolio with every derived metric; zero-valued for empty input

    Raises:
        ValueError: If month_window is less than 1

    Example:
        >>> portfolio = build_portfolio([], [], [])
        >>> portfolio.total_revenue, portfolio.burn_rate
        (Decimal('0'), 0)
    """
    if month_window < 1:
        raise ValueError(f"month_window must be at least 1, got {month_window}")

    logger.info(
        f"Building portfolio from {len(projects)} projects, "
        f"{len(payments)} payments and {len(costs)} cost rows"
    )

    portfolio = Portfolio()

    stats = summarize_payments(payments)
    portfolio.total_received = stats.total_received
    portfolio.total_pending = stats.total_pending

    costs_by_project = group_by_project(costs)
    cost_totals: Dict[str, Decimal] = {}

    for project in projects:
        project_costs = costs_by_project.get(project.id, [])
        metric = build_project_metric(project, project_costs)
        cost_totals[project.id] = aggregate_costs(project_costs).total

        portfolio.total_revenue += project.price
        portfolio.total_costs += metric.total_cost
        portfolio.total_profit += metric.profit

        totals = portfolio.profit_by_service_type.setdefault(
            project.service_type, ServiceTypeTotals()
        )
        totals.revenue += project.price
        totals.cost += metric.total_cost
        totals.profit += metric.profit

        if project.status == "active":
            portfolio.active_projects_count += 1
        elif project.status == "completed":
            portfolio.completed_projects_count += 1

        portfolio.project_metrics.append(metric)

    portfolio.avg_cycle_time_days = _average_cycle_time(projects)
    portfolio.revenue_by_month = _monthly_series(projects, cost_totals, month_window)

    start_months = {
        month_key(project.start_date)
        for project in projects
        if project.start_date is not None
    }
    portfolio.burn_rate = round_to_int(
        portfolio.total_costs / max(1, len(start_months))
    )

    logger.debug(
        f"Portfolio: revenue {portfolio.total_revenue}, "
        f"costs {portfolio.total_costs}, {len(start_months)} active month(s)"
    )

    return portfolio
