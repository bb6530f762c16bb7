"""Aggregators that roll project metrics up to clients and the portfolio."""

from studio_metrics.aggregators.client_aggregator import (
    ClientWithFinancials,
    aggregate_client,
    aggregate_clients,
)
from studio_metrics.aggregators.portfolio_aggregator import (
    DEFAULT_MONTH_WINDOW,
    MonthlyTotals,
    Portfolio,
    ServiceTypeTotals,
    build_portfolio,
)
from studio_metrics.aggregators.portfolio_insights import (
    average_margin,
    long_cycle_projects,
    low_margin_projects,
    service_type_margins,
    top_profitable_projects,
)

__all__ = [
    "ClientWithFinancials",
    "aggregate_client",
    "aggregate_clients",
    "DEFAULT_MONTH_WINDOW",
    "MonthlyTotals",
    "Portfolio",
    "ServiceTypeTotals",
    "build_portfolio",
    "average_margin",
    "long_cycle_projects",
    "low_margin_projects",
    "service_type_margins",
    "top_profitable_projects",
]
