"""Metrics service: fetch current records once and derive metrics.

This is the request-level entry point used by the dashboard, finance and
client views. Each call refreshes the record source once, fetches the rows
and runs the pure aggregators over them; nothing is cached between calls.
"""

import logging
from decimal import Decimal
from typing import Callable, List, Optional, TypeVar

from studio_metrics.aggregators.client_aggregator import (
    ClientWithFinancials,
    aggregate_clients,
)
from studio_metrics.aggregators.portfolio_aggregator import Portfolio, build_portfolio
from studio_metrics.calculators.payment_calculator import (
    PaymentSplit,
    PaymentStats,
    split_payment,
    summarize_payments,
)
from studio_metrics.config.settings import MetricsSettings, get_config
from studio_metrics.exceptions import DataSourceError
from studio_metrics.readers.record_source import RecordSource
from studio_metrics.utils.logging_utils import (
    LogContext,
    generate_correlation_id,
    log_function_call,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MetricsService:
    """Derives dashboard and client metrics from a record source.

    Attributes:
        source: Record source to fetch rows from
        settings: Application settings (month window, advance share)

    Example:
        >>> service = MetricsService(SnapshotReader("exports/studio.json"))
        >>> portfolio = service.get_dashboard_metrics()
        >>> portfolio.to_dict()["totalRevenue"]
        15000.0
    """

    def __init__(
        self, source: RecordSource, settings: Optional[MetricsSettings] = None
    ):
        self.source = source
        self.settings = settings or get_config()

    def _fetch(self, collection: str, fetch: Callable[[], T]) -> T:
        """Run a fetch, wrapping any failure in DataSourceError."""
        try:
            return fetch()
        except Exception as e:
            logger.error(f"Failed to fetch {collection}: {type(e).__name__}: {e}")
            raise DataSourceError(f"Failed to fetch {collection}: {e}") from e

    @log_function_call(level="INFO")
    def get_dashboard_metrics(self) -> Portfolio:
        """Build the portfolio summary from the current records.

        Returns:
            Portfolio for the dashboard, finance and report views

        Raises:
            DataSourceError: If any collection cannot be fetched
        """
        with LogContext(correlation_id=generate_correlation_id(), view="portfolio"):
            self._fetch("records", self.source.refresh)
            projects = self._fetch("projects", self.source.list_projects)
            payments = self._fetch("payments", self.source.list_payments)
            costs = self._fetch("costs", self.source.list_costs)

            return build_portfolio(
                projects, payments, costs, month_window=self.settings.month_window
            )

    @log_function_call(level="INFO")
    def get_clients_with_financials(
        self, client_id: Optional[str] = None
    ) -> List[ClientWithFinancials]:
        """Aggregate financials for all clients, or for a single client.

        Args:
            client_id: Restrict the result to this client

        Returns:
            Clients with their aggregated financials; empty when the
            requested client does not exist

        Raises:
            DataSourceError: If any collection cannot be fetched
        """
        with LogContext(correlation_id=generate_correlation_id(), view="clients"):
            self._fetch("records", self.source.refresh)
            clients = self._fetch(
                "clients", lambda: self.source.list_clients(client_id)
            )
            if not clients:
                logger.info(
                    f"No client found for id {client_id}"
                    if client_id
                    else "No clients found"
                )
                return []

            projects = self._fetch("projects", self.source.list_projects)
            costs = self._fetch("costs", self.source.list_costs)

            return aggregate_clients(clients, projects, costs)

    def get_payment_stats(self) -> PaymentStats:
        """Received and pending payment totals across all projects."""
        self._fetch("records", self.source.refresh)
        payments = self._fetch("payments", self.source.list_payments)
        return summarize_payments(payments)

    def plan_payments(self, price: Decimal) -> PaymentSplit:
        """Split a price into advance and final payments per the settings."""
        return split_payment(price, self.settings.advance_percentage)
