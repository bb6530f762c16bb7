"""CLI commands."""

from studio_metrics.cli.commands.clients import client_financials
from studio_metrics.cli.commands.portfolio import portfolio_report
from studio_metrics.cli.commands.validate import validate_data

__all__ = ["client_financials", "portfolio_report", "validate_data"]
