"""Tabular export of derived metrics.

Builds pandas DataFrames from a portfolio or client aggregation so that the
finance and report views can be exported as CSV.
"""

import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from studio_metrics.aggregators.client_aggregator import ClientWithFinancials
from studio_metrics.aggregators.portfolio_aggregator import Portfolio

logger = logging.getLogger(__name__)

PROJECT_COLUMNS = [
    "id",
    "title",
    "service_type",
    "status",
    "price",
    "total_cost",
    "profit",
    "margin",
    "cycle_days",
]
MONTH_COLUMNS = ["period", "month", "revenue", "expenses"]
SERVICE_TYPE_COLUMNS = ["service_type", "revenue", "cost", "profit"]
CLIENT_COLUMNS = [
    "id",
    "client_name",
    "company_name",
    "status",
    "total_revenue",
    "total_cost",
    "total_profit",
    "margin_percent",
]


def project_metrics_frame(portfolio: Portfolio) -> pd.DataFrame:
    """One row per project with its derived metrics.

    ``cycle_days`` is a nullable integer column; projects without a known
    cycle time hold ``<NA>``.
    """
    rows = [metric.to_dict() for metric in portfolio.project_metrics]
    df = pd.DataFrame(rows, columns=PROJECT_COLUMNS)
    df["cycle_days"] = df["cycle_days"].astype("Int64")
    return df


def revenue_by_month_frame(portfolio: Portfolio) -> pd.DataFrame:
    """Monthly revenue and expense series, oldest month first."""
    rows = [bucket.to_dict() for bucket in portfolio.revenue_by_month]
    return pd.DataFrame(rows, columns=MONTH_COLUMNS)


def service_type_frame(portfolio: Portfolio) -> pd.DataFrame:
    """Profit breakdown with one row per service type."""
    rows = [
        {"service_type": key, **totals.to_dict()}
        for key, totals in portfolio.profit_by_service_type.items()
    ]
    return pd.DataFrame(rows, columns=SERVICE_TYPE_COLUMNS)


def client_financials_frame(clients: Sequence[ClientWithFinancials]) -> pd.DataFrame:
    """One row per client with its aggregated financials."""
    rows = [client.to_dict() for client in clients]
    return pd.DataFrame(rows, columns=CLIENT_COLUMNS)


def write_csv(frame: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write a frame to CSV, creating parent directories as needed.

    Args:
        frame: DataFrame to write
        path: Destination file

    Returns:
        Path of the written file
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(target, index=False)
    logger.info(f"Wrote {len(frame)} row(s) to {target}")
    return target


def export_portfolio(portfolio: Portfolio, directory: Union[str, Path]) -> List[Path]:
    """Write the project, monthly and service-type tables of a portfolio.

    Args:
        portfolio: Portfolio to export
        directory: Output directory

    Returns:
        Paths of the written CSV files
    """
    output = Path(directory)
    return [
        write_csv(project_metrics_frame(portfolio), output / "project_metrics.csv"),
        write_csv(revenue_by_month_frame(portfolio), output / "revenue_by_month.csv"),
        write_csv(service_type_frame(portfolio), output / "profit_by_service_type.csv"),
    ]
