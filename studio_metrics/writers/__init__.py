"""Writers that export derived metrics."""

from studio_metrics.writers.report_writer import (
    client_financials_frame,
    export_portfolio,
    project_metrics_frame,
    revenue_by_month_frame,
    service_type_frame,
    write_csv,
)

__all__ = [
    "client_financials_frame",
    "export_portfolio",
    "project_metrics_frame",
    "revenue_by_month_frame",
    "service_type_frame",
    "write_csv",
]
