"""CLI utility functions."""

from studio_metrics.cli.utils.formatters import (
    format_currency,
    format_days,
    format_error,
    format_info,
    format_percent,
    format_success,
    format_table,
    format_warning,
)

__all__ = [
    "format_currency",
    "format_days",
    "format_error",
    "format_info",
    "format_percent",
    "format_success",
    "format_table",
    "format_warning",
]
