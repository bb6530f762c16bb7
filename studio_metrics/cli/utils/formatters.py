"""Output formatting utilities for CLI."""

from decimal import Decimal
from typing import List, Optional, Union

import click

from studio_metrics.calculators.number_utils import (
    ONE_DECIMAL,
    round_half_up,
    round_to_int,
)
from studio_metrics.models.coercion import coerce_decimal


def format_success(message: str) -> str:
    """Format a success message with green color."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


def format_currency(value: Union[Decimal, int, float], symbol: str = "$") -> str:
    """Format an amount rounded to whole currency units with thousands separators.

    Args:
        value: Amount to format
        symbol: Currency symbol prefix

    Returns:
        Formatted amount, e.g. ``$12,346``

    Example:
        >>> format_currency(Decimal("12345.6"))
        '$12,346'
    """
    return f"{symbol}{round_to_int(coerce_decimal(value)):,}"


def format_percent(value: Union[Decimal, int, float]) -> str:
    """Format a percentage with one decimal place, e.g. ``33.5%``."""
    return f"{round_half_up(coerce_decimal(value), ONE_DECIMAL)}%"


def format_days(value: Optional[int]) -> str:
    """Format a day count, showing a dash when unknown."""
    return "—" if value is None else f"{value}d"


def format_countdown(days: Optional[int]) -> str:
    """Format the days left until a renewal.

    Example:
        >>> format_countdown(30)
        'in 30d'
        >>> format_countdown(0)
        'expired'
    """
    if days is None:
        return "—"
    return f"in {days}d" if days > 0 else "expired"


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 40) -> str:
    """Format data as a table.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column (default: 40)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(col_widths)]):
            col_widths[i] = max(col_widths[i], len(str(cell)))
    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def render(cells: List[str]) -> str:
        return (
            "|"
            + "|".join(
                f" {str(cell)[: col_widths[i]]:<{col_widths[i]}} "
                for i, cell in enumerate(cells[: len(col_widths)])
            )
            + "|"
        )

    lines = [separator, render(headers), separator]
    if rows:
        lines.extend(render(row) for row in rows)
        lines.append(separator)

    return "\n".join(lines)
