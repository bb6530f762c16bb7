"""Cost aggregation and profit derivation for a single project.

This module implements the leaf of the metrics pipeline:
- Summing any number of cost rows into per-category subtotals
- Deriving profit and margin from a price and a total cost

Missing cost sub-fields count as 0 (handled by the Cost model). Negative
cost lines are summed as given so that correction entries reduce the total.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from studio_metrics.calculators.number_utils import ZERO, percentage
from studio_metrics.models.cost import Cost


@dataclass(frozen=True)
class CostBreakdown:
    """Subtotals of a project's cost rows.

    Attributes:
        labor: Sum of labor costs
        tool: Sum of tool costs
        hosting: Sum of hosting costs
        other: Sum of other costs
        total: Grand total across all four categories

    Example:
        >>> breakdown = CostBreakdown(
        ...     labor=Decimal("300"), tool=Decimal("50"),
        ...     hosting=Decimal("0"), other=Decimal("0"), total=Decimal("350"),
        ... )
        >>> breakdown.total
        Decimal('350')
    """

    labor: Decimal
    tool: Decimal
    hosting: Decimal
    other: Decimal
    total: Decimal


@dataclass(frozen=True)
class ProfitMargin:
    """Profit and margin percentage for a price/cost pair."""

    profit: Decimal
    margin: Decimal


@dataclass(frozen=True)
class CostMetrics:
    """Cost breakdown combined with the derived profit and margin.

    Attributes:
        breakdown: Per-category subtotals
        total_cost: Grand total cost
        profit: Price minus total cost
        margin: Profit as a percentage of price (unrounded)
    """

    breakdown: CostBreakdown
    total_cost: Decimal
    profit: Decimal
    margin: Decimal


def aggregate_costs(costs: Iterable[Cost]) -> CostBreakdown:
    """Sum cost rows into category subtotals and a grand total.

    Args:
        costs: Cost rows for one project (may be empty)

    Returns:
        CostBreakdown; all zeros for an empty input

    Example:
        >>> aggregate_costs([Cost(id="k-1", labor_cost=100, tool_cost=None)]).total
        Decimal('100')
    """
    labor = tool = hosting = other = ZERO

    for cost in costs:
        labor += cost.labor_cost
        tool += cost.tool_cost
        hosting += cost.hosting_cost
        other += cost.other_cost

    return CostBreakdown(
        labor=labor,
        tool=tool,
        hosting=hosting,
        other=other,
        total=labor + tool + hosting + other,
    )


def derive_profit_margin(
    price: Decimal, total_cost: Optional[Decimal]
) -> ProfitMargin:
    """Derive profit and margin from a price and total cost.

    The margin is not clamped: a cost overrun yields a negative margin.
    A missing total cost counts as 0 for profit and yields a 0 margin, and
    a non-positive price always yields a 0 margin.

    Args:
        price: Quoted price
        total_cost: Aggregated cost, or None when unknown

    Returns:
        ProfitMargin with ``profit = price - total_cost`` and
        ``margin = profit / price * 100``

    Example:
        >>> derive_profit_margin(Decimal("10000"), Decimal("11500")).margin
        Decimal('-15.00')
        >>> derive_profit_margin(Decimal("0"), Decimal("200")).margin
        Decimal('0')
    """
    if total_cost is None:
        return ProfitMargin(profit=price, margin=ZERO)

    profit = price - total_cost
    return ProfitMargin(profit=profit, margin=percentage(profit, price))


def compute_cost_metrics(price: Decimal, costs: Iterable[Cost]) -> CostMetrics:
    """Aggregate a project's costs and derive its profit and margin.

    Args:
        price: Project price
        costs: Cost rows belonging to the project

    Returns:
        CostMetrics for the project
    """
    breakdown = aggregate_costs(costs)
    result = derive_profit_margin(price, breakdown.total)

    return CostMetrics(
        breakdown=breakdown,
        total_cost=breakdown.total,
        profit=result.profit,
        margin=result.margin,
    )
