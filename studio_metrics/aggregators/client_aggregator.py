"""Client financial aggregator.

Rolls project revenue and cost up to the owning client. A client's
financials cover all of its projects regardless of project status.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from studio_metrics.calculators.cost_calculator import aggregate_costs
from studio_metrics.calculators.number_utils import ZERO, percentage
from studio_metrics.calculators.project_metrics import group_by_project
from studio_metrics.models.client import Client
from studio_metrics.models.cost import Cost
from studio_metrics.models.project import Project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientWithFinancials:
    """A client together with its aggregated financials.

    Attributes:
        client: The client record
        total_revenue: Sum of the client's project prices
        total_cost: Sum of the client's project costs
        total_profit: Revenue minus cost
        margin_percent: Profit as a percentage of revenue, 0 without revenue
        project_count: Number of projects owned by the client
    """

    client: Client
    total_revenue: Decimal
    total_cost: Decimal
    total_profit: Decimal
    margin_percent: Decimal
    project_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as the client row extended with its financial fields."""
        data = self.client.model_dump(mode="json")
        data.update(
            {
                "total_revenue": float(self.total_revenue),
                "total_cost": float(self.total_cost),
                "total_profit": float(self.total_profit),
                "margin_percent": float(self.margin_percent),
            }
        )
        return data


def _aggregate(
    client: Client,
    projects: Sequence[Project],
    costs_by_project: Dict[str, List[Cost]],
) -> ClientWithFinancials:
    total_revenue = ZERO
    total_cost = ZERO
    project_count = 0

    for project in projects:
        if project.client_id != client.id:
            continue
        project_count += 1
        total_revenue += project.price
        total_cost += aggregate_costs(costs_by_project.get(project.id, [])).total

    total_profit = total_revenue - total_cost

    logger.debug(
        f"Client {client.id}: {project_count} project(s), "
        f"revenue {total_revenue}, cost {total_cost}"
    )

    return ClientWithFinancials(
        client=client,
        total_revenue=total_revenue,
        total_cost=total_cost,
        total_profit=total_profit,
        margin_percent=percentage(total_profit, total_revenue),
        project_count=project_count,
    )


def aggregate_client(
    client: Client, projects: Sequence[Project], costs: Sequence[Cost]
) -> ClientWithFinancials:
    """Aggregate revenue, cost, profit and margin for one client.

    Args:
        client: The client to aggregate
        projects: Project rows; only those owned by the client are counted
        costs: Cost rows; only those of the client's projects are counted

    Returns:
        ClientWithFinancials; all zeros when the client has no projects

    Example:
        >>> client = Client(id="c-1")
        >>> aggregate_client(client, [], []).margin_percent
        Decimal('0')
    """
    return _aggregate(client, projects, group_by_project(costs))


def aggregate_clients(
    clients: Sequence[Client], projects: Sequence[Project], costs: Sequence[Cost]
) -> List[ClientWithFinancials]:
    """Aggregate financials for every client, preserving client order."""
    logger.info(
        f"Aggregating financials for {len(clients)} clients "
        f"across {len(projects)} projects"
    )
    costs_by_project = group_by_project(costs)
    return [_aggregate(client, projects, costs_by_project) for client in clients]
