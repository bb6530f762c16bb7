"""Per-project metric builder.

Combines a project's price, its aggregated costs and its lifecycle dates
into a single metric record used by the dashboard, finance and report views.
"""

import datetime as dt
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, TypeVar

from studio_metrics.calculators.cost_calculator import compute_cost_metrics
from studio_metrics.calculators.date_utils import cycle_days
from studio_metrics.calculators.number_utils import ONE_DECIMAL, round_half_up
from studio_metrics.models.cost import Cost
from studio_metrics.models.payment import Payment
from studio_metrics.models.project import Project

DEFAULT_PROJECT_STATUS = "active"

RowT = TypeVar("RowT", Cost, Payment)


@dataclass(frozen=True)
class ProjectMetric:
    """Derived financial metrics for one project.

    Attributes:
        id: Project identifier
        title: Project title
        service_type: Normalized service type
        price: Project price
        total_cost: Aggregated cost
        profit: Price minus total cost
        margin: Margin percentage rounded half-up to one decimal
        cycle_days: Days from start to final payment, None when unknown
        status: Project status (``"active"`` when not recorded)
        start_date: Date work started, for elapsed-time displays; not part
            of the serialized metric

    Example:
        >>> metric = ProjectMetric(
        ...     id="p-1", title="Site", service_type="website",
        ...     price=Decimal("10000"), total_cost=Decimal("4000"),
        ...     profit=Decimal("6000"), margin=Decimal("60.0"),
        ...     cycle_days=45, status="completed",
        ... )
        >>> metric.profit
        Decimal('6000')
    """

    id: str
    title: str
    service_type: str
    price: Decimal
    total_cost: Decimal
    profit: Decimal
    margin: Decimal
    cycle_days: Optional[int]
    status: str
    start_date: Optional[dt.datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible primitives."""
        return {
            "id": self.id,
            "title": self.title,
            "service_type": self.service_type,
            "price": float(self.price),
            "total_cost": float(self.total_cost),
            "profit": float(self.profit),
            "margin": float(self.margin),
            "cycle_days": self.cycle_days,
            "status": self.status,
        }


def group_by_project(rows: Iterable[RowT]) -> Dict[str, List[RowT]]:
    """Index cost or payment rows by their ``project_id``.

    Rows without a project id are dropped since no project can claim them.
    """
    grouped: Dict[str, List[RowT]] = defaultdict(list)
    for row in rows:
        if row.project_id is not None:
            grouped[row.project_id].append(row)
    return grouped


def build_project_metric(
    project: Project,
    costs: Sequence[Cost],
    payments: Optional[Sequence[Payment]] = None,
) -> ProjectMetric:
    """Build the metric record for a single project.

    Cycle time is taken from the project's ``final_payment_date``, which the
    payment workflow sets when the final payment is received, so payments
    are accepted but not needed here.

    Args:
        project: The project
        costs: Cost rows belonging to the project
        payments: Payment rows belonging to the project (optional)

    Returns:
        ProjectMetric for the project

    Example:
        >>> project = Project(
        ...     id="p-1", price=10000,
        ...     start_date="2024-01-01", final_payment_date="2024-02-15",
        ... )
        >>> build_project_metric(project, []).cycle_days
        45
    """
    metrics = compute_cost_metrics(project.price, costs)

    return ProjectMetric(
        id=project.id,
        title=project.title,
        service_type=project.service_type,
        price=project.price,
        total_cost=metrics.total_cost,
        profit=metrics.profit,
        margin=round_half_up(metrics.margin, ONE_DECIMAL),
        cycle_days=cycle_days(project.start_date, project.final_payment_date),
        status=project.status or DEFAULT_PROJECT_STATUS,
        start_date=project.start_date,
    )


def build_project_metrics(
    projects: Sequence[Project], costs: Sequence[Cost]
) -> List[ProjectMetric]:
    """Build metric records for every project, in input order."""
    costs_by_project = group_by_project(costs)
    return [
        build_project_metric(project, costs_by_project.get(project.id, []))
        for project in projects
    ]
