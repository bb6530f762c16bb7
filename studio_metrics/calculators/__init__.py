"""Calculator modules for the metrics engine."""

from studio_metrics.calculators.cost_calculator import (
    CostBreakdown,
    CostMetrics,
    ProfitMargin,
    aggregate_costs,
    compute_cost_metrics,
    derive_profit_margin,
)
from studio_metrics.calculators.date_utils import (
    cycle_days,
    days_between,
    days_elapsed,
    days_until,
    month_key,
    month_label,
    parse_date,
)
from studio_metrics.calculators.number_utils import (
    percentage,
    round_half_up,
    round_to_int,
)
from studio_metrics.calculators.payment_calculator import (
    PaymentSplit,
    PaymentStats,
    split_payment,
    summarize_payments,
)
from studio_metrics.calculators.project_metrics import (
    ProjectMetric,
    build_project_metric,
    build_project_metrics,
    group_by_project,
)

__all__ = [
    # cost_calculator
    "CostBreakdown",
    "CostMetrics",
    "ProfitMargin",
    "aggregate_costs",
    "compute_cost_metrics",
    "derive_profit_margin",
    # date_utils
    "cycle_days",
    "days_between",
    "days_elapsed",
    "days_until",
    "month_key",
    "month_label",
    "parse_date",
    # number_utils
    "percentage",
    "round_half_up",
    "round_to_int",
    # payment_calculator
    "PaymentSplit",
    "PaymentStats",
    "split_payment",
    "summarize_payments",
    # project_metrics
    "ProjectMetric",
    "build_project_metric",
    "build_project_metrics",
    "group_by_project",
]
