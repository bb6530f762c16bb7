"""Validation of raw snapshot records before metrics are derived.

Metrics never fail on malformed data: bad numbers count as 0 and bad dates
as absent. This validator makes those silent coercions visible and flags
rows the aggregators cannot attribute to a project or client.
"""

import logging
from collections import Counter
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Set, Tuple

from studio_metrics.models.client import CLIENT_STATUSES
from studio_metrics.models.coercion import coerce_datetime
from studio_metrics.models.cost import COST_FIELDS
from studio_metrics.models.payment import PAYMENT_STATUSES, PAYMENT_TYPES
from studio_metrics.models.project import PROJECT_STATUSES, SERVICE_TYPES
from studio_metrics.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


def is_malformed_number(value: Any) -> bool:
    """True when a present value cannot be read as a finite number.

    Example:
        >>> is_malformed_number("12.5"), is_malformed_number("abc")
        (False, True)
        >>> is_malformed_number(None)
        False
    """
    if value is None or value == "":
        return False
    if isinstance(value, bool):
        return True
    if not isinstance(value, (int, float, str, Decimal)):
        return True
    try:
        return not Decimal(str(value).strip()).is_finite()
    except InvalidOperation:
        return True


def is_malformed_date(value: Any) -> bool:
    """True when a present value cannot be read as a date."""
    if value is None or value == "":
        return False
    return coerce_datetime(value) is None


def _row_context(index: int, row: Dict[str, Any]) -> Dict[str, Any]:
    return {"row": index, "id": row.get("id")}


def _valid_rows(
    report: ValidationReport, name: str, rows: List[Any], require_id: bool = True
) -> List[Tuple[int, Dict[str, Any]]]:
    """Return (index, row) pairs of the rows that will be read.

    Rows that are not objects are reported as errors and left out, as are
    rows without an id when ``require_id`` is set. Payments and costs are
    counted by ``project_id`` alone, so a missing id is only noted for them.
    Indexes refer to the position in the original collection.
    """
    valid = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            report.add_error(name, "Row is not an object", row, {"row": index})
            continue
        if row.get("id") in (None, ""):
            if require_id:
                report.add_error(
                    f"{name}.id",
                    "Row has no id and will be skipped",
                    None,
                    {"row": index},
                )
                continue
            report.add_info(f"{name}.id", "Row has no id", None, {"row": index})
        valid.append((index, row))
    return valid


def _check_numbers(
    report: ValidationReport, name: str, index: int, row: Dict[str, Any], fields
) -> None:
    for field_name in fields:
        value = row.get(field_name)
        if is_malformed_number(value):
            report.add_warning(
                f"{name}.{field_name}",
                "Not a number, will be treated as 0",
                value,
                _row_context(index, row),
            )


def _check_dates(
    report: ValidationReport, name: str, index: int, row: Dict[str, Any], fields
) -> None:
    for field_name in fields:
        value = row.get(field_name)
        if is_malformed_date(value):
            report.add_warning(
                f"{name}.{field_name}",
                "Not a valid date, will be treated as missing",
                value,
                _row_context(index, row),
            )


def _check_choice(
    report: ValidationReport,
    field: str,
    index: int,
    row: Dict[str, Any],
    key: str,
    choices,
    message: str,
) -> None:
    value = row.get(key)
    if value is not None and value not in choices:
        report.add_warning(field, message, value, _row_context(index, row))


def _validate_clients(report: ValidationReport, rows: List[Any]) -> Set[str]:
    client_ids: Set[str] = set()
    for index, row in _valid_rows(report, "clients", rows):
        client_ids.add(str(row["id"]))
        _check_dates(report, "clients", index, row, ("renewal_date",))
        _check_choice(
            report,
            "clients.status",
            index,
            row,
            "status",
            CLIENT_STATUSES,
            "Unknown client status",
        )
    return client_ids


def _validate_projects(
    report: ValidationReport, rows: List[Any], client_ids: Set[str]
) -> Set[str]:
    project_ids: Set[str] = set()
    for index, row in _valid_rows(report, "projects", rows):
        context = _row_context(index, row)
        project_ids.add(str(row["id"]))

        _check_numbers(report, "projects", index, row, ("price",))
        price = row.get("price")
        if price not in (None, "") and not is_malformed_number(price):
            if Decimal(str(price).strip()) < 0:
                report.add_warning(
                    "projects.price", "Price is negative", price, context
                )

        _check_dates(
            report,
            "projects",
            index,
            row,
            ("start_date", "deadline", "final_payment_date"),
        )
        _check_choice(
            report,
            "projects.service_type",
            index,
            row,
            "service_type",
            SERVICE_TYPES,
            "Unknown service type, bucketed as 'other'",
        )
        _check_choice(
            report,
            "projects.status",
            index,
            row,
            "status",
            PROJECT_STATUSES,
            "Unknown project status",
        )

        client_id = row.get("client_id")
        if client_id is None or str(client_id) not in client_ids:
            report.add_error(
                "projects.client_id",
                "Project does not belong to a known client",
                client_id,
                context,
            )

        if row.get("final_payment_date") and not row.get("start_date"):
            report.add_info(
                "projects.start_date",
                "Final payment recorded without a start date, "
                "excluded from cycle time",
                None,
                context,
            )
    return project_ids


def _validate_payments(
    report: ValidationReport, rows: List[Any], project_ids: Set[str]
) -> None:
    seen_types: Counter = Counter()
    for index, row in _valid_rows(report, "payments", rows, require_id=False):
        context = _row_context(index, row)
        project_id = row.get("project_id")

        if project_id is None or str(project_id) not in project_ids:
            report.add_error(
                "payments.project_id",
                "Payment does not belong to a known project",
                project_id,
                context,
            )

        _check_numbers(report, "payments", index, row, ("amount",))
        _check_dates(report, "payments", index, row, ("paid_date",))
        _check_choice(
            report,
            "payments.type",
            index,
            row,
            "type",
            PAYMENT_TYPES,
            "Unknown payment type",
        )
        _check_choice(
            report,
            "payments.status",
            index,
            row,
            "status",
            PAYMENT_STATUSES,
            "Unknown payment status, counted as pending",
        )

        if row.get("status") == "paid" and not row.get("paid_date"):
            report.add_info(
                "payments.paid_date", "Paid payment has no paid date", None, context
            )

        if row.get("type") in PAYMENT_TYPES and project_id is not None:
            key = (str(project_id), row["type"])
            seen_types[key] += 1
            if seen_types[key] == 2:
                report.add_error(
                    "payments.type",
                    f"Project has more than one {row['type']} payment",
                    row["type"],
                    {"project_id": project_id},
                )


def _validate_costs(
    report: ValidationReport, rows: List[Any], project_ids: Set[str]
) -> None:
    for index, row in _valid_rows(report, "costs", rows, require_id=False):
        project_id = row.get("project_id")
        if project_id is None or str(project_id) not in project_ids:
            report.add_error(
                "costs.project_id",
                "Cost does not belong to a known project",
                project_id,
                _row_context(index, row),
            )
        _check_numbers(report, "costs", index, row, COST_FIELDS)


def validate_snapshot(raw: Dict[str, List[Any]]) -> ValidationReport:
    """Validate raw snapshot collections.

    Args:
        raw: Mapping of collection name (clients, projects, payments, costs)
            to raw row lists, as returned by SnapshotReader.read_raw()

    Returns:
        ValidationReport listing every issue found; never raises on bad data

    Example:
        >>> report = validate_snapshot({"projects": [{"id": "p-1", "price": "abc"}]})
        >>> report.warning_count
        1
    """
    report = ValidationReport()

    client_ids = _validate_clients(report, raw.get("clients") or [])
    project_ids = _validate_projects(report, raw.get("projects") or [], client_ids)
    _validate_payments(report, raw.get("payments") or [], project_ids)
    _validate_costs(report, raw.get("costs") or [], project_ids)

    logger.info(f"Snapshot validation finished: {report.summary()}")
    return report
