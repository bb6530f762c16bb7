"""Validation of store records."""

from studio_metrics.validators.snapshot_validator import (
    is_malformed_date,
    is_malformed_number,
    validate_snapshot,
)
from studio_metrics.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "is_malformed_date",
    "is_malformed_number",
    "validate_snapshot",
]
