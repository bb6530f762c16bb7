"""Record models for the metrics engine.

This package contains Pydantic models for the rows read from the data store:
- BaseDataModel: Base class with common configuration
- Client: Client information
- Project: Project with price, service type and lifecycle dates
- Payment: Advance or final payment
- Cost: Cost entry booked against a project
"""

from studio_metrics.models.base import BaseDataModel
from studio_metrics.models.client import CLIENT_STATUSES, Client, ClientStatus
from studio_metrics.models.coercion import coerce_datetime, coerce_decimal
from studio_metrics.models.cost import COST_FIELDS, Cost
from studio_metrics.models.payment import (
    PAYMENT_STATUSES,
    PAYMENT_TYPES,
    Payment,
    PaymentStatus,
    PaymentType,
)
from studio_metrics.models.project import (
    DEFAULT_SERVICE_TYPE,
    PROJECT_STATUSES,
    SERVICE_TYPES,
    Project,
    ProjectStatus,
    ServiceType,
    normalize_service_type,
)

__all__ = [
    "BaseDataModel",
    "Client",
    "ClientStatus",
    "CLIENT_STATUSES",
    "Cost",
    "COST_FIELDS",
    "Payment",
    "PaymentStatus",
    "PaymentType",
    "PAYMENT_STATUSES",
    "PAYMENT_TYPES",
    "Project",
    "ProjectStatus",
    "ServiceType",
    "DEFAULT_SERVICE_TYPE",
    "PROJECT_STATUSES",
    "SERVICE_TYPES",
    "coerce_datetime",
    "coerce_decimal",
    "normalize_service_type",
]
