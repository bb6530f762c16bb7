"""Project data model for the metrics engine.

This module defines the Project model, the unit every financial metric is
derived from, together with the closed service-type and status vocabularies.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Literal, Optional, get_args

from pydantic import Field, field_validator

from studio_metrics.models.base import BaseDataModel
from studio_metrics.models.coercion import ZERO, coerce_datetime, coerce_decimal

ServiceType = Literal["website", "ai_workflow", "automation", "management", "other"]
ProjectStatus = Literal["lead", "active", "completed", "paused"]

SERVICE_TYPES = get_args(ServiceType)
PROJECT_STATUSES = get_args(ProjectStatus)
DEFAULT_SERVICE_TYPE = "other"


def normalize_service_type(value: Any) -> str:
    """Map a raw service type onto the closed vocabulary.

    Example:
        >>> normalize_service_type("website")
        'website'
        >>> normalize_service_type("seo")
        'other'
    """
    if isinstance(value, str) and value in SERVICE_TYPES:
        return value
    return DEFAULT_SERVICE_TYPE


def coerce_identifier(value: Any) -> Any:
    """Store ids may be UUID strings or integers; keep them as strings."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        return str(value)
    return value


class Project(BaseDataModel):
    """Represents a project row.

    Attributes:
        id: Project identifier
        client_id: Identifier of the owning client
        title: Project title
        price: Quoted total price
        service_type: Service category, ``"other"`` when unclassified
        status: Pipeline status, None when absent or unknown
        start_date: Date work started
        deadline: Agreed delivery date
        final_payment_date: Date the final payment was recorded as paid

    Example:
        >>> project = Project(
        ...     id="p-1",
        ...     client_id="c-1",
        ...     title="Marketing site",
        ...     price="10000",
        ...     service_type="website",
        ...     start_date="2024-03-01",
        ... )
        >>> project.price
        Decimal('10000')
    """

    id: str = Field(..., min_length=1, description="Project identifier")
    client_id: Optional[str] = Field(None, description="Owning client identifier")
    title: str = Field("", description="Project title")
    price: Decimal = Field(ZERO, description="Quoted total price")
    service_type: ServiceType = Field(DEFAULT_SERVICE_TYPE, description="Service type")
    status: Optional[ProjectStatus] = Field(None, description="Project status")
    start_date: Optional[dt.datetime] = Field(None, description="Start date")
    deadline: Optional[dt.datetime] = Field(None, description="Deadline")
    final_payment_date: Optional[dt.datetime] = Field(
        None, description="Date the final payment was received"
    )

    @field_validator("id", "client_id", mode="before")
    @classmethod
    def convert_identifier(cls, v: Any) -> Any:
        return coerce_identifier(v)

    @field_validator("title", mode="before")
    @classmethod
    def convert_title(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("price", mode="before")
    @classmethod
    def convert_price(cls, v: Any) -> Decimal:
        """Convert the price to Decimal, treating malformed values as 0."""
        return coerce_decimal(v)

    @field_validator("service_type", mode="before")
    @classmethod
    def convert_service_type(cls, v: Any) -> str:
        return normalize_service_type(v)

    @field_validator("status", mode="before")
    @classmethod
    def convert_status(cls, v: Any) -> Optional[str]:
        """Unknown statuses are treated as absent."""
        if isinstance(v, str) and v in PROJECT_STATUSES:
            return v
        return None

    @field_validator("start_date", "deadline", "final_payment_date", mode="before")
    @classmethod
    def convert_dates(cls, v: Any) -> Optional[dt.datetime]:
        """Parse dates leniently; unparseable values become None."""
        return coerce_datetime(v)
