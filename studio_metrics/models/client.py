"""Client data model for the metrics engine."""

import datetime as dt
from typing import Any, Literal, Optional, get_args

from pydantic import Field, field_validator

from studio_metrics.models.base import BaseDataModel
from studio_metrics.models.coercion import coerce_datetime
from studio_metrics.models.project import coerce_identifier

ClientStatus = Literal["active", "completed", "paused"]

CLIENT_STATUSES = get_args(ClientStatus)


class Client(BaseDataModel):
    """Represents a client row.

    A client carries no financial fields of its own; revenue, cost and
    margin are always derived from the client's projects.

    Attributes:
        id: Client identifier
        client_name: Contact name
        company_name: Company name
        email: Contact email
        industry: Industry label
        renewal_date: Contract renewal date
        status: Relationship status

    Example:
        >>> client = Client(id="c-1", client_name="Dana", company_name="Acme")
        >>> client.status is None
        True
    """

    id: str = Field(..., min_length=1, description="Client identifier")
    client_name: str = Field("", description="Contact name")
    company_name: str = Field("", description="Company name")
    email: Optional[str] = Field(None, description="Contact email")
    industry: Optional[str] = Field(None, description="Industry")
    renewal_date: Optional[dt.datetime] = Field(None, description="Renewal date")
    status: Optional[ClientStatus] = Field(None, description="Client status")

    @field_validator("id", mode="before")
    @classmethod
    def convert_identifier(cls, v: Any) -> Any:
        return coerce_identifier(v)

    @field_validator("client_name", "company_name", mode="before")
    @classmethod
    def convert_names(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("renewal_date", mode="before")
    @classmethod
    def convert_renewal_date(cls, v: Any) -> Optional[dt.datetime]:
        return coerce_datetime(v)

    @field_validator("status", mode="before")
    @classmethod
    def convert_status(cls, v: Any) -> Optional[str]:
        if isinstance(v, str) and v in CLIENT_STATUSES:
            return v
        return None
