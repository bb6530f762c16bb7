"""Payment data model for the metrics engine.

Every project is billed through two scheduled payments, an ``advance`` and a
``final`` one. Each is tracked as its own row with a paid/pending status.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Literal, Optional, get_args

from pydantic import Field, field_validator

from studio_metrics.models.base import BaseDataModel
from studio_metrics.models.coercion import ZERO, coerce_datetime, coerce_decimal
from studio_metrics.models.project import coerce_identifier

PaymentType = Literal["advance", "final"]
PaymentStatus = Literal["paid", "pending"]

PAYMENT_TYPES = get_args(PaymentType)
PAYMENT_STATUSES = get_args(PaymentStatus)


class Payment(BaseDataModel):
    """Represents a payment row.

    Attributes:
        id: Payment identifier, None when the store row has none
        project_id: Identifier of the project being paid for
        type: ``advance`` or ``final``
        amount: Amount due
        status: ``paid`` or ``pending``; anything that is not ``paid`` counts
            as pending
        paid_date: Date the payment was received

    Example:
        >>> payment = Payment(
        ...     id="pay-1", project_id="p-1", type="advance",
        ...     amount=4000, status="paid", paid_date="2024-03-02",
        ... )
        >>> payment.amount
        Decimal('4000')
    """

    id: Optional[str] = Field(None, description="Payment identifier")
    project_id: Optional[str] = Field(None, description="Project identifier")
    type: Optional[PaymentType] = Field(None, description="Payment type")
    amount: Decimal = Field(ZERO, description="Amount")
    status: PaymentStatus = Field("pending", description="Payment status")
    paid_date: Optional[dt.datetime] = Field(None, description="Date received")

    @field_validator("id", "project_id", mode="before")
    @classmethod
    def convert_identifier(cls, v: Any) -> Any:
        return coerce_identifier(v)

    @field_validator("type", mode="before")
    @classmethod
    def convert_type(cls, v: Any) -> Optional[str]:
        """Unknown payment types are treated as absent."""
        if isinstance(v, str) and v in PAYMENT_TYPES:
            return v
        return None

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount(cls, v: Any) -> Decimal:
        return coerce_decimal(v)

    @field_validator("status", mode="before")
    @classmethod
    def convert_status(cls, v: Any) -> str:
        """Only an explicit ``paid`` counts as received."""
        return "paid" if v == "paid" else "pending"

    @field_validator("paid_date", mode="before")
    @classmethod
    def convert_paid_date(cls, v: Any) -> Optional[dt.datetime]:
        return coerce_datetime(v)

    @property
    def is_paid(self) -> bool:
        return self.status == "paid"
