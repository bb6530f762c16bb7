"""Cost data model for the metrics engine."""

from decimal import Decimal
from typing import Any, Optional

from pydantic import Field, field_validator

from studio_metrics.models.base import BaseDataModel
from studio_metrics.models.coercion import ZERO, coerce_decimal
from studio_metrics.models.project import coerce_identifier

COST_FIELDS = ("labor_cost", "tool_cost", "hosting_cost", "other_cost")


class Cost(BaseDataModel):
    """Represents one cost entry booked against a project.

    A project may have any number of cost rows. Each sub-field is optional
    in the store and counts as 0 when missing. Negative values are kept as
    given so that correction entries can reduce a project's cost.

    Attributes:
        id: Cost row identifier, None when the store row has none
        project_id: Identifier of the project the cost belongs to
        labor_cost: Labor cost
        tool_cost: Software and tooling cost
        hosting_cost: Hosting cost
        other_cost: Any other cost

    Example:
        >>> cost = Cost(id="k-1", project_id="p-1", labor_cost=100, tool_cost=None)
        >>> cost.total
        Decimal('100')
    """

    id: Optional[str] = Field(None, description="Cost identifier")
    project_id: Optional[str] = Field(None, description="Project identifier")
    labor_cost: Decimal = Field(ZERO, description="Labor cost")
    tool_cost: Decimal = Field(ZERO, description="Tool cost")
    hosting_cost: Decimal = Field(ZERO, description="Hosting cost")
    other_cost: Decimal = Field(ZERO, description="Other cost")

    @field_validator("id", "project_id", mode="before")
    @classmethod
    def convert_identifier(cls, v: Any) -> Any:
        return coerce_identifier(v)

    @field_validator(*COST_FIELDS, mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Decimal:
        """Convert cost values to Decimal, treating absent values as 0."""
        return coerce_decimal(v)

    @property
    def total(self) -> Decimal:
        return self.labor_cost + self.tool_cost + self.hosting_cost + self.other_cost
