"""Base model for all record models in the metrics engine.

This module provides a base Pydantic model with common configuration
and helper methods for serialization/deserialization.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all record models.

    Records are snapshots of rows owned by the external data store. They
    carry columns the metrics engine never looks at (notes, created_at, ...),
    so unknown fields are ignored rather than rejected.

    Example:
        >>> class Tag(BaseDataModel):
        ...     name: str
        >>> Tag(name="vip", created_at="2024-01-01").model_dump()
        {'name': 'vip'}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date
        arbitrary_types_allowed=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        # Store rows carry more columns than the engine needs
        extra="ignore",
        frozen=False,
    )
