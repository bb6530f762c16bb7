"""Record source interface for the external data store.

The metrics engine only ever reads four collections. Anything that can list
them (a database client, an HTTP API client, a JSON snapshot) can feed it.
"""

import logging
from typing import Any, Iterable, List, Optional, Protocol, Sequence, Type, TypeVar

from pydantic import ValidationError

from studio_metrics.models.base import BaseDataModel
from studio_metrics.models.client import Client
from studio_metrics.models.cost import Cost
from studio_metrics.models.payment import Payment
from studio_metrics.models.project import Project

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseDataModel)


class RecordSource(Protocol):
    """Read-only access to the rows the metrics engine consumes."""

    def list_projects(self) -> List[Project]:
        ...

    def list_payments(self) -> List[Payment]:
        ...

    def list_costs(self) -> List[Cost]:
        ...

    def list_clients(self, client_id: Optional[str] = None) -> List[Client]:
        ...

    def refresh(self) -> None:
        """Drop cached rows so the next listing reflects the store."""
        ...


def parse_rows(rows: Iterable[Any], model: Type[ModelT], kind: str) -> List[ModelT]:
    """Validate raw rows into models, skipping rows that cannot be used.

    Field-level problems (a non-numeric price, an invalid date) are coerced
    by the models themselves. Only rows that are not objects or that the
    model rejects (a client or project without an id) are dropped here.
    Payments and costs are matched on ``project_id`` and need no id.

    Args:
        rows: Raw row dictionaries
        model: Model class to validate into
        kind: Collection name used in log messages

    Returns:
        List of validated models, in input order
    """
    parsed: List[ModelT] = []

    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning(f"Skipping {kind} row {index}: expected an object")
            continue
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(
                f"Skipping {kind} row {index} ({row.get('id', 'no id')}): "
                f"{e.error_count()} validation error(s)"
            )

    return parsed


class InMemoryRecordSource:
    """Record source backed by already-loaded model lists.

    Example:
        >>> source = InMemoryRecordSource(projects=[Project(id="p-1")])
        >>> len(source.list_projects())
        1
    """

    def __init__(
        self,
        clients: Sequence[Client] = (),
        projects: Sequence[Project] = (),
        payments: Sequence[Payment] = (),
        costs: Sequence[Cost] = (),
    ):
        self.clients = list(clients)
        self.projects = list(projects)
        self.payments = list(payments)
        self.costs = list(costs)

    def list_projects(self) -> List[Project]:
        return list(self.projects)

    def list_payments(self) -> List[Payment]:
        return list(self.payments)

    def list_costs(self) -> List[Cost]:
        return list(self.costs)

    def list_clients(self, client_id: Optional[str] = None) -> List[Client]:
        if client_id is None:
            return list(self.clients)
        return [client for client in self.clients if client.id == client_id]

    def refresh(self) -> None:
        pass
