"""Snapshot reader for JSON exports of the data store.

A snapshot is a single JSON object holding the four collections the metrics
engine reads:

```
{
  "clients":  [{"id": "c-1", "client_name": "...", ...}],
  "projects": [{"id": "p-1", "client_id": "c-1", "price": 10000, ...}],
  "payments": [{"id": "pay-1", "project_id": "p-1", "type": "advance", ...}],
  "costs":    [{"id": "k-1", "project_id": "p-1", "labor_cost": 1200, ...}]
}
```

Missing collections are read as empty. The file is read once and the rows
are kept until ``refresh()``, so all collections of one request come from
the same file state. MetricsService refreshes at the start of every request.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from studio_metrics.exceptions import SnapshotReadError
from studio_metrics.models.client import Client
from studio_metrics.models.cost import Cost
from studio_metrics.models.payment import Payment
from studio_metrics.models.project import Project
from studio_metrics.readers.record_source import ModelT, parse_rows

logger = logging.getLogger(__name__)

COLLECTIONS = ("clients", "projects", "payments", "costs")


class SnapshotReader:
    """Record source reading a JSON snapshot file.

    Attributes:
        path: Location of the snapshot file

    Example:
        >>> reader = SnapshotReader("exports/studio.json")
        >>> projects = reader.list_projects()
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._raw: Optional[Dict[str, List[Any]]] = None

    def refresh(self) -> None:
        """Forget the loaded snapshot so the next read sees the current file."""
        self._raw = None

    def read_raw(self) -> Dict[str, List[Any]]:
        """Read the snapshot without validating rows.

        Returns:
            Mapping of collection name to raw row list

        Raises:
            SnapshotReadError: If the file cannot be read or is not a JSON
                object of lists
        """
        logger.debug(f"Reading snapshot from {self.path}")

        try:
            with self.path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError as e:
            raise SnapshotReadError(f"Snapshot file not found: {self.path}") from e
        except OSError as e:
            raise SnapshotReadError(f"Cannot read snapshot {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SnapshotReadError(
                f"Snapshot {self.path} is not valid JSON: {e.msg} "
                f"(line {e.lineno}, column {e.colno})"
            ) from e

        if not isinstance(data, dict):
            raise SnapshotReadError(
                f"Snapshot {self.path} must contain a JSON object at the top level"
            )

        raw: Dict[str, List[Any]] = {}
        for name in COLLECTIONS:
            rows = data.get(name) or []
            if not isinstance(rows, list):
                raise SnapshotReadError(
                    f"Snapshot collection '{name}' must be a list, "
                    f"got {type(rows).__name__}"
                )
            raw[name] = rows

        return raw

    def _read_rows(self, name: str, model: Type[ModelT]) -> List[ModelT]:
        if self._raw is None:
            self._raw = self.read_raw()
        rows = parse_rows(self._raw[name], model, name)
        logger.debug(f"Loaded {len(rows)} {name} from snapshot")
        return rows

    def list_projects(self) -> List[Project]:
        return self._read_rows("projects", Project)

    def list_payments(self) -> List[Payment]:
        return self._read_rows("payments", Payment)

    def list_costs(self) -> List[Cost]:
        return self._read_rows("costs", Cost)

    def list_clients(self, client_id: Optional[str] = None) -> List[Client]:
        clients = self._read_rows("clients", Client)
        if client_id is None:
            return clients
        return [client for client in clients if client.id == client_id]
