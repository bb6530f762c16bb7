"""Readers that fetch records from the data store."""

from studio_metrics.readers.record_source import (
    InMemoryRecordSource,
    RecordSource,
    parse_rows,
)
from studio_metrics.readers.snapshot_reader import SnapshotReader

__all__ = ["InMemoryRecordSource", "RecordSource", "SnapshotReader", "parse_rows"]
