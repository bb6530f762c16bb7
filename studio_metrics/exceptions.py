"""Exceptions raised around the metrics engine.

The calculators and aggregators never raise on bad record data; these
errors belong to the I/O boundary that fetches records.
"""


class MetricsError(Exception):
    """Base class for metrics engine errors."""


class SnapshotReadError(MetricsError):
    """A snapshot file is missing, unreadable or not valid JSON."""


class DataSourceError(MetricsError):
    """Fetching records from the data source failed."""
