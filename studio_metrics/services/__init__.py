"""Services that combine data access with the metrics engine."""

from studio_metrics.services.metrics_service import MetricsService

__all__ = ["MetricsService"]
