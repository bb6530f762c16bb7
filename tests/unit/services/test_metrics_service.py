"""Unit tests for MetricsService."""

import json
from decimal import Decimal
from unittest.mock import Mock, patch

import pytest

from studio_metrics.config import MetricsSettings
from studio_metrics.exceptions import DataSourceError, SnapshotReadError
from studio_metrics.readers.snapshot_reader import SnapshotReader
from studio_metrics.services.metrics_service import MetricsService


@pytest.fixture
def settings():
    """Settings with the default business rules."""
    return MetricsSettings(
        environment="testing", advance_percentage=Decimal("40"), month_window=6
    )


@pytest.fixture
def service(snapshot_file, settings):
    """Service reading the shared snapshot fixture."""
    return MetricsService(SnapshotReader(snapshot_file), settings)


class TestDashboardMetrics:
    """Test the portfolio view entry point."""

    def test_portfolio_from_snapshot(self, service):
        """Test the full portfolio derived from the snapshot."""
        portfolio = service.get_dashboard_metrics()

        assert portfolio.total_revenue == Decimal("23000")
        assert portfolio.total_costs == Decimal("5000")
        assert portfolio.total_profit == Decimal("18000")
        assert portfolio.total_received == Decimal("10000")
        assert portfolio.total_pending == Decimal("2000")
        assert portfolio.active_projects_count == 1
        assert portfolio.completed_projects_count == 1
        assert portfolio.avg_cycle_time_days == 45
        assert portfolio.burn_rate == 5000
        assert [b.period for b in portfolio.revenue_by_month] == ["2024-03"]
        assert portfolio.revenue_by_month[0].revenue == Decimal("15000")

    def test_project_metrics(self, service):
        """Test per-project margins and cycle times."""
        metrics = service.get_dashboard_metrics().project_metrics

        assert [m.margin for m in metrics] == [
            Decimal("60.0"),
            Decimal("80.0"),
            Decimal("100.0"),
        ]
        assert [m.cycle_days for m in metrics] == [45, None, None]
        assert [m.status for m in metrics] == ["completed", "active", "lead"]

    def test_month_window_from_settings(self, snapshot_file):
        """Test the month window is taken from settings."""
        settings = MetricsSettings(environment="testing", month_window=1)
        source = Mock()
        source.list_projects.return_value = []
        source.list_payments.return_value = []
        source.list_costs.return_value = []

        portfolio = MetricsService(source, settings).get_dashboard_metrics()

        assert portfolio.revenue_by_month == []
        source.list_projects.assert_called_once_with()

    def test_one_file_read_per_request(self, service, snapshot_file, raw_snapshot):
        """Test a request reads the snapshot once and sees later edits."""
        with patch.object(json, "load", wraps=json.load) as load:
            service.get_dashboard_metrics()

        assert load.call_count == 1

        raw_snapshot["projects"] = raw_snapshot["projects"][:1]
        snapshot_file.write_text(json.dumps(raw_snapshot), encoding="utf-8")

        assert service.get_dashboard_metrics().total_revenue == Decimal("10000")

    def test_fetch_failure_wrapped(self, settings):
        """Test source failures surface as DataSourceError."""
        source = Mock()
        source.list_projects.side_effect = RuntimeError("connection reset")

        with pytest.raises(DataSourceError, match="projects") as exc_info:
            MetricsService(source, settings).get_dashboard_metrics()

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_missing_snapshot_wrapped(self, tmp_path, settings):
        """Test reader errors are wrapped as well."""
        service = MetricsService(SnapshotReader(tmp_path / "gone.json"), settings)

        with pytest.raises(DataSourceError) as exc_info:
            service.get_dashboard_metrics()

        assert isinstance(exc_info.value.__cause__, SnapshotReadError)


class TestClientsWithFinancials:
    """Test the client view entry point."""

    def test_all_clients(self, service):
        """Test every client is aggregated in store order."""
        results = service.get_clients_with_financials()

        assert [r.client.id for r in results] == ["c-1", "c-2"]
        acme, globex = results
        assert acme.total_revenue == Decimal("15000")
        assert acme.total_cost == Decimal("5000")
        assert acme.total_profit == Decimal("10000")
        assert float(acme.margin_percent) == pytest.approx(66.6667, abs=0.001)
        assert globex.total_cost == Decimal("0")
        assert globex.margin_percent == Decimal("100")

    def test_single_client(self, service):
        """Test filtering by client id."""
        results = service.get_clients_with_financials("c-2")

        assert len(results) == 1
        assert results[0].total_revenue == Decimal("8000")

    def test_unknown_client_is_empty(self, settings):
        """Test an unknown client returns an empty list without further fetches."""
        source = Mock()
        source.list_clients.return_value = []

        results = MetricsService(source, settings).get_clients_with_financials("x")

        assert results == []
        source.list_clients.assert_called_once_with("x")
        source.list_projects.assert_not_called()

    def test_idempotent(self, service):
        """Test repeated calls over unchanged data agree."""
        first = [r.to_dict() for r in service.get_clients_with_financials()]
        second = [r.to_dict() for r in service.get_clients_with_financials()]

        assert first == second


class TestPaymentHelpers:
    """Test payment statistics and planning."""

    def test_payment_stats(self, service):
        """Test received and pending totals."""
        stats = service.get_payment_stats()

        assert stats.total_received == Decimal("10000")
        assert stats.total_pending == Decimal("2000")

    def test_plan_payments_uses_settings(self, snapshot_file):
        """Test the advance share comes from settings."""
        settings = MetricsSettings(environment="testing", advance_percentage=50)
        service = MetricsService(SnapshotReader(snapshot_file), settings)

        split = service.plan_payments(Decimal("9000"))

        assert split.advance == Decimal("4500")
        assert split.final == Decimal("4500")

    def test_defaults_to_global_config(self, mock_env, snapshot_file):
        """Test settings fall back to the global configuration."""
        service = MetricsService(SnapshotReader(snapshot_file))

        assert service.settings.month_window == 6
        assert service.settings.environment == "testing"
