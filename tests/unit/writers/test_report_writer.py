"""Unit tests for the tabular report writer."""

import pandas as pd
import pytest

from studio_metrics.aggregators.client_aggregator import aggregate_clients
from studio_metrics.aggregators.portfolio_aggregator import build_portfolio
from studio_metrics.readers.snapshot_reader import SnapshotReader
from studio_metrics.writers.report_writer import (
    client_financials_frame,
    export_portfolio,
    project_metrics_frame,
    revenue_by_month_frame,
    service_type_frame,
    write_csv,
)


@pytest.fixture
def reader(snapshot_file):
    """Reader over the shared snapshot fixture."""
    return SnapshotReader(snapshot_file)


@pytest.fixture
def portfolio(reader):
    """Portfolio built from the snapshot fixture."""
    return build_portfolio(
        reader.list_projects(), reader.list_payments(), reader.list_costs()
    )


class TestFrames:
    """Test DataFrame construction."""

    def test_project_metrics_frame(self, portfolio):
        """Test one row per project with nullable cycle days."""
        df = project_metrics_frame(portfolio)

        assert list(df["id"]) == ["p-1", "p-2", "p-3"]
        assert list(df["margin"]) == [60.0, 80.0, 100.0]
        assert str(df["cycle_days"].dtype) == "Int64"
        assert df["cycle_days"].iloc[0] == 45
        assert df["cycle_days"].isna().tolist() == [False, True, True]

    def test_empty_portfolio_frames(self):
        """Test an empty portfolio yields empty frames with headers."""
        empty = build_portfolio([], [], [])

        assert project_metrics_frame(empty).empty
        assert list(revenue_by_month_frame(empty).columns) == [
            "period",
            "month",
            "revenue",
            "expenses",
        ]
        assert service_type_frame(empty).empty

    def test_revenue_by_month_frame(self, portfolio):
        """Test the monthly series as a frame."""
        df = revenue_by_month_frame(portfolio)

        assert df.to_dict("records") == [
            {
                "period": "2024-03",
                "month": "Mar",
                "revenue": 15000.0,
                "expenses": 5000.0,
            }
        ]

    def test_service_type_frame(self, portfolio):
        """Test one row per service type in first-seen order."""
        df = service_type_frame(portfolio)

        assert list(df["service_type"]) == ["website", "automation", "ai_workflow"]
        assert df.set_index("service_type").loc["website", "profit"] == 6000.0

    def test_client_financials_frame(self, reader):
        """Test client rows carry their financial totals."""
        clients = aggregate_clients(
            reader.list_clients(), reader.list_projects(), reader.list_costs()
        )

        df = client_financials_frame(clients)

        assert list(df["company_name"]) == ["Acme Corp", "Globex"]
        assert list(df["total_revenue"]) == [15000.0, 8000.0]
        assert df["margin_percent"].iloc[0] == pytest.approx(66.6667, abs=0.001)


class TestWriteCsv:
    """Test CSV output."""

    def test_write_creates_parent_directories(self, tmp_path):
        """Test missing directories are created."""
        target = tmp_path / "nested" / "out.csv"

        path = write_csv(pd.DataFrame([{"a": 1}]), target)

        assert path == target
        assert target.read_text(encoding="utf-8").splitlines() == ["a", "1"]

    def test_export_portfolio(self, portfolio, tmp_path):
        """Test the three portfolio tables are written."""
        paths = export_portfolio(portfolio, tmp_path / "reports")

        assert [p.name for p in paths] == [
            "project_metrics.csv",
            "revenue_by_month.csv",
            "profit_by_service_type.csv",
        ]
        assert all(p.exists() for p in paths)

        projects = pd.read_csv(paths[0])
        assert len(projects) == 3
        assert projects.loc[0, "cycle_days"] == 45
