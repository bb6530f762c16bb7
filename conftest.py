"""
Global pytest configuration and fixtures.
"""
import json
import os
from typing import Any, Dict, List

import pytest

from studio_metrics.config import MetricsSettings, reload_config


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'ENVIRONMENT': 'testing',
        'DEBUG': 'true',
        'LOG_LEVEL': 'DEBUG',
        'ADVANCE_PERCENTAGE': '40',
        'MONTH_WINDOW': '6',
        'CURRENCY_SYMBOL': '$',
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv('SNAPSHOT_PATH', raising=False)

    # Clear the global config to force reload with test values
    import studio_metrics.config.settings
    studio_metrics.config.settings._config = None

    yield test_env_vars

    # Clean up
    studio_metrics.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> MetricsSettings:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def raw_snapshot() -> Dict[str, List[Dict[str, Any]]]:
    """Raw store rows for two clients and three projects."""
    return {
        'clients': [
            {'id': 'c-1', 'client_name': 'Dana Reyes', 'company_name': 'Acme Corp',
             'status': 'active', 'renewal_date': '2024-12-31'},
            {'id': 'c-2', 'client_name': 'Sam Okafor', 'company_name': 'Globex',
             'status': 'paused'},
        ],
        'projects': [
            {'id': 'p-1', 'client_id': 'c-1', 'title': 'Marketing site',
             'service_type': 'website', 'price': 10000, 'status': 'completed',
             'start_date': '2024-03-01', 'final_payment_date': '2024-04-15'},
            {'id': 'p-2', 'client_id': 'c-1', 'title': 'Lead routing',
             'service_type': 'automation', 'price': 5000, 'status': 'active',
             'start_date': '2024-03-10', 'final_payment_date': None},
            {'id': 'p-3', 'client_id': 'c-2', 'title': 'Support bot',
             'service_type': 'ai_workflow', 'price': 8000, 'status': 'lead',
             'start_date': None, 'final_payment_date': None},
        ],
        'payments': [
            {'id': 'pay-1', 'project_id': 'p-1', 'type': 'advance', 'amount': 4000,
             'status': 'paid', 'paid_date': '2024-03-02'},
            {'id': 'pay-2', 'project_id': 'p-1', 'type': 'final', 'amount': 6000,
             'status': 'paid', 'paid_date': '2024-04-15'},
            {'id': 'pay-3', 'project_id': 'p-2', 'type': 'advance', 'amount': 2000,
             'status': 'pending', 'paid_date': None},
        ],
        'costs': [
            {'id': 'k-1', 'project_id': 'p-1', 'labor_cost': 3000, 'tool_cost': 500,
             'hosting_cost': 300, 'other_cost': 200},
            {'id': 'k-2', 'project_id': 'p-2', 'labor_cost': 800, 'tool_cost': None,
             'hosting_cost': None, 'other_cost': 200},
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path, raw_snapshot):
    """Write the raw snapshot to a JSON file and return its path."""
    path = tmp_path / 'snapshot.json'
    path.write_text(json.dumps(raw_snapshot), encoding='utf-8')
    return path


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    # Remove test coverage files in case they're created
    test_files = ['coverage.xml', '.coverage']
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as exercising the command-line interface"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "tests/unit/cli/" in str(item.fspath):
            item.add_marker(pytest.mark.cli)
