"""Tests for structured logging utilities."""

import json
import logging
import uuid

import pytest

from studio_metrics.config.logging_config import (
    LoggingConfig,
    configure_logging,
    reset_logging,
)
from studio_metrics.utils.logging_utils import (
    LogContext,
    generate_correlation_id,
    get_correlation_id,
    log_function_call,
)


class TestGenerateCorrelationId:
    """Test correlation ID generation."""

    def test_generate_correlation_id_format(self):
        """Test correlation ID is a UUID string."""
        corr_id = generate_correlation_id()

        assert isinstance(corr_id, str)
        uuid.UUID(corr_id)

    def test_generate_correlation_id_uniqueness(self):
        """Test each correlation ID is unique."""
        ids = [generate_correlation_id() for _ in range(100)]
        assert len(set(ids)) == 100


class TestLogContext:
    """Test LogContext context manager."""

    @pytest.fixture
    def json_log_file(self, tmp_path):
        """Configure JSON logging to a temporary file."""
        log_file = tmp_path / "test.log"
        configure_logging(
            LoggingConfig(
                log_format="json",
                enable_console=False,
                enable_file=True,
                log_file=str(log_file),
            )
        )
        yield log_file
        reset_logging()

    def _entries(self, log_file):
        for handler in logging.getLogger().handlers:
            handler.flush()
        return [json.loads(line) for line in log_file.read_text().splitlines()]

    def test_context_nesting_and_cleanup(self, json_log_file):
        """Test nested contexts merge and are removed on exit."""
        logger = logging.getLogger("test_module")

        with LogContext(view="clients"):
            with LogContext(client_id="c-1"):
                logger.info("Nested message")
            logger.info("Outer message")
        logger.info("Outside message")

        nested, outer, outside = self._entries(json_log_file)
        assert nested["view"] == "clients"
        assert nested["client_id"] == "c-1"
        assert outer["view"] == "clients"
        assert "client_id" not in outer
        assert "view" not in outside

    def test_correlation_id_lookup(self):
        """Test the active correlation id is visible inside the context."""
        assert get_correlation_id() is None

        with LogContext(correlation_id="req-42"):
            assert get_correlation_id() == "req-42"

        assert get_correlation_id() is None

    def test_context_restored_after_exception(self):
        """Test context is restored even when the block raises."""
        with pytest.raises(RuntimeError):
            with LogContext(correlation_id="req-1"):
                raise RuntimeError("fail")

        assert get_correlation_id() is None


class TestLogFunctionCall:
    """Test the log_function_call decorator."""

    def test_logs_entry_and_exit(self, caplog):
        """Test entry and exit are logged at the requested level."""

        @log_function_call(level="INFO")
        def build(value):
            return value * 2

        with caplog.at_level(logging.INFO):
            assert build(21) == 42

        assert "Entering build" in caplog.text
        assert "Exiting build" in caplog.text

    def test_bare_decorator_includes_args(self, caplog):
        """Test arguments are logged when requested."""

        @log_function_call(include_args=True)
        def fetch(collection, limit=None):
            return []

        with caplog.at_level(logging.DEBUG):
            fetch("projects", limit=5)

        assert "Entering fetch with args: 'projects', limit=5" in caplog.text

    def test_exceptions_logged_and_reraised(self, caplog):
        """Test exceptions are logged at ERROR and propagate."""

        @log_function_call
        def explode():
            raise ValueError("bad row")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError, match="bad row"):
                explode()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Exception in explode: ValueError: bad row" in errors[0].getMessage()

    def test_preserves_metadata(self):
        """Test functools.wraps keeps the wrapped name and docstring."""

        @log_function_call
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
