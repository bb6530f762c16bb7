"""Request-scoped log context and call logging.

A metrics request (one dashboard or client view) runs inside a
``LogContext`` whose fields are copied onto every record emitted in that
thread, so all log lines of one request share a correlation id.
"""

import functools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, Optional

_local = threading.local()


def _current_context() -> Dict[str, Any]:
    context = getattr(_local, "context", None)
    if context is None:
        context = _local.context = {}
    return context


def generate_correlation_id() -> str:
    """Return a new random correlation id (UUID4 string)."""
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    """Correlation id of the active LogContext in this thread, if any."""
    return _current_context().get("correlation_id")


class LogContext:
    """Attach structured fields to all records logged inside the block.

    Contexts nest: inner fields are added to the outer ones and the outer
    context is restored on exit, also when the block raises.

    Example:
        with LogContext(correlation_id=generate_correlation_id(), view="finance"):
            logger.info("Building portfolio")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._saved: Dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._saved = dict(_current_context())
        _current_context().update(self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        _local.context = self._saved
        return False


class _ContextFilter(logging.Filter):
    """Copy the active LogContext fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _current_context().items():
            setattr(record, key, value)
        return True


def _describe_call(name: str, args: tuple, kwargs: Dict[str, Any]) -> str:
    parts = [repr(arg) for arg in args]
    parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return f"Entering {name} with args: {', '.join(parts)}"


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """Log entry to and exit from the decorated function.

    Usable bare (``@log_function_call``) or with options. Exceptions are
    logged at ERROR with their traceback and re-raised unchanged.

    Args:
        func: Function to decorate when used without options
        include_args: Include the call arguments in the entry message
        level: Level name for the entry and exit messages

    Example:
        @log_function_call(level="INFO")
        def get_dashboard_metrics(self):
            ...
    """
    log_level = getattr(logging, level.upper())

    def decorator(f: Callable) -> Callable:
        logger = logging.getLogger(f.__module__)

        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            if include_args:
                logger.log(log_level, _describe_call(f.__name__, args, kwargs))
            else:
                logger.log(log_level, f"Entering {f.__name__}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Exception in {f.__name__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            logger.log(log_level, f"Exiting {f.__name__}")
            return result

        return wrapper

    return decorator if func is None else decorator(func)
