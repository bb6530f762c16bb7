"""Error reporting and exit codes for CLI commands.

| Error                                   | Exit code |
|-----------------------------------------|-----------|
| ConfigurationError                      | 1         |
| SnapshotReadError / DataSourceError     | 2         |
| DataValidationError                     | 3         |
| ProcessingError                         | 4         |
| click.Abort (Ctrl+C)                    | 130       |
| anything else                           | 255       |
"""

import sys
import traceback
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple, Type

import click

from studio_metrics.cli.utils.formatters import format_error, format_warning
from studio_metrics.exceptions import DataSourceError, SnapshotReadError

EXIT_ABORTED = 130
EXIT_UNEXPECTED = 255

DATA_SOURCE_HINT = (
    "Check that the snapshot path exists and holds a JSON export with "
    "clients, projects, payments and costs"
)


class CLIError(Exception):
    """Error with a user-facing message and an optional recovery hint."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Settings are invalid or a required option is missing."""


class DataValidationError(CLIError):
    """Snapshot data failed validation."""


class ProcessingError(CLIError):
    """Error raised while deriving or exporting metrics."""


_CLI_ERRORS: Tuple[Tuple[Type[CLIError], str, int], ...] = (
    (ConfigurationError, "Configuration Error", 1),
    (DataValidationError, "Data Validation Error", 3),
    (ProcessingError, "Processing Error", 4),
)


def _report(label: str, message: str, hint: Optional[str]) -> None:
    click.echo(format_error(f"{label}: {message}"))
    if hint:
        click.echo(format_warning(f"Hint: {hint}"))


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """Print an error for the user and return the process exit code.

    Args:
        error: The exception that ended the command
        debug: Print the full stack trace for unexpected errors

    Returns:
        Exit code, see the module table
    """
    for error_type, label, exit_code in _CLI_ERRORS:
        if isinstance(error, error_type):
            _report(label, error.message, error.recovery_hint)
            return exit_code

    if isinstance(error, (SnapshotReadError, DataSourceError)):
        _report("Data Source Error", str(error), DATA_SOURCE_HINT)
        return 2

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return EXIT_ABORTED

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))

    if debug:
        click.echo("\nFull stack trace:")
        click.echo(
            "".join(traceback.format_exception(type(error), error, error.__traceback__))
        )
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))

    return EXIT_UNEXPECTED


@contextmanager
def with_error_handling(debug: bool = False) -> Iterator[None]:
    """Turn exceptions raised by a command body into a message and exit code.

    ``SystemExit`` passes through untouched.

    Example:
        @click.command()
        @debug_option
        def portfolio(debug):
            with with_error_handling(debug):
                ...
    """
    try:
        yield
    except SystemExit:
        raise
    except Exception as e:
        sys.exit(handle_cli_error(e, debug))
