"""Validate snapshot command."""

from typing import Optional

import click

from studio_metrics.cli.commands.common import (
    debug_option,
    load_settings,
    open_snapshot,
    snapshot_option,
)
from studio_metrics.cli.error_handlers import DataValidationError, with_error_handling
from studio_metrics.cli.utils.formatters import format_info, format_success
from studio_metrics.validators.snapshot_validator import validate_snapshot


@click.command(name="validate")
@snapshot_option
@debug_option
def validate_data(snapshot: Optional[str], debug: bool):
    """Check snapshot records for values the metrics will coerce or drop.

    Exits with code 3 when errors (orphaned or unidentifiable rows) are found.

    Example:
        studio-metrics validate --snapshot exports/studio.json
    """
    with with_error_handling(debug):
        settings = load_settings()
        reader = open_snapshot(snapshot, settings)

        click.echo(format_info(f"Validating {reader.path}..."))
        report = validate_snapshot(reader.read_raw())

        click.echo(report.format())

        if not report.is_valid():
            raise DataValidationError(
                f"Snapshot has {report.summary()}",
                recovery_hint="Fix the rows listed under ERRORS in the data store",
            )

        click.echo(format_success("Snapshot is valid"))
