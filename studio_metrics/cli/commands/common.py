"""Options and helpers shared by the CLI commands."""

import datetime as dt
from typing import Optional

import click
from pydantic import ValidationError

from studio_metrics.cli.error_handlers import ConfigurationError
from studio_metrics.config.settings import MetricsSettings, get_config
from studio_metrics.readers.snapshot_reader import SnapshotReader

snapshot_option = click.option(
    "--snapshot",
    "snapshot",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON snapshot of the data store (optional, uses SNAPSHOT_PATH from config)",
)

debug_option = click.option(
    "--debug", is_flag=True, default=False, help="Show full stack traces on errors"
)

format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Output format",
)

today_option = click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date for day counts (YYYY-MM-DD, default: current date)",
)


def resolve_today(today: Optional[dt.datetime]) -> dt.date:
    """Return the date given on the command line, or the current date."""
    return (today or dt.datetime.now()).date()


def load_settings() -> MetricsSettings:
    """Load settings, reporting invalid configuration as a CLI error."""
    try:
        return get_config()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            recovery_hint="Check the values in your .env file or environment",
        ) from e


def open_snapshot(snapshot: Optional[str], settings: MetricsSettings) -> SnapshotReader:
    """Create a reader for the given snapshot or the configured default."""
    path = snapshot or settings.snapshot_path
    if not path:
        raise ConfigurationError(
            "No snapshot file given",
            recovery_hint="Pass --snapshot PATH or set SNAPSHOT_PATH",
        )
    return SnapshotReader(path)
