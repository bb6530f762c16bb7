"""Studio Metrics CLI.

Command-line interface over a JSON snapshot of the studio data store:
portfolio metrics, client financials and snapshot validation.
"""

from dataclasses import replace

import click

from studio_metrics import __version__
from studio_metrics.cli.commands.clients import client_financials
from studio_metrics.cli.commands.portfolio import portfolio_report
from studio_metrics.cli.commands.validate import validate_data
from studio_metrics.config.logging_config import LoggingConfig, configure_logging


@click.group(help="Studio Metrics CLI - Derive financial metrics for the studio")
@click.version_option(version=__version__)
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool):
    """Studio Metrics CLI main entry point."""
    config = LoggingConfig.from_env()
    if verbose:
        config = replace(config, log_level="DEBUG")
    configure_logging(config)


cli.add_command(portfolio_report)
cli.add_command(client_financials)
cli.add_command(validate_data)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
