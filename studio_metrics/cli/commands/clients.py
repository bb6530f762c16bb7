"""Client financials command."""

import datetime as dt
import json
from typing import Optional

import click

from studio_metrics.calculators.date_utils import days_until
from studio_metrics.cli.commands.common import (
    debug_option,
    format_option,
    load_settings,
    open_snapshot,
    resolve_today,
    snapshot_option,
    today_option,
)
from studio_metrics.cli.error_handlers import with_error_handling
from studio_metrics.cli.utils.formatters import (
    format_countdown,
    format_currency,
    format_info,
    format_percent,
    format_success,
    format_table,
)
from studio_metrics.services.metrics_service import MetricsService


@click.command(name="clients")
@snapshot_option
@click.option("--client-id", type=str, default=None, help="Show a single client")
@format_option
@today_option
@debug_option
def client_financials(
    snapshot: Optional[str],
    client_id: Optional[str],
    output_format: str,
    today: Optional[dt.datetime],
    debug: bool,
):
    """Show revenue, cost, profit, margin and renewal countdown per client.

    Example:
        studio-metrics clients --snapshot exports/studio.json
        studio-metrics clients --client-id c-1 --format json
    """
    with with_error_handling(debug):
        settings = load_settings()
        service = MetricsService(open_snapshot(snapshot, settings), settings)

        clients = service.get_clients_with_financials(client_id)

        if output_format == "json":
            click.echo(json.dumps([c.to_dict() for c in clients], indent=2))
            return

        if not clients:
            click.echo(format_info("No matching clients found."))
            return

        symbol = settings.currency_symbol
        reference_date = resolve_today(today)
        rows = [
            [
                c.client.company_name or c.client.client_name or c.client.id,
                str(c.project_count),
                format_currency(c.total_revenue, symbol),
                format_currency(c.total_cost, symbol),
                format_currency(c.total_profit, symbol),
                format_percent(c.margin_percent),
                format_countdown(days_until(c.client.renewal_date, reference_date)),
            ]
            for c in clients
        ]
        headers = [
            "Client",
            "Projects",
            "Revenue",
            "Cost",
            "Profit",
            "Margin",
            "Renewal",
        ]
        click.echo(format_table(headers, rows))
        click.echo()
        click.echo(format_success(f"Found {len(clients)} client(s)"))
