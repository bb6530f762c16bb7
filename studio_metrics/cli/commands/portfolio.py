"""Portfolio metrics command."""

import datetime as dt
import json
from typing import List, Optional

import click

from studio_metrics.aggregators.portfolio_aggregator import Portfolio
from studio_metrics.aggregators.portfolio_insights import (
    LONG_CYCLE_DAYS,
    LOW_MARGIN_THRESHOLD,
    average_margin,
    long_cycle_projects,
    low_margin_projects,
    service_type_margins,
    top_profitable_projects,
)
from studio_metrics.calculators.date_utils import days_elapsed
from studio_metrics.calculators.project_metrics import ProjectMetric
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
    format_currency,
    format_days,
    format_info,
    format_percent,
    format_success,
    format_table,
)
from studio_metrics.services.metrics_service import MetricsService
from studio_metrics.writers.report_writer import export_portfolio


def _project_rows(metrics: List[ProjectMetric], money) -> List[List[str]]:
    return [
        [
            m.title or m.id,
            m.service_type,
            money(m.profit),
            format_percent(m.margin),
            format_days(m.cycle_days),
        ]
        for m in metrics
    ]


def _render_rankings(portfolio: Portfolio, money) -> None:
    rankings = [
        ("Top profitable projects", top_profitable_projects(portfolio)),
        (
            f"Projects below {LOW_MARGIN_THRESHOLD}% margin",
            low_margin_projects(portfolio),
        ),
        (
            f"Projects with cycles over {LONG_CYCLE_DAYS} days",
            long_cycle_projects(portfolio),
        ),
    ]
    for title, metrics in rankings:
        if not metrics:
            continue
        click.echo()
        click.echo(click.style(title, bold=True))
        click.echo(
            format_table(
                ["Project", "Type", "Profit", "Margin", "Cycle"],
                _project_rows(metrics, money),
            )
        )


def _render_portfolio(portfolio: Portfolio, symbol: str, today: dt.date) -> None:
    def money(value) -> str:
        return format_currency(value, symbol)

    summary_rows = [
        ["Total revenue", money(portfolio.total_revenue)],
        ["Received", money(portfolio.total_received)],
        ["Pending", money(portfolio.total_pending)],
        ["Total costs", money(portfolio.total_costs)],
        ["Total profit", money(portfolio.total_profit)],
        ["Average margin", format_percent(average_margin(portfolio))],
        ["Burn rate / month", money(portfolio.burn_rate)],
        ["Active projects", str(portfolio.active_projects_count)],
        ["Completed projects", str(portfolio.completed_projects_count)],
        ["Avg cycle time", format_days(portfolio.avg_cycle_time_days)],
    ]
    click.echo(format_table(["Metric", "Value"], summary_rows))

    if portfolio.profit_by_service_type:
        margins = service_type_margins(portfolio)
        click.echo()
        click.echo(
            format_table(
                ["Service type", "Revenue", "Cost", "Profit", "Margin"],
                [
                    [
                        key,
                        money(t.revenue),
                        money(t.cost),
                        money(t.profit),
                        f"{margins[key]}%",
                    ]
                    for key, t in portfolio.profit_by_service_type.items()
                ],
            )
        )

    if portfolio.revenue_by_month:
        click.echo()
        click.echo(
            format_table(
                ["Month", "Period", "Revenue", "Expenses"],
                [
                    [b.month, b.period, money(b.revenue), money(b.expenses)]
                    for b in portfolio.revenue_by_month
                ],
            )
        )

    if portfolio.project_metrics:
        click.echo()
        click.echo(
            format_table(
                [
                    "Project",
                    "Type",
                    "Status",
                    "Price",
                    "Profit",
                    "Margin",
                    "Cycle",
                    "Elapsed",
                ],
                [
                    [
                        m.title or m.id,
                        m.service_type,
                        m.status,
                        money(m.price),
                        money(m.profit),
                        format_percent(m.margin),
                        format_days(m.cycle_days),
                        format_days(days_elapsed(m.start_date, today)),
                    ]
                    for m in portfolio.project_metrics
                ],
            )
        )
        _render_rankings(portfolio, money)


@click.command(name="portfolio")
@snapshot_option
@format_option
@click.option(
    "--export-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Also write the metric tables as CSV files into this directory",
)
@today_option
@debug_option
def portfolio_report(
    snapshot: Optional[str],
    output_format: str,
    export_dir: Optional[str],
    today: Optional[dt.datetime],
    debug: bool,
):
    """Show portfolio metrics, margins and project rankings.

    Example:
        studio-metrics portfolio --snapshot exports/studio.json
        studio-metrics portfolio --format json
    """
    with with_error_handling(debug):
        settings = load_settings()
        service = MetricsService(open_snapshot(snapshot, settings), settings)

        portfolio = service.get_dashboard_metrics()

        if output_format == "json":
            click.echo(json.dumps(portfolio.to_dict(), indent=2))
        else:
            _render_portfolio(
                portfolio, settings.currency_symbol, resolve_today(today)
            )

        if export_dir:
            paths = export_portfolio(portfolio, export_dir)
            click.echo(format_success(f"Exported {len(paths)} file(s) to {export_dir}"))
        elif output_format == "table" and not portfolio.project_metrics:
            click.echo(format_info("No projects found in the snapshot."))
