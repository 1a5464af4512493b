#!/usr/bin/env python3
"""
Report CLI - Monthly Budget Report Command

Builds the monthly family budget report, renders the chart, saves the
detailed data and posts the summary to Slack.
"""

import logging
from datetime import date
from pathlib import Path

import click

from ..analysis import render_budget_chart
from ..budget import MonthlyBudgetRun, format_summary, save_detailed_data
from ..core.config import get_config
from ..core.currency import InvalidAmountError, parse_price_to_cents
from ..core.dates import DateRange
from ..core.errors import BudgetError
from ..core.money import Money
from ..moneybird import MoneybirdClient
from ..notify import SlackNotifier

logger = logging.getLogger(__name__)


def _parse_revenue(ctx: click.Context, param: click.Parameter, value: str | None) -> Money | None:
    if value is None:
        return None
    try:
        cents = parse_price_to_cents(value)
    except InvalidAmountError as e:
        raise click.BadParameter(f"not an amount: {value}") from e
    if cents < 0:
        raise click.BadParameter("revenue must not be negative")
    return Money.from_cents(cents)


@click.command()
@click.option(
    "--start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Start date (YYYY-MM-DD), defaults to first of the end date's month",
)
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), help="End date (YYYY-MM-DD), defaults to today")
@click.option(
    "--revenue",
    callback=_parse_revenue,
    help="Manual gross revenue override (e.g. --revenue 12850.20)",
)
@click.option("--revenue-account", help="Revenue ledger account name (default from REVENUE_ACCOUNT_NAME)")
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Override output directory")
@click.option("--chart/--no-chart", default=True, help="Render the pie chart (default: on)")
@click.option("--save-data/--no-save-data", default=True, help="Write detailed JSON data (default: on)")
@click.option("--send/--no-send", default=True, help="Post the summary to Slack (default: on)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def report(
    ctx: click.Context,
    start,
    end,
    revenue: Money | None,
    revenue_account: str | None,
    output_dir: Path | None,
    chart: bool,
    save_data: bool,
    send: bool,
    verbose: bool,
) -> None:
    """
    Build the monthly family budget report.

    Examples:
      family-budget report
      family-budget report --revenue 12850.20
      family-budget report --start 2025-01-01 --end 2025-01-31 --no-send
    """
    ctx.ensure_object(dict)
    config = ctx.obj.get("config") or get_config()
    verbose = verbose or ctx.obj.get("verbose", False)

    if start is None and end is None:
        period = DateRange.month_to_date()
    else:
        end_date = end.date() if end else date.today()
        start_date = start.date() if start else end_date.replace(day=1)
        if start_date > end_date:
            raise click.BadParameter(f"start {start_date} is after end {end_date}", param_hint="--start")
        period = DateRange(start=start_date, end=end_date)

    output_path = output_dir or config.output_dir
    output_path.mkdir(parents=True, exist_ok=True)

    if verbose:
        click.echo("Family Budget Report")
        click.echo(f"Period: {period}")
        click.echo(f"Manual revenue: {revenue if revenue is not None else 'not set'}")
        click.echo(f"Output directory: {output_path}")
        click.echo()

    try:
        client = MoneybirdClient.from_config(config.moneybird)
        run = MonthlyBudgetRun(client, config.moneybird, config.budget)
        result = run.run(period, revenue_override=revenue, revenue_account_name=revenue_account)
    except BudgetError as e:
        click.echo(f"❌ Report aborted: {e}", err=True)
        raise click.ClickException(str(e)) from e

    summary = format_summary(result.report)
    click.echo(summary)

    chart_file = None
    if chart:
        try:
            chart_file = render_budget_chart(
                result.report.root_totals,
                result.report.budget,
                output_path / f"budget_chart_{period.month_key()}.png",
                config.chart,
                title=f"Family Budget {period.month_label()}",
            )
        except OSError as e:
            logger.error("Rendering chart failed: %s", e)
            click.echo(f"⚠️  Could not render chart: {e}", err=True)
        if chart_file:
            click.echo(f"\n✅ Pie chart saved to: {chart_file}")

    if save_data:
        try:
            data_file = save_detailed_data(result.report, result.mutations, output_path)
            click.echo(f"✅ Detailed data saved to: {data_file}")
        except OSError as e:
            logger.error("Saving detailed data failed: %s", e)
            click.echo(f"⚠️  Could not save detailed data: {e}", err=True)

    if not send:
        return

    if not config.slack.is_configured:
        logger.warning("Slack is not configured; summary not sent")
        click.echo("⚠️  Slack not configured (SLACK_BOT_TOKEN/SLACK_CHANNEL_ID); summary not sent")
        return

    try:
        SlackNotifier.from_config(config.slack).send_report(summary, chart_file)
    except BudgetError as e:
        click.echo(f"❌ Sending to Slack failed: {e}", err=True)
        raise click.ClickException(str(e)) from e

    click.echo("✅ Summary posted to Slack")
