#!/usr/bin/env python3
"""
Main CLI Entry Point for the Family Budget Report

Provides the command-line interface for building and sending the report.
"""

import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Family Budget - Monthly Moneybird Budget Report

    Categorizes the month's Moneybird transactions, computes the available
    family budget after VAT and income tax, and posts a summary with a pie
    chart to Slack.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["BUDGET_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("familybudget").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from familybudget import __author__, __version__

    click.echo(f"Family Budget v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Moneybird Token: {'set' if config_obj.moneybird.api_token else 'not set'}")
    click.echo(f"  Moneybird Administration: {config_obj.moneybird.administration_id or 'not set'}")
    click.echo(f"  Slack: {'configured' if config_obj.slack.is_configured else 'not configured'}")
    click.echo(f"  VAT Rate: {config_obj.budget.vat_rate}")
    click.echo(f"  Income Tax Rate: {config_obj.budget.income_tax_rate}")
    click.echo(f"  Revenue Account: {config_obj.budget.revenue_account_name}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .report import report  # noqa: E402

main.add_command(report)


if __name__ == "__main__":
    main()
