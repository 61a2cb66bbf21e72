"""Settings commands."""

import click
from studioledger.cli.error_handling import handle_domain_error
from studioledger.domain.distribution import BUCKETS
from studioledger.domain.entities import (
    PROFIT_CYCLES,
    ProLaboreFrequency,
    ProLaboreMode,
    Settings,
)
from studioledger.domain.errors import DomainError
from studioledger.domain.settings import SettingsService
from studioledger.utils.amount_parser import format_currency, format_percent, parse_amount
from studioledger.utils.date_parser import parse_date


def _display_settings(settings: Settings) -> None:
    click.echo("Pro-labore:")
    click.echo(f"  Frequency: {settings.pro_labore_frequency.value}")
    click.echo(f"  Mode: {settings.pro_labore_mode.value}")
    if settings.pro_labore_mode == ProLaboreMode.FIXED:
        click.echo(f"  Fixed value: {format_currency(settings.fixed_pro_labore_value)}")
    start = settings.pro_labore_start_date
    click.echo(f"  Start date: {start if start else 'not set'}")
    click.echo(f"Profit cycle: {settings.profit_cycle} month(s)")

    distribution = settings.distribution.effective()
    source = "custom" if settings.distribution.is_custom else "default"
    click.echo(f"Distribution ({source}):")
    for name, label, _ in BUCKETS:
        click.echo(f"  {label:<20} {format_percent(getattr(distribution, name)):>6}%")
    total = sum(getattr(distribution, name) for name, _, _ in BUCKETS)
    if total != 100:
        click.echo(f"  Note: percentages add up to {format_percent(total)}%")


@click.group()
def config_group():
    """View and change preferences."""
    pass


@config_group.command("show")
@click.pass_context
def show_config(ctx):
    """Show current preferences."""
    _display_settings(SettingsService(ctx.obj["db"]).get_settings())


@config_group.command("pro-labore")
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in ProLaboreFrequency], case_sensitive=False),
    help="Payout cadence",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ProLaboreMode], case_sensitive=False),
    help="PERCENT of revenue or a FIXED monthly value",
)
@click.option("--fixed-value", help="Monthly pro-labore for FIXED mode")
@click.option("--start-date", help="No payouts are suggested before this date")
@click.option("--clear-start-date", is_flag=True, help="Remove the start date")
@click.pass_context
def configure_pro_labore(
    ctx,
    frequency: str | None,
    mode: str | None,
    fixed_value: str | None,
    start_date: str | None,
    clear_start_date: bool,
):
    """Change pro-labore preferences.

    Examples:
        studioledger config pro-labore --frequency WEEKLY
        studioledger config pro-labore --mode FIXED --fixed-value 2000
    """
    service = SettingsService(ctx.obj["db"])

    if start_date and clear_start_date:
        click.echo("Error: --start-date cannot be combined with --clear-start-date", err=True)
        ctx.exit(1)

    changes = {}
    if frequency:
        changes["frequency"] = frequency.upper()
    if mode:
        changes["mode"] = mode.upper()
    if fixed_value is not None:
        try:
            changes["fixed_value"] = parse_amount(fixed_value)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    if start_date:
        try:
            changes["start_date"] = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    if clear_start_date:
        changes["start_date"] = None

    try:
        settings = service.update_pro_labore(**changes)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo("Pro-labore preferences updated.")
    _display_settings(settings)


@config_group.command("profit-cycle")
@click.argument("months", type=click.Choice([str(c) for c in PROFIT_CYCLES]))
@click.pass_context
def configure_profit_cycle(ctx, months: str):
    """Set the profit distribution cycle in months."""
    service = SettingsService(ctx.obj["db"])
    try:
        service.set_profit_cycle(int(months))
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Profit cycle set to {months} month(s).")


@config_group.command("distribution")
@click.option("--fixed", help="Percent for fixed expenses")
@click.option("--variable", help="Percent for variable expenses")
@click.option("--profit", help="Percent for studio profit")
@click.option("--investment", help="Percent for investments")
@click.option("--pro-labore", help="Percent for pro-labore")
@click.option("--reset", is_flag=True, help="Go back to the default distribution")
@click.pass_context
def configure_distribution(ctx, reset: bool, **percents):
    """Customize the smart distribution percentages.

    Percentages not given keep their current value. They do not have to add
    up to 100.

    Examples:
        studioledger config distribution --pro-labore 40 --investment 17.7
        studioledger config distribution --reset
    """
    service = SettingsService(ctx.obj["db"])
    given = {name: value for name, value in percents.items() if value is not None}

    if reset and given:
        click.echo("Error: --reset cannot be combined with percentages", err=True)
        ctx.exit(1)

    try:
        if reset:
            settings = service.reset_distribution()
        else:
            values = {name: parse_amount(value) for name, value in given.items()}
            settings = service.set_distribution(**values)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo("Distribution updated.")
    _display_settings(settings)


def register_commands(cli: click.Group) -> None:
    """Register config commands with main CLI."""
    cli.add_command(config_group, name="config")
