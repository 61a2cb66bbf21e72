"""CLI helpers for resolving the month a command works on."""

from datetime import date

import click

from studioledger.utils.date_parser import parse_month


def resolve_cli_month(ctx, month: str | None) -> tuple[int, int]:
    """Resolve ``--month`` to (year, month), defaulting to the current month."""
    if not month:
        today = date.today()
        return today.year, today.month

    try:
        return parse_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)


def month_option(help_text: str = "Month (YYYY-MM, MM/YYYY or 'last month'; default: this month)"):
    """Shared ``--month`` option."""
    return click.option("--month", "-m", help=help_text)
