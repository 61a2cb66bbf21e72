"""Monthly overview commands."""

import click
from studioledger.cli.error_handling import handle_domain_error
from studioledger.cli.month_filters import month_option, resolve_cli_month
from studioledger.domain.entities import MonthlyReport, ProfitReserve
from studioledger.domain.errors import DomainError
from studioledger.domain.report import MonthlyReportService
from studioledger.utils.amount_parser import format_currency, format_percent


def _display_suggestions(report: MonthlyReport) -> None:
    if not report.suggestions:
        click.echo("  No pro-labore withdrawal suggested.")
        return
    for suggestion in report.suggestions:
        click.echo(f"  {suggestion.date}  {format_currency(suggestion.amount):>16}")


def _display_report(report: MonthlyReport, reserve: ProfitReserve) -> None:
    click.echo(f"\nOverview for {report.year:04d}-{report.month:02d}")
    click.echo("=" * 60)
    click.echo(f"{'Studio revenue':<30} {format_currency(report.professional_revenue):>16}")
    click.echo(f"{'Studio expenses':<30} {format_currency(report.professional_expense):>16}")
    click.echo(f"{'Net profit':<30} {format_currency(report.net_profit):>16}")
    click.echo(f"{'Profit margin':<30} {report.profit_margin:>15.1f}%")
    click.echo(f"{'Withdrawn this month':<30} {format_currency(report.withdrawn_this_month):>16}")
    click.echo(
        f"{'Remaining studio balance':<30} {format_currency(report.remaining_studio_balance):>16}"
    )
    click.echo(f"{'Health':<30} {report.health.label:>16}")

    click.echo(f"\n{'Personal revenue':<30} {format_currency(report.personal_revenue):>16}")
    click.echo(f"{'Personal expenses':<30} {format_currency(report.personal_expense):>16}")

    click.echo("\nRevenue by payment method:")
    for method, amount in report.revenue_by_method.items():
        click.echo(f"  {method.value:<28} {format_currency(amount):>16}")

    if report.expenses_by_sub_category:
        click.echo("\nStudio expenses by sub-category:")
        for sub_category, amount in report.expenses_by_sub_category:
            click.echo(f"  {sub_category.value:<28} {format_currency(amount):>16}")

    click.echo("\nSmart distribution:")
    for bucket in report.allocation.values():
        click.echo(
            f"  {bucket.label:<20} {format_percent(bucket.percent):>6}% "
            f"{format_currency(bucket.amount):>16}"
            f"  {bucket.description}"
        )

    click.echo("\nPro-labore suggestions:")
    _display_suggestions(report)

    click.echo(
        f"\nProfit reserve ({reserve.start_year:04d}-{reserve.start_month:02d} to "
        f"{reserve.end_year:04d}-{reserve.end_month:02d}, "
        f"{reserve.cycle_months}-month cycle):"
    )
    click.echo(f"  {'Accumulated':<28} {format_currency(reserve.accumulated):>16}")
    click.echo(f"  {'Withdrawn':<28} {format_currency(reserve.withdrawn):>16}")
    click.echo(f"  {'Available':<28} {format_currency(reserve.available):>16}")


@click.command("report")
@month_option()
@click.pass_context
def report(ctx, month: str | None):
    """Show the monthly overview.

    Examples:
        studioledger report
        studioledger report --month 2024-03
    """
    service = MonthlyReportService(ctx.obj["db"])
    year, month_number = resolve_cli_month(ctx, month)

    try:
        monthly = service.build_monthly_report(month_number, year)
        reserve = service.profit_reserve(month_number, year)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    _display_report(monthly, reserve)


@click.command("forecast")
@month_option()
@click.pass_context
def forecast(ctx, month: str | None):
    """Show the suggested pro-labore withdrawals for a month."""
    service = MonthlyReportService(ctx.obj["db"])
    year, month_number = resolve_cli_month(ctx, month)

    try:
        monthly = service.build_monthly_report(month_number, year)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    pro_labore = monthly.allocation["pro_labore"]
    click.echo(f"\nPro-labore for {year:04d}-{month_number:02d}")
    click.echo(
        f"  Ceiling ({format_percent(pro_labore.percent)}% of studio revenue): "
        f"{format_currency(pro_labore.amount)}"
    )
    click.echo(f"  Already withdrawn: {format_currency(monthly.pro_labore_withdrawn)}")
    click.echo("Suggested withdrawals:")
    _display_suggestions(monthly)


@click.command("trend")
@month_option(help_text="Last month of the trend (default: this month)")
@click.option("--months", type=click.IntRange(min=1), default=6, show_default=True)
@click.pass_context
def trend(ctx, month: str | None, months: int):
    """Show studio revenue and expenses for recent months."""
    service = MonthlyReportService(ctx.obj["db"])
    year, month_number = resolve_cli_month(ctx, month)

    try:
        points = service.build_trend(month_number, year, months=months)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{'Month':<10} {'Revenue':>16} {'Expenses':>16} {'Result':>16}")
    click.echo("-" * 60)
    for point in points:
        click.echo(
            f"{point.year:04d}-{point.month:02d}{'':<3} {format_currency(point.revenue):>16} "
            f"{format_currency(point.expense):>16} "
            f"{format_currency(point.revenue - point.expense):>16}"
        )


def register_commands(cli: click.Group) -> None:
    """Register report commands with main CLI."""
    cli.add_command(report)
    cli.add_command(forecast)
    cli.add_command(trend)
