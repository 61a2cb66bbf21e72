"""Revenue management commands."""

import click
from studioledger.cli.error_handling import handle_domain_error
from studioledger.cli.month_filters import month_option, resolve_cli_month
from studioledger.domain.entities import ExpenseType, PaymentMethod
from studioledger.domain.errors import DomainError
from studioledger.domain.revenue import RevenueService, revenue_by_payment_method
from studioledger.domain.withdrawal import WithdrawalService
from studioledger.utils.amount_parser import format_currency, parse_amount
from studioledger.utils.date_parser import parse_date


@click.group()
def revenue_group():
    """Manage revenue entries."""
    pass


@revenue_group.command("add")
@click.option("--amount", required=True, help="Amount received (e.g., 80 or 'R$ 80,00')")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Date received (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod], case_sensitive=False),
    default=PaymentMethod.PIX.value,
    show_default=True,
    help="Payment method",
)
@click.option(
    "--type",
    "revenue_type",
    type=click.Choice([t.value for t in ExpenseType], case_sensitive=False),
    default=ExpenseType.PROFESSIONAL.value,
    show_default=True,
    help="Studio (PROFESSIONAL) or personal income",
)
@click.option("--description", help="Revenue description")
@click.option("--unique-id", help="Unique revenue ID (auto-generated if not provided)")
@click.pass_context
def add_revenue(
    ctx,
    amount: str,
    date_str: str,
    method: str,
    revenue_type: str,
    description: str | None,
    unique_id: str | None,
):
    """Add a revenue entry.

    Examples:
        studioledger revenue add --amount 120 --method CARD --description "Gel manicure"
    """
    db = ctx.obj["db"]
    service = RevenueService(db)

    try:
        revenue_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        revenue_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        revenue_id = service.create_revenue(
            amount=revenue_amount,
            date=revenue_date,
            payment_method=method.upper(),
            type=revenue_type.upper(),
            description=description,
            unique_id=unique_id,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    revenue = service.get_revenue(revenue_id)
    click.echo(f"Created revenue {revenue_id}")
    click.echo(f"  Date: {revenue.date}")
    click.echo(f"  Amount: {format_currency(revenue.amount)} via {revenue.payment_method.value}")
    click.echo(f"  Description: {revenue.description}")


@revenue_group.command("list")
@month_option()
@click.option(
    "--type",
    "revenue_type",
    type=click.Choice([t.value for t in ExpenseType], case_sensitive=False),
    help="Only PROFESSIONAL or PERSONAL revenue",
)
@click.option("--search", help="Only revenue whose description contains this text")
@click.pass_context
def list_revenues(ctx, month: str | None, revenue_type: str | None, search: str | None):
    """List a month's revenue entries, newest first."""
    db = ctx.obj["db"]
    service = RevenueService(db)
    year, month_number = resolve_cli_month(ctx, month)

    revenues = service.monthly_revenues(
        month_number,
        year,
        type=revenue_type.upper() if revenue_type else None,
        search=search,
    )
    if not revenues:
        click.echo(f"No revenue in {year:04d}-{month_number:02d}.")
        return

    click.echo(f"\nRevenue for {year:04d}-{month_number:02d}:")
    click.echo("-" * 90)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':<16} {'Method':<7} {'Type':<13} {'Description':<30}"
    )
    click.echo("-" * 90)
    for revenue in revenues:
        click.echo(
            f"{revenue.id:<6} {str(revenue.date):<12} {format_currency(revenue.amount):<16} "
            f"{revenue.payment_method.value:<7} {revenue.type.value:<13} "
            f"{revenue.description[:30]:<30}"
        )

    click.echo("-" * 90)
    totals = revenue_by_payment_method(revenues)
    by_method = " | ".join(
        f"{method.value}: {format_currency(amount)}" for method, amount in totals.items()
    )
    click.echo(f"{'TOTAL':<6} {format_currency(sum(totals.values()))} ({by_method})")


@revenue_group.command("delete")
@click.argument("revenue_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_revenue(ctx, revenue_id: int, yes: bool) -> None:
    """Delete a revenue entry.

    Deleting the personal revenue created by a withdrawal reverses the
    withdrawal.
    """
    db = ctx.obj["db"]
    service = RevenueService(db)

    revenue = service.get_revenue(revenue_id)
    if revenue is None:
        click.echo(f"Error: Revenue {revenue_id} not found", err=True)
        ctx.exit(1)

    prompt = f"Are you sure you want to delete revenue {revenue_id}?"
    withdrawal = WithdrawalService(db).find_withdrawal_for_revenue(revenue_id)
    if withdrawal is not None:
        prompt = (
            f"Revenue {revenue_id} belongs to withdrawal {withdrawal.id}. "
            "Reverse the withdrawal and its studio expense too?"
        )
    if not yes and not click.confirm(prompt):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_revenue(revenue_id)
        click.echo(f"Deleted revenue {revenue_id}")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register revenue commands with main CLI."""
    cli.add_command(revenue_group, name="revenue")
