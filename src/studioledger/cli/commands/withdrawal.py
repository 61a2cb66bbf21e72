"""Withdrawal commands."""

import click
from studioledger.cli.error_handling import handle_domain_error
from studioledger.cli.month_filters import month_option, resolve_cli_month
from studioledger.domain.entities import WithdrawalKind
from studioledger.domain.errors import DomainError
from studioledger.domain.withdrawal import WithdrawalService
from studioledger.utils.amount_parser import format_currency, parse_amount
from studioledger.utils.date_parser import parse_date


@click.group()
def withdrawal_group():
    """Record and reverse owner withdrawals."""
    pass


@withdrawal_group.command("add")
@click.option("--amount", required=True, help="Amount withdrawn")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Withdrawal date (YYYY-MM-DD or relative like 'today')",
)
@click.option(
    "--kind",
    type=click.Choice([k.value for k in WithdrawalKind], case_sensitive=False),
    default=WithdrawalKind.PRO_LABORE.value,
    show_default=True,
    help="PRO_LABORE (compensation) or PROFIT (profit reserve)",
)
@click.option("--description", help="Withdrawal description")
@click.pass_context
def add_withdrawal(
    ctx, amount: str, date_str: str, kind: str, description: str | None
):
    """Record a withdrawal.

    Also records the matching studio expense and personal revenue.

    Examples:
        studioledger withdrawal add --amount 500 --date 2024-03-10
        studioledger withdrawal add --amount 300 --kind PROFIT
    """
    db = ctx.obj["db"]
    service = WithdrawalService(db)

    try:
        withdrawal_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        withdrawal_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        withdrawal_id = service.record_withdrawal(
            amount=withdrawal_amount,
            date=withdrawal_date,
            kind=kind.upper(),
            description=description,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    withdrawal = service.get_withdrawal(withdrawal_id)
    click.echo(f"Recorded withdrawal {withdrawal_id}")
    click.echo(f"  Date: {withdrawal.date}")
    click.echo(f"  Amount: {format_currency(withdrawal.amount)} ({withdrawal.kind.value})")
    click.echo(f"  Studio expense: {withdrawal.expense_id}")
    click.echo(f"  Personal revenue: {withdrawal.revenue_id}")


@withdrawal_group.command("list")
@month_option()
@click.pass_context
def list_withdrawals(ctx, month: str | None):
    """List a month's withdrawals."""
    db = ctx.obj["db"]
    service = WithdrawalService(db)
    year, month_number = resolve_cli_month(ctx, month)

    withdrawals = service.list_withdrawals(month=month_number, year=year)
    if not withdrawals:
        click.echo(f"No withdrawals in {year:04d}-{month_number:02d}.")
        return

    click.echo(f"\nWithdrawals for {year:04d}-{month_number:02d}:")
    click.echo("-" * 80)
    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':<16} {'Kind':<11} {'Description':<30}")
    click.echo("-" * 80)
    for withdrawal in withdrawals:
        click.echo(
            f"{withdrawal.id:<6} {str(withdrawal.date):<12} "
            f"{format_currency(withdrawal.amount):<16} {withdrawal.kind.value:<11} "
            f"{withdrawal.description[:30]:<30}"
        )
    click.echo("-" * 80)
    total = sum(w.amount for w in withdrawals)
    click.echo(f"{'TOTAL':<6} {'':<12} {format_currency(total):<16} Count: {len(withdrawals)}")


@withdrawal_group.command("reverse")
@click.argument("withdrawal_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reverse_withdrawal(ctx, withdrawal_id: int, yes: bool) -> None:
    """Reverse a withdrawal and its paired expense and revenue."""
    db = ctx.obj["db"]
    service = WithdrawalService(db)

    if service.get_withdrawal(withdrawal_id) is None:
        click.echo(f"Error: Withdrawal {withdrawal_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Reverse withdrawal {withdrawal_id}? Its studio expense and personal revenue are removed too."
    ):
        click.echo("Reversal cancelled.")
        return

    try:
        service.reverse_withdrawal(withdrawal_id)
        click.echo(f"Reversed withdrawal {withdrawal_id}")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register withdrawal commands with main CLI."""
    cli.add_command(withdrawal_group, name="withdrawal")
