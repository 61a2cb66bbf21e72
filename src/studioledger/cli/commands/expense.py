"""Expense management commands."""

import click
from studioledger.cli.error_handling import handle_domain_error
from studioledger.cli.month_filters import month_option, resolve_cli_month
from studioledger.domain.entities import (
    Bank,
    ExpenseCategory,
    ExpenseType,
    SubCategory,
)
from studioledger.domain.errors import DomainError
from studioledger.domain.transaction import TransactionService
from studioledger.domain.withdrawal import WithdrawalService
from studioledger.utils.amount_parser import format_currency, parse_amount
from studioledger.utils.date_parser import parse_date


def _choice(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls], case_sensitive=False)


@click.group()
def expense_group():
    """Manage studio and personal expenses."""
    pass


@expense_group.command("add")
@click.option("--amount", required=True, help="Amount (e.g., 150.00 or 'R$ 1.234,56')")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Purchase date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--type",
    "expense_type",
    type=_choice(ExpenseType),
    default=ExpenseType.PROFESSIONAL.value,
    show_default=True,
    help="Studio (PROFESSIONAL) or personal expense",
)
@click.option(
    "--category",
    type=_choice(ExpenseCategory),
    default=ExpenseCategory.VARIABLE.value,
    show_default=True,
    help="FIXED repeats the amount monthly; VARIABLE splits it across installments",
)
@click.option(
    "--sub-category",
    type=_choice(SubCategory),
    default=SubCategory.OUTROS.value,
    show_default=True,
    help="Expense tag",
)
@click.option(
    "--bank",
    type=_choice(Bank),
    default=Bank.OTHER.value,
    show_default=True,
    help="Payment channel",
)
@click.option("--custom-bank", help="Channel name when --bank is OTHER")
@click.option(
    "--installments", type=int, default=1, show_default=True, help="Number of months covered"
)
@click.option("--description", help="Expense description")
@click.option("--unique-id", help="Unique expense ID (auto-generated if not provided)")
@click.pass_context
def add_expense(
    ctx,
    amount: str,
    date_str: str,
    expense_type: str,
    category: str,
    sub_category: str,
    bank: str,
    custom_bank: str | None,
    installments: int,
    description: str | None,
    unique_id: str | None,
):
    """Add an expense.

    Examples:
        studioledger expense add --amount 1200 --category FIXED --sub-category ALUGUEL
        studioledger expense add --amount 300 --installments 3 --bank NUBANK --description "UV cabin"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    # Parse date
    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            amount=txn_amount,
            date=txn_date,
            type=expense_type.upper(),
            category=category.upper(),
            description=description,
            sub_category=sub_category.upper(),
            bank=bank.upper(),
            custom_bank=custom_bank,
            installments=installments,
            unique_id=unique_id,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    txn = service.get_transaction(transaction_id)
    click.echo(f"Created expense {transaction_id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_currency(txn.amount)}")
    click.echo(f"  Type: {txn.type.value} / {txn.category.value}")
    if txn.installments > 1:
        click.echo(f"  Installments: {txn.installments}")
    click.echo(f"  Description: {txn.description}")


@expense_group.command("list")
@month_option()
@click.option(
    "--type",
    "expense_type",
    type=_choice(ExpenseType),
    help="Only PROFESSIONAL or PERSONAL expenses",
)
@click.option("--category", type=_choice(ExpenseCategory), help="Only FIXED or VARIABLE expenses")
@click.option("--bank", type=_choice(Bank), help="Only expenses paid through this bank")
@click.option("--search", help="Only expenses whose description contains this text")
@click.option("--all", "show_all", is_flag=True, help="List stored expenses instead of a month")
@click.pass_context
def list_expenses(
    ctx,
    month: str | None,
    expense_type: str | None,
    category: str | None,
    bank: str | None,
    search: str | None,
    show_all: bool,
):
    """List a month's expense lines, with installments expanded.

    Use --all to list the stored expenses themselves.

    Examples:
        studioledger expense list --month 2024-03 --category FIXED
        studioledger expense list --all --bank NUBANK --search gel
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    filters = {
        "type": expense_type.upper() if expense_type else None,
        "category": category.upper() if category else None,
        "bank": bank.upper() if bank else None,
        "search": search,
    }

    if show_all:
        transactions = service.list_transactions(**filters)
        if not transactions:
            click.echo("No expenses found.")
            return

        click.echo(f"\nFound {len(transactions)} expense(s):")
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<6} {'Date':<12} {'Amount':<16} {'Type':<13} {'Category':<9} "
            f"{'Inst.':<6} {'Description':<30}"
        )
        click.echo("-" * 100)
        for txn in transactions:
            marker = "*" if txn.is_withdrawal_linked else ""
            click.echo(
                f"{txn.id:<6} {str(txn.date):<12} {format_currency(txn.amount):<16} "
                f"{txn.type.value:<13} {txn.category.value:<9} {txn.installments:<6} "
                f"{(txn.description + marker)[:30]:<30}"
            )
        return

    year, month_number = resolve_cli_month(ctx, month)
    lines = service.monthly_expenses(month_number, year, **filters)
    if not lines:
        click.echo(f"No expenses in {year:04d}-{month_number:02d}.")
        return

    click.echo(f"\nExpenses for {year:04d}-{month_number:02d}:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':<16} {'Type':<13} {'Sub-category':<16} "
        f"{'Inst.':<7} {'Description':<30}"
    )
    click.echo("-" * 100)
    for line in lines:
        installment = f"{line.current_installment}/{line.total_installments}"
        click.echo(
            f"{line.transaction_id:<6} {str(line.date):<12} {format_currency(line.amount):<16} "
            f"{line.type.value:<13} {line.sub_category.value:<16} {installment:<7} "
            f"{line.description[:30]:<30}"
        )
    total = sum(line.amount for line in lines)
    click.echo("-" * 100)
    click.echo(f"{'TOTAL':<6} {'':<12} {format_currency(total):<16} Count: {len(lines)}")


@expense_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, transaction_id: int, yes: bool) -> None:
    """Delete an expense.

    Deleting the expense created by a withdrawal reverses the withdrawal.

    Examples:
        studioledger expense delete 1
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    prompt = f"Are you sure you want to delete expense {transaction_id}?"
    withdrawal = WithdrawalService(db).find_withdrawal_for_transaction(transaction_id)
    if withdrawal is not None:
        prompt = (
            f"Expense {transaction_id} belongs to withdrawal {withdrawal.id}. "
            "Reverse the withdrawal and its personal revenue too?"
        )
    if not yes and not click.confirm(prompt):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
        click.echo(f"Deleted expense {transaction_id}")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
