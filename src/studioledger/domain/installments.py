"""Installment expansion of expense transactions into monthly lines."""

from typing import Iterable

from studioledger.domain.entities import (
    ExpenseCategory,
    MonthlyExpenseLine,
    Transaction,
)
from studioledger.domain.errors import ValidationError, invalid_installments
from studioledger.utils.date_parser import months_between


def monthly_amount(txn: Transaction):
    """Return the amount a transaction contributes to each covered month.

    FIXED transactions repeat their full amount; VARIABLE transactions split
    their total evenly across the installments.
    """
    if txn.installments < 1:
        raise ValidationError(invalid_installments(txn.installments))
    if txn.category == ExpenseCategory.FIXED:
        return txn.amount
    return txn.amount / txn.installments


def expand_installments(
    transactions: Iterable[Transaction], target_month: int, target_year: int
) -> list[MonthlyExpenseLine]:
    """Expand transactions into the lines falling in one month.

    A transaction covers the months from its purchase month up to
    ``installments - 1`` months later; outside that window it is skipped.

    Args:
        transactions: Stored expense transactions (not modified)
        target_month: Month number, 1-12
        target_year: Four-digit year

    Returns:
        Monthly expense lines, most recent purchase date first. Lines with the
        same date keep their input order.
    """
    lines: list[MonthlyExpenseLine] = []

    for txn in transactions:
        months_diff = months_between(txn.date, target_year, target_month)
        if not 0 <= months_diff < txn.installments:
            continue

        lines.append(
            MonthlyExpenseLine(
                transaction_id=txn.id,
                unique_id=txn.unique_id,
                months_diff=months_diff,
                description=txn.description,
                amount=monthly_amount(txn),
                current_installment=months_diff + 1,
                total_installments=txn.installments,
                date=txn.date,
                type=txn.type,
                category=txn.category,
                sub_category=txn.sub_category,
                bank=txn.bank,
                custom_bank=txn.custom_bank,
            )
        )

    # sorted() is stable, so equal dates keep input order
    return sorted(lines, key=lambda line: line.date, reverse=True)
