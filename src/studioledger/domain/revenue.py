"""Month-scoped revenue views, aggregates and the revenue service."""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from studioledger.database.base import Database
from studioledger.domain.entities import ExpenseType, PaymentMethod, Revenue
from studioledger.domain.errors import NotFoundError, revenue_not_found
from studioledger.utils.date_parser import days_in_month

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Service revenue"


def filter_monthly_revenues(
    revenues: Iterable[Revenue],
    target_month: int,
    target_year: int,
    revenue_type: Optional[ExpenseType] = None,
) -> list[Revenue]:
    """Return revenue entries dated in the target month, newest first.

    Entries sharing a date keep their input order. The input is not modified.

    Args:
        revenues: Revenue entries in any order
        target_month: Month number, 1-12
        target_year: Four-digit year
        revenue_type: Optional PROFESSIONAL/PERSONAL filter
    """
    selected = [
        r
        for r in revenues
        if r.date.month == target_month
        and r.date.year == target_year
        and (revenue_type is None or r.type == revenue_type)
    ]
    return sorted(selected, key=lambda r: r.date, reverse=True)


def filter_by_description(records: Iterable, search: Optional[str] = None) -> list:
    """Keep records whose description contains ``search``, ignoring case."""
    if not search:
        return list(records)
    needle = search.casefold()
    return [r for r in records if needle in r.description.casefold()]


def sum_amounts(records: Iterable) -> Decimal:
    """Sum the ``amount`` of any records (revenues, lines, withdrawals)."""
    return sum((r.amount for r in records), Decimal("0"))


def revenue_by_payment_method(revenues: Iterable[Revenue]) -> dict[PaymentMethod, Decimal]:
    """Total revenue per payment method, with every method present."""
    totals = {method: Decimal("0") for method in PaymentMethod}
    for r in revenues:
        totals[r.payment_method] += r.amount
    return totals


class RevenueService:
    """Service for managing revenue entries."""

    def __init__(self, db: Database):
        """Initialize revenue service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_revenue(
        self,
        amount: Decimal,
        date: date,
        payment_method: PaymentMethod = PaymentMethod.PIX,
        type: ExpenseType = ExpenseType.PROFESSIONAL,
        description: Optional[str] = None,
        unique_id: Optional[str] = None,
    ) -> int:
        """Create a revenue entry.

        Args:
            amount: Positive amount received
            date: Date received
            payment_method: PIX, CARD or CASH
            type: PROFESSIONAL (studio income) or PERSONAL
            description: Optional description
            unique_id: Optional external ID (generated if not provided)

        Returns:
            Revenue ID

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If unique_id is already used
        """
        entity = Revenue(
            id=0,
            unique_id=unique_id or str(uuid.uuid4()),
            description=(description or "").strip() or DEFAULT_DESCRIPTION,
            amount=amount,
            date=date,
            payment_method=payment_method,
            type=type,
        )
        revenue_id = self.db.create_revenue(
            unique_id=entity.unique_id,
            description=entity.description,
            amount=entity.amount,
            date=entity.date,
            payment_method=entity.payment_method,
            type=entity.type,
        )
        logger.info(
            "Created %s revenue %s: %s via %s",
            entity.type.value.lower(),
            revenue_id,
            entity.amount,
            entity.payment_method.value,
        )
        return revenue_id

    def get_revenue(self, revenue_id: int) -> Optional[Revenue]:
        """Get revenue by ID."""
        return self.db.get_revenue(revenue_id)

    def list_revenues(
        self, type: Optional[ExpenseType] = None, search: Optional[str] = None
    ) -> list[Revenue]:
        """List stored revenues, newest first."""
        return filter_by_description(self.db.list_revenues(type=type), search)

    def delete_revenue(self, revenue_id: int) -> None:
        """Delete a revenue entry.

        Deleting the personal side of a withdrawal reverses the whole
        withdrawal, removing the withdrawal and its paired expense too.

        Raises:
            NotFoundError: If revenue doesn't exist
        """
        revenue = self.db.get_revenue(revenue_id)
        if revenue is None:
            raise NotFoundError(revenue_not_found(revenue_id))

        withdrawal = self.db.get_withdrawal_by_revenue(revenue_id)
        if withdrawal is not None:
            logger.info(
                "Revenue %s is linked to withdrawal %s; reversing the withdrawal",
                revenue_id,
                withdrawal.id,
            )
            self.db.delete_withdrawal(withdrawal.id)
            return

        self.db.delete_revenue(revenue_id)
        logger.info("Deleted revenue %s", revenue_id)

    def monthly_revenues(
        self,
        month: int,
        year: int,
        type: Optional[ExpenseType] = None,
        search: Optional[str] = None,
    ) -> list[Revenue]:
        """Revenue entries dated in a month, newest first.

        Args:
            month: Month number, 1-12
            year: Four-digit year
            type: Optional PROFESSIONAL/PERSONAL filter
            search: Optional text the description must contain, ignoring case
        """
        start = date(year, month, 1)
        end = date(year, month, days_in_month(year, month))
        revenues = self.db.list_revenues(start_date=start, end_date=end, type=type)
        return filter_monthly_revenues(filter_by_description(revenues, search), month, year)
