"""Withdrawal domain service.

A withdrawal moves money from the studio to the owner. Recording one stores
three records at once: the withdrawal, a PROFESSIONAL expense on the studio
ledger and a PERSONAL revenue on the owner's ledger. Reversing it removes
all three.
"""

import logging
import uuid
from typing import Optional
from datetime import date
from decimal import Decimal

from studioledger.database.base import Database
from studioledger.domain.entities import Withdrawal, WithdrawalKind
from studioledger.domain.errors import NotFoundError, withdrawal_not_found
from studioledger.utils.date_parser import days_in_month

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTIONS = {
    WithdrawalKind.PRO_LABORE: "Pro-labore withdrawal",
    WithdrawalKind.PROFIT: "Profit withdrawal",
}


class WithdrawalService:
    """Service for recording and reversing withdrawals."""

    def __init__(self, db: Database):
        """Initialize withdrawal service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_withdrawal(
        self,
        amount: Decimal,
        date: date,
        kind: WithdrawalKind = WithdrawalKind.PRO_LABORE,
        description: Optional[str] = None,
        unique_id: Optional[str] = None,
    ) -> int:
        """Record a withdrawal and its paired expense and revenue.

        Args:
            amount: Positive amount withdrawn
            date: Withdrawal date
            kind: PRO_LABORE or PROFIT
            description: Optional description (a default per kind otherwise)
            unique_id: Optional external ID (generated if not provided)

        Returns:
            Withdrawal ID

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If the withdrawal or pair IDs are already used
        """
        entity = Withdrawal(
            id=0,
            unique_id=unique_id or str(uuid.uuid4()),
            amount=amount,
            date=date,
            kind=kind,
            description=(description or "").strip(),
        )
        withdrawal_id = self.db.create_withdrawal(
            unique_id=entity.unique_id,
            amount=entity.amount,
            date=entity.date,
            kind=entity.kind,
            description=entity.description or DEFAULT_DESCRIPTIONS[entity.kind],
        )
        logger.info(
            "Recorded %s withdrawal %s of %s on %s",
            entity.kind.value,
            withdrawal_id,
            entity.amount,
            entity.date,
        )
        return withdrawal_id

    def get_withdrawal(self, withdrawal_id: int) -> Optional[Withdrawal]:
        """Get withdrawal by ID."""
        return self.db.get_withdrawal(withdrawal_id)

    def reverse_withdrawal(self, withdrawal_id: int) -> None:
        """Reverse a withdrawal, removing it and its paired records.

        Raises:
            NotFoundError: If withdrawal doesn't exist
        """
        withdrawal = self.db.get_withdrawal(withdrawal_id)
        if withdrawal is None:
            raise NotFoundError(withdrawal_not_found(withdrawal_id))
        self.db.delete_withdrawal(withdrawal_id)
        logger.info("Reversed withdrawal %s", withdrawal_id)

    def list_withdrawals(
        self, month: Optional[int] = None, year: Optional[int] = None
    ) -> list[Withdrawal]:
        """List withdrawals, newest first, optionally for one month.

        Args:
            month: Month number, requires ``year``
            year: Four-digit year; without ``month`` the whole year is listed

        Raises:
            ValueError: If ``month`` is given without ``year``
        """
        if month is not None and year is None:
            raise ValueError("A month filter needs a year")
        if year is None:
            return self.db.list_withdrawals()
        if month is None:
            return self.db.list_withdrawals(
                start_date=date(year, 1, 1), end_date=date(year, 12, 31)
            )
        return self.db.list_withdrawals(
            start_date=date(year, month, 1),
            end_date=date(year, month, days_in_month(year, month)),
        )

    def find_withdrawal_for_transaction(self, transaction_id: int) -> Optional[Withdrawal]:
        """Return the withdrawal an expense belongs to, if any."""
        return self.db.get_withdrawal_by_expense(transaction_id)

    def find_withdrawal_for_revenue(self, revenue_id: int) -> Optional[Withdrawal]:
        """Return the withdrawal a revenue entry belongs to, if any."""
        return self.db.get_withdrawal_by_revenue(revenue_id)
