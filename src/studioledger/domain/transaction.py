"""Transaction domain service."""

import logging
import uuid
from typing import Optional
from datetime import date
from decimal import Decimal

from studioledger.database.base import Database
from studioledger.domain.entities import (
    Bank,
    ExpenseCategory,
    ExpenseType,
    MonthlyExpenseLine,
    SubCategory,
    Transaction as TransactionEntity,
)
from studioledger.domain.errors import NotFoundError, transaction_not_found
from studioledger.domain.installments import expand_installments
from studioledger.domain.revenue import filter_by_description

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Expense without description"


class TransactionService:
    """Service for managing expense transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        amount: Decimal,
        date: date,
        type: ExpenseType,
        category: ExpenseCategory,
        description: Optional[str] = None,
        sub_category: SubCategory = SubCategory.OUTROS,
        bank: Bank = Bank.OTHER,
        custom_bank: Optional[str] = None,
        installments: int = 1,
        unique_id: Optional[str] = None,
    ) -> int:
        """Create an expense transaction.

        Args:
            amount: Positive amount; the monthly value for FIXED expenses, the
                total to split for VARIABLE ones
            date: Purchase date (first covered month)
            type: PROFESSIONAL or PERSONAL
            category: FIXED or VARIABLE
            description: Optional description
            sub_category: Expense tag
            bank: Payment channel
            custom_bank: Channel name, kept only when bank is OTHER
            installments: Number of covered months (>= 1)
            unique_id: Optional external ID (generated if not provided)

        Returns:
            Transaction ID

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If unique_id is already used
        """
        # Building the entity validates every field before anything is stored
        entity = TransactionEntity(
            id=0,
            unique_id=unique_id or str(uuid.uuid4()),
            description=(description or "").strip() or DEFAULT_DESCRIPTION,
            amount=amount,
            date=date,
            type=type,
            category=category,
            sub_category=sub_category,
            bank=bank,
            custom_bank=custom_bank if bank == Bank.OTHER else None,
            installments=installments,
        )

        transaction_id = self.db.create_transaction(
            unique_id=entity.unique_id,
            description=entity.description,
            amount=entity.amount,
            date=entity.date,
            type=entity.type,
            category=entity.category,
            sub_category=entity.sub_category,
            bank=entity.bank,
            custom_bank=entity.custom_bank,
            installments=entity.installments,
        )
        logger.info(
            "Created %s %s expense %s: %s x%d",
            entity.type.value.lower(),
            entity.category.value.lower(),
            transaction_id,
            entity.amount,
            entity.installments,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        type: Optional[ExpenseType] = None,
        category: Optional[ExpenseCategory] = None,
        bank: Optional[Bank] = None,
        search: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List stored transactions, newest first.

        Args:
            type: Optional PROFESSIONAL/PERSONAL filter
            category: Optional FIXED/VARIABLE filter
            bank: Optional bank filter
            search: Optional text the description must contain, ignoring case
        """
        transactions = self.db.list_transactions(type=type, category=category, bank=bank)
        return filter_by_description(transactions, search)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Deleting the expense side of a withdrawal reverses the whole
        withdrawal, removing the withdrawal and its paired revenue too.

        Args:
            transaction_id: Transaction ID to delete

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        withdrawal = self.db.get_withdrawal_by_expense(transaction_id)
        if withdrawal is not None:
            logger.info(
                "Expense %s is linked to withdrawal %s; reversing the withdrawal",
                transaction_id,
                withdrawal.id,
            )
            self.db.delete_withdrawal(withdrawal.id)
            return

        self.db.delete_transaction(transaction_id)
        logger.info("Deleted expense %s", transaction_id)

    def monthly_expenses(
        self,
        month: int,
        year: int,
        type: Optional[ExpenseType] = None,
        category: Optional[ExpenseCategory] = None,
        bank: Optional[Bank] = None,
        search: Optional[str] = None,
    ) -> list[MonthlyExpenseLine]:
        """Expense lines falling in a month, with installments expanded."""
        transactions = self.list_transactions(
            type=type, category=category, bank=bank, search=search
        )
        return expand_installments(transactions, month, year)
