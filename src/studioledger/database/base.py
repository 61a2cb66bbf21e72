"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

from studioledger.domain.entities import (
    Transaction,
    Revenue,
    Withdrawal,
    Settings,
)


class Database(ABC):
    """Abstract record store for studioledger.

    Withdrawals are always written and removed together with their paired
    expense and revenue; implementations must do each of those operations
    in a single transaction.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        unique_id: str,
        description: str,
        amount: Decimal,
        date: date,
        type: str,
        category: str,
        sub_category: str,
        bank: str,
        custom_bank: Optional[str] = None,
        installments: int = 1,
    ) -> int:
        """Create an expense transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def unique_id_exists(self, unique_id: str) -> bool:
        """Check if any transaction, revenue or withdrawal uses unique_id."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        type: Optional[str] = None,
        category: Optional[str] = None,
        bank: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional type, category and bank filters."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction that is not linked to a withdrawal."""
        pass

    # Revenue operations
    @abstractmethod
    def create_revenue(
        self,
        unique_id: str,
        description: str,
        amount: Decimal,
        date: date,
        payment_method: str,
        type: str,
    ) -> int:
        """Create a revenue entry. Returns revenue ID."""
        pass

    @abstractmethod
    def get_revenue(self, revenue_id: int) -> Optional[Revenue]:
        """Get revenue by ID."""
        pass

    @abstractmethod
    def list_revenues(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[str] = None,
    ) -> list[Revenue]:
        """List revenues with optional date range and type filters."""
        pass

    @abstractmethod
    def delete_revenue(self, revenue_id: int) -> None:
        """Delete a revenue entry that is not linked to a withdrawal."""
        pass

    # Withdrawal operations
    @abstractmethod
    def create_withdrawal(
        self,
        unique_id: str,
        amount: Decimal,
        date: date,
        kind: str,
        description: str,
    ) -> int:
        """Create a withdrawal together with its paired expense and revenue.

        The expense is stored as ``withdraw-ref-<unique_id>`` and the revenue
        as ``personal-ref-<unique_id>``. Returns withdrawal ID.
        """
        pass

    @abstractmethod
    def get_withdrawal(self, withdrawal_id: int) -> Optional[Withdrawal]:
        """Get withdrawal by ID."""
        pass

    @abstractmethod
    def get_withdrawal_by_expense(self, transaction_id: int) -> Optional[Withdrawal]:
        """Get the withdrawal paired with an expense transaction, if any."""
        pass

    @abstractmethod
    def get_withdrawal_by_revenue(self, revenue_id: int) -> Optional[Withdrawal]:
        """Get the withdrawal paired with a revenue entry, if any."""
        pass

    @abstractmethod
    def list_withdrawals(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Withdrawal]:
        """List withdrawals, optionally within a date range."""
        pass

    @abstractmethod
    def delete_withdrawal(self, withdrawal_id: int) -> None:
        """Delete a withdrawal and its paired expense and revenue."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self) -> Settings:
        """Get stored settings, or defaults when none were saved."""
        pass

    @abstractmethod
    def save_settings(self, settings: Settings) -> None:
        """Persist settings."""
        pass

    # Bulk operations
    @abstractmethod
    def replace_all(
        self,
        transactions: list[dict],
        revenues: list[dict],
        withdrawals: list[dict],
        settings: Settings,
    ) -> None:
        """Replace every record and the settings in one transaction.

        ``withdrawals`` dicts carry ``expense_unique_id`` and
        ``revenue_unique_id`` naming records present in ``transactions`` and
        ``revenues``.
        """
        pass
