"""Shared pytest fixtures for studioledger tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from studioledger.database.factories import create_sqlite_database
from studioledger.domain.backup import BackupService
from studioledger.domain.entities import (
    ExpenseCategory,
    ExpenseType,
    PaymentMethod,
    Revenue,
    Transaction,
)
from studioledger.domain.report import MonthlyReportService
from studioledger.domain.revenue import RevenueService
from studioledger.domain.settings import SettingsService
from studioledger.domain.transaction import TransactionService
from studioledger.domain.withdrawal import WithdrawalService


def _create_temp_db():
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()
    return db


def _cleanup(db):
    db.disconnect()
    if os.path.exists(db.database_path):
        os.unlink(db.database_path)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    db = _create_temp_db()
    yield db
    _cleanup(db)


@pytest.fixture
def other_db():
    """Create a second, independent temporary database."""
    db = _create_temp_db()
    yield db
    _cleanup(db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def revenue_service(temp_db):
    """Create a RevenueService with a temporary database."""
    return RevenueService(temp_db)


@pytest.fixture
def withdrawal_service(temp_db):
    """Create a WithdrawalService with a temporary database."""
    return WithdrawalService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a MonthlyReportService with a temporary database."""
    return MonthlyReportService(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def make_transaction():
    """Build in-memory Transaction entities with sensible defaults."""
    counter = {"id": 0}

    def _make(amount, txn_date, category=ExpenseCategory.VARIABLE, installments=1, **kwargs):
        counter["id"] += 1
        fields = {
            "id": counter["id"],
            "unique_id": f"t{counter['id']}",
            "description": f"Expense {counter['id']}",
            "amount": Decimal(str(amount)),
            "date": txn_date,
            "type": ExpenseType.PROFESSIONAL,
            "category": category,
            "installments": installments,
        }
        fields.update(kwargs)
        return Transaction(**fields)

    return _make


@pytest.fixture
def make_revenue():
    """Build in-memory Revenue entities with sensible defaults."""
    counter = {"id": 0}

    def _make(amount, revenue_date, **kwargs):
        counter["id"] += 1
        fields = {
            "id": counter["id"],
            "unique_id": f"r{counter['id']}",
            "description": f"Revenue {counter['id']}",
            "amount": Decimal(str(amount)),
            "date": revenue_date,
            "payment_method": PaymentMethod.PIX,
            "type": ExpenseType.PROFESSIONAL,
        }
        fields.update(kwargs)
        return Revenue(**fields)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
