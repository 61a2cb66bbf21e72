"""Tests for TransactionService."""

import pytest
from datetime import date
from decimal import Decimal

from studioledger.domain.entities import (
    Bank,
    ExpenseCategory,
    ExpenseType,
    SubCategory,
)
from studioledger.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_transaction(transaction_service):
    """Test creating an expense with all fields."""
    txn_id = transaction_service.create_transaction(
        amount=Decimal("300.00"),
        date=date(2024, 1, 15),
        type=ExpenseType.PROFESSIONAL,
        category=ExpenseCategory.VARIABLE,
        description="UV cabin",
        sub_category=SubCategory.MATERIAL,
        bank=Bank.NUBANK,
        installments=3,
        unique_id="TXN001",
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn.unique_id == "TXN001"
    assert txn.amount == Decimal("300.00")
    assert txn.installments == 3
    assert txn.sub_category == SubCategory.MATERIAL
    assert txn.bank == Bank.NUBANK
    assert txn.created_at is not None


def test_create_transaction_accepts_raw_values(transaction_service):
    txn_id = transaction_service.create_transaction(
        amount="R$ 1.200,00",
        date=date(2024, 3, 1),
        type="PROFESSIONAL",
        category="FIXED",
        sub_category="ALUGUEL",
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn.amount == Decimal("1200")
    assert txn.category == ExpenseCategory.FIXED
    assert txn.description == "Expense without description"


def test_custom_bank_kept_only_for_other(transaction_service):
    other_id = transaction_service.create_transaction(
        amount=10,
        date=date(2024, 3, 1),
        type="PERSONAL",
        category="VARIABLE",
        bank=Bank.OTHER,
        custom_bank="Inter",
    )
    nubank_id = transaction_service.create_transaction(
        amount=10,
        date=date(2024, 3, 1),
        type="PERSONAL",
        category="VARIABLE",
        bank=Bank.NUBANK,
        custom_bank="Inter",
    )

    assert transaction_service.get_transaction(other_id).custom_bank == "Inter"
    assert transaction_service.get_transaction(nubank_id).custom_bank is None


def test_invalid_transaction_is_not_stored(transaction_service):
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(
            amount=100,
            date=date(2024, 3, 1),
            type="PROFESSIONAL",
            category="VARIABLE",
            installments=0,
        )
    assert transaction_service.list_transactions() == []


def test_duplicate_unique_id(transaction_service):
    transaction_service.create_transaction(
        amount=10, date=date(2024, 3, 1), type="PERSONAL", category="FIXED", unique_id="X"
    )
    with pytest.raises(ConflictError):
        transaction_service.create_transaction(
            amount=20, date=date(2024, 3, 2), type="PERSONAL", category="FIXED", unique_id="X"
        )


def test_list_transactions_by_type(transaction_service):
    transaction_service.create_transaction(
        amount=10, date=date(2024, 3, 1), type="PERSONAL", category="FIXED"
    )
    transaction_service.create_transaction(
        amount=20, date=date(2024, 3, 5), type="PROFESSIONAL", category="FIXED"
    )

    all_txns = transaction_service.list_transactions()
    assert [t.amount for t in all_txns] == [Decimal("20"), Decimal("10")]

    personal = transaction_service.list_transactions(type=ExpenseType.PERSONAL)
    assert [t.amount for t in personal] == [Decimal("10")]


def test_list_transactions_filters(transaction_service):
    transaction_service.create_transaction(
        amount=10,
        date=date(2024, 3, 1),
        type="PROFESSIONAL",
        category="FIXED",
        description="Studio rent",
    )
    transaction_service.create_transaction(
        amount=20,
        date=date(2024, 3, 5),
        type="PROFESSIONAL",
        category="VARIABLE",
        bank=Bank.NUBANK,
        description="Gel polish",
    )
    transaction_service.create_transaction(
        amount=30,
        date=date(2024, 3, 6),
        type="PERSONAL",
        category="VARIABLE",
        bank=Bank.NUBANK,
        description="Cotton",
    )

    fixed = transaction_service.list_transactions(category=ExpenseCategory.FIXED)
    assert [t.description for t in fixed] == ["Studio rent"]
    nubank = transaction_service.list_transactions(bank=Bank.NUBANK)
    assert [t.description for t in nubank] == ["Cotton", "Gel polish"]
    polish = transaction_service.list_transactions(search="POLISH")
    assert [t.description for t in polish] == ["Gel polish"]
    assert transaction_service.list_transactions(bank=Bank.NUBANK, search="rent") == []

    lines = transaction_service.monthly_expenses(3, 2024, bank=Bank.NUBANK, search="gel")
    assert [line.description for line in lines] == ["Gel polish"]


def test_monthly_expenses(transaction_service):
    transaction_service.create_transaction(
        amount=300,
        date=date(2024, 1, 15),
        type="PROFESSIONAL",
        category="VARIABLE",
        installments=3,
    )
    transaction_service.create_transaction(
        amount=50, date=date(2024, 3, 2), type="PERSONAL", category="VARIABLE"
    )

    lines = transaction_service.monthly_expenses(3, 2024)
    assert [line.amount for line in lines] == [Decimal("50"), Decimal("100")]
    assert lines[1].current_installment == 3

    studio = transaction_service.monthly_expenses(3, 2024, type=ExpenseType.PROFESSIONAL)
    assert len(studio) == 1
    assert transaction_service.monthly_expenses(4, 2024, type=ExpenseType.PROFESSIONAL) == []


def test_delete_transaction(transaction_service):
    txn_id = transaction_service.create_transaction(
        amount=10, date=date(2024, 3, 1), type="PERSONAL", category="FIXED"
    )

    transaction_service.delete_transaction(txn_id)
    assert transaction_service.get_transaction(txn_id) is None


def test_delete_missing_transaction(transaction_service):
    with pytest.raises(NotFoundError, match="Transaction 999 not found"):
        transaction_service.delete_transaction(999)
