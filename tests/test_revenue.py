"""Tests for revenue views and RevenueService."""

import pytest
from datetime import date
from decimal import Decimal

from studioledger.domain.entities import ExpenseType, PaymentMethod
from studioledger.domain.errors import ConflictError, NotFoundError, ValidationError
from studioledger.domain.revenue import (
    filter_monthly_revenues,
    revenue_by_payment_method,
    sum_amounts,
)


class TestFilterMonthlyRevenues:
    """Tests for the month filter."""

    def test_keeps_only_target_month(self, make_revenue):
        march = make_revenue(100, date(2024, 3, 5))
        april = make_revenue(50, date(2024, 4, 1))
        last_year = make_revenue(70, date(2023, 3, 5))

        assert filter_monthly_revenues([march, april, last_year], 3, 2024) == [march]

    def test_sorted_newest_first_with_stable_ties(self, make_revenue):
        first = make_revenue(10, date(2024, 3, 1))
        tie_a = make_revenue(20, date(2024, 3, 15))
        last = make_revenue(30, date(2024, 3, 31))
        tie_b = make_revenue(40, date(2024, 3, 15))

        result = filter_monthly_revenues([first, tie_a, last, tie_b], 3, 2024)
        assert result == [last, tie_a, tie_b, first]

    def test_type_filter(self, make_revenue):
        studio = make_revenue(10, date(2024, 3, 1))
        personal = make_revenue(20, date(2024, 3, 2), type=ExpenseType.PERSONAL)

        assert filter_monthly_revenues(
            [studio, personal], 3, 2024, revenue_type=ExpenseType.PERSONAL
        ) == [personal]

    def test_input_not_modified(self, make_revenue):
        revenues = [make_revenue(10, date(2024, 3, 1)), make_revenue(20, date(2024, 3, 20))]
        snapshot = list(revenues)

        filter_monthly_revenues(revenues, 3, 2024)
        assert revenues == snapshot


def test_sum_amounts(make_revenue):
    revenues = [make_revenue("10.10", date(2024, 3, 1)), make_revenue("0.20", date(2024, 3, 2))]
    assert sum_amounts(revenues) == Decimal("10.30")
    assert sum_amounts([]) == Decimal("0")


def test_revenue_by_payment_method(make_revenue):
    revenues = [
        make_revenue(100, date(2024, 3, 1), payment_method=PaymentMethod.PIX),
        make_revenue(50, date(2024, 3, 2), payment_method=PaymentMethod.PIX),
        make_revenue(80, date(2024, 3, 3), payment_method=PaymentMethod.CARD),
    ]

    totals = revenue_by_payment_method(revenues)
    assert totals == {
        PaymentMethod.PIX: Decimal("150"),
        PaymentMethod.CARD: Decimal("80"),
        PaymentMethod.CASH: Decimal("0"),
    }


class TestRevenueService:
    """Tests for RevenueService."""

    def test_create_and_get(self, revenue_service):
        revenue_id = revenue_service.create_revenue(
            amount=Decimal("80.50"),
            date=date(2024, 3, 5),
            payment_method=PaymentMethod.CARD,
            description="  Gel manicure ",
        )

        revenue = revenue_service.get_revenue(revenue_id)
        assert revenue.amount == Decimal("80.50")
        assert revenue.payment_method == PaymentMethod.CARD
        assert revenue.type == ExpenseType.PROFESSIONAL
        assert revenue.description == "Gel manicure"
        assert revenue.unique_id

    def test_default_description(self, revenue_service):
        revenue_id = revenue_service.create_revenue(amount=10, date=date(2024, 3, 5))
        assert revenue_service.get_revenue(revenue_id).description == "Service revenue"

    def test_invalid_amount(self, revenue_service):
        with pytest.raises(ValidationError):
            revenue_service.create_revenue(amount=0, date=date(2024, 3, 5))
        assert revenue_service.list_revenues() == []

    def test_duplicate_unique_id(self, revenue_service):
        revenue_service.create_revenue(amount=10, date=date(2024, 3, 5), unique_id="R1")
        with pytest.raises(ConflictError):
            revenue_service.create_revenue(amount=20, date=date(2024, 3, 6), unique_id="R1")

    def test_monthly_revenues(self, revenue_service):
        revenue_service.create_revenue(amount=10, date=date(2024, 2, 29))
        revenue_service.create_revenue(amount=20, date=date(2024, 3, 1))
        revenue_service.create_revenue(amount=30, date=date(2024, 3, 31))
        revenue_service.create_revenue(
            amount=40, date=date(2024, 3, 15), type=ExpenseType.PERSONAL
        )

        march = revenue_service.monthly_revenues(3, 2024)
        assert [r.amount for r in march] == [Decimal("30"), Decimal("40"), Decimal("20")]

        studio = revenue_service.monthly_revenues(3, 2024, type=ExpenseType.PROFESSIONAL)
        assert [r.amount for r in studio] == [Decimal("30"), Decimal("20")]

    def test_search_by_description(self, revenue_service):
        revenue_service.create_revenue(amount=80, date=date(2024, 3, 5), description="Gel manicure")
        revenue_service.create_revenue(amount=60, date=date(2024, 3, 6), description="Pedicure")
        revenue_service.create_revenue(amount=90, date=date(2024, 4, 2), description="Manicure")

        march = revenue_service.monthly_revenues(3, 2024, search="MANICURE")
        assert [r.description for r in march] == ["Gel manicure"]
        everywhere = revenue_service.list_revenues(search="manicure")
        assert [r.amount for r in everywhere] == [Decimal("90"), Decimal("80")]
        assert revenue_service.list_revenues(search="") != []

    def test_delete_revenue(self, revenue_service):
        revenue_id = revenue_service.create_revenue(amount=10, date=date(2024, 3, 5))
        revenue_service.delete_revenue(revenue_id)
        assert revenue_service.get_revenue(revenue_id) is None

    def test_delete_missing_revenue(self, revenue_service):
        with pytest.raises(NotFoundError):
            revenue_service.delete_revenue(999)
