"""Tests for MonthlyReportService."""

import pytest
from datetime import date
from decimal import Decimal

from studioledger.domain.entities import (
    ExpenseType,
    HealthTier,
    PaymentMethod,
    SubCategory,
    WithdrawalKind,
)


@pytest.fixture
def march_records(transaction_service, revenue_service):
    """Studio and personal records around March 2024."""
    revenue_service.create_revenue(amount=1000, date=date(2024, 3, 5))
    revenue_service.create_revenue(
        amount=200, date=date(2024, 3, 10), payment_method=PaymentMethod.CARD
    )
    revenue_service.create_revenue(amount=30, date=date(2024, 3, 12), type=ExpenseType.PERSONAL)
    revenue_service.create_revenue(amount=999, date=date(2024, 4, 1))

    transaction_service.create_transaction(
        amount=100,
        date=date(2024, 3, 1),
        type="PROFESSIONAL",
        category="FIXED",
        sub_category=SubCategory.ALUGUEL,
        installments=12,
    )
    transaction_service.create_transaction(
        amount=300,
        date=date(2024, 2, 15),
        type="PROFESSIONAL",
        category="VARIABLE",
        sub_category=SubCategory.MATERIAL,
        installments=3,
    )
    transaction_service.create_transaction(
        amount=50, date=date(2024, 3, 2), type="PERSONAL", category="VARIABLE"
    )


def test_monthly_report_totals(report_service, march_records):
    report = report_service.build_monthly_report(3, 2024)

    assert report.professional_revenue == Decimal("1200")
    assert report.professional_expense == Decimal("200")
    assert report.personal_revenue == Decimal("30")
    assert report.personal_expense == Decimal("50")
    assert report.net_profit == Decimal("1000")
    assert report.withdrawn_this_month == Decimal("0")
    assert report.remaining_studio_balance == Decimal("1000")
    assert report.health.tier == HealthTier.EXCELLENT
    assert len(report.expense_lines) == 3
    assert len(report.revenues) == 3


def test_monthly_report_breakdowns(report_service, march_records):
    report = report_service.build_monthly_report(3, 2024)

    assert report.revenue_by_method[PaymentMethod.PIX] == Decimal("1000")
    assert report.revenue_by_method[PaymentMethod.CARD] == Decimal("200")
    assert report.revenue_by_method[PaymentMethod.CASH] == Decimal("0")
    assert dict(report.expenses_by_sub_category) == {
        SubCategory.ALUGUEL: Decimal("100"),
        SubCategory.MATERIAL: Decimal("100"),
    }
    assert report.allocation["pro_labore"].amount == Decimal("572.4")


def test_monthly_report_suggestions(report_service, revenue_service, march_records):
    # MONTHLY by default: the only payout day is the 1st, before any revenue
    assert report_service.build_monthly_report(3, 2024).suggestions == ()

    revenue_service.create_revenue(amount=100, date=date(2024, 3, 1))
    report = report_service.build_monthly_report(3, 2024)
    assert len(report.suggestions) == 1
    assert report.suggestions[0].date == date(2024, 3, 1)
    assert report.suggestions[0].amount == Decimal("47.7")


def test_monthly_report_with_withdrawal(
    report_service, withdrawal_service, settings_service, march_records
):
    settings_service.update_pro_labore(frequency="WEEKLY")
    withdrawal_service.record_withdrawal(amount=300, date=date(2024, 3, 20))
    withdrawal_service.record_withdrawal(
        amount=300, date=date(2024, 3, 21), kind=WithdrawalKind.PROFIT
    )

    report = report_service.build_monthly_report(3, 2024)
    assert report.professional_expense == Decimal("800")
    assert report.personal_revenue == Decimal("630")
    assert report.withdrawn_this_month == Decimal("600")
    assert report.pro_labore_withdrawn == Decimal("300")
    assert report.net_profit == Decimal("400")
    assert report.remaining_studio_balance == Decimal("-200")
    # Only the pro-labore withdrawal counts against the ceiling
    by_day = {s.date.day: s.amount for s in report.suggestions}
    assert by_day == {
        8: Decimal("119.25"),
        15: Decimal("143.1"),
        22: Decimal("143.1"),
        29: Decimal("143.1"),
    }


def test_report_follows_settings(report_service, settings_service, march_records):
    settings_service.update_pro_labore(frequency="WEEKLY")
    settings_service.set_distribution(pro_labore=50)

    report = report_service.build_monthly_report(3, 2024)
    assert report.allocation["pro_labore"].amount == Decimal("600")
    # Weekly payout days from the 5th: 8, 15, 22, 29
    assert [s.date.day for s in report.suggestions] == [29, 22, 15, 8]
    assert report.suggestions[0].amount == Decimal("150")


def test_empty_month(report_service):
    report = report_service.build_monthly_report(1, 2024)

    assert report.health.tier == HealthTier.NO_DATA
    assert report.suggestions == ()
    assert report.expense_lines == ()
    assert report.profit_margin == Decimal("0")


def test_trend(report_service, march_records):
    points = report_service.build_trend(3, 2024, months=3)

    assert [(p.year, p.month) for p in points] == [(2024, 1), (2024, 2), (2024, 3)]
    assert [p.revenue for p in points] == [Decimal("0"), Decimal("0"), Decimal("1200")]
    assert [p.expense for p in points] == [Decimal("0"), Decimal("100"), Decimal("200")]


def test_trend_crosses_year(report_service):
    points = report_service.build_trend(2, 2024, months=4)
    assert [(p.year, p.month) for p in points] == [
        (2023, 11),
        (2023, 12),
        (2024, 1),
        (2024, 2),
    ]


def test_trend_requires_a_month(report_service):
    with pytest.raises(ValueError):
        report_service.build_trend(3, 2024, months=0)


def test_profit_reserve(report_service, revenue_service, withdrawal_service, settings_service):
    settings_service.set_profit_cycle(3)
    revenue_service.create_revenue(amount=1000, date=date(2024, 1, 10))
    revenue_service.create_revenue(amount=2000, date=date(2024, 2, 10))
    revenue_service.create_revenue(amount=500, date=date(2024, 3, 10))
    revenue_service.create_revenue(amount=9000, date=date(2023, 12, 10))
    withdrawal_service.record_withdrawal(
        amount=100, date=date(2024, 2, 20), kind=WithdrawalKind.PROFIT
    )
    withdrawal_service.record_withdrawal(amount=250, date=date(2024, 3, 20))

    reserve = report_service.profit_reserve(3, 2024)
    assert (reserve.start_year, reserve.start_month) == (2024, 1)
    assert (reserve.end_year, reserve.end_month) == (2024, 3)
    assert reserve.cycle_months == 3
    assert reserve.accumulated == Decimal("350")
    assert reserve.withdrawn == Decimal("100")
    assert reserve.available == Decimal("250")


def test_profit_reserve_single_month_cycle(report_service, revenue_service, settings_service):
    settings_service.set_profit_cycle(1)
    revenue_service.create_revenue(amount=1000, date=date(2024, 2, 10))
    revenue_service.create_revenue(amount=400, date=date(2024, 3, 10))

    reserve = report_service.profit_reserve(3, 2024)
    assert reserve.accumulated == Decimal("40")
