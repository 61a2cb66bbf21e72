"""Monthly report domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from studioledger.database.base import Database
from studioledger.domain.distribution import allocate_budget
from studioledger.domain.entities import (
    ExpenseType,
    MonthlyExpenseLine,
    MonthlyReport,
    ProfitReserve,
    SubCategory,
    TrendPoint,
    WithdrawalKind,
)
from studioledger.domain.forecast import forecast_pro_labore
from studioledger.domain.health import classify_health, profit_margin
from studioledger.domain.installments import expand_installments
from studioledger.domain.revenue import (
    filter_monthly_revenues,
    revenue_by_payment_method,
    sum_amounts,
)
from studioledger.utils.date_parser import days_in_month, shift_month

logger = logging.getLogger(__name__)


def expenses_by_sub_category(
    lines: Iterable[MonthlyExpenseLine],
) -> list[tuple[SubCategory, Decimal]]:
    """Total expense per sub-category, largest first, zero totals omitted."""
    totals: dict[SubCategory, Decimal] = {}
    for line in lines:
        totals[line.sub_category] = totals.get(line.sub_category, Decimal("0")) + line.amount
    return sorted(
        ((sub, amount) for sub, amount in totals.items() if amount > 0),
        key=lambda item: item[1],
        reverse=True,
    )


class MonthlyReportService:
    """Service for building the month overview, trend and profit reserve."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_monthly_report(self, month: int, year: int) -> MonthlyReport:
        """Build the overview of one month.

        Professional figures drive the studio numbers (margin, health,
        allocation, forecast); personal figures are reported alongside.

        Args:
            month: Month number, 1-12
            year: Four-digit year

        Returns:
            MonthlyReport for the month
        """
        settings = self.db.get_settings()
        transactions = self.db.list_transactions()
        start = date(year, month, 1)
        end = date(year, month, days_in_month(year, month))
        revenues = filter_monthly_revenues(
            self.db.list_revenues(start_date=start, end_date=end), month, year
        )
        withdrawals = self.db.list_withdrawals(start_date=start, end_date=end)

        lines = expand_installments(transactions, month, year)
        professional_lines = [line for line in lines if line.type == ExpenseType.PROFESSIONAL]
        personal_lines = [line for line in lines if line.type == ExpenseType.PERSONAL]
        professional_revenues = [r for r in revenues if r.type == ExpenseType.PROFESSIONAL]
        personal_revenues = [r for r in revenues if r.type == ExpenseType.PERSONAL]

        professional_revenue = sum_amounts(professional_revenues)
        professional_expense = sum_amounts(professional_lines)
        net_profit = professional_revenue - professional_expense
        withdrawn = sum_amounts(withdrawals)
        pro_labore_withdrawn = sum_amounts(
            w for w in withdrawals if w.kind == WithdrawalKind.PRO_LABORE
        )

        distribution = settings.distribution.effective()
        suggestions = forecast_pro_labore(
            target_month=month,
            target_year=year,
            frequency=settings.pro_labore_frequency,
            month_revenues=professional_revenues,
            existing_withdrawals=withdrawals,
            pro_labore_percent=distribution.pro_labore,
            mode=settings.pro_labore_mode,
            fixed_value=settings.fixed_pro_labore_value,
            user_start_date=settings.pro_labore_start_date,
        )

        logger.debug(
            "Report %04d-%02d: %d expense lines, %d revenues, %d withdrawals",
            year,
            month,
            len(lines),
            len(revenues),
            len(withdrawals),
        )

        return MonthlyReport(
            year=year,
            month=month,
            expense_lines=tuple(lines),
            revenues=tuple(revenues),
            professional_revenue=professional_revenue,
            professional_expense=professional_expense,
            personal_revenue=sum_amounts(personal_revenues),
            personal_expense=sum_amounts(personal_lines),
            net_profit=net_profit,
            profit_margin=profit_margin(professional_revenue, professional_expense),
            withdrawn_this_month=withdrawn,
            pro_labore_withdrawn=pro_labore_withdrawn,
            remaining_studio_balance=net_profit - withdrawn,
            health=classify_health(professional_revenue, professional_expense),
            allocation=allocate_budget(professional_revenue, distribution),
            suggestions=tuple(suggestions),
            revenue_by_method=revenue_by_payment_method(professional_revenues),
            expenses_by_sub_category=tuple(expenses_by_sub_category(professional_lines)),
        )

    def build_trend(self, month: int, year: int, months: int = 6) -> list[TrendPoint]:
        """Professional revenue and expense for the months ending at a month.

        Args:
            month: Last month of the trend, 1-12
            year: Year of the last month
            months: Number of months to include

        Returns:
            TrendPoints, oldest first
        """
        if months < 1:
            raise ValueError("Trend needs at least one month")

        transactions = self.db.list_transactions(type=ExpenseType.PROFESSIONAL)
        revenues = self.db.list_revenues(type=ExpenseType.PROFESSIONAL)

        points = []
        for offset in range(months - 1, -1, -1):
            point_year, point_month = shift_month(year, month, -offset)
            points.append(
                TrendPoint(
                    year=point_year,
                    month=point_month,
                    revenue=sum_amounts(
                        filter_monthly_revenues(revenues, point_month, point_year)
                    ),
                    expense=sum_amounts(
                        expand_installments(transactions, point_month, point_year)
                    ),
                )
            )
        return points

    def profit_reserve(self, month: int, year: int) -> ProfitReserve:
        """Profit bucket accumulated over the profit cycle ending at a month.

        Each month of the cycle contributes the profit share of its
        professional revenue; PROFIT withdrawals dated inside the cycle are
        subtracted from what is available.
        """
        settings = self.db.get_settings()
        cycle = settings.profit_cycle
        distribution = settings.distribution.effective()
        start_year, start_month = shift_month(year, month, -(cycle - 1))

        revenues = self.db.list_revenues(
            start_date=date(start_year, start_month, 1),
            end_date=date(year, month, days_in_month(year, month)),
            type=ExpenseType.PROFESSIONAL,
        )
        accumulated = Decimal("0")
        for offset in range(cycle):
            point_year, point_month = shift_month(start_year, start_month, offset)
            month_revenue = sum_amounts(
                filter_monthly_revenues(revenues, point_month, point_year)
            )
            accumulated += allocate_budget(month_revenue, distribution)["profit"].amount

        withdrawals = self.db.list_withdrawals(
            start_date=date(start_year, start_month, 1),
            end_date=date(year, month, days_in_month(year, month)),
        )
        withdrawn = sum_amounts(w for w in withdrawals if w.kind == WithdrawalKind.PROFIT)

        return ProfitReserve(
            start_year=start_year,
            start_month=start_month,
            end_year=year,
            end_month=month,
            cycle_months=cycle,
            accumulated=accumulated,
            withdrawn=withdrawn,
        )
