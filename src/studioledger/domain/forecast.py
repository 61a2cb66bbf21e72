"""Pro-labore withdrawal forecasting.

The forecaster walks the target month on the payout schedule and, for each
payout day, suggests how much compensation the owner can take:

- never more than ``pro_labore_percent`` of the revenue earned up to that
  day, minus what was already withdrawn as pro-labore this month;
- at most one period's slice of the monthly entitlement (the ceiling, or
  the fixed value) so the payout is spread over the month.

Revenue dated on a day counts for that whole day, so an entry dated the 10th
is available to a payout evaluated on the 10th.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from studioledger.domain.entities import (
    ProLaboreFrequency,
    ProLaboreMode,
    Revenue,
    Withdrawal,
    WithdrawalKind,
    WithdrawalSuggestion,
)
from studioledger.domain.revenue import filter_monthly_revenues, sum_amounts
from studioledger.utils.amount_parser import to_decimal
from studioledger.utils.date_parser import days_in_month

MINIMUM_SUGGESTION = Decimal("1")

INTERVAL_DAYS = {
    ProLaboreFrequency.DAILY: 1,
    ProLaboreFrequency.WEEKLY: 7,
    ProLaboreFrequency.FIFTEEN_DAYS: 15,
    ProLaboreFrequency.TWENTY_DAYS: 20,
}

PERIOD_DIVISORS = {
    ProLaboreFrequency.DAILY: Decimal("30"),
    ProLaboreFrequency.WEEKLY: Decimal("4"),
    ProLaboreFrequency.FIFTEEN_DAYS: Decimal("2"),
    ProLaboreFrequency.TWENTY_DAYS: Decimal("1.5"),
    ProLaboreFrequency.MONTHLY: Decimal("1"),
}


def interval_days(frequency: ProLaboreFrequency, year: int, month: int) -> int:
    """Days between evaluation points; MONTHLY spans the whole month."""
    frequency = ProLaboreFrequency(frequency)
    if frequency == ProLaboreFrequency.MONTHLY:
        return days_in_month(year, month)
    return INTERVAL_DAYS[frequency]


def period_divisor(frequency: ProLaboreFrequency) -> Decimal:
    """Number of payout periods a month's entitlement is spread over."""
    return PERIOD_DIVISORS[ProLaboreFrequency(frequency)]


def effective_start_day(
    month_revenues: list[Revenue],
    target_month: int,
    target_year: int,
    user_start_date: Optional[date] = None,
) -> int:
    """First day of the month a payout may be suggested for.

    That is the day of the earliest revenue, pushed later (never earlier) by
    a configured start date in the same month.
    """
    start_day = min(r.date for r in month_revenues).day
    if (
        user_start_date is not None
        and user_start_date.month == target_month
        and user_start_date.year == target_year
    ):
        start_day = max(start_day, user_start_date.day)
    return start_day


def evaluation_days(
    frequency: ProLaboreFrequency, target_month: int, target_year: int, start_day: int
) -> list[int]:
    """Payout days of the month on or after ``start_day``.

    The schedule is anchored on the 1st (1, 8, 15, ... for WEEKLY). MONTHLY
    only has the 1st, so it yields nothing once the start day is later.
    """
    step = interval_days(frequency, target_year, target_month)
    last_day = days_in_month(target_year, target_month)
    return [day for day in range(1, last_day + 1, step) if day >= start_day]


def forecast_pro_labore(
    target_month: int,
    target_year: int,
    frequency: ProLaboreFrequency,
    month_revenues: Iterable[Revenue],
    existing_withdrawals: Iterable[Withdrawal],
    pro_labore_percent,
    mode: ProLaboreMode = ProLaboreMode.PERCENT,
    fixed_value=Decimal("0"),
    user_start_date: Optional[date] = None,
) -> list[WithdrawalSuggestion]:
    """Suggest pro-labore withdrawals for the remaining payout days.

    Args:
        target_month: Month number, 1-12
        target_year: Four-digit year
        frequency: Payout cadence
        month_revenues: Revenue the pro-labore is paid from; entries outside
            the target month are ignored
        existing_withdrawals: Withdrawals already recorded; only PRO_LABORE
            withdrawals dated in the target month count against the ceiling
        pro_labore_percent: Share of revenue the owner may take
        mode: PERCENT slices the ceiling, FIXED slices ``fixed_value``
        fixed_value: Monthly pro-labore used in FIXED mode
        user_start_date: Optional date before which nothing is suggested

    Returns:
        Suggestions ordered by date, newest first
    """
    frequency = ProLaboreFrequency(frequency)
    mode = ProLaboreMode(mode)
    percent = to_decimal(pro_labore_percent)
    fixed_value = to_decimal(fixed_value)

    revenues = filter_monthly_revenues(month_revenues, target_month, target_year)
    if not revenues:
        return []

    month_pro_labore = [
        w
        for w in existing_withdrawals
        if w.kind == WithdrawalKind.PRO_LABORE
        and w.date.month == target_month
        and w.date.year == target_year
    ]
    already_withdrawn = sum_amounts(month_pro_labore)
    withdrawn_days = {w.date for w in month_pro_labore}

    divisor = period_divisor(frequency)
    start_day = effective_start_day(revenues, target_month, target_year, user_start_date)

    suggestions: list[WithdrawalSuggestion] = []
    for day in evaluation_days(frequency, target_month, target_year, start_day):
        current_day = date(target_year, target_month, day)

        revenue_until_now = sum_amounts(r for r in revenues if r.date <= current_day)
        if revenue_until_now == 0:
            continue

        max_available = revenue_until_now * percent / Decimal(100)
        remaining_available = max_available - already_withdrawn

        if mode == ProLaboreMode.PERCENT:
            ideal_slice = max_available / divisor
        else:
            ideal_slice = fixed_value / divisor

        suggested_amount = min(ideal_slice, remaining_available)
        if suggested_amount < MINIMUM_SUGGESTION:
            continue

        if current_day in withdrawn_days:
            continue

        suggestions.append(WithdrawalSuggestion(date=current_day, amount=suggested_amount))

    return sorted(suggestions, key=lambda s: s.date, reverse=True)
