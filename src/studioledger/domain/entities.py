"""Domain model entities for studioledger.

These are pure data classes representing business concepts, independent of
database schema. Entities validate themselves on construction so malformed
records (non-positive amounts, zero installments, unparseable dates) never
reach the monthly computations.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from studioledger.domain.errors import (
    ValidationError,
    invalid_installments,
    must_be_positive,
)
from studioledger.utils.amount_parser import to_decimal


class ExpenseType(str, Enum):
    """Ledger a record belongs to: the studio or the owner's personal life."""

    PROFESSIONAL = "PROFESSIONAL"
    PERSONAL = "PERSONAL"


class ExpenseCategory(str, Enum):
    """FIXED amounts repeat every covered month, VARIABLE totals are split."""

    FIXED = "FIXED"
    VARIABLE = "VARIABLE"


class SubCategory(str, Enum):
    """Expense tag shown in breakdowns."""

    MORADIA = "MORADIA"
    ALIMENTACAO = "ALIMENTACAO"
    TRANSPORTE = "TRANSPORTE"
    LAZER = "LAZER"
    SAUDE = "SAUDE"
    EDUCACAO = "EDUCACAO"
    BELEZA = "BELEZA"
    MATERIAL = "MATERIAL"
    CURSOS = "CURSOS"
    MARKETING = "MARKETING"
    ALUGUEL = "ALUGUEL"
    IMPOSTOS = "IMPOSTOS"
    OUTROS = "OUTROS"


class Bank(str, Enum):
    """Payment channel an expense was paid through."""

    NUBANK = "NUBANK"
    BRADESCO = "BRADESCO"
    CASH = "CASH"
    OTHER = "OTHER"


class PaymentMethod(str, Enum):
    """How a revenue entry was received."""

    PIX = "PIX"
    CARD = "CARD"
    CASH = "CASH"


class WithdrawalKind(str, Enum):
    """PRO_LABORE is owner compensation, PROFIT draws on the profit reserve."""

    PRO_LABORE = "PRO_LABORE"
    PROFIT = "PROFIT"


class ProLaboreFrequency(str, Enum):
    """Payout cadence used by the pro-labore forecaster."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    FIFTEEN_DAYS = "15_DAYS"
    TWENTY_DAYS = "20_DAYS"
    MONTHLY = "MONTHLY"


class ProLaboreMode(str, Enum):
    """Pro-labore entitlement as a share of revenue or as a fixed value."""

    PERCENT = "PERCENT"
    FIXED = "FIXED"


class HealthTier(str, Enum):
    """Qualitative band for a month's margin."""

    NO_DATA = "NO_DATA"
    CRITICAL = "CRITICAL"
    LOSS = "LOSS"
    CAUTION = "CAUTION"
    HEALTHY = "HEALTHY"
    EXCELLENT = "EXCELLENT"


PROFIT_CYCLES = (1, 3, 6, 12)

WITHDRAWAL_EXPENSE_PREFIX = "withdraw-ref-"
WITHDRAWAL_REVENUE_PREFIX = "personal-ref-"


def _coerce_enum(obj, name: str, enum_cls: type[Enum]) -> None:
    value = getattr(obj, name)
    if isinstance(value, enum_cls):
        return
    try:
        object.__setattr__(obj, name, enum_cls(value))
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {name} '{value}'. Expected one of: {allowed}"
        ) from None


def _coerce_date(obj, name: str) -> None:
    value = getattr(obj, name)
    if isinstance(value, datetime):
        object.__setattr__(obj, name, value.date())
    elif isinstance(value, date):
        return
    elif isinstance(value, str):
        try:
            object.__setattr__(obj, name, date.fromisoformat(value[:10]))
        except ValueError:
            raise ValidationError(f"Invalid {name} '{value}'") from None
    else:
        raise ValidationError(f"Invalid {name} {value!r}: expected a date")


def _coerce_amount(obj, name: str, positive: bool = True) -> None:
    value = getattr(obj, name)
    if value is None:
        raise ValidationError(f"{name} is required")
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise ValidationError(str(e)) from None
    if positive and amount <= 0:
        raise ValidationError(must_be_positive(name, value))
    if not positive and amount < 0:
        raise ValidationError(f"{name} must not be negative (got {value})")
    object.__setattr__(obj, name, amount)


@dataclass(frozen=True)
class Transaction:
    """Expense transaction domain entity."""

    id: int
    unique_id: str
    description: str
    amount: Decimal
    date: date
    type: ExpenseType
    category: ExpenseCategory
    sub_category: SubCategory = SubCategory.OUTROS
    bank: Bank = Bank.OTHER
    custom_bank: Optional[str] = None
    installments: int = 1
    created_at: Optional[datetime] = None

    def __post_init__(self):
        _coerce_amount(self, "amount")
        _coerce_date(self, "date")
        _coerce_enum(self, "type", ExpenseType)
        _coerce_enum(self, "category", ExpenseCategory)
        _coerce_enum(self, "sub_category", SubCategory)
        _coerce_enum(self, "bank", Bank)
        if (
            isinstance(self.installments, bool)
            or not isinstance(self.installments, int)
            or self.installments < 1
        ):
            raise ValidationError(invalid_installments(self.installments))

    @property
    def is_withdrawal_linked(self) -> bool:
        return self.unique_id.startswith(WITHDRAWAL_EXPENSE_PREFIX)


@dataclass(frozen=True)
class Revenue:
    """Revenue entry domain entity."""

    id: int
    unique_id: str
    description: str
    amount: Decimal
    date: date
    payment_method: PaymentMethod = PaymentMethod.PIX
    type: ExpenseType = ExpenseType.PROFESSIONAL
    created_at: Optional[datetime] = None

    def __post_init__(self):
        _coerce_amount(self, "amount")
        _coerce_date(self, "date")
        _coerce_enum(self, "payment_method", PaymentMethod)
        _coerce_enum(self, "type", ExpenseType)

    @property
    def is_withdrawal_linked(self) -> bool:
        return self.unique_id.startswith(WITHDRAWAL_REVENUE_PREFIX)


@dataclass(frozen=True)
class Withdrawal:
    """Withdrawal domain entity.

    ``expense_id`` and ``revenue_id`` reference the paired PROFESSIONAL
    expense and PERSONAL revenue that the store creates and removes together
    with the withdrawal.
    """

    id: int
    unique_id: str
    amount: Decimal
    date: date
    kind: WithdrawalKind
    description: str = ""
    expense_id: Optional[int] = None
    revenue_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        _coerce_amount(self, "amount")
        _coerce_date(self, "date")
        _coerce_enum(self, "kind", WithdrawalKind)

    @property
    def expense_unique_id(self) -> str:
        return f"{WITHDRAWAL_EXPENSE_PREFIX}{self.unique_id}"

    @property
    def revenue_unique_id(self) -> str:
        return f"{WITHDRAWAL_REVENUE_PREFIX}{self.unique_id}"


@dataclass(frozen=True)
class MonthlyExpenseLine:
    """One month's share of an expense transaction."""

    transaction_id: int
    unique_id: str
    months_diff: int
    description: str
    amount: Decimal
    current_installment: int
    total_installments: int
    date: date
    type: ExpenseType
    category: ExpenseCategory
    sub_category: SubCategory
    bank: Bank
    custom_bank: Optional[str] = None

    @property
    def id(self) -> str:
        return f"{self.transaction_id}-{self.months_diff}"


@dataclass(frozen=True)
class DistributionConfig:
    """Percentage split of revenue across the five budget buckets.

    The percentages are deliberately not required to sum to 100.
    """

    is_custom: bool = False
    fixed: Decimal = Decimal("12.3")
    variable: Decimal = Decimal("20.0")
    profit: Decimal = Decimal("10.0")
    investment: Decimal = Decimal("10.0")
    pro_labore: Decimal = Decimal("47.7")

    def __post_init__(self):
        for name in ("fixed", "variable", "profit", "investment", "pro_labore"):
            _coerce_amount(self, name, positive=False)

    def effective(self) -> "DistributionConfig":
        """Return the percentages actually applied (defaults unless custom)."""
        return self if self.is_custom else DEFAULT_DISTRIBUTION


DEFAULT_DISTRIBUTION = DistributionConfig()


@dataclass(frozen=True)
class AllocationBucket:
    """A named share of revenue produced by the budget allocator."""

    name: str
    percent: Decimal
    amount: Decimal
    label: str
    description: str


@dataclass(frozen=True)
class WithdrawalSuggestion:
    """Suggested pro-labore withdrawal for a scheduled payout date."""

    date: date
    amount: Decimal


@dataclass(frozen=True)
class HealthStatus:
    """Result of classifying a month's margin."""

    label: str
    tier: HealthTier


@dataclass(frozen=True)
class Settings:
    """User preferences persisted alongside the records."""

    pro_labore_frequency: ProLaboreFrequency = ProLaboreFrequency.MONTHLY
    pro_labore_start_date: Optional[date] = None
    profit_cycle: int = 6
    pro_labore_mode: ProLaboreMode = ProLaboreMode.PERCENT
    fixed_pro_labore_value: Decimal = Decimal("0")
    distribution: DistributionConfig = field(default_factory=DistributionConfig)

    def __post_init__(self):
        _coerce_enum(self, "pro_labore_frequency", ProLaboreFrequency)
        _coerce_enum(self, "pro_labore_mode", ProLaboreMode)
        _coerce_amount(self, "fixed_pro_labore_value", positive=False)
        if self.pro_labore_start_date is not None:
            _coerce_date(self, "pro_labore_start_date")
        if self.profit_cycle not in PROFIT_CYCLES:
            raise ValidationError(
                f"Invalid profit cycle {self.profit_cycle!r}. "
                f"Expected one of: {', '.join(str(c) for c in PROFIT_CYCLES)}"
            )


@dataclass(frozen=True)
class TrendPoint:
    """Revenue and professional expense totals for one month."""

    year: int
    month: int
    revenue: Decimal
    expense: Decimal


@dataclass(frozen=True)
class ProfitReserve:
    """Profit reserve accumulated over a profit cycle."""

    start_year: int
    start_month: int
    end_year: int
    end_month: int
    cycle_months: int
    accumulated: Decimal
    withdrawn: Decimal

    @property
    def available(self) -> Decimal:
        return self.accumulated - self.withdrawn


@dataclass(frozen=True)
class MonthlyReport:
    """Everything the month overview shows, computed from one snapshot."""

    year: int
    month: int
    expense_lines: tuple[MonthlyExpenseLine, ...]
    revenues: tuple[Revenue, ...]
    professional_revenue: Decimal
    professional_expense: Decimal
    personal_revenue: Decimal
    personal_expense: Decimal
    net_profit: Decimal
    profit_margin: Decimal
    withdrawn_this_month: Decimal
    pro_labore_withdrawn: Decimal
    remaining_studio_balance: Decimal
    health: HealthStatus
    allocation: dict[str, AllocationBucket]
    suggestions: tuple[WithdrawalSuggestion, ...]
    revenue_by_method: dict[PaymentMethod, Decimal]
    expenses_by_sub_category: tuple[tuple[SubCategory, Decimal], ...]
