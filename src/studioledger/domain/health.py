"""Business health classification from monthly revenue and expense."""

from decimal import Decimal

from studioledger.domain.entities import HealthStatus, HealthTier
from studioledger.utils.amount_parser import to_decimal

LABELS = {
    HealthTier.NO_DATA: "No data",
    HealthTier.CRITICAL: "Critical",
    HealthTier.LOSS: "Loss",
    HealthTier.CAUTION: "Caution",
    HealthTier.HEALTHY: "Healthy",
    HealthTier.EXCELLENT: "Excellent",
}


def profit_margin(revenue, expense) -> Decimal:
    """Return (revenue - expense) / revenue as a percentage, 0 without revenue."""
    revenue = to_decimal(revenue)
    if revenue == 0:
        return Decimal("0")
    return (revenue - to_decimal(expense)) / revenue * 100


def classify_health(revenue, expense) -> HealthStatus:
    """Classify a month's margin into a health tier.

    Margins below 0 are a loss, below 20 caution, below 50 healthy and
    anything higher excellent. Without revenue the month is either empty or
    critical depending on whether anything was spent.
    """
    revenue = to_decimal(revenue)
    expense = to_decimal(expense)

    if revenue == 0 and expense == 0:
        tier = HealthTier.NO_DATA
    elif revenue == 0:
        tier = HealthTier.CRITICAL
    else:
        margin = profit_margin(revenue, expense)
        if margin < 0:
            tier = HealthTier.LOSS
        elif margin < 20:
            tier = HealthTier.CAUTION
        elif margin < 50:
            tier = HealthTier.HEALTHY
        else:
            tier = HealthTier.EXCELLENT

    return HealthStatus(label=LABELS[tier], tier=tier)
