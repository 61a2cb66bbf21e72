"""Smart distribution of revenue into budget buckets."""

from decimal import Decimal
from typing import Optional

from studioledger.domain.entities import (
    AllocationBucket,
    DEFAULT_DISTRIBUTION,
    DistributionConfig,
)
from studioledger.utils.amount_parser import to_decimal

# (config attribute, label, what the bucket pays for)
BUCKETS = (
    ("fixed", "Fixed expenses", "Rent, water, power, internet"),
    ("variable", "Variable expenses", "Gel, products, fees, air conditioning"),
    ("profit", "Studio profit", "Emergency reserve"),
    ("investment", "Investments", "Courses, equipment"),
    ("pro_labore", "Your pro-labore", "Nail designer salary"),
)


def allocate_budget(
    total_revenue, config: Optional[DistributionConfig] = None
) -> dict[str, AllocationBucket]:
    """Split a revenue total across the five budget buckets.

    Custom percentages are used only when ``config.is_custom`` is set;
    otherwise the default 12.3/20/10/10/47.7 split applies. Percentages are
    applied as given, even when they do not add up to 100.

    Args:
        total_revenue: Revenue to distribute
        config: Optional distribution configuration

    Returns:
        Mapping of bucket name to AllocationBucket, in display order
    """
    total = to_decimal(total_revenue)
    percents = (config or DEFAULT_DISTRIBUTION).effective()

    allocation: dict[str, AllocationBucket] = {}
    for name, label, description in BUCKETS:
        percent = getattr(percents, name)
        allocation[name] = AllocationBucket(
            name=name,
            percent=percent,
            amount=total * percent / Decimal(100),
            label=label,
            description=description,
        )
    return allocation
