"""Settings domain service."""

import logging
from dataclasses import replace
from typing import Optional

from studioledger.database.base import Database
from studioledger.domain.entities import (
    DistributionConfig,
    ProLaboreFrequency,
    ProLaboreMode,
    Settings,
)

logger = logging.getLogger(__name__)

_UNSET = object()


class SettingsService:
    """Service for reading and changing user preferences."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_settings(self) -> Settings:
        """Return current settings (defaults if never saved)."""
        return self.db.get_settings()

    def update_pro_labore(
        self,
        frequency: Optional[ProLaboreFrequency] = None,
        start_date=_UNSET,
        mode: Optional[ProLaboreMode] = None,
        fixed_value=None,
    ) -> Settings:
        """Update pro-labore preferences; omitted arguments are unchanged.

        Args:
            frequency: Payout cadence
            start_date: Date before which no payout is suggested; pass None
                to clear it
            mode: PERCENT or FIXED
            fixed_value: Monthly pro-labore used in FIXED mode

        Returns:
            The saved settings

        Raises:
            ValidationError: If any value is invalid
        """
        current = self.db.get_settings()
        changes = {}
        if frequency is not None:
            changes["pro_labore_frequency"] = frequency
        if start_date is not _UNSET:
            changes["pro_labore_start_date"] = start_date
        if mode is not None:
            changes["pro_labore_mode"] = mode
        if fixed_value is not None:
            changes["fixed_pro_labore_value"] = fixed_value

        updated = replace(current, **changes)
        self.db.save_settings(updated)
        logger.info("Updated pro-labore settings: %s", ", ".join(sorted(changes)) or "none")
        return updated

    def set_profit_cycle(self, months: int) -> Settings:
        """Set how many months the profit reserve accumulates (1, 3, 6, 12)."""
        updated = replace(self.db.get_settings(), profit_cycle=months)
        self.db.save_settings(updated)
        logger.info("Profit cycle set to %s months", months)
        return updated

    def set_distribution(
        self,
        fixed=None,
        variable=None,
        profit=None,
        investment=None,
        pro_labore=None,
    ) -> Settings:
        """Switch to custom distribution percentages.

        Omitted percentages keep their current value. The percentages are
        stored as given; they are not required to add up to 100.
        """
        current = self.db.get_settings()
        base = current.distribution
        values = {
            "fixed": fixed,
            "variable": variable,
            "profit": profit,
            "investment": investment,
            "pro_labore": pro_labore,
        }
        distribution = DistributionConfig(
            is_custom=True,
            **{
                name: getattr(base, name) if value is None else value
                for name, value in values.items()
            },
        )
        updated = replace(current, distribution=distribution)
        self.db.save_settings(updated)
        logger.info("Custom distribution saved: %s", distribution)
        return updated

    def reset_distribution(self) -> Settings:
        """Go back to the automatic default distribution."""
        updated = replace(self.db.get_settings(), distribution=DistributionConfig())
        self.db.save_settings(updated)
        logger.info("Distribution reset to defaults")
        return updated
