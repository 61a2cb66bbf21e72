"""Domain layer for studioledger application."""

# Services import the database interface, which imports the entities from
# this package, so they are resolved lazily.
_SERVICES = {
    "TransactionService": "studioledger.domain.transaction",
    "RevenueService": "studioledger.domain.revenue",
    "WithdrawalService": "studioledger.domain.withdrawal",
    "SettingsService": "studioledger.domain.settings",
    "MonthlyReportService": "studioledger.domain.report",
    "BackupService": "studioledger.domain.backup",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
