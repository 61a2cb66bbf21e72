"""JSON backup export and import.

The snapshot layout matches the browser app's backup file: camelCase record
lists plus the user preferences at the top level. Withdrawal pairs are not
stored explicitly in that format; they are recognised on import through the
``withdraw-ref-<id>`` and ``personal-ref-<id>`` record ids.
"""

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Any, Optional

from studioledger.database.base import Database
from studioledger.domain.entities import (
    Bank,
    DistributionConfig,
    ExpenseCategory,
    ExpenseType,
    PaymentMethod,
    Revenue,
    Settings,
    SubCategory,
    Transaction,
    Withdrawal,
)
from studioledger.domain.errors import ConflictError, ValidationError, duplicate_unique_id
from studioledger.domain.withdrawal import DEFAULT_DESCRIPTIONS
from studioledger.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = (
    "transactions",
    "revenues",
    "withdrawals",
    "proLaboreFrequency",
    "proLaboreStartDate",
    "profitCycle",
    "proLaboreMode",
    "fixedProLaboreValue",
    "distributionConfig",
)

DISTRIBUTION_KEYS = {
    "fixed": "fixed",
    "variable": "variable",
    "profit": "profit",
    "investment": "investment",
    "proLabore": "pro_labore",
}


def _number(amount: Decimal):
    """JSON number for a stored amount."""
    return int(amount) if amount == amount.to_integral_value() else float(amount)


def _date(value: Any, what: str):
    if value is None or value == "":
        raise ValidationError(f"{what}: date is required")
    if not isinstance(value, str):
        raise ValidationError(f"{what}: invalid date {value!r}")
    try:
        return parse_date(value)
    except ValueError as e:
        raise ValidationError(f"{what}: {e}") from None


def _integer(value: Any) -> Any:
    # JSON numbers may arrive as 3.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


def _record_id(record: dict) -> str:
    value = record.get("id")
    if value is None or str(value).strip() == "":
        return str(uuid.uuid4())
    return str(value)


def _records(data: dict, key: str) -> list[dict]:
    records = data.get(key) or []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValidationError(f"Backup field '{key}' must be a list of records")
    return records


class BackupService:
    """Service for exporting and restoring a full snapshot of the ledger."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_snapshot(self) -> dict[str, Any]:
        """Export every record and the settings as a JSON-serialisable dict."""
        settings = self.db.get_settings()
        transactions = sorted(self.db.list_transactions(), key=lambda t: t.id)
        revenues = sorted(self.db.list_revenues(), key=lambda r: r.id)
        withdrawals = sorted(self.db.list_withdrawals(), key=lambda w: w.id)

        snapshot = {
            "transactions": [self._export_transaction(t) for t in transactions],
            "revenues": [self._export_revenue(r) for r in revenues],
            "withdrawals": [self._export_withdrawal(w) for w in withdrawals],
            "proLaboreFrequency": settings.pro_labore_frequency.value,
            "proLaboreStartDate": (
                settings.pro_labore_start_date.isoformat()
                if settings.pro_labore_start_date
                else None
            ),
            "profitCycle": settings.profit_cycle,
            "proLaboreMode": settings.pro_labore_mode.value,
            "fixedProLaboreValue": _number(settings.fixed_pro_labore_value),
            "distributionConfig": {
                "isCustom": settings.distribution.is_custom,
                **{
                    key: _number(getattr(settings.distribution, attr))
                    for key, attr in DISTRIBUTION_KEYS.items()
                },
            },
        }
        logger.info(
            "Exported %d transactions, %d revenues, %d withdrawals",
            len(transactions),
            len(revenues),
            len(withdrawals),
        )
        return snapshot

    def import_snapshot(self, data: dict[str, Any]) -> dict[str, int]:
        """Replace all records and settings with a snapshot's content.

        Record lists missing from the snapshot are treated as empty.
        Preferences missing from it keep their current value. Nothing is
        changed when any record is invalid.

        Args:
            data: Snapshot as produced by export_snapshot (or the browser app)

        Returns:
            Counts of imported transactions, revenues, withdrawals and of
            withdrawal sides that had to be recreated

        Raises:
            ValidationError: If the snapshot or any record is invalid
            ConflictError: If two records share an id
        """
        if not isinstance(data, dict) or not any(key in data for key in SNAPSHOT_KEYS):
            raise ValidationError("Not a valid backup: no known fields found")

        transactions = [self._import_transaction(r) for r in _records(data, "transactions")]
        revenues = [self._import_revenue(r) for r in _records(data, "revenues")]
        withdrawals = [self._import_withdrawal(r) for r in _records(data, "withdrawals")]

        for records in (transactions, revenues, withdrawals):
            self._check_unique(records)

        expense_uids = {t["unique_id"] for t in transactions}
        revenue_uids = {r["unique_id"] for r in revenues}
        recreated = 0
        for withdrawal in withdrawals:
            if withdrawal["expense_unique_id"] not in expense_uids:
                transactions.append(self._paired_expense(withdrawal))
                expense_uids.add(withdrawal["expense_unique_id"])
                recreated += 1
            if withdrawal["revenue_unique_id"] not in revenue_uids:
                revenues.append(self._paired_revenue(withdrawal))
                revenue_uids.add(withdrawal["revenue_unique_id"])
                recreated += 1

        if recreated:
            logger.warning("Recreated %d missing withdrawal records", recreated)

        settings = self._import_settings(data)
        self.db.replace_all(
            transactions=transactions,
            revenues=revenues,
            withdrawals=withdrawals,
            settings=settings,
        )

        counts = {
            "transactions": len(transactions),
            "revenues": len(revenues),
            "withdrawals": len(withdrawals),
            "recreated": recreated,
        }
        logger.info("Imported backup: %s", counts)
        return counts

    # Export helpers
    @staticmethod
    def _export_transaction(txn: Transaction) -> dict[str, Any]:
        record = {
            "id": txn.unique_id,
            "description": txn.description,
            "amount": _number(txn.amount),
            "date": txn.date.isoformat(),
            "type": txn.type.value,
            "category": txn.category.value,
            "subCategory": txn.sub_category.value,
            "bank": txn.bank.value,
            "installments": txn.installments,
        }
        if txn.custom_bank:
            record["customBank"] = txn.custom_bank
        return record

    @staticmethod
    def _export_revenue(revenue: Revenue) -> dict[str, Any]:
        return {
            "id": revenue.unique_id,
            "description": revenue.description,
            "amount": _number(revenue.amount),
            "date": revenue.date.isoformat(),
            "paymentMethod": revenue.payment_method.value,
            "type": revenue.type.value,
        }

    @staticmethod
    def _export_withdrawal(withdrawal: Withdrawal) -> dict[str, Any]:
        return {
            "id": withdrawal.unique_id,
            "amount": _number(withdrawal.amount),
            "date": withdrawal.date.isoformat(),
            "type": withdrawal.kind.value,
            "description": withdrawal.description,
        }

    # Import helpers
    @staticmethod
    def _import_transaction(record: dict) -> dict[str, Any]:
        unique_id = _record_id(record)
        what = f"Transaction '{unique_id}'"
        bank = record.get("bank") or Bank.OTHER
        entity = Transaction(
            id=0,
            unique_id=unique_id,
            description=record.get("description") or "",
            amount=record.get("amount"),
            date=_date(record.get("date"), what),
            type=record.get("type"),
            category=record.get("category"),
            sub_category=record.get("subCategory") or SubCategory.OUTROS,
            bank=bank,
            custom_bank=record.get("customBank") or None,
            installments=_integer(record.get("installments", 1)),
        )
        return {
            "unique_id": entity.unique_id,
            "description": entity.description,
            "amount": entity.amount,
            "date": entity.date,
            "type": entity.type,
            "category": entity.category,
            "sub_category": entity.sub_category,
            "bank": entity.bank,
            "custom_bank": entity.custom_bank if entity.bank == Bank.OTHER else None,
            "installments": entity.installments,
        }

    @staticmethod
    def _import_revenue(record: dict) -> dict[str, Any]:
        unique_id = _record_id(record)
        entity = Revenue(
            id=0,
            unique_id=unique_id,
            description=record.get("description") or "",
            amount=record.get("amount"),
            date=_date(record.get("date"), f"Revenue '{unique_id}'"),
            payment_method=record.get("paymentMethod") or PaymentMethod.PIX,
            type=record.get("type") or ExpenseType.PROFESSIONAL,
        )
        return {
            "unique_id": entity.unique_id,
            "description": entity.description,
            "amount": entity.amount,
            "date": entity.date,
            "payment_method": entity.payment_method,
            "type": entity.type,
        }

    @staticmethod
    def _import_withdrawal(record: dict) -> dict[str, Any]:
        unique_id = _record_id(record)
        entity = Withdrawal(
            id=0,
            unique_id=unique_id,
            amount=record.get("amount"),
            date=_date(record.get("date"), f"Withdrawal '{unique_id}'"),
            kind=record.get("type"),
            description=record.get("description") or "",
        )
        return {
            "unique_id": entity.unique_id,
            "amount": entity.amount,
            "date": entity.date,
            "kind": entity.kind,
            "description": entity.description or DEFAULT_DESCRIPTIONS[entity.kind],
            "expense_unique_id": entity.expense_unique_id,
            "revenue_unique_id": entity.revenue_unique_id,
        }

    @staticmethod
    def _paired_expense(withdrawal: dict) -> dict[str, Any]:
        return {
            "unique_id": withdrawal["expense_unique_id"],
            "description": withdrawal["description"],
            "amount": withdrawal["amount"],
            "date": withdrawal["date"],
            "type": ExpenseType.PROFESSIONAL,
            "category": ExpenseCategory.FIXED,
            "sub_category": SubCategory.OUTROS,
            "bank": Bank.CASH,
            "installments": 1,
        }

    @staticmethod
    def _paired_revenue(withdrawal: dict) -> dict[str, Any]:
        return {
            "unique_id": withdrawal["revenue_unique_id"],
            "description": withdrawal["description"],
            "amount": withdrawal["amount"],
            "date": withdrawal["date"],
            "payment_method": PaymentMethod.PIX,
            "type": ExpenseType.PERSONAL,
        }

    @staticmethod
    def _check_unique(records: list[dict]) -> None:
        seen = set()
        for record in records:
            if record["unique_id"] in seen:
                raise ConflictError(duplicate_unique_id("Record", record["unique_id"]))
            seen.add(record["unique_id"])

    def _import_settings(self, data: dict) -> Settings:
        current = self.db.get_settings()
        changes: dict[str, Any] = {}
        if data.get("proLaboreFrequency"):
            changes["pro_labore_frequency"] = data["proLaboreFrequency"]
        if data.get("proLaboreStartDate"):
            changes["pro_labore_start_date"] = _date(
                data["proLaboreStartDate"], "proLaboreStartDate"
            )
        if data.get("profitCycle"):
            changes["profit_cycle"] = _integer(data["profitCycle"])
        if data.get("proLaboreMode"):
            changes["pro_labore_mode"] = data["proLaboreMode"]
        if data.get("fixedProLaboreValue") is not None:
            changes["fixed_pro_labore_value"] = data["fixedProLaboreValue"]

        config: Optional[dict] = data.get("distributionConfig")
        if config:
            if not isinstance(config, dict):
                raise ValidationError("Backup field 'distributionConfig' must be an object")
            base = current.distribution
            changes["distribution"] = DistributionConfig(
                is_custom=bool(config.get("isCustom", False)),
                **{
                    attr: config.get(key, getattr(base, attr))
                    for key, attr in DISTRIBUTION_KEYS.items()
                },
            )

        return replace(current, **changes)
