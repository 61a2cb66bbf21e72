"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from studioledger.domain import entities as domain
from studioledger.database.models import (
    Transaction as ORMTransaction,
    Revenue as ORMRevenue,
    Withdrawal as ORMWithdrawal,
    Settings as ORMSettings,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        unique_id=orm_transaction.unique_id,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        date=orm_transaction.date,
        type=orm_transaction.type,
        category=orm_transaction.category,
        sub_category=orm_transaction.sub_category,
        bank=orm_transaction.bank,
        custom_bank=orm_transaction.custom_bank,
        installments=orm_transaction.installments,
        created_at=orm_transaction.created_at,
    )


def revenue_to_domain(orm_revenue: ORMRevenue) -> domain.Revenue:
    """Convert SQLAlchemy Revenue model to domain Revenue entity."""
    return domain.Revenue(
        id=orm_revenue.id,
        unique_id=orm_revenue.unique_id,
        description=orm_revenue.description,
        amount=orm_revenue.amount,
        date=orm_revenue.date,
        payment_method=orm_revenue.payment_method,
        type=orm_revenue.type,
        created_at=orm_revenue.created_at,
    )


def withdrawal_to_domain(orm_withdrawal: ORMWithdrawal) -> domain.Withdrawal:
    """Convert SQLAlchemy Withdrawal model to domain Withdrawal entity."""
    return domain.Withdrawal(
        id=orm_withdrawal.id,
        unique_id=orm_withdrawal.unique_id,
        amount=orm_withdrawal.amount,
        date=orm_withdrawal.date,
        kind=orm_withdrawal.kind,
        description=orm_withdrawal.description,
        expense_id=orm_withdrawal.expense_id,
        revenue_id=orm_withdrawal.revenue_id,
        created_at=orm_withdrawal.created_at,
    )


def settings_to_domain(orm_settings: ORMSettings) -> domain.Settings:
    """Convert the SQLAlchemy Settings row to a domain Settings entity."""
    return domain.Settings(
        pro_labore_frequency=orm_settings.pro_labore_frequency,
        pro_labore_start_date=orm_settings.pro_labore_start_date,
        profit_cycle=orm_settings.profit_cycle,
        pro_labore_mode=orm_settings.pro_labore_mode,
        fixed_pro_labore_value=orm_settings.fixed_pro_labore_value,
        distribution=domain.DistributionConfig(
            is_custom=orm_settings.distribution_is_custom,
            fixed=orm_settings.distribution_fixed,
            variable=orm_settings.distribution_variable,
            profit=orm_settings.distribution_profit,
            investment=orm_settings.distribution_investment,
            pro_labore=orm_settings.distribution_pro_labore,
        ),
    )


def apply_settings(orm_settings: ORMSettings, settings: domain.Settings) -> None:
    """Copy a domain Settings entity onto the SQLAlchemy Settings row."""
    orm_settings.pro_labore_frequency = settings.pro_labore_frequency.value
    orm_settings.pro_labore_start_date = settings.pro_labore_start_date
    orm_settings.profit_cycle = settings.profit_cycle
    orm_settings.pro_labore_mode = settings.pro_labore_mode.value
    orm_settings.fixed_pro_labore_value = settings.fixed_pro_labore_value
    distribution = settings.distribution
    orm_settings.distribution_is_custom = distribution.is_custom
    orm_settings.distribution_fixed = distribution.fixed
    orm_settings.distribution_variable = distribution.variable
    orm_settings.distribution_profit = distribution.profit
    orm_settings.distribution_investment = distribution.investment
    orm_settings.distribution_pro_labore = distribution.pro_labore
