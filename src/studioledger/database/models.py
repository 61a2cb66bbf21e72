"""SQLAlchemy models for studioledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Imported amounts and percentages may carry more than two decimal places
AMOUNT = Numeric(18, 6)
PERCENTAGE = Numeric(9, 6)


class Transaction(Base):
    """Expense transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    unique_id = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(AMOUNT, nullable=False)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    sub_category = Column(String, nullable=False)
    bank = Column(String, nullable=False)
    custom_bank = Column(String, nullable=True)
    installments = Column(Integer, default=1, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Revenue(Base):
    """Revenue entry model."""

    __tablename__ = "revenues"

    id = Column(Integer, primary_key=True)
    unique_id = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(AMOUNT, nullable=False)
    date = Column(Date, nullable=False)
    payment_method = Column(String, nullable=False)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Withdrawal(Base):
    """Withdrawal model linked to its paired expense and revenue."""

    __tablename__ = "withdrawals"

    id = Column(Integer, primary_key=True)
    unique_id = Column(String, unique=True, nullable=False)
    amount = Column(AMOUNT, nullable=False)
    date = Column(Date, nullable=False)
    kind = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    expense_id = Column(Integer, ForeignKey("transactions.id"), nullable=False, unique=True)
    revenue_id = Column(Integer, ForeignKey("revenues.id"), nullable=False, unique=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    expense = relationship("Transaction")
    revenue = relationship("Revenue")


class Settings(Base):
    """Single-row table holding user preferences."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    pro_labore_frequency = Column(String, nullable=False, default="MONTHLY")
    pro_labore_start_date = Column(Date, nullable=True)
    profit_cycle = Column(Integer, nullable=False, default=6)
    pro_labore_mode = Column(String, nullable=False, default="PERCENT")
    fixed_pro_labore_value = Column(AMOUNT, nullable=False, default=0)
    distribution_is_custom = Column(Boolean, nullable=False, default=False)
    distribution_fixed = Column(PERCENTAGE, nullable=False)
    distribution_variable = Column(PERCENTAGE, nullable=False)
    distribution_profit = Column(PERCENTAGE, nullable=False)
    distribution_investment = Column(PERCENTAGE, nullable=False)
    distribution_pro_labore = Column(PERCENTAGE, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
