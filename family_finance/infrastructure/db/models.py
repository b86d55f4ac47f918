"""
SQLAlchemy ORM models

Every table is partitioned by account_id; FinanceStorage scopes all queries
to a single account. Primary keys are string UUIDs assigned in Python so that
records built before a flush (e.g. generated budget categories) already carry
their identity.
"""
import uuid
from datetime import datetime
from decimal import Decimal
from sqlalchemy import String, DateTime, Integer, Text, Boolean, Numeric, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from family_finance.infrastructure.db.session import Base


def new_id() -> str:
    """Generate a fresh record identifier"""
    return str(uuid.uuid4())


class UserProfile(Base):
    """
    Household profile: the seed input for budget generation. One per account.
    """
    __tablename__ = "user_profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    monthly_income: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    dependents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)


class BudgetCategory(Base):
    __tablename__ = "budget_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    budgeted_amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)  # needs, wants, savings, growth
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Keeps generator output order stable when reading categories back
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Transaction(Base):
    """
    Money movement against a budget category.

    category_id is a weak reference: deleting a category leaves its
    transactions in place. month is always the YYYY-MM of date.
    """
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    category_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)  # expense, saving, ipp, asset, liability
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    month: Mapped[str] = mapped_column(String(7), nullable=False)

    __table_args__ = (
        Index("ix_transactions_account_month", "account_id", "month"),
    )


class SavingsGoal(Base):
    __tablename__ = "savings_goals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    target_amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    current_amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, default=Decimal("0"))
    monthly_contribution: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, default=Decimal("0"))

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)


class IPPAccount(Base):
    """
    Individual Pension Plan account, one per account.

    current_balance is kept additively: every logged contribution adds the
    contribution plus any realized growth.
    """
    __tablename__ = "ipp_accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    current_balance: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, default=Decimal("0"))
    monthly_contribution: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, default=Decimal("0"))
    total_contributions: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, default=Decimal("0"))
    tax_relief_rate: Mapped[Decimal] = mapped_column(Numeric(precision=5, scale=4), nullable=False)
    realized_value: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, default=Decimal("0"))

    last_updated: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)


class Asset(Base):
    """Asset or liability ledger entry (amount is always a positive magnitude)"""
    __tablename__ = "assets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)  # asset, liability
    category: Mapped[str] = mapped_column(String(64), nullable=False, default="other")

    last_updated: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)


class Investment(Base):
    __tablename__ = "investments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    units: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    purchase_price: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    current_price: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=4), nullable=False)
    purchase_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    last_updated: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    @property
    def invested(self) -> Decimal:
        return self.units * self.purchase_price

    @property
    def current_value(self) -> Decimal:
        return self.units * self.current_price

    @property
    def gain(self) -> Decimal:
        return self.current_value - self.invested


class AdditionalIncome(Base):
    """Income on top of the base salary. Soft-deleted rows stay for the trash view."""
    __tablename__ = "additional_income"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    source: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    month: Mapped[str] = mapped_column(String(7), nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_additional_income_account_month", "account_id", "month"),
    )


class MonthlySnapshot(Base):
    """
    Frozen aggregate metrics for one calendar month (one row per account+month)
    """
    __tablename__ = "monthly_snapshots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    month: Mapped[str] = mapped_column(String(7), nullable=False)
    income: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    total_expenses: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    total_savings: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    ipp_contributions: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    net_worth: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    __table_args__ = (
        UniqueConstraint("account_id", "month", name="uq_snapshot_account_month"),
    )
