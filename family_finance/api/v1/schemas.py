"""
Response models shared by the v1 routers

Amounts are Decimal fields and serialize as strings in JSON.
"""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class _OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(_OrmModel):
    id: str
    name: str
    monthly_income: Decimal
    dependents: int
    created_at: datetime
    updated_at: datetime


class CategoryResponse(_OrmModel):
    id: str
    name: str
    budgeted_amount: Decimal
    type: str
    is_default: bool


class TransactionResponse(_OrmModel):
    id: str
    date: datetime
    category_id: str
    amount: Decimal
    type: str
    notes: str | None
    month: str


class GoalResponse(_OrmModel):
    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    monthly_contribution: Decimal
    created_at: datetime


class IPPAccountResponse(_OrmModel):
    id: str
    current_balance: Decimal
    monthly_contribution: Decimal
    total_contributions: Decimal
    tax_relief_rate: Decimal
    realized_value: Decimal
    last_updated: datetime


class IPPSummaryResponse(IPPAccountResponse):
    tax_relief: Decimal
    effective_cost: Decimal


class AssetResponse(_OrmModel):
    id: str
    name: str
    amount: Decimal
    type: str
    category: str
    last_updated: datetime


class InvestmentResponse(_OrmModel):
    id: str
    name: str
    type: str
    units: Decimal
    purchase_price: Decimal
    current_price: Decimal
    purchase_date: datetime
    notes: str | None
    last_updated: datetime
    invested: Decimal
    current_value: Decimal
    gain: Decimal


class IncomeResponse(_OrmModel):
    id: str
    date: datetime
    amount: Decimal
    source: str
    description: str | None
    month: str
    deleted: bool


class SnapshotResponse(_OrmModel):
    id: str
    month: str
    income: Decimal
    total_expenses: Decimal
    total_savings: Decimal
    ipp_contributions: Decimal
    net_worth: Decimal
    created_at: datetime


class BudgetTotals(BaseModel):
    budgeted: Decimal
    spent: Decimal


class BudgetVsActualResponse(BaseModel):
    month: str
    totals: dict[str, BudgetTotals]
    total_budgeted: Decimal
    total_spent: Decimal
    remaining: Decimal
    percentage_used: float


class GoalProgressResponse(BaseModel):
    goal_id: str
    name: str
    percentage: float
    remaining: Decimal
    months_to_target: int


class SavingsProgressResponse(BaseModel):
    total_target: Decimal
    total_current: Decimal
    total_monthly: Decimal
    percentage_complete: float
    goals: list[GoalResponse]
    goal_progress: list[GoalProgressResponse]
