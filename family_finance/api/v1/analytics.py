"""
Analytics API endpoints: dashboard, monthly snapshots, trends
"""
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from family_finance.api.deps import get_storage
from family_finance.api.v1.schemas import (
    BudgetVsActualResponse, GoalResponse, IPPSummaryResponse, SavingsProgressResponse, SnapshotResponse,
    TransactionResponse,
)
from family_finance.application.calculations import CalculationsService
from family_finance.application.snapshots import TIME_RANGES, SnapshotService
from family_finance.config import get_settings
from family_finance.infrastructure.storage import FinanceStorage


router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


# === Response models ===

class DashboardResponse(BaseModel):
    budget: BudgetVsActualResponse
    net_worth: Decimal
    days_left_in_month: int
    recent_transactions: list[TransactionResponse]
    savings: SavingsProgressResponse
    ipp: IPPSummaryResponse | None
    generated_at: datetime


class Change(BaseModel):
    absolute: Decimal
    percent: float


class MonthlyChanges(BaseModel):
    net_worth: Change
    expenses: Change
    savings: Change


class AnalyticsResponse(BaseModel):
    snapshots: list[SnapshotResponse]
    net_worth: Decimal
    average_expenses: Decimal
    average_savings: Decimal
    expense_trend: float
    savings_trend: float
    changes: MonthlyChanges | None
    insights: list[str]


class GrowthResponse(BaseModel):
    growth: Decimal
    percentage: float


# === Endpoints ===

@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(storage: FinanceStorage = Depends(get_storage)):
    """Refresh the current month's snapshot, then return the dashboard view"""
    SnapshotService(storage).update_current_month_snapshot()
    summary = CalculationsService(storage).get_dashboard_summary()

    savings = summary["savings"]
    savings["goals"] = [GoalResponse.model_validate(g) for g in savings["goals"]]
    return DashboardResponse(
        budget=BudgetVsActualResponse(**summary["budget"]),
        net_worth=summary["net_worth"],
        days_left_in_month=summary["days_left_in_month"],
        recent_transactions=[TransactionResponse.model_validate(t) for t in summary["recent_transactions"]],
        savings=SavingsProgressResponse(**savings),
        ipp=IPPSummaryResponse(**summary["ipp"]) if summary["ipp"] else None,
        generated_at=summary["generated_at"],
    )


@router.get("/", response_model=AnalyticsResponse)
def analytics(time_range: str = "all", storage: FinanceStorage = Depends(get_storage)):
    """Snapshot history for 3m, 6m, 12m or all, with averages, trends and insights"""
    if time_range not in TIME_RANGES:
        raise HTTPException(status_code=400, detail=f"time_range must be one of {', '.join(TIME_RANGES)}")

    data = SnapshotService(storage).get_analytics(time_range, currency=get_settings().CURRENCY)
    data["snapshots"] = [SnapshotResponse.model_validate(s) for s in data["snapshots"]]
    return AnalyticsResponse(**data)


@router.get("/snapshots/recent", response_model=list[SnapshotResponse])
def recent_snapshots(months: int = 6, storage: FinanceStorage = Depends(get_storage)):
    """Last N months oldest first; missing months are created on the way"""
    if months < 1:
        raise HTTPException(status_code=400, detail="months must be at least 1")
    snapshots = SnapshotService(storage).get_recent_snapshots(months)
    return [SnapshotResponse.model_validate(s) for s in snapshots]


@router.get("/snapshots/{month}", response_model=SnapshotResponse)
def read_snapshot(month: str, storage: FinanceStorage = Depends(get_storage)):
    snapshot = storage.get_monthly_snapshot(month)
    if snapshot is None:
        raise HTTPException(status_code=404, detail=f"No snapshot for {month}")
    return SnapshotResponse.model_validate(snapshot)


@router.get("/growth", response_model=GrowthResponse)
def net_worth_growth(storage: FinanceStorage = Depends(get_storage)):
    return GrowthResponse(**CalculationsService(storage).get_net_worth_growth())
