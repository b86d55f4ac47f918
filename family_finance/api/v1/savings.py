"""
Savings API endpoints: goals and the IPP pension account
"""
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from family_finance.api.deps import get_storage
from family_finance.api.v1.schemas import GoalResponse, IPPAccountResponse, IPPSummaryResponse, SavingsProgressResponse
from family_finance.application.calculations import CalculationsService
from family_finance.application.goals import (
    ContributeToGoalUseCase, CreateGoalUseCase, DeleteGoalUseCase, UpdateGoalUseCase,
)
from family_finance.application.ipp import LogIPPContributionUseCase, SetIPPContributionUseCase
from family_finance.infrastructure.storage import FinanceStorage


router = APIRouter(prefix="/api/v1/savings", tags=["savings"])


# === Request models ===

class CreateGoalRequest(BaseModel):
    name: str
    target_amount: Decimal
    monthly_contribution: Decimal = Decimal("0")
    current_amount: Decimal = Decimal("0")


class UpdateGoalRequest(BaseModel):
    name: str | None = None
    target_amount: Decimal | None = None
    current_amount: Decimal | None = None
    monthly_contribution: Decimal | None = None


class ContributionRequest(BaseModel):
    amount: Decimal


class IPPContributionRequest(BaseModel):
    amount: Decimal
    realized_growth: Decimal = Decimal("0")


class IPPMonthlyRequest(BaseModel):
    monthly_contribution: Decimal


# === Goals ===

@router.get("/", response_model=SavingsProgressResponse)
def savings_progress(storage: FinanceStorage = Depends(get_storage)):
    progress = CalculationsService(storage).get_savings_progress()
    progress["goals"] = [GoalResponse.model_validate(g) for g in progress["goals"]]
    return SavingsProgressResponse(**progress)


@router.post("/goals", response_model=GoalResponse)
def create_goal(req: CreateGoalRequest, storage: FinanceStorage = Depends(get_storage)):
    goal = CreateGoalUseCase(storage).execute(
        name=req.name,
        target_amount=req.target_amount,
        monthly_contribution=req.monthly_contribution,
        current_amount=req.current_amount,
    )
    return GoalResponse.model_validate(goal)


@router.patch("/goals/{goal_id}", response_model=GoalResponse)
def update_goal(goal_id: str, req: UpdateGoalRequest, storage: FinanceStorage = Depends(get_storage)):
    goal = UpdateGoalUseCase(storage).execute(goal_id=goal_id, **req.model_dump())
    return GoalResponse.model_validate(goal)


@router.post("/goals/{goal_id}/contributions", response_model=GoalResponse)
def contribute_to_goal(goal_id: str, req: ContributionRequest, storage: FinanceStorage = Depends(get_storage)):
    goal = ContributeToGoalUseCase(storage).execute(goal_id=goal_id, amount=req.amount)
    return GoalResponse.model_validate(goal)


@router.delete("/goals/{goal_id}", status_code=204)
def delete_goal(goal_id: str, storage: FinanceStorage = Depends(get_storage)):
    DeleteGoalUseCase(storage).execute(goal_id)


# === IPP ===

@router.get("/ipp", response_model=IPPSummaryResponse)
def ipp_summary(storage: FinanceStorage = Depends(get_storage)):
    summary = CalculationsService(storage).get_ipp_summary()
    if summary is None:
        raise HTTPException(status_code=404, detail="IPP account not configured")
    return IPPSummaryResponse(**summary)


@router.post("/ipp/contributions", response_model=IPPAccountResponse)
def log_ipp_contribution(req: IPPContributionRequest, storage: FinanceStorage = Depends(get_storage)):
    account = LogIPPContributionUseCase(storage).execute(
        amount=req.amount,
        realized_growth=req.realized_growth,
    )
    return IPPAccountResponse.model_validate(account)


@router.put("/ipp/monthly-contribution", response_model=IPPAccountResponse)
def set_ipp_monthly_contribution(req: IPPMonthlyRequest, storage: FinanceStorage = Depends(get_storage)):
    account = SetIPPContributionUseCase(storage).execute(req.monthly_contribution)
    return IPPAccountResponse.model_validate(account)
