"""
Profile API endpoints (onboarding and settings)
"""
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from family_finance.api.deps import get_storage
from family_finance.api.v1.schemas import CategoryResponse, ProfileResponse
from family_finance.application.budget_generator import generate_budget_categories, get_income_bracket
from family_finance.application.profile import SetupProfileUseCase, UpdateProfileUseCase
from family_finance.domain.allocation import BRACKET_LABELS
from family_finance.infrastructure.db.models import UserProfile
from family_finance.infrastructure.storage import FinanceStorage


router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


# === Request/Response models ===

class ProfileRequest(BaseModel):
    name: str
    monthly_income: Decimal
    dependents: int = 0

    @field_validator("dependents")
    @classmethod
    def validate_dependents(cls, v: int) -> int:
        if v < 0:
            raise ValueError("dependents cannot be negative")
        return v


class UpdateProfileRequest(ProfileRequest):
    regenerate_categories: bool = False


class UpdateProfileResponse(BaseModel):
    profile: ProfileResponse
    significant_change: bool
    categories_regenerated: bool


class BudgetPreviewResponse(BaseModel):
    bracket: str
    bracket_label: str
    categories: list[CategoryResponse]


# === Endpoints ===

@router.post("/setup", response_model=ProfileResponse)
def setup_profile(req: ProfileRequest, storage: FinanceStorage = Depends(get_storage)):
    """Onboard: create the profile, default categories, goals and IPP account"""
    profile = SetupProfileUseCase(storage).execute(
        name=req.name,
        monthly_income=req.monthly_income,
        dependents=req.dependents,
    )
    return ProfileResponse.model_validate(profile)


@router.get("/", response_model=ProfileResponse)
def read_profile(storage: FinanceStorage = Depends(get_storage)):
    profile = storage.get_user_profile()
    if profile is None:
        raise HTTPException(status_code=404, detail="No user profile found")
    return ProfileResponse.model_validate(profile)


@router.put("/", response_model=UpdateProfileResponse)
def update_profile(req: UpdateProfileRequest, storage: FinanceStorage = Depends(get_storage)):
    result = UpdateProfileUseCase(storage).execute(
        name=req.name,
        monthly_income=req.monthly_income,
        dependents=req.dependents,
        regenerate_categories=req.regenerate_categories,
    )
    return UpdateProfileResponse(
        profile=ProfileResponse.model_validate(result["profile"]),
        significant_change=result["significant_change"],
        categories_regenerated=result["categories_regenerated"],
    )


@router.get("/budget-preview", response_model=BudgetPreviewResponse)
def budget_preview(monthly_income: Decimal, dependents: int = 0):
    """Categories the setup would generate, without saving anything"""
    if monthly_income <= 0 or dependents < 0:
        raise HTTPException(status_code=400, detail="Valid income and dependents are required")

    draft = UserProfile(name="preview", monthly_income=monthly_income, dependents=dependents)
    bracket = get_income_bracket(monthly_income)
    return BudgetPreviewResponse(
        bracket=bracket,
        bracket_label=BRACKET_LABELS[bracket],
        categories=[CategoryResponse.model_validate(c) for c in generate_budget_categories(draft)],
    )
