"""
Net worth API endpoints: asset/liability ledger, investments, additional income
"""
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from family_finance.api.deps import get_storage
from family_finance.api.v1.schemas import AssetResponse, IncomeResponse, InvestmentResponse
from family_finance.application.assets import (
    DeleteAssetUseCase, DeleteInvestmentUseCase, SaveAssetUseCase, SaveInvestmentUseCase,
)
from family_finance.application.calculations import CalculationsService
from family_finance.application.income import RecordIncomeUseCase, RestoreIncomeUseCase, SoftDeleteIncomeUseCase
from family_finance.domain.allocation import ASSET_CATEGORIES, INCOME_SOURCES, INVESTMENT_TYPES, LIABILITY_CATEGORIES
from family_finance.infrastructure.storage import FinanceStorage


router = APIRouter(prefix="/api/v1/networth", tags=["networth"])


# === Request/Response models ===

class AssetRequest(BaseModel):
    name: str
    amount: Decimal
    type: str  # asset, liability
    category: str = "other"


class InvestmentRequest(BaseModel):
    name: str
    type: str
    units: Decimal
    purchase_price: Decimal
    current_price: Decimal
    purchase_date: datetime | None = None
    notes: str | None = None


class IncomeRequest(BaseModel):
    amount: Decimal
    source: str
    date: datetime | None = None
    description: str | None = None


class NetWorthResponse(BaseModel):
    net_worth: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    additional_income_total: Decimal
    assets: list[AssetResponse]
    liabilities: list[AssetResponse]


class HoldingResponse(BaseModel):
    id: str
    name: str
    type: str
    units: Decimal
    invested: Decimal
    current_value: Decimal
    gain: Decimal
    gain_percentage: float


class PortfolioResponse(BaseModel):
    total_invested: Decimal
    current_value: Decimal
    total_gain: Decimal
    gain_percentage: float
    holdings: list[HoldingResponse]


class OptionsResponse(BaseModel):
    asset_categories: dict[str, str]
    liability_categories: dict[str, str]
    investment_types: dict[str, str]
    income_sources: list[str]


# === Form options ===

@router.get("/options", response_model=OptionsResponse)
def form_options():
    """Suggested categories, investment types and income sources"""
    return OptionsResponse(
        asset_categories=ASSET_CATEGORIES,
        liability_categories=LIABILITY_CATEGORIES,
        investment_types=INVESTMENT_TYPES,
        income_sources=INCOME_SOURCES,
    )


# === Net worth / assets ===

@router.get("/", response_model=NetWorthResponse)
def net_worth(storage: FinanceStorage = Depends(get_storage)):
    breakdown = CalculationsService(storage).get_net_worth_breakdown()
    breakdown["assets"] = [AssetResponse.model_validate(a) for a in breakdown["assets"]]
    breakdown["liabilities"] = [AssetResponse.model_validate(a) for a in breakdown["liabilities"]]
    return NetWorthResponse(**breakdown)


def _save_asset(req: AssetRequest, storage: FinanceStorage, asset_id: str | None = None) -> AssetResponse:
    asset = SaveAssetUseCase(storage).execute(
        name=req.name,
        amount=req.amount,
        asset_type=req.type,
        category=req.category,
        asset_id=asset_id,
    )
    return AssetResponse.model_validate(asset)


@router.post("/assets", response_model=AssetResponse)
def create_asset(req: AssetRequest, storage: FinanceStorage = Depends(get_storage)):
    return _save_asset(req, storage)


@router.put("/assets/{asset_id}", response_model=AssetResponse)
def update_asset(asset_id: str, req: AssetRequest, storage: FinanceStorage = Depends(get_storage)):
    return _save_asset(req, storage, asset_id)


@router.delete("/assets/{asset_id}", status_code=204)
def delete_asset(asset_id: str, storage: FinanceStorage = Depends(get_storage)):
    DeleteAssetUseCase(storage).execute(asset_id)


# === Investments ===

@router.get("/investments", response_model=PortfolioResponse)
def portfolio(storage: FinanceStorage = Depends(get_storage)):
    return PortfolioResponse(**CalculationsService(storage).get_portfolio_summary())


def _save_investment(req: InvestmentRequest, storage: FinanceStorage, investment_id: str | None = None) -> InvestmentResponse:
    investment = SaveInvestmentUseCase(storage).execute(
        name=req.name,
        investment_type=req.type,
        units=req.units,
        purchase_price=req.purchase_price,
        current_price=req.current_price,
        purchase_date=req.purchase_date,
        notes=req.notes,
        investment_id=investment_id,
    )
    return InvestmentResponse.model_validate(investment)


@router.post("/investments", response_model=InvestmentResponse)
def create_investment(req: InvestmentRequest, storage: FinanceStorage = Depends(get_storage)):
    return _save_investment(req, storage)


@router.put("/investments/{investment_id}", response_model=InvestmentResponse)
def update_investment(investment_id: str, req: InvestmentRequest, storage: FinanceStorage = Depends(get_storage)):
    return _save_investment(req, storage, investment_id)


@router.delete("/investments/{investment_id}", status_code=204)
def delete_investment(investment_id: str, storage: FinanceStorage = Depends(get_storage)):
    DeleteInvestmentUseCase(storage).execute(investment_id)


# === Additional income ===

@router.get("/income", response_model=list[IncomeResponse])
def list_income(
    month: str | None = None,
    include_deleted: bool = False,
    storage: FinanceStorage = Depends(get_storage),
):
    """All additional income, one month's (non-deleted) entries, or the trash included"""
    if month is not None:
        entries = storage.get_additional_income_by_month(month)
    else:
        entries = storage.get_all_additional_income(include_deleted=include_deleted)
    return [IncomeResponse.model_validate(e) for e in entries]


@router.post("/income", response_model=IncomeResponse)
def record_income(req: IncomeRequest, storage: FinanceStorage = Depends(get_storage)):
    income = RecordIncomeUseCase(storage).execute(
        amount=req.amount,
        source=req.source,
        income_date=req.date,
        description=req.description,
    )
    return IncomeResponse.model_validate(income)


@router.delete("/income/{income_id}", response_model=IncomeResponse)
def soft_delete_income(income_id: str, storage: FinanceStorage = Depends(get_storage)):
    return IncomeResponse.model_validate(SoftDeleteIncomeUseCase(storage).execute(income_id))


@router.post("/income/{income_id}/restore", response_model=IncomeResponse)
def restore_income(income_id: str, storage: FinanceStorage = Depends(get_storage)):
    return IncomeResponse.model_validate(RestoreIncomeUseCase(storage).execute(income_id))
