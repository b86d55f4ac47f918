"""
Budget API endpoints: categories, transactions, budget vs actual
"""
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from family_finance.api.deps import get_storage
from family_finance.api.v1.schemas import BudgetVsActualResponse, CategoryResponse, TransactionResponse
from family_finance.application.budget_generator import summarize_budget
from family_finance.application.calculations import CalculationsService, get_current_month
from family_finance.application.categories import CreateCategoryUseCase, DeleteCategoryUseCase, UpdateCategoryUseCase
from family_finance.application.transactions import DeleteTransactionUseCase, RecordTransactionUseCase
from family_finance.domain.allocation import TX_TYPE_EXPENSE
from family_finance.infrastructure.storage import FinanceStorage


router = APIRouter(prefix="/api/v1/budget", tags=["budget"])


# === Request/Response models ===

class CreateCategoryRequest(BaseModel):
    name: str
    type: str  # needs, wants, savings, growth
    budgeted_amount: Decimal


class UpdateCategoryRequest(BaseModel):
    name: str | None = None
    budgeted_amount: Decimal | None = None


class CreateTransactionRequest(BaseModel):
    category_id: str
    amount: Decimal
    type: str = TX_TYPE_EXPENSE
    date: datetime | None = None
    notes: str | None = None


class CategorySpendingResponse(BaseModel):
    category_id: str
    name: str
    type: str
    budgeted: Decimal
    spent: Decimal
    remaining: Decimal
    percentage_used: float
    is_over: bool


# === Categories ===

@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(storage: FinanceStorage = Depends(get_storage)):
    return [CategoryResponse.model_validate(c) for c in storage.get_budget_categories()]


@router.post("/categories", response_model=CategoryResponse)
def create_category(req: CreateCategoryRequest, storage: FinanceStorage = Depends(get_storage)):
    category = CreateCategoryUseCase(storage).execute(
        name=req.name,
        category_type=req.type,
        budgeted_amount=req.budgeted_amount,
    )
    return CategoryResponse.model_validate(category)


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
def update_category(category_id: str, req: UpdateCategoryRequest, storage: FinanceStorage = Depends(get_storage)):
    category = UpdateCategoryUseCase(storage).execute(
        category_id=category_id,
        name=req.name,
        budgeted_amount=req.budgeted_amount,
    )
    return CategoryResponse.model_validate(category)


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(category_id: str, storage: FinanceStorage = Depends(get_storage)):
    DeleteCategoryUseCase(storage).execute(category_id)


@router.get("/summary", response_model=dict[str, Decimal])
def budget_summary(storage: FinanceStorage = Depends(get_storage)):
    """Budgeted total per category type"""
    return summarize_budget(storage.get_budget_categories())


# === Budget vs actual ===

@router.get("/vs-actual", response_model=BudgetVsActualResponse)
def budget_vs_actual(storage: FinanceStorage = Depends(get_storage)):
    return BudgetVsActualResponse(**CalculationsService(storage).get_budget_vs_actual())


@router.get("/spending", response_model=list[CategorySpendingResponse])
def category_spending(storage: FinanceStorage = Depends(get_storage)):
    return CalculationsService(storage).get_category_spending()


# === Transactions ===

@router.get("/transactions", response_model=list[TransactionResponse])
def list_transactions(month: str | None = None, storage: FinanceStorage = Depends(get_storage)):
    """Transactions of a month (YYYY-MM, current month by default)"""
    transactions = storage.get_transactions_by_month(month or get_current_month())
    return [TransactionResponse.model_validate(t) for t in transactions]


@router.post("/transactions", response_model=TransactionResponse)
def create_transaction(req: CreateTransactionRequest, storage: FinanceStorage = Depends(get_storage)):
    tx = RecordTransactionUseCase(storage).execute(
        category_id=req.category_id,
        amount=req.amount,
        tx_type=req.type,
        tx_date=req.date,
        notes=req.notes,
    )
    return TransactionResponse.model_validate(tx)


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: str, storage: FinanceStorage = Depends(get_storage)):
    DeleteTransactionUseCase(storage).execute(transaction_id)
