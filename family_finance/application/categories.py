"""
Budget category use cases - user edits after onboarding
"""
import logging

from family_finance.domain.allocation import CATEGORY_TYPES
from family_finance.infrastructure.db.models import BudgetCategory, new_id
from family_finance.infrastructure.storage import FinanceStorage
from family_finance.utils.validation import parse_amount

logger = logging.getLogger(__name__)


class CategoryValidationError(ValueError):
    """Invalid budget category input"""
    pass


def _parse_budget(value):
    try:
        amount = parse_amount(value)
    except ValueError as e:
        raise CategoryValidationError(str(e))
    if amount < 0:
        raise CategoryValidationError("Budgeted amount cannot be negative")
    return amount


class CreateCategoryUseCase:
    """Use case: add a custom category"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, name: str, category_type: str, budgeted_amount) -> BudgetCategory:
        name = (name or "").strip()
        if not name:
            raise CategoryValidationError("Category name is required")
        if category_type not in CATEGORY_TYPES:
            raise CategoryValidationError(f"Unknown category type: {category_type}")
        amount = _parse_budget(budgeted_amount)

        position = len(self.storage.get_budget_categories())
        category = self.storage.save_budget_category(BudgetCategory(
            id=new_id(),
            name=name,
            budgeted_amount=amount,
            type=category_type,
            is_default=False,
            position=position,
        ))
        logger.info("Created category %s (%s) for account_id=%s", category.id, category_type, self.storage.account_id)
        return category


class UpdateCategoryUseCase:
    """Use case: rename a category or change its budget"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, category_id: str, name: str | None = None, budgeted_amount=None) -> BudgetCategory:
        category = self.storage.get_budget_category(category_id)
        if category is None:
            raise CategoryValidationError("Category not found")

        if name is not None:
            name = name.strip()
            if not name:
                raise CategoryValidationError("Category name is required")
            category.name = name
        if budgeted_amount is not None:
            category.budgeted_amount = _parse_budget(budgeted_amount)

        return self.storage.save_budget_category(category)


class DeleteCategoryUseCase:
    """
    Use case: delete a category

    Transactions pointing at it are kept; they simply stop counting towards
    any budget.
    """

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, category_id: str) -> None:
        if not self.storage.delete_budget_category(category_id):
            raise CategoryValidationError("Category not found")
