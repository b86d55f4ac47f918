"""
Profile use cases - onboarding and settings edits
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from family_finance.application.budget_generator import generate_budget_categories, round_amount
from family_finance.domain.allocation import (
    EDUCATION_GOAL,
    EDUCATION_GOAL_MONTHLY_RATE,
    EDUCATION_GOAL_TARGET,
    EMERGENCY_FUND_GOAL,
    EMERGENCY_FUND_MONTHLY_RATE,
    EMERGENCY_FUND_MONTHS,
    IPP_DEFAULT_CONTRIBUTION_RATE,
    IPP_TAX_RELIEF_RATE,
    SIGNIFICANT_INCOME_CHANGE,
)
from family_finance.infrastructure.db.models import IPPAccount, SavingsGoal, UserProfile, new_id
from family_finance.infrastructure.storage import FinanceStorage
from family_finance.utils.validation import parse_amount

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


class ProfileNotFoundError(LookupError):
    """No profile exists yet: the household has to be onboarded first"""
    pass


class ProfileValidationError(ValueError):
    """Invalid profile input"""
    pass


def require_profile(storage: FinanceStorage) -> UserProfile:
    profile = storage.get_user_profile()
    if profile is None:
        raise ProfileNotFoundError("No user profile found")
    return profile


def _validate(name: str, monthly_income, dependents: int) -> tuple[str, Decimal, int]:
    name = (name or "").strip()
    if not name:
        raise ProfileValidationError("Name is required")

    try:
        income = parse_amount(monthly_income)
    except ValueError:
        raise ProfileValidationError("Valid income is required")
    if income <= 0:
        raise ProfileValidationError("Valid income is required")

    if dependents is None or int(dependents) != dependents or dependents < 0:
        raise ProfileValidationError("Valid number of dependents is required")

    return name, income, int(dependents)


def is_significant_change(old_income: Decimal, new_income: Decimal, old_dependents: int, new_dependents: int) -> bool:
    """Income moved by more than 10% of the old income, or the household size changed."""
    income_changed = abs(Decimal(new_income) - Decimal(old_income)) > Decimal(old_income) * SIGNIFICANT_INCOME_CHANGE
    return income_changed or new_dependents != old_dependents


class SetupProfileUseCase:
    """
    Use case: onboard a household

    Saves the profile, its generated budget categories, the default savings
    goals and an IPP account sized from the income.
    """

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, name: str, monthly_income, dependents: int = 0) -> UserProfile:
        name, income, dependents = _validate(name, monthly_income, dependents)

        if self.storage.get_user_profile() is not None:
            raise ProfileValidationError("Profile already exists")

        now = datetime.now()
        profile = self.storage.save_user_profile(UserProfile(
            id=new_id(),
            name=name,
            monthly_income=income,
            dependents=dependents,
            created_at=now,
            updated_at=now,
        ))

        categories = generate_budget_categories(profile)
        for category in categories:
            self.storage.save_budget_category(category)

        self.storage.save_savings_goal(SavingsGoal(
            id=new_id(),
            name=EMERGENCY_FUND_GOAL,
            target_amount=income * EMERGENCY_FUND_MONTHS,
            current_amount=_ZERO,
            monthly_contribution=round_amount(income * EMERGENCY_FUND_MONTHLY_RATE),
            created_at=now,
        ))
        if dependents > 0:
            self.storage.save_savings_goal(SavingsGoal(
                id=new_id(),
                name=EDUCATION_GOAL,
                target_amount=EDUCATION_GOAL_TARGET,
                current_amount=_ZERO,
                monthly_contribution=round_amount(income * EDUCATION_GOAL_MONTHLY_RATE),
                created_at=now,
            ))

        self.storage.save_ipp_account(IPPAccount(
            id=new_id(),
            current_balance=_ZERO,
            monthly_contribution=round_amount(income * IPP_DEFAULT_CONTRIBUTION_RATE),
            total_contributions=_ZERO,
            tax_relief_rate=IPP_TAX_RELIEF_RATE,
            realized_value=_ZERO,
            last_updated=now,
        ))

        logger.info(
            "Onboarded account_id=%s with %d categories (dependents=%d)",
            self.storage.account_id, len(categories), dependents,
        )
        return profile


class UpdateProfileUseCase:
    """
    Use case: edit the profile from settings

    A significant change (income by more than 10%, or dependents) can
    regenerate the budget categories when the caller asks for it. Existing
    transactions are kept either way.
    """

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, name: str, monthly_income, dependents: int, regenerate_categories: bool = False) -> Dict[str, Any]:
        profile = require_profile(self.storage)
        name, income, dependents = _validate(name, monthly_income, dependents)

        significant = is_significant_change(profile.monthly_income, income, profile.dependents, dependents)

        profile.name = name
        profile.monthly_income = income
        profile.dependents = dependents
        profile.updated_at = datetime.now()
        self.storage.save_user_profile(profile)

        regenerated = False
        if significant and regenerate_categories:
            for category in self.storage.get_budget_categories():
                self.storage.delete_budget_category(category.id)
            for category in generate_budget_categories(profile):
                self.storage.save_budget_category(category)
            regenerated = True
            logger.info("Regenerated budget categories for account_id=%s", self.storage.account_id)

        return {
            "profile": profile,
            "significant_change": significant,
            "categories_regenerated": regenerated,
        }
