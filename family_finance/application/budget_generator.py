"""
Budget generator: turns a household profile into default budget categories.

Pure computation, no database access. The categories are returned as
transient ORM objects; the caller decides whether to persist them.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List

from family_finance.domain.allocation import (
    BUDGET_ALLOCATION,
    BRACKET_HIGH,
    CATEGORY_ALLOCATION_SUGGESTIONS,
    CATEGORY_TYPES,
    DEFAULT_CATEGORIES,
    DEPENDENT_CATEGORIES,
    INCOME_BRACKETS,
)
from family_finance.infrastructure.db.models import BudgetCategory, UserProfile, new_id

_ZERO = Decimal("0")
_WHOLE = Decimal("1")


def round_amount(amount: Decimal) -> Decimal:
    """Round to the nearest whole currency unit, halves away from zero."""
    return Decimal(amount).quantize(_WHOLE, rounding=ROUND_HALF_UP)


def get_income_bracket(income: Decimal) -> str:
    """Classify monthly income; the first three bounds are inclusive."""
    income = Decimal(income)
    for upper_bound, bracket in INCOME_BRACKETS:
        if income <= upper_bound:
            return bracket
    return BRACKET_HIGH


def _category_names(category_type: str, dependents: int) -> List[str]:
    names = list(DEFAULT_CATEGORIES[category_type])
    if dependents > 0:
        names.extend(DEPENDENT_CATEGORIES.get(category_type, []))
    return names


def _allocate_pool(pool: Decimal, names: List[str], suggestions: Dict[str, Dict[str, Decimal]], bracket: str) -> List[Decimal]:
    """
    Split one pool across its categories.

    Categories without a suggestion get the whole pool. Rounding drift (and
    any mismatch between the suggested fractions and 1) is absorbed by the
    first category so the pool total is exact.
    """
    amounts = []
    for name in names:
        fraction = suggestions.get(name, {}).get(bracket)
        if fraction is None:
            amounts.append(round_amount(pool))
        else:
            amounts.append(round_amount(pool * fraction))

    if amounts:
        target = round_amount(pool)
        allocated = sum(amounts, _ZERO)
        if allocated != target:
            amounts[0] += target - allocated
    return amounts


def generate_budget_categories(profile: UserProfile) -> List[BudgetCategory]:
    """
    Build the default category set for a profile.

    Order: needs, wants, savings, growth; within a pool the base categories
    come first, then the dependent-only ones. Every category is marked as a
    default and gets a fresh id.
    """
    income = Decimal(profile.monthly_income)
    dependents = profile.dependents or 0
    bracket = get_income_bracket(income)

    categories: List[BudgetCategory] = []
    for category_type in CATEGORY_TYPES:
        pool = income * BUDGET_ALLOCATION[category_type]
        names = _category_names(category_type, dependents)
        suggestions = CATEGORY_ALLOCATION_SUGGESTIONS.get(category_type, {})
        amounts = _allocate_pool(pool, names, suggestions, bracket)

        for name, amount in zip(names, amounts):
            categories.append(BudgetCategory(
                id=new_id(),
                name=name,
                budgeted_amount=amount,
                type=category_type,
                is_default=True,
                position=len(categories),
            ))

    return categories


def summarize_budget(categories: List[BudgetCategory]) -> Dict[str, Decimal]:
    """Total budgeted amount per category type."""
    summary = {category_type: _ZERO for category_type in CATEGORY_TYPES}
    for category in categories:
        if category.type in summary:
            summary[category.type] += Decimal(category.budgeted_amount)
    return summary
