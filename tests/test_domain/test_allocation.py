"""
Tests for allocation tables
"""
from decimal import Decimal

from family_finance.domain.allocation import (
    BUDGET_ALLOCATION,
    BRACKET_LABELS,
    CATEGORY_ALLOCATION_SUGGESTIONS,
    CATEGORY_TYPES,
    DEFAULT_CATEGORIES,
    DEPENDENT_CATEGORIES,
    INCOME_BRACKETS,
)


def test_allocation_fractions_sum_to_one():
    assert sum(BUDGET_ALLOCATION.values()) == Decimal("1")


def test_every_category_type_has_a_pool_and_defaults():
    for category_type in CATEGORY_TYPES:
        assert category_type in BUDGET_ALLOCATION
        assert DEFAULT_CATEGORIES[category_type]


def test_growth_pool_has_single_unsuggested_category():
    """Pension (IPP) takes the whole growth pool"""
    assert DEFAULT_CATEGORIES["growth"] == ["Pension (IPP)"]
    assert "growth" not in CATEGORY_ALLOCATION_SUGGESTIONS


def test_dependent_categories_only_for_needs_and_savings():
    assert set(DEPENDENT_CATEGORIES) == {"needs", "savings"}
    assert DEPENDENT_CATEGORIES["needs"] == ["School Fees", "Medical & Healthcare"]
    assert DEPENDENT_CATEGORIES["savings"] == ["Children's Education Fund"]


def test_suggestions_cover_every_bracket():
    brackets = set(BRACKET_LABELS)
    for per_category in CATEGORY_ALLOCATION_SUGGESTIONS.values():
        for fractions in per_category.values():
            assert set(fractions) == brackets


def test_income_brackets_are_ascending():
    bounds = [bound for bound, _ in INCOME_BRACKETS]
    assert bounds == sorted(bounds)
    assert bounds == [Decimal("50000"), Decimal("100000"), Decimal("200000")]


def test_wants_suggestions_sum_to_one_per_bracket():
    wants = CATEGORY_ALLOCATION_SUGGESTIONS["wants"]
    for bracket in BRACKET_LABELS:
        assert sum(f[bracket] for f in wants.values()) == Decimal("1")
