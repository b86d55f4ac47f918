"""
Tests for onboarding and profile edits
"""
import pytest
from decimal import Decimal

from family_finance.application.profile import (
    ProfileNotFoundError,
    ProfileValidationError,
    SetupProfileUseCase,
    UpdateProfileUseCase,
    is_significant_change,
    require_profile,
)
from family_finance.infrastructure.db.models import BudgetCategory, UserProfile
from family_finance.infrastructure.storage import FinanceStorage


class TestSetupProfile:
    def test_setup_with_dependents(self, storage):
        profile = SetupProfileUseCase(storage).execute(name="  Kamau  ", monthly_income="85000", dependents=2)

        assert profile.name == "Kamau"
        assert profile.monthly_income == Decimal("85000")
        assert storage.get_user_profile().id == profile.id

        categories = storage.get_budget_categories()
        assert len(categories) == 14
        assert categories[0].name == "Rent/Mortgage"
        assert categories[-1].name == "Pension (IPP)"

        goals = {g.name: g for g in storage.get_all_savings_goals()}
        assert goals["Emergency Fund"].target_amount == Decimal("510000")
        assert goals["Emergency Fund"].monthly_contribution == Decimal("8500")
        assert goals["Children's Education"].target_amount == Decimal("500000")
        assert goals["Children's Education"].monthly_contribution == Decimal("4250")

        ipp = storage.get_ipp_account()
        assert ipp.monthly_contribution == Decimal("4250")
        assert ipp.tax_relief_rate == Decimal("0.30")
        assert ipp.current_balance == Decimal("0")

    def test_setup_without_dependents(self, storage):
        SetupProfileUseCase(storage).execute(name="Njeri", monthly_income="60000")

        assert len(storage.get_budget_categories()) == 11
        assert [g.name for g in storage.get_all_savings_goals()] == ["Emergency Fund"]

    def test_setup_twice_rejected(self, storage):
        SetupProfileUseCase(storage).execute(name="Njeri", monthly_income="60000")
        with pytest.raises(ProfileValidationError, match="already exists"):
            SetupProfileUseCase(storage).execute(name="Njeri", monthly_income="70000")

    @pytest.mark.parametrize("name, income, dependents, message", [
        ("", "60000", 0, "Name is required"),
        ("   ", "60000", 0, "Name is required"),
        ("Njeri", "0", 0, "Valid income"),
        ("Njeri", "-100", 0, "Valid income"),
        ("Njeri", "abc", 0, "Valid income"),
        ("Njeri", "60000", -1, "dependents"),
    ])
    def test_invalid_input(self, storage, name, income, dependents, message):
        with pytest.raises(ProfileValidationError, match=message):
            SetupProfileUseCase(storage).execute(name=name, monthly_income=income, dependents=dependents)
        assert storage.get_user_profile() is None

    def test_accounts_are_isolated(self, db_session, storage):
        SetupProfileUseCase(storage).execute(name="Njeri", monthly_income="60000")
        other = FinanceStorage(db_session, account_id=2)

        assert other.get_user_profile() is None
        assert other.get_budget_categories() == []


class TestRequireProfile:
    def test_missing_profile(self, storage):
        with pytest.raises(ProfileNotFoundError):
            require_profile(storage)


class TestSignificantChange:
    def test_income_threshold_is_strict(self):
        assert is_significant_change(Decimal("100000"), Decimal("110000"), 0, 0) is False
        assert is_significant_change(Decimal("100000"), Decimal("110001"), 0, 0) is True
        assert is_significant_change(Decimal("100000"), Decimal("89999"), 0, 0) is True

    def test_dependents_change(self):
        assert is_significant_change(Decimal("100000"), Decimal("100000"), 1, 2) is True


class TestUpdateProfile:
    def test_requires_profile(self, storage):
        with pytest.raises(ProfileNotFoundError):
            UpdateProfileUseCase(storage).execute(name="X", monthly_income="1000", dependents=0)

    def test_minor_change_keeps_categories(self, storage):
        SetupProfileUseCase(storage).execute(name="Njeri", monthly_income="60000")
        before = [c.id for c in storage.get_budget_categories()]

        result = UpdateProfileUseCase(storage).execute(
            name="Njeri W.", monthly_income="62000", dependents=0, regenerate_categories=True,
        )

        assert result["significant_change"] is False
        assert result["categories_regenerated"] is False
        assert result["profile"].name == "Njeri W."
        assert result["profile"].monthly_income == Decimal("62000")
        assert [c.id for c in storage.get_budget_categories()] == before

    def test_significant_change_without_request_keeps_categories(self, storage):
        SetupProfileUseCase(storage).execute(name="Njeri", monthly_income="60000")
        before = [c.id for c in storage.get_budget_categories()]

        result = UpdateProfileUseCase(storage).execute(name="Njeri", monthly_income="90000", dependents=0)

        assert result["significant_change"] is True
        assert result["categories_regenerated"] is False
        assert [c.id for c in storage.get_budget_categories()] == before

    def test_regenerate_on_new_dependent(self, storage):
        SetupProfileUseCase(storage).execute(name="Njeri", monthly_income="60000")

        result = UpdateProfileUseCase(storage).execute(
            name="Njeri", monthly_income="60000", dependents=1, regenerate_categories=True,
        )

        assert result["categories_regenerated"] is True
        names = [c.name for c in storage.get_budget_categories()]
        assert len(names) == 14
        assert "School Fees" in names
        assert sum(c.budgeted_amount for c in storage.get_budget_categories()) == Decimal("60000")

    def test_regeneration_replaces_custom_categories(self, storage, db_session):
        SetupProfileUseCase(storage).execute(name="Njeri", monthly_income="60000")
        custom = storage.save_budget_category(BudgetCategory(
            name="Church", budgeted_amount=Decimal("2000"), type="wants", is_default=False, position=99,
        ))

        UpdateProfileUseCase(storage).execute(
            name="Njeri", monthly_income="120000", dependents=0, regenerate_categories=True,
        )

        assert storage.get_budget_category(custom.id) is None
        assert db_session.query(UserProfile).count() == 1
