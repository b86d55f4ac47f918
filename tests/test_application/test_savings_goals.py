"""
Tests for savings goals and the IPP account
"""
import pytest
from decimal import Decimal

from family_finance.application.goals import (
    ContributeToGoalUseCase,
    CreateGoalUseCase,
    DeleteGoalUseCase,
    GoalValidationError,
    UpdateGoalUseCase,
)
from family_finance.application.ipp import (
    IPPValidationError,
    LogIPPContributionUseCase,
    SetIPPContributionUseCase,
)
from family_finance.application.profile import SetupProfileUseCase


# ============================================================================
# Goals
# ============================================================================


class TestCreateGoal:
    def test_create_goal_basic(self, storage):
        goal = CreateGoalUseCase(storage).execute(name="School trip", target_amount="20000")

        assert goal.current_amount == Decimal("0")
        assert goal.monthly_contribution == Decimal("0")
        assert storage.get_savings_goal(goal.id) is goal

    @pytest.mark.parametrize("kwargs, message", [
        ({"name": " ", "target_amount": "100"}, "name is required"),
        ({"name": "X", "target_amount": "0"}, "must be positive"),
        ({"name": "X", "target_amount": "100", "monthly_contribution": "-1"}, "cannot be negative"),
        ({"name": "X", "target_amount": "100", "current_amount": "-1"}, "cannot be negative"),
        ({"name": "X", "target_amount": "1e3"}, "Target amount"),
    ])
    def test_invalid_goal(self, storage, kwargs, message):
        with pytest.raises(GoalValidationError, match=message):
            CreateGoalUseCase(storage).execute(**kwargs)


class TestContributeToGoal:
    def test_contributions_accumulate(self, storage):
        goal = CreateGoalUseCase(storage).execute(name="Car", target_amount="150000", current_amount="45000")
        ContributeToGoalUseCase(storage).execute(goal.id, "7000")
        ContributeToGoalUseCase(storage).execute(goal.id, "3000")

        assert storage.get_savings_goal(goal.id).current_amount == Decimal("55000")

    def test_overshoot_allowed(self, storage):
        goal = CreateGoalUseCase(storage).execute(name="Phone", target_amount="10000", current_amount="9000")
        ContributeToGoalUseCase(storage).execute(goal.id, "5000")

        assert goal.current_amount == Decimal("14000")

    def test_non_positive_contribution(self, storage):
        goal = CreateGoalUseCase(storage).execute(name="Phone", target_amount="10000")
        with pytest.raises(GoalValidationError, match="valid amount"):
            ContributeToGoalUseCase(storage).execute(goal.id, "0")

    def test_unknown_goal(self, storage):
        with pytest.raises(GoalValidationError, match="No goal selected"):
            ContributeToGoalUseCase(storage).execute("missing", "100")


class TestUpdateDeleteGoal:
    def test_edit_can_lower_current_amount(self, storage):
        goal = CreateGoalUseCase(storage).execute(name="Car", target_amount="150000", current_amount="45000")
        updated = UpdateGoalUseCase(storage).execute(goal.id, current_amount="40000", monthly_contribution="2500")

        assert updated.current_amount == Decimal("40000")
        assert updated.monthly_contribution == Decimal("2500")
        assert updated.target_amount == Decimal("150000")

    def test_update_missing(self, storage):
        with pytest.raises(GoalValidationError, match="not found"):
            UpdateGoalUseCase(storage).execute("missing", name="X")

    def test_delete(self, storage):
        goal = CreateGoalUseCase(storage).execute(name="Car", target_amount="150000")
        DeleteGoalUseCase(storage).execute(goal.id)
        assert storage.get_all_savings_goals() == []

        with pytest.raises(GoalValidationError):
            DeleteGoalUseCase(storage).execute(goal.id)


# ============================================================================
# IPP
# ============================================================================


@pytest.fixture
def onboarded(storage):
    SetupProfileUseCase(storage).execute(name="Mwangi", monthly_income="85000")
    return storage


class TestIPPContributions:
    def test_balance_is_contributions_plus_growth(self, onboarded):
        log = LogIPPContributionUseCase(onboarded).execute
        log("4250")
        log("4250", realized_growth="600")
        account = log("5000", realized_growth="150.50")

        assert account.total_contributions == Decimal("13500")
        assert account.realized_value == Decimal("750.50")
        assert account.current_balance == Decimal("14250.50")
        assert account.current_balance == account.total_contributions + account.realized_value

    def test_invalid_contribution(self, onboarded):
        with pytest.raises(IPPValidationError, match="valid contribution"):
            LogIPPContributionUseCase(onboarded).execute("0")
        with pytest.raises(IPPValidationError, match="Growth cannot be negative"):
            LogIPPContributionUseCase(onboarded).execute("100", realized_growth="-1")

    def test_no_account(self, storage):
        with pytest.raises(IPPValidationError, match="No IPP account"):
            LogIPPContributionUseCase(storage).execute("100")

    def test_set_monthly_contribution(self, onboarded):
        account = SetIPPContributionUseCase(onboarded).execute("6000")

        assert account.monthly_contribution == Decimal("6000")
        assert account.total_contributions == Decimal("0")

    def test_set_monthly_without_account(self, storage):
        with pytest.raises(IPPValidationError):
            SetIPPContributionUseCase(storage).execute("6000")
