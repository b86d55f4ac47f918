"""
Savings goal use cases
"""
import logging
from datetime import datetime
from decimal import Decimal

from family_finance.infrastructure.db.models import SavingsGoal, new_id
from family_finance.infrastructure.storage import FinanceStorage
from family_finance.utils.validation import parse_amount

logger = logging.getLogger(__name__)


class GoalValidationError(ValueError):
    """Invalid savings goal input"""
    pass


def _amount(value, field: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError as e:
        raise GoalValidationError(f"{field}: {e}")


class CreateGoalUseCase:
    """Use case: create a savings goal"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, name: str, target_amount, monthly_contribution="0", current_amount="0") -> SavingsGoal:
        name = (name or "").strip()
        if not name:
            raise GoalValidationError("Goal name is required")

        target = _amount(target_amount, "Target amount")
        if target <= 0:
            raise GoalValidationError("Target amount must be positive")
        monthly = _amount(monthly_contribution, "Monthly contribution")
        if monthly < 0:
            raise GoalValidationError("Monthly contribution cannot be negative")
        current = _amount(current_amount, "Current amount")
        if current < 0:
            raise GoalValidationError("Current amount cannot be negative")

        goal = self.storage.save_savings_goal(SavingsGoal(
            id=new_id(),
            name=name,
            target_amount=target,
            current_amount=current,
            monthly_contribution=monthly,
            created_at=datetime.now(),
        ))
        logger.info("Created savings goal %s for account_id=%s", goal.id, self.storage.account_id)
        return goal


class UpdateGoalUseCase:
    """Use case: edit a goal (the only way current_amount can go down)"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(
        self,
        goal_id: str,
        name: str | None = None,
        target_amount=None,
        current_amount=None,
        monthly_contribution=None,
    ) -> SavingsGoal:
        goal = self.storage.get_savings_goal(goal_id)
        if goal is None:
            raise GoalValidationError("Goal not found")

        if name is not None:
            name = name.strip()
            if not name:
                raise GoalValidationError("Goal name is required")
            goal.name = name
        if target_amount is not None:
            target = _amount(target_amount, "Target amount")
            if target <= 0:
                raise GoalValidationError("Target amount must be positive")
            goal.target_amount = target
        if current_amount is not None:
            current = _amount(current_amount, "Current amount")
            if current < 0:
                raise GoalValidationError("Current amount cannot be negative")
            goal.current_amount = current
        if monthly_contribution is not None:
            monthly = _amount(monthly_contribution, "Monthly contribution")
            if monthly < 0:
                raise GoalValidationError("Monthly contribution cannot be negative")
            goal.monthly_contribution = monthly

        return self.storage.save_savings_goal(goal)


class ContributeToGoalUseCase:
    """
    Use case: add money to a goal

    The goal may end up above its target.
    """

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, goal_id: str, amount) -> SavingsGoal:
        amount = _amount(amount, "Amount")
        if amount <= 0:
            raise GoalValidationError("Please enter a valid amount")

        goal = self.storage.get_savings_goal(goal_id)
        if goal is None:
            raise GoalValidationError("No goal selected")

        goal.current_amount = Decimal(goal.current_amount) + amount
        self.storage.save_savings_goal(goal)
        logger.info("Contributed %s to goal %s", amount, goal.id)
        return goal


class DeleteGoalUseCase:

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, goal_id: str) -> None:
        if not self.storage.delete_savings_goal(goal_id):
            raise GoalValidationError("Goal not found")
