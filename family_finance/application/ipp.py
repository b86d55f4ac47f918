"""
IPP (Individual Pension Plan) use cases

The balance is maintained additively: each logged contribution adds the
contribution and any realized growth, it is never recomputed from history.
"""
import logging
from datetime import datetime
from decimal import Decimal

from family_finance.infrastructure.db.models import IPPAccount
from family_finance.infrastructure.storage import FinanceStorage
from family_finance.utils.validation import parse_amount

logger = logging.getLogger(__name__)


class IPPValidationError(ValueError):
    """Invalid IPP operation"""
    pass


def _amount(value, field: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError as e:
        raise IPPValidationError(f"{field}: {e}")


def _require_account(storage: FinanceStorage) -> IPPAccount:
    account = storage.get_ipp_account()
    if account is None:
        raise IPPValidationError("No IPP account found")
    return account


class LogIPPContributionUseCase:
    """Use case: record a pension contribution, optionally with realized growth"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, amount, realized_growth="0") -> IPPAccount:
        amount = _amount(amount, "Contribution")
        if amount <= 0:
            raise IPPValidationError("Please enter a valid contribution amount")
        growth = _amount(realized_growth, "Growth")
        if growth < 0:
            raise IPPValidationError("Growth cannot be negative")

        account = _require_account(self.storage)
        account.current_balance = Decimal(account.current_balance) + amount + growth
        account.total_contributions = Decimal(account.total_contributions) + amount
        account.realized_value = Decimal(account.realized_value) + growth
        account.last_updated = datetime.now()

        self.storage.save_ipp_account(account)
        logger.info("Logged IPP contribution %s (growth %s) for account_id=%s", amount, growth, self.storage.account_id)
        return account


class SetIPPContributionUseCase:
    """Use case: change the planned monthly contribution"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, monthly_contribution) -> IPPAccount:
        monthly = _amount(monthly_contribution, "Monthly contribution")
        if monthly < 0:
            raise IPPValidationError("Monthly contribution cannot be negative")

        account = _require_account(self.storage)
        account.monthly_contribution = monthly
        account.last_updated = datetime.now()
        return self.storage.save_ipp_account(account)
