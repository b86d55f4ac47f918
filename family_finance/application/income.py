"""
Additional income use cases (bonuses, freelance work, rent...)

Entries are soft-deleted so they can be restored from the trash view.
"""
import logging
from datetime import date, datetime

from family_finance.application.calculations import month_key
from family_finance.application.transactions import as_datetime
from family_finance.infrastructure.db.models import AdditionalIncome, new_id
from family_finance.infrastructure.storage import FinanceStorage
from family_finance.utils.validation import parse_amount

logger = logging.getLogger(__name__)


class IncomeValidationError(ValueError):
    """Invalid additional income input"""
    pass


class RecordIncomeUseCase:
    """Use case: record additional income"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(
        self,
        amount,
        source: str,
        income_date: date | datetime | None = None,
        description: str | None = None,
    ) -> AdditionalIncome:
        try:
            amount = parse_amount(amount)
        except ValueError as e:
            raise IncomeValidationError(str(e))
        if amount <= 0:
            raise IncomeValidationError("Please enter a valid amount")

        source = (source or "").strip()
        if not source:
            raise IncomeValidationError("Income source is required")

        when = as_datetime(income_date)
        income = self.storage.save_additional_income(AdditionalIncome(
            id=new_id(),
            date=when,
            amount=amount,
            source=source,
            description=(description or "").strip() or None,
            month=month_key(when),
            deleted=False,
        ))
        logger.info("Recorded additional income %s for account_id=%s", income.id, self.storage.account_id)
        return income


class _SetDeletedUseCase:
    deleted: bool

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, income_id: str) -> AdditionalIncome:
        income = self.storage.get_additional_income(income_id)
        if income is None:
            raise IncomeValidationError("Income entry not found")

        income.deleted = self.deleted
        # month follows date on every write
        income.month = month_key(income.date)
        return self.storage.save_additional_income(income)


class SoftDeleteIncomeUseCase(_SetDeletedUseCase):
    """Use case: move an entry to the trash (excluded from all totals)"""
    deleted = True


class RestoreIncomeUseCase(_SetDeletedUseCase):
    """Use case: bring an entry back from the trash"""
    deleted = False
