"""
Transaction use cases

Every write path sets month from date, so month-indexed reads always agree
with the transaction's date.
"""
import logging
from datetime import date, datetime

from family_finance.application.calculations import month_key
from family_finance.domain.allocation import TRANSACTION_TYPES, TX_TYPE_EXPENSE
from family_finance.infrastructure.db.models import Transaction, new_id
from family_finance.infrastructure.storage import FinanceStorage
from family_finance.utils.validation import parse_amount

logger = logging.getLogger(__name__)


class TransactionValidationError(ValueError):
    """Invalid transaction input"""
    pass


def as_datetime(value: date | datetime | None) -> datetime:
    """
    Naive local datetime for storage and month derivation.

    Dates without a time component are taken at midnight; None means now.
    Timezone-aware values are converted to local time and stored naive.
    """
    if value is None:
        return datetime.now()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


class RecordTransactionUseCase:
    """Use case: log an expense, saving, IPP, asset or liability movement"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(
        self,
        category_id: str,
        amount,
        tx_type: str = TX_TYPE_EXPENSE,
        tx_date: date | datetime | None = None,
        notes: str | None = None,
    ) -> Transaction:
        if tx_type not in TRANSACTION_TYPES:
            raise TransactionValidationError(f"Unknown transaction type: {tx_type}")
        if not category_id:
            raise TransactionValidationError("Please select a category")

        try:
            amount = parse_amount(amount)
        except ValueError as e:
            raise TransactionValidationError(str(e))
        if amount <= 0:
            raise TransactionValidationError("Please enter a valid amount")

        if tx_type == TX_TYPE_EXPENSE and self.storage.get_budget_category(category_id) is None:
            raise TransactionValidationError("Category not found")

        when = as_datetime(tx_date)
        notes = (notes or "").strip() or None
        tx = self.storage.save_transaction(Transaction(
            id=new_id(),
            date=when,
            category_id=category_id,
            amount=amount,
            type=tx_type,
            notes=notes,
            month=month_key(when),
        ))
        logger.info("Recorded %s transaction %s for account_id=%s", tx_type, tx.id, self.storage.account_id)
        return tx


class DeleteTransactionUseCase:

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, transaction_id: str) -> None:
        if not self.storage.delete_transaction(transaction_id):
            raise TransactionValidationError("Transaction not found")
