"""
Finance storage - record store for one account

All reads and writes go through FinanceStorage, which is constructed for a
single account_id and filters every query by it. The aggregation services
receive an instance explicitly instead of reaching for a global handle.

Saves flush so that generated defaults and constraint violations surface
immediately; committing belongs to the caller (request scope).
"""
from typing import List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from family_finance.infrastructure.db.session import Base
from family_finance.infrastructure.db.models import (
    UserProfile, BudgetCategory, Transaction, SavingsGoal, IPPAccount,
    Asset, Investment, AdditionalIncome, MonthlySnapshot,
)

ModelT = TypeVar("ModelT", bound=Base)


class FinanceStorage:

    def __init__(self, db: Session, account_id: int):
        self.db = db
        self.account_id = account_id

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------

    def _query(self, model: Type[ModelT]):
        return self.db.query(model).filter(model.account_id == self.account_id)

    def _get(self, model: Type[ModelT], record_id: str) -> Optional[ModelT]:
        return self._query(model).filter(model.id == record_id).first()

    def _save(self, record: ModelT) -> ModelT:
        record.account_id = self.account_id
        self.db.add(record)
        self.db.flush()
        return record

    def _delete(self, model: Type[ModelT], record_id: str) -> bool:
        record = self._get(model, record_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_user_profile(self) -> Optional[UserProfile]:
        return self._query(UserProfile).first()

    def save_user_profile(self, profile: UserProfile) -> UserProfile:
        return self._save(profile)

    # ------------------------------------------------------------------
    # Budget categories
    # ------------------------------------------------------------------

    def get_budget_categories(self) -> List[BudgetCategory]:
        return (
            self._query(BudgetCategory)
            .order_by(BudgetCategory.position, BudgetCategory.name)
            .all()
        )

    def get_budget_category(self, category_id: str) -> Optional[BudgetCategory]:
        return self._get(BudgetCategory, category_id)

    def save_budget_category(self, category: BudgetCategory) -> BudgetCategory:
        return self._save(category)

    def delete_budget_category(self, category_id: str) -> bool:
        return self._delete(BudgetCategory, category_id)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def get_transactions_by_month(self, month: str) -> List[Transaction]:
        return (
            self._query(Transaction)
            .filter(Transaction.month == month)
            .order_by(Transaction.date, Transaction.id)
            .all()
        )

    def get_all_transactions(self) -> List[Transaction]:
        return self._query(Transaction).order_by(Transaction.date, Transaction.id).all()

    def save_transaction(self, transaction: Transaction) -> Transaction:
        return self._save(transaction)

    def delete_transaction(self, transaction_id: str) -> bool:
        return self._delete(Transaction, transaction_id)

    # ------------------------------------------------------------------
    # Savings goals
    # ------------------------------------------------------------------

    def get_all_savings_goals(self) -> List[SavingsGoal]:
        return self._query(SavingsGoal).order_by(SavingsGoal.created_at, SavingsGoal.id).all()

    def get_savings_goal(self, goal_id: str) -> Optional[SavingsGoal]:
        return self._get(SavingsGoal, goal_id)

    def save_savings_goal(self, goal: SavingsGoal) -> SavingsGoal:
        return self._save(goal)

    def delete_savings_goal(self, goal_id: str) -> bool:
        return self._delete(SavingsGoal, goal_id)

    # ------------------------------------------------------------------
    # IPP account
    # ------------------------------------------------------------------

    def get_ipp_account(self) -> Optional[IPPAccount]:
        return self._query(IPPAccount).first()

    def save_ipp_account(self, account: IPPAccount) -> IPPAccount:
        return self._save(account)

    # ------------------------------------------------------------------
    # Assets / liabilities
    # ------------------------------------------------------------------

    def get_all_assets(self) -> List[Asset]:
        return self._query(Asset).order_by(Asset.type, Asset.name).all()

    def get_asset(self, asset_id: str) -> Optional[Asset]:
        return self._get(Asset, asset_id)

    def save_asset(self, asset: Asset) -> Asset:
        return self._save(asset)

    def delete_asset(self, asset_id: str) -> bool:
        return self._delete(Asset, asset_id)

    # ------------------------------------------------------------------
    # Investments
    # ------------------------------------------------------------------

    def get_all_investments(self) -> List[Investment]:
        return self._query(Investment).order_by(Investment.name).all()

    def get_investment(self, investment_id: str) -> Optional[Investment]:
        return self._get(Investment, investment_id)

    def save_investment(self, investment: Investment) -> Investment:
        return self._save(investment)

    def delete_investment(self, investment_id: str) -> bool:
        return self._delete(Investment, investment_id)

    # ------------------------------------------------------------------
    # Additional income (soft-deleted rows hidden unless asked for)
    # ------------------------------------------------------------------

    def get_additional_income_by_month(self, month: str) -> List[AdditionalIncome]:
        return (
            self._query(AdditionalIncome)
            .filter(AdditionalIncome.month == month, AdditionalIncome.deleted == False)  # noqa: E712
            .order_by(AdditionalIncome.date, AdditionalIncome.id)
            .all()
        )

    def get_all_additional_income(self, include_deleted: bool = False) -> List[AdditionalIncome]:
        query = self._query(AdditionalIncome)
        if not include_deleted:
            query = query.filter(AdditionalIncome.deleted == False)  # noqa: E712
        return query.order_by(AdditionalIncome.date, AdditionalIncome.id).all()

    def get_additional_income(self, income_id: str) -> Optional[AdditionalIncome]:
        return self._get(AdditionalIncome, income_id)

    def save_additional_income(self, income: AdditionalIncome) -> AdditionalIncome:
        return self._save(income)

    # ------------------------------------------------------------------
    # Monthly snapshots
    # ------------------------------------------------------------------

    def get_monthly_snapshot(self, month: str) -> Optional[MonthlySnapshot]:
        return self._query(MonthlySnapshot).filter(MonthlySnapshot.month == month).first()

    def get_all_monthly_snapshots(self) -> List[MonthlySnapshot]:
        return self._query(MonthlySnapshot).order_by(MonthlySnapshot.month).all()

    def save_monthly_snapshot(self, snapshot: MonthlySnapshot) -> MonthlySnapshot:
        return self._save(snapshot)
