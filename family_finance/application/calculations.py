"""
Financial calculations: read-and-derive views over stored records.

Pure read layer: nothing here writes to storage. Every ratio returns 0
when its denominator is zero; absent data yields zeros, empty lists or None.
"""
import calendar
import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List

from family_finance.domain.allocation import (
    ASSET_TYPE_ASSET,
    ASSET_TYPE_LIABILITY,
    CATEGORY_TYPES,
    TX_TYPE_EXPENSE,
)
from family_finance.infrastructure.db.models import Transaction
from family_finance.infrastructure.storage import FinanceStorage

_ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Calendar helpers (month key format: YYYY-MM)
# ---------------------------------------------------------------------------


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def parse_month(month: str) -> tuple[int, int]:
    year, mon = month.split("-")
    return int(year), int(mon)


def shift_month(month: str, delta: int) -> str:
    """Move a month key by delta months, rolling over year boundaries."""
    year, mon = parse_month(month)
    index = year * 12 + (mon - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def get_current_month(today: date | None = None) -> str:
    """Current month key from the local wall clock."""
    return month_key(today or date.today())


def get_days_left_in_month(today: date | None = None) -> int:
    """Days remaining after today in the current month."""
    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return last_day - today.day


def percentage(part: Decimal | int, whole: Decimal | int) -> float:
    """part / whole * 100, or 0 for a zero denominator."""
    if not whole:
        return 0.0
    return float(Decimal(part) / Decimal(whole) * 100)


def goal_progress(goal) -> Dict[str, Any]:
    """
    Progress of a single savings goal.

    remaining goes negative once a goal is overshot. months_to_target is 0
    without a monthly contribution or once the target is reached.
    """
    target = Decimal(goal.target_amount)
    remaining = target - Decimal(goal.current_amount)
    monthly = Decimal(goal.monthly_contribution)

    months = 0
    if monthly > 0 and remaining > 0:
        months = math.ceil(remaining / monthly)

    return {
        "goal_id": goal.id,
        "name": goal.name,
        "percentage": percentage(goal.current_amount, target),
        "remaining": remaining,
        "months_to_target": months,
    }


def _sum_amounts(records) -> Decimal:
    return sum((Decimal(r.amount) for r in records), _ZERO)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CalculationsService:

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def calculate_net_worth(self) -> Decimal:
        """
        Assets + all-time additional income - liabilities.

        Additional income counts as cash that stays on the books once earned,
        independently of the asset ledger. Soft-deleted income is excluded.
        """
        assets = self.storage.get_all_assets()
        total_assets = _sum_amounts(a for a in assets if a.type == ASSET_TYPE_ASSET)
        total_liabilities = _sum_amounts(a for a in assets if a.type == ASSET_TYPE_LIABILITY)
        additional_total = _sum_amounts(self.storage.get_all_additional_income())
        return total_assets + additional_total - total_liabilities

    def get_net_worth_breakdown(self) -> Dict[str, Any]:
        """Assets and liabilities listed separately, with the totals behind net worth."""
        assets = self.storage.get_all_assets()
        asset_items = [a for a in assets if a.type == ASSET_TYPE_ASSET]
        liability_items = [a for a in assets if a.type == ASSET_TYPE_LIABILITY]
        total_assets = _sum_amounts(asset_items)
        total_liabilities = _sum_amounts(liability_items)
        additional_total = _sum_amounts(self.storage.get_all_additional_income())

        return {
            "assets": asset_items,
            "liabilities": liability_items,
            "total_assets": total_assets,
            "total_liabilities": total_liabilities,
            "additional_income_total": additional_total,
            "net_worth": total_assets + additional_total - total_liabilities,
        }

    def get_budget_vs_actual(self, today: date | None = None) -> Dict[str, Any]:
        """Budgeted vs spent for the current month, per category type and overall."""
        month = get_current_month(today)
        categories = self.storage.get_budget_categories()
        transactions = self.storage.get_transactions_by_month(month)

        spent_by_category: Dict[str, Decimal] = {}
        for tx in transactions:
            if tx.type != TX_TYPE_EXPENSE:
                continue
            spent_by_category[tx.category_id] = spent_by_category.get(tx.category_id, _ZERO) + Decimal(tx.amount)

        totals = {t: {"budgeted": _ZERO, "spent": _ZERO} for t in CATEGORY_TYPES}
        for cat in categories:
            bucket = totals.get(cat.type)
            if bucket is None:
                continue
            bucket["budgeted"] += Decimal(cat.budgeted_amount)
            bucket["spent"] += spent_by_category.get(cat.id, _ZERO)

        total_budgeted = sum((t["budgeted"] for t in totals.values()), _ZERO)
        total_spent = sum((t["spent"] for t in totals.values()), _ZERO)

        return {
            "month": month,
            "totals": totals,
            "total_budgeted": total_budgeted,
            "total_spent": total_spent,
            "remaining": total_budgeted - total_spent,
            "percentage_used": percentage(total_spent, total_budgeted),
        }

    def get_category_spending(self, today: date | None = None) -> List[Dict[str, Any]]:
        """Per-category budgeted/spent/remaining for the current month."""
        month = get_current_month(today)
        transactions = self.storage.get_transactions_by_month(month)
        spent_by_category: Dict[str, Decimal] = {}
        for tx in transactions:
            if tx.type == TX_TYPE_EXPENSE:
                spent_by_category[tx.category_id] = spent_by_category.get(tx.category_id, _ZERO) + Decimal(tx.amount)

        rows = []
        for cat in self.storage.get_budget_categories():
            spent = spent_by_category.get(cat.id, _ZERO)
            budgeted = Decimal(cat.budgeted_amount)
            rows.append({
                "category_id": cat.id,
                "name": cat.name,
                "type": cat.type,
                "budgeted": budgeted,
                "spent": spent,
                "remaining": budgeted - spent,
                "percentage_used": percentage(spent, budgeted),
                "is_over": spent > budgeted,
            })
        return rows

    def get_savings_progress(self) -> Dict[str, Any]:
        goals = self.storage.get_all_savings_goals()
        total_target = sum((Decimal(g.target_amount) for g in goals), _ZERO)
        total_current = sum((Decimal(g.current_amount) for g in goals), _ZERO)
        total_monthly = sum((Decimal(g.monthly_contribution) for g in goals), _ZERO)

        return {
            "total_target": total_target,
            "total_current": total_current,
            "total_monthly": total_monthly,
            "percentage_complete": percentage(total_current, total_target),
            "goals": goals,
            "goal_progress": [goal_progress(g) for g in goals],
        }

    def get_ipp_summary(self) -> Dict[str, Any] | None:
        """IPP account with tax relief figures; None when no account is set up."""
        account = self.storage.get_ipp_account()
        if account is None:
            return None

        monthly = Decimal(account.monthly_contribution)
        tax_relief = monthly * Decimal(account.tax_relief_rate)
        return {
            "id": account.id,
            "current_balance": Decimal(account.current_balance),
            "monthly_contribution": monthly,
            "total_contributions": Decimal(account.total_contributions),
            "tax_relief_rate": Decimal(account.tax_relief_rate),
            "realized_value": Decimal(account.realized_value),
            "last_updated": account.last_updated,
            "tax_relief": tax_relief,
            "effective_cost": monthly - tax_relief,
        }

    def get_recent_transactions(self, limit: int = 5) -> List[Transaction]:
        """Newest first; equal dates keep storage order."""
        transactions = self.storage.get_all_transactions()
        ordered = sorted(transactions, key=lambda tx: tx.date, reverse=True)
        return ordered[:limit]

    def get_net_worth_growth(self, today: date | None = None) -> Dict[str, Any]:
        """Net worth change between the previous and the current month's snapshots."""
        current_month = get_current_month(today)
        previous_month = shift_month(current_month, -1)

        current = self.storage.get_monthly_snapshot(current_month)
        previous = self.storage.get_monthly_snapshot(previous_month)
        if current is None or previous is None:
            return {"growth": _ZERO, "percentage": 0.0}

        growth = Decimal(current.net_worth) - Decimal(previous.net_worth)
        pct = percentage(growth, previous.net_worth) if previous.net_worth > 0 else 0.0
        return {"growth": growth, "percentage": pct}

    def get_portfolio_summary(self) -> Dict[str, Any]:
        investments = self.storage.get_all_investments()
        total_invested = sum((inv.invested for inv in investments), _ZERO)
        current_value = sum((inv.current_value for inv in investments), _ZERO)
        total_gain = current_value - total_invested

        holdings = [
            {
                "id": inv.id,
                "name": inv.name,
                "type": inv.type,
                "units": inv.units,
                "invested": inv.invested,
                "current_value": inv.current_value,
                "gain": inv.gain,
                "gain_percentage": percentage(inv.gain, inv.invested),
            }
            for inv in investments
        ]
        return {
            "total_invested": total_invested,
            "current_value": current_value,
            "total_gain": total_gain,
            "gain_percentage": percentage(total_gain, total_invested),
            "holdings": holdings,
        }

    def get_dashboard_summary(self, today: date | None = None) -> Dict[str, Any]:
        """Everything the dashboard shows, in one read."""
        return {
            "budget": self.get_budget_vs_actual(today),
            "net_worth": self.calculate_net_worth(),
            "days_left_in_month": get_days_left_in_month(today),
            "recent_transactions": self.get_recent_transactions(),
            "savings": self.get_savings_progress(),
            "ipp": self.get_ipp_summary(),
            "generated_at": datetime.now(),
        }
