"""
Monthly snapshots: one durable record of aggregate metrics per month.

Snapshots are created on demand (dashboard and analytics reads). Only the
current month is ever refreshed; past months keep whatever was written when
they were first ensured.

Known limitation: no historical asset ledger exists, so a snapshot created
for a past month (backfill) records today's net worth, not the net worth that
month actually ended with.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from family_finance.application.calculations import (
    CalculationsService,
    get_current_month,
    percentage,
    shift_month,
)
from family_finance.application.profile import require_profile
from family_finance.domain.allocation import TX_TYPE_EXPENSE, TX_TYPE_IPP, TX_TYPE_SAVING
from family_finance.infrastructure.db.models import MonthlySnapshot, new_id
from family_finance.infrastructure.storage import FinanceStorage
from family_finance.utils.money import format_money

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")

TIME_RANGES = {"3m": 3, "6m": 6, "12m": 12, "all": None}

TREND_WINDOW = 3


def _delta(current: Decimal, previous: Decimal) -> Dict[str, Any]:
    change = Decimal(current) - Decimal(previous)
    return {"absolute": change, "percent": percentage(change, previous)}


def calculate_monthly_changes(snapshots: Sequence[MonthlySnapshot]) -> Dict[str, Any] | None:
    """Deltas between the last two snapshots of an ordered sequence."""
    if len(snapshots) < 2:
        return None

    current, previous = snapshots[-1], snapshots[-2]
    return {
        "net_worth": _delta(current.net_worth, previous.net_worth),
        "expenses": _delta(current.total_expenses, previous.total_expenses),
        "savings": _delta(current.total_savings, previous.total_savings),
    }


def calculate_trend(snapshots: Sequence[MonthlySnapshot], field: str) -> float:
    """
    Percentage change of the average over the last three snapshots against
    the three before them.
    """
    if len(snapshots) < 2:
        return 0.0

    recent = snapshots[-TREND_WINDOW:]
    previous = snapshots[-2 * TREND_WINDOW:-TREND_WINDOW]
    if not previous:
        return 0.0

    recent_avg = sum((Decimal(getattr(s, field)) for s in recent), _ZERO) / len(recent)
    previous_avg = sum((Decimal(getattr(s, field)) for s in previous), _ZERO) / len(previous)
    return percentage(recent_avg - previous_avg, previous_avg)


def build_insights(snapshots: Sequence[MonthlySnapshot], currency: str = "KES") -> List[str]:
    """Plain-language remarks on the latest month against the one before."""
    if len(snapshots) < 2:
        return []

    latest, previous = snapshots[-1], snapshots[-2]
    expense_change = Decimal(latest.total_expenses) - Decimal(previous.total_expenses)
    savings_change = Decimal(latest.total_savings) - Decimal(previous.total_savings)
    net_worth_change = Decimal(latest.net_worth) - Decimal(previous.net_worth)

    insights = []
    if expense_change > 0:
        insights.append(f"Your expenses increased by {format_money(expense_change, currency)} last month")
    elif expense_change < 0:
        insights.append(f"You spent {format_money(-expense_change, currency)} less than the month before")

    if savings_change > 0:
        insights.append(f"Your savings increased by {format_money(savings_change, currency)}")
    elif savings_change < 0:
        insights.append("Consider increasing your monthly savings to stay on track with your goals")

    if net_worth_change > 0:
        insights.append(f"Your net worth grew by {format_money(net_worth_change, currency)} this month")
    return insights


class SnapshotService:

    def __init__(self, storage: FinanceStorage):
        self.storage = storage
        self.calculations = CalculationsService(storage)

    def _compute(self, month: str) -> Dict[str, Decimal]:
        profile = require_profile(self.storage)

        transactions = self.storage.get_transactions_by_month(month)
        additional = self.storage.get_additional_income_by_month(month)

        def total(tx_type: str) -> Decimal:
            return sum((Decimal(tx.amount) for tx in transactions if tx.type == tx_type), _ZERO)

        additional_total = sum((Decimal(a.amount) for a in additional), _ZERO)
        return {
            "income": Decimal(profile.monthly_income) + additional_total,
            "total_expenses": total(TX_TYPE_EXPENSE),
            # Monthly "saving" transactions, not cumulative goal balances
            "total_savings": total(TX_TYPE_SAVING),
            "ipp_contributions": total(TX_TYPE_IPP),
            "net_worth": self.calculations.calculate_net_worth(),
        }

    def create_monthly_snapshot(self, month: str) -> MonthlySnapshot:
        """Compute the month's figures and write them, replacing any existing record."""
        values = self._compute(month)

        snapshot = self.storage.get_monthly_snapshot(month)
        if snapshot is None:
            snapshot = MonthlySnapshot(id=new_id(), month=month)
        for field, value in values.items():
            setattr(snapshot, field, value)
        snapshot.created_at = datetime.now()

        self.storage.save_monthly_snapshot(snapshot)
        logger.info("Saved snapshot %s for account_id=%s", month, self.storage.account_id)
        return snapshot

    def ensure_monthly_snapshot(self, month: str) -> MonthlySnapshot:
        """Return the month's snapshot, creating it on first request."""
        snapshot = self.storage.get_monthly_snapshot(month)
        if snapshot is not None:
            return snapshot
        return self.create_monthly_snapshot(month)

    def update_current_month_snapshot(self, today: date | None = None) -> MonthlySnapshot:
        """Recompute and replace the current month's snapshot."""
        return self.create_monthly_snapshot(get_current_month(today))

    def get_recent_snapshots(self, months: int = 6, today: date | None = None) -> List[MonthlySnapshot]:
        """
        Snapshots for the last `months` months, oldest first, current included.

        Missing months are backfilled (with today's net worth).
        """
        current = get_current_month(today)
        return [
            self.ensure_monthly_snapshot(shift_month(current, -offset))
            for offset in range(months - 1, -1, -1)
        ]

    def get_snapshot_history(self, time_range: str = "all") -> List[MonthlySnapshot]:
        if time_range not in TIME_RANGES:
            raise ValueError(f"Unknown time range: {time_range}")

        snapshots = self.storage.get_all_monthly_snapshots()
        limit = TIME_RANGES[time_range]
        if limit is not None:
            snapshots = snapshots[-limit:]
        return snapshots

    def get_analytics(self, time_range: str = "all", today: date | None = None, currency: str = "KES") -> Dict[str, Any]:
        """Trend data for the analytics view; refreshes the current month first."""
        self.update_current_month_snapshot(today)
        snapshots = self.get_snapshot_history(time_range)

        count = len(snapshots)
        avg_expenses = sum((Decimal(s.total_expenses) for s in snapshots), _ZERO) / count if count else _ZERO
        avg_savings = sum((Decimal(s.total_savings) for s in snapshots), _ZERO) / count if count else _ZERO

        return {
            "snapshots": snapshots,
            "net_worth": self.calculations.calculate_net_worth(),
            "average_expenses": avg_expenses,
            "average_savings": avg_savings,
            "expense_trend": calculate_trend(snapshots, "total_expenses"),
            "savings_trend": calculate_trend(snapshots, "total_savings"),
            "changes": calculate_monthly_changes(snapshots),
            "insights": build_insights(snapshots, currency),
        }
