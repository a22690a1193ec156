import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Protocol

from database import RecordStore
from schemas import EXPENSE, INCOME, Dashboard, DailyPoint, FinancialRecord, Summary

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10
SERIES_DAYS = 7


class BalanceProvider(Protocol):
    def current_balance(self) -> float:
        ...


class ScanningBalanceProvider:
    """Balance recomputed from every stored record on each call."""

    def __init__(self, store: RecordStore):
        self.store = store

    def current_balance(self) -> float:
        return signed_total(self.store.list_all())


def signed_total(records: Iterable[FinancialRecord]) -> float:
    total = 0.0
    for r in records:
        total += r.amount if r.type == INCOME else -r.amount
    return total


def summarize(records: Iterable[FinancialRecord]) -> Summary:
    total_income = 0.0
    total_expense = 0.0
    for r in records:
        if r.type == INCOME:
            total_income += r.amount
        elif r.type == EXPENSE:
            total_expense += r.amount
    return Summary(
        totalIncome=total_income,
        totalExpense=total_expense,
        balance=total_income - total_expense,
    )


def day_bounds(day: date):
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = start + timedelta(days=1) - timedelta(milliseconds=1)
    return start, end


def daily_series(store: RecordStore, today: date, days: int = SERIES_DAYS) -> List[DailyPoint]:
    """Income/expense sums for the trailing `days` days, oldest first.

    A store failure while reading any day degrades to an empty series.
    """
    points = []
    try:
        for offset in range(days - 1, -1, -1):
            day = today - timedelta(days=offset)
            start, end = day_bounds(day)
            day_summary = summarize(store.list_in_range(start, end))
            points.append(DailyPoint(
                date=day.isoformat(),
                income=day_summary.totalIncome,
                expense=day_summary.totalExpense,
            ))
    except Exception:
        logger.exception("Error building daily series")
        return []
    return points


class DashboardService:
    def __init__(self, store: RecordStore):
        self.store = store

    def compute_dashboard(self, now: Optional[datetime] = None) -> Dashboard:
        now = now or datetime.now(timezone.utc)
        records = self.store.list_all()
        return Dashboard(
            summary=summarize(records),
            recentTransactions=records[:RECENT_LIMIT],
            chartData=daily_series(self.store, now.astimezone(timezone.utc).date()),
        )
