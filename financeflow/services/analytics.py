"""Analytics service: feeds store snapshots to the pure analytics functions."""

from collections.abc import Callable
from datetime import datetime

from financeflow.dates import current_month_window
from financeflow.domain.analytics import CategoryTotal, MonthlyTotal, Summary, compute_summary
from financeflow.domain.models import EXPENSE
from financeflow.store.base import TransactionStore


class AnalyticsService:
    """Read-only dashboard analytics.

    Args:
        store: Record store handle.
        clock: Returns the current time; decides which month is "current".
    """

    def __init__(self, store: TransactionStore, clock: Callable[[], datetime] = datetime.now) -> None:
        self.store = store
        self.clock = clock

    def summary(self) -> Summary:
        start, end = current_month_window(self.clock())
        return compute_summary(self.store.list_all(), self.store.list_by_date_range(start, end))

    def category_breakdown(self) -> list[CategoryTotal]:
        """Expense totals and counts per category."""
        return self.store.aggregate_by_category(EXPENSE)

    def monthly_expense_series(self) -> list[MonthlyTotal]:
        """Expense totals per month, oldest month first."""
        return self.store.aggregate_by_month(EXPENSE)
