"""In-memory transaction store.

Holds records in a dict for tests and throwaway sessions. Aggregations reuse
the pure functions from ``financeflow.domain.analytics``.
"""

from dataclasses import replace
from datetime import datetime
from typing import Any

from financeflow.domain.analytics import CategoryTotal, MonthlyTotal, category_breakdown, monthly_expense_series
from financeflow.domain.models import TransactionType
from financeflow.domain.transactions import Transaction

_UPDATABLE = ("amount", "description", "category", "type", "date")


def _newest_first(transactions: list[Transaction]) -> list[Transaction]:
    return sorted(transactions, key=lambda txn: (txn.date, txn.id), reverse=True)


class InMemoryTransactionStore:
    """Transaction store that keeps everything in process memory."""

    def __init__(self) -> None:
        self._rows: dict[int, Transaction] = {}
        self._next_id = 1

    def insert(self, fields: dict[str, Any], created_at: datetime | None = None) -> Transaction:
        txn = Transaction(
            id=self._next_id,
            amount=fields["amount"],
            description=fields["description"],
            category=fields["category"],
            type=fields["type"],
            date=fields["date"],
            created_at=(created_at or datetime.now()).replace(microsecond=0),
        )
        self._rows[txn.id] = txn
        self._next_id += 1
        return txn

    def update_by_id(self, txn_id: int, fields: dict[str, Any]) -> Transaction | None:
        existing = self._rows.get(txn_id)
        if existing is None:
            return None
        changes = {name: fields[name] for name in _UPDATABLE if name in fields}
        updated = replace(existing, **changes)
        self._rows[txn_id] = updated
        return updated

    def delete_by_id(self, txn_id: int) -> bool:
        return self._rows.pop(txn_id, None) is not None

    def find_by_id(self, txn_id: int) -> Transaction | None:
        return self._rows.get(txn_id)

    def list_all(self) -> list[Transaction]:
        return _newest_first(list(self._rows.values()))

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Transaction]:
        return _newest_first([txn for txn in self._rows.values() if start <= txn.date <= end])

    def aggregate_by_category(self, txn_type: TransactionType) -> list[CategoryTotal]:
        return category_breakdown(self._rows.values(), txn_type)

    def aggregate_by_month(self, txn_type: TransactionType) -> list[MonthlyTotal]:
        return monthly_expense_series(self._rows.values(), txn_type)
