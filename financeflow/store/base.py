"""Record store contract consumed by the services."""

from datetime import datetime
from typing import Any, Protocol

from financeflow.domain.analytics import CategoryTotal, MonthlyTotal
from financeflow.domain.models import TransactionType
from financeflow.domain.transactions import Transaction


class TransactionStore(Protocol):
    """Persistence for Transaction records.

    ``fields`` arguments hold validated values as produced by
    ``validate_transaction``: ``amount``, ``description``, ``category``,
    ``type`` and ``date`` (a datetime).
    """

    def insert(self, fields: dict[str, Any], created_at: datetime | None = None) -> Transaction: ...

    def update_by_id(self, txn_id: int, fields: dict[str, Any]) -> Transaction | None: ...

    def delete_by_id(self, txn_id: int) -> bool: ...

    def find_by_id(self, txn_id: int) -> Transaction | None: ...

    def list_all(self) -> list[Transaction]: ...

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Transaction]: ...

    def aggregate_by_category(self, txn_type: TransactionType) -> list[CategoryTotal]: ...

    def aggregate_by_month(self, txn_type: TransactionType) -> list[MonthlyTotal]: ...
