"""SQLite-backed transaction store."""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

from financeflow.domain.analytics import CategoryTotal, MonthlyTotal
from financeflow.domain.models import CategoryName, Description, Money, Month, TransactionType
from financeflow.domain.transactions import Transaction, amount_to_cents, format_timestamp
from financeflow.errors import StoreError
from financeflow.store.schema import get_db_path

_COLUMNS = "id, amount, description, category, type, date, created_at"

# Order matters: it fixes the SET clause order for partial updates
_UPDATABLE = ("amount", "description", "category", "type", "date")

# SQLite INTEGER is a signed 64-bit value
_MIN_INTEGER = -(2**63)
_MAX_INTEGER = 2**63 - 1


def _row_to_transaction(row: sqlite3.Row) -> Transaction:
    return Transaction(
        id=row["id"],
        amount=row["amount"],
        description=Description(row["description"]),
        category=CategoryName(row["category"]),
        type=TransactionType(row["type"]),
        date=datetime.fromisoformat(row["date"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def _storable_id(txn_id: int) -> bool:
    return _MIN_INTEGER <= txn_id <= _MAX_INTEGER


def _column_values(fields: dict[str, Any]) -> dict[str, Any]:
    """Map validated fields to column values."""
    values: dict[str, Any] = {}
    for name in _UPDATABLE:
        if name not in fields:
            continue
        value = fields[name]
        if name == "date":
            value = format_timestamp(value)
        values[name] = value
        if name == "amount":
            values["amount_cents"] = amount_to_cents(value)
    return values


class SqliteTransactionStore:
    """Transaction store backed by a SQLite file.

    Each operation opens its own connection, so one instance can be shared
    across threads.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()

    def _connect(self) -> sqlite3.Connection:
        """Create a database connection with row factory.

        Returns:
            Database connection with row_factory configured.
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _fetch_all(self, query: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        try:
            with self._connect() as conn:
                return conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Query failed: {e}") from e

    def insert(self, fields: dict[str, Any], created_at: datetime | None = None) -> Transaction:
        """Insert a transaction.

        Args:
            fields: Validated transaction fields.
            created_at: Creation timestamp. If None, uses now.

        Returns:
            The stored transaction with its assigned id.

        Raises:
            StoreError: If database operation fails.
        """
        created = (created_at or datetime.now()).replace(microsecond=0)
        values = _column_values(fields)
        values["created_at"] = format_timestamp(created)

        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)

        try:
            with self._connect() as conn:
                try:
                    cursor = conn.execute(
                        f"INSERT INTO transactions ({columns}) VALUES ({placeholders})",
                        tuple(values.values()),
                    )
                    conn.commit()
                except (sqlite3.Error, OverflowError):
                    conn.rollback()
                    raise
                txn_id = cursor.lastrowid
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(f"Insert failed: {e}") from e

        return Transaction(
            id=txn_id,
            amount=fields["amount"],
            description=fields["description"],
            category=fields["category"],
            type=fields["type"],
            date=fields["date"],
            created_at=created,
        )

    def update_by_id(self, txn_id: int, fields: dict[str, Any]) -> Transaction | None:
        """Replace the supplied fields of a transaction.

        Args:
            txn_id: Transaction ID.
            fields: Validated subset of transaction fields.

        Returns:
            The updated transaction, or None if no row has that id.

        Raises:
            StoreError: If database operation fails.
        """
        if not _storable_id(txn_id):
            return None

        values = _column_values(fields)
        if not values:
            return self.find_by_id(txn_id)

        assignments = ", ".join(f"{column} = ?" for column in values)

        try:
            with self._connect() as conn:
                try:
                    cursor = conn.execute(
                        f"UPDATE transactions SET {assignments} WHERE id = ?",
                        (*values.values(), txn_id),
                    )
                    conn.commit()
                except (sqlite3.Error, OverflowError):
                    conn.rollback()
                    raise
                if cursor.rowcount == 0:
                    return None
                row = conn.execute(f"SELECT {_COLUMNS} FROM transactions WHERE id = ?", (txn_id,)).fetchone()
        except (sqlite3.Error, OverflowError) as e:
            raise StoreError(f"Update failed: {e}") from e

        return _row_to_transaction(row) if row else None

    def delete_by_id(self, txn_id: int) -> bool:
        """Delete a transaction permanently.

        Returns:
            True if a row was removed, False otherwise.

        Raises:
            StoreError: If database operation fails.
        """
        if not _storable_id(txn_id):
            return False

        try:
            with self._connect() as conn:
                try:
                    cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
                    conn.commit()
                except sqlite3.Error:
                    conn.rollback()
                    raise
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StoreError(f"Delete failed: {e}") from e

    def find_by_id(self, txn_id: int) -> Transaction | None:
        if not _storable_id(txn_id):
            return None
        rows = self._fetch_all(f"SELECT {_COLUMNS} FROM transactions WHERE id = ?", (txn_id,))
        return _row_to_transaction(rows[0]) if rows else None

    def list_all(self) -> list[Transaction]:
        """Get all transactions ordered by date descending."""
        rows = self._fetch_all(f"SELECT {_COLUMNS} FROM transactions ORDER BY date DESC, id DESC")
        return [_row_to_transaction(row) for row in rows]

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Transaction]:
        """Get transactions dated within [start, end], newest first."""
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM transactions WHERE date >= ? AND date <= ? ORDER BY date DESC, id DESC",
            (format_timestamp(start), format_timestamp(end)),
        )
        return [_row_to_transaction(row) for row in rows]

    def aggregate_by_category(self, txn_type: TransactionType) -> list[CategoryTotal]:
        """Sum and count transactions of one type per category."""
        rows = self._fetch_all(
            "SELECT category, SUM(amount_cents) AS total, COUNT(*) AS count "
            "FROM transactions WHERE type = ? GROUP BY category",
            (txn_type,),
        )
        return [
            CategoryTotal(category=CategoryName(row["category"]), total=Money(row["total"]), count=row["count"])
            for row in rows
        ]

    def aggregate_by_month(self, txn_type: TransactionType) -> list[MonthlyTotal]:
        """Sum transactions of one type per YYYY-MM month, ascending."""
        rows = self._fetch_all(
            "SELECT strftime('%Y-%m', date) AS month, SUM(amount_cents) AS total "
            "FROM transactions WHERE type = ? GROUP BY month ORDER BY month",
            (txn_type,),
        )
        return [MonthlyTotal(month=Month(row["month"]), total=Money(row["total"])) for row in rows]
