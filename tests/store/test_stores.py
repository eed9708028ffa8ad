"""Contract tests run against every store backend."""

import sqlite3
from datetime import datetime
from pathlib import Path

import pytest

from financeflow.config import Settings
from financeflow.domain.analytics import CategoryTotal, MonthlyTotal
from financeflow.domain.models import EXPENSE, INCOME, CategoryName, Money, Month
from financeflow.errors import StoreError
from financeflow.store import (
    InMemoryTransactionStore,
    SqliteTransactionStore,
    TransactionStore,
    database_exists,
    init_database,
    open_store,
)


class TestInsertAndFind:
    """Tests for insert and find_by_id."""

    def test_assigns_increasing_ids(self, store: TransactionStore, make_fields) -> None:
        """Should assign a distinct id to each insert."""
        first = store.insert(make_fields())
        second = store.insert(make_fields(description="Bus"))

        assert second.id > first.id

    def test_round_trip(self, store: TransactionStore, make_fields) -> None:
        """Should return the inserted values on lookup."""
        created = store.insert(make_fields(amount="12.5"), created_at=datetime(2024, 3, 10, 9, 0, 0))

        found = store.find_by_id(created.id)

        assert found == created
        assert found is not None
        assert found.amount == "12.5"
        assert found.date == datetime(2024, 3, 10)
        assert found.created_at == datetime(2024, 3, 10, 9, 0, 0)

    def test_created_at_defaults_to_now(self, store: TransactionStore, make_fields) -> None:
        """Should stamp created_at when not given."""
        before = datetime.now().replace(microsecond=0)
        created = store.insert(make_fields())

        assert created.created_at >= before

    def test_find_missing(self, store: TransactionStore) -> None:
        """Should return None for unknown ids."""
        assert store.find_by_id(999) is None

    def test_ids_beyond_64_bits_are_missing(self, store: TransactionStore, make_fields) -> None:
        """Should treat ids no row can have as unknown."""
        store.insert(make_fields())

        for txn_id in (2**63, -(2**63) - 1, 2**70):
            assert store.find_by_id(txn_id) is None
            assert store.update_by_id(txn_id, {"amount": "1.00"}) is None
            assert store.delete_by_id(txn_id) is False


class TestUpdate:
    """Tests for update_by_id."""

    def test_replaces_only_given_fields(self, store: TransactionStore, make_fields) -> None:
        """Should change supplied fields and keep id and created_at."""
        created = store.insert(make_fields())

        updated = store.update_by_id(created.id, {"amount": "55.55", "category": CategoryName("shopping")})

        assert updated is not None
        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.amount == "55.55"
        assert updated.category == "shopping"
        assert updated.description == created.description
        assert store.find_by_id(created.id) == updated

    def test_amount_change_feeds_aggregates(self, store: TransactionStore, make_fields) -> None:
        """Should aggregate the new amount after an update."""
        created = store.insert(make_fields(amount="10.00"))
        store.update_by_id(created.id, {"amount": "25.00"})

        assert store.aggregate_by_category(EXPENSE) == [
            CategoryTotal(category=CategoryName("food"), total=Money(2500), count=1)
        ]

    def test_missing(self, store: TransactionStore) -> None:
        """Should return None for unknown ids."""
        assert store.update_by_id(999, {"amount": "1.00"}) is None

    def test_empty_update_returns_current(self, store: TransactionStore, make_fields) -> None:
        """Should return the record unchanged for an empty update."""
        created = store.insert(make_fields())

        assert store.update_by_id(created.id, {}) == created


class TestDelete:
    """Tests for delete_by_id."""

    def test_removes_permanently(self, store: TransactionStore, make_fields) -> None:
        """Should report removal and forget the record."""
        created = store.insert(make_fields())

        assert store.delete_by_id(created.id) is True
        assert store.find_by_id(created.id) is None
        assert store.delete_by_id(created.id) is False

    def test_missing(self, store: TransactionStore) -> None:
        """Should return False for unknown ids."""
        assert store.delete_by_id(12345) is False


class TestListing:
    """Tests for list_all and list_by_date_range."""

    def test_list_all_newest_first(self, store: TransactionStore, make_fields) -> None:
        """Should order by date descending regardless of insert order."""
        store.insert(make_fields(date="2024-02-01"))
        store.insert(make_fields(date="2024-03-01"))
        store.insert(make_fields(date="2024-01-01"))

        dates = [txn.date for txn in store.list_all()]

        assert dates == [datetime(2024, 3, 1), datetime(2024, 2, 1), datetime(2024, 1, 1)]

    def test_date_range_is_inclusive(self, store: TransactionStore, make_fields) -> None:
        """Should include both boundary instants."""
        store.insert(make_fields(description="before", date="2024-02-29T23:59:59"))
        store.insert(make_fields(description="first", date="2024-03-01T00:00:00"))
        store.insert(make_fields(description="last", date="2024-03-31T23:59:59"))
        store.insert(make_fields(description="after", date="2024-04-01T00:00:00"))

        result = store.list_by_date_range(datetime(2024, 3, 1), datetime(2024, 3, 31, 23, 59, 59))

        assert [txn.description for txn in result] == ["last", "first"]

    def test_empty(self, store: TransactionStore) -> None:
        """Should return empty lists for an empty store."""
        assert store.list_all() == []
        assert store.list_by_date_range(datetime(2024, 1, 1), datetime(2024, 12, 31)) == []


class TestAggregates:
    """Tests for aggregate_by_category and aggregate_by_month."""

    def test_by_category(self, store: TransactionStore, make_fields) -> None:
        """Should sum and count per category for one type."""
        store.insert(make_fields(amount="10.10", category="food"))
        store.insert(make_fields(amount="0.20", category="food"))
        store.insert(make_fields(amount="30", category="utilities"))
        store.insert(make_fields(amount="999", category="income", txn_type="income"))

        result = sorted(store.aggregate_by_category(EXPENSE), key=lambda row: row.category)

        assert result == [
            CategoryTotal(category=CategoryName("food"), total=Money(1030), count=2),
            CategoryTotal(category=CategoryName("utilities"), total=Money(3000), count=1),
        ]
        assert store.aggregate_by_category(INCOME) == [
            CategoryTotal(category=CategoryName("income"), total=Money(99900), count=1)
        ]

    def test_by_month_sorted(self, store: TransactionStore, make_fields) -> None:
        """Should emit months ascending without filling gaps."""
        store.insert(make_fields(amount="5.00", date="2024-03-31T23:59:59"))
        store.insert(make_fields(amount="1.00", date="2023-11-02"))
        store.insert(make_fields(amount="2.50", date="2024-03-01"))
        store.insert(make_fields(amount="50.00", date="2024-02-10", txn_type="income", category="income"))

        assert store.aggregate_by_month(EXPENSE) == [
            MonthlyTotal(month=Month("2023-11"), total=Money(100)),
            MonthlyTotal(month=Month("2024-03"), total=Money(750)),
        ]

    def test_empty(self, store: TransactionStore) -> None:
        """Should return empty lists for an empty store."""
        assert store.aggregate_by_category(EXPENSE) == []
        assert store.aggregate_by_month(EXPENSE) == []


class TestSqliteStore:
    """SQLite-specific behavior."""

    def test_init_database_is_idempotent(self, db_path: Path) -> None:
        """Should allow re-running initialization."""
        init_database(db_path)

        assert database_exists(db_path)

    def test_stores_exact_amount_and_cents(self, db_path: Path, make_fields) -> None:
        """Should keep the submitted string and its cent value."""
        store = SqliteTransactionStore(db_path)
        created = store.insert(make_fields(amount="7.5"))

        conn = sqlite3.connect(db_path)
        try:
            row = conn.execute("SELECT amount, amount_cents FROM transactions WHERE id = ?", (created.id,)).fetchone()
        finally:
            conn.close()

        assert row == ("7.5", 750)

    def test_amount_too_large_for_integer_column(self, db_path: Path, make_fields) -> None:
        """Should wrap cents that overflow SQLite INTEGER as StoreError."""
        store = SqliteTransactionStore(db_path)
        created = store.insert(make_fields())

        with pytest.raises(StoreError):
            store.insert(make_fields(amount="99999999999999999999"))
        with pytest.raises(StoreError):
            store.update_by_id(created.id, {"amount": "99999999999999999999"})

        assert store.list_all() == [created]

    def test_failures_raise_store_error(self, tmp_path: Path) -> None:
        """Should wrap sqlite errors for a database without schema."""
        store = SqliteTransactionStore(tmp_path / "empty.db")

        with pytest.raises(StoreError):
            store.list_all()


class TestOpenStore:
    """Tests for open_store."""

    def test_memory_backend(self) -> None:
        """Should build an in-memory store."""
        assert isinstance(open_store(Settings(backend="memory")), InMemoryTransactionStore)

    def test_sqlite_backend_uses_configured_path(self, db_path: Path) -> None:
        """Should point the SQLite store at the configured path."""
        store = open_store(Settings(backend="sqlite", db_path=db_path))

        assert isinstance(store, SqliteTransactionStore)
        assert store.db_path == db_path

    def test_unknown_backend(self) -> None:
        """Should reject unknown backends."""
        with pytest.raises(ValueError):
            open_store(Settings(backend="postgres"))
