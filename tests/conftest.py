"""Shared fixtures."""

from datetime import datetime
from pathlib import Path

import pytest

from financeflow.domain.transactions import validate_transaction
from financeflow.store import InMemoryTransactionStore, SqliteTransactionStore, TransactionStore, init_database


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "financeflow.db"
    init_database(path)
    return path


@pytest.fixture(params=["memory", "sqlite"])
def store(request: pytest.FixtureRequest, db_path: Path) -> TransactionStore:
    """Each store backend, so contract tests run against both."""
    if request.param == "memory":
        return InMemoryTransactionStore()
    return SqliteTransactionStore(db_path)


def fields(
    amount: str = "40.00",
    description: str = "Groceries",
    category: str = "food",
    txn_type: str = "expense",
    date: str = "2024-03-10",
) -> dict:
    """Validated insert fields built through the real validator."""
    result = validate_transaction(
        {"amount": amount, "description": description, "category": category, "type": txn_type, "date": date}
    )
    assert result.ok, result.errors
    return result.values


@pytest.fixture
def make_fields():
    return fields


@pytest.fixture
def march_clock():
    return lambda: datetime(2024, 3, 15, 12, 0, 0)
