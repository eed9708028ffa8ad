"""Record store layer - provides persistence for the application.

This module re-exports the store backends and schema helpers for easy
importing.
"""

from financeflow.config import Settings
from financeflow.store.base import TransactionStore
from financeflow.store.memory import InMemoryTransactionStore
from financeflow.store.schema import database_exists, get_db_path, init_database
from financeflow.store.sqlite import SqliteTransactionStore


def open_store(settings: Settings) -> TransactionStore:
    """Build the store selected by the configuration.

    Args:
        settings: Loaded settings.

    Returns:
        A store handle to pass to the services.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    if settings.backend == "memory":
        return InMemoryTransactionStore()
    if settings.backend == "sqlite":
        return SqliteTransactionStore(settings.db_path or get_db_path())
    raise ValueError(f"Unknown database backend: {settings.backend!r}")


__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Stores
    "InMemoryTransactionStore",
    "SqliteTransactionStore",
    "TransactionStore",
    "open_store",
]
