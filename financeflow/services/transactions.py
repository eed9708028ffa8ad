"""Transaction service: validates input and applies it to the store."""

import logging
from typing import Any

from financeflow.domain.transactions import Transaction, validate_transaction
from financeflow.errors import NotFoundError, ValidationError
from financeflow.store.base import TransactionStore

logger = logging.getLogger(__name__)


class TransactionService:
    """Create, read, update and delete transactions through a store handle.

    No analytics are cached, so every mutation is visible to the next
    analytics read.
    """

    def __init__(self, store: TransactionStore) -> None:
        self.store = store

    def create(self, data: Any) -> Transaction:
        """Validate and persist a new transaction.

        Args:
            data: Full transaction input.

        Returns:
            The stored transaction with id and created_at assigned.

        Raises:
            ValidationError: If any field is invalid.
        """
        result = validate_transaction(data)
        if not result.ok:
            raise ValidationError(result.errors)

        txn = self.store.insert(result.values)
        logger.info("Created transaction %d (%s %s)", txn.id, txn.type, txn.amount)
        return txn

    def update(self, txn_id: int, data: Any) -> Transaction:
        """Replace the supplied fields of a transaction.

        Args:
            txn_id: Transaction ID.
            data: Partial transaction input.

        Returns:
            The updated transaction.

        Raises:
            ValidationError: If any supplied field is invalid.
            NotFoundError: If no transaction has that id.
        """
        result = validate_transaction(data, partial=True)
        if not result.ok:
            raise ValidationError(result.errors)

        txn = self.store.update_by_id(txn_id, result.values)
        if txn is None:
            raise NotFoundError(txn_id)

        logger.info("Updated transaction %d (%s)", txn_id, ", ".join(sorted(result.values)) or "no changes")
        return txn

    def delete(self, txn_id: int) -> bool:
        """Delete a transaction.

        Returns:
            True if a transaction was removed, False if none had that id.
        """
        deleted = self.store.delete_by_id(txn_id)
        if deleted:
            logger.info("Deleted transaction %d", txn_id)
        return deleted

    def get(self, txn_id: int) -> Transaction | None:
        return self.store.find_by_id(txn_id)

    def list(self) -> list[Transaction]:
        """All transactions, newest date first."""
        return self.store.list_all()
