"""Error kinds surfaced by the service layer.

Status codes and exit codes are assigned by the HTTP and CLI boundaries.
"""

from financeflow.domain.transactions import FieldError


class FinanceFlowError(Exception):
    """Base class for financeflow errors."""


class ValidationError(FinanceFlowError):
    """Input failed validation; carries per-field messages."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        details = ", ".join(f"{err.field}: {err.message}" for err in errors)
        super().__init__(f"Validation failed ({details})")


class NotFoundError(FinanceFlowError):
    """No transaction with the requested id."""

    def __init__(self, txn_id: int) -> None:
        self.txn_id = txn_id
        super().__init__(f"Transaction {txn_id} not found")


class InternalError(FinanceFlowError):
    """Store or unexpected failure."""


class StoreError(InternalError):
    """The record store failed to complete an operation."""
