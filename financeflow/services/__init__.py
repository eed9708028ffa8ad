"""Service layer - validation and analytics on top of a record store."""

from financeflow.services.analytics import AnalyticsService
from financeflow.services.transactions import TransactionService

__all__ = ["AnalyticsService", "TransactionService"]
