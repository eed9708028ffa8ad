"""Domain models and types for financeflow.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from financeflow.domain.models import CategoryName, Description, Money, Month, TransactionType

__all__ = ["Money", "Month", "CategoryName", "Description", "TransactionType"]
