"""Domain type definitions for financeflow.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in cents (minor units)
- Month: Month in YYYY-MM format
- CategoryName: One of the fixed transaction categories
- TransactionType: Either "income" or "expense"
- Description: Transaction description text
"""

from typing import NewType

# Money amounts are aggregated as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

TransactionType = NewType("TransactionType", str)

Description = NewType("Description", str)

CATEGORIES: tuple[CategoryName, ...] = (
    CategoryName("food"),
    CategoryName("transportation"),
    CategoryName("shopping"),
    CategoryName("entertainment"),
    CategoryName("utilities"),
    CategoryName("healthcare"),
    CategoryName("income"),
    CategoryName("other"),
)

INCOME = TransactionType("income")
EXPENSE = TransactionType("expense")

TRANSACTION_TYPES: tuple[TransactionType, ...] = (INCOME, EXPENSE)
