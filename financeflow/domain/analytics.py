"""Pure functions for analytics calculations and aggregations.

This module contains the functional core for dashboard analytics:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All sums are taken in cents (Money type); conversion to JSON numbers
happens in ``to_dict`` only.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from financeflow.dates import month_key
from financeflow.domain.models import EXPENSE, INCOME, CategoryName, Money, Month, TransactionType
from financeflow.domain.transactions import Transaction, cents_to_decimal


@dataclass(frozen=True)
class Summary:
    """Immutable dashboard summary."""

    total_balance: Money
    monthly_income: Money
    monthly_expenses: Money
    savings_rate: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalBalance": float(cents_to_decimal(self.total_balance)),
            "monthlyIncome": float(cents_to_decimal(self.monthly_income)),
            "monthlyExpenses": float(cents_to_decimal(self.monthly_expenses)),
            "savingsRate": float(self.savings_rate),
        }


@dataclass(frozen=True)
class CategoryTotal:
    """Immutable per-category aggregate."""

    category: CategoryName
    total: Money
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "total": float(cents_to_decimal(self.total)),
            "count": self.count,
        }


@dataclass(frozen=True)
class MonthlyTotal:
    """Immutable per-month aggregate."""

    month: Month
    total: Money

    def to_dict(self) -> dict[str, Any]:
        return {"month": self.month, "total": float(cents_to_decimal(self.total))}


def sum_by_type(transactions: Iterable[Transaction], txn_type: TransactionType) -> Money:
    """Sum amounts of all transactions of one type.

    Args:
        transactions: Transactions to sum.
        txn_type: "income" or "expense".

    Returns:
        Total in cents.
    """
    return Money(sum(txn.cents for txn in transactions if txn.type == txn_type))


def calculate_savings_rate(income: Money, expenses: Money) -> Decimal:
    """Calculate the percentage of income not spent.

    Rounded to one decimal place, halves away from zero.

    Args:
        income: Income in cents.
        expenses: Expenses in cents.

    Returns:
        Savings rate percentage, or 0 if there is no income.
    """
    if income <= 0:
        return Decimal("0.0")
    rate = Decimal(income - expenses) * 100 / Decimal(income)
    return rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def compute_summary(
    all_transactions: Iterable[Transaction],
    month_transactions: Iterable[Transaction],
) -> Summary:
    """Create the dashboard summary.

    The balance covers every transaction ever recorded, while income,
    expenses and savings rate only cover the current month.

    Args:
        all_transactions: Every stored transaction.
        month_transactions: Transactions dated within the current month.

    Returns:
        Summary with all calculations.
    """
    all_list = list(all_transactions)
    month_list = list(month_transactions)

    total_balance = Money(sum_by_type(all_list, INCOME) - sum_by_type(all_list, EXPENSE))
    monthly_income = sum_by_type(month_list, INCOME)
    monthly_expenses = sum_by_type(month_list, EXPENSE)

    return Summary(
        total_balance=total_balance,
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        savings_rate=calculate_savings_rate(monthly_income, monthly_expenses),
    )


def category_breakdown(
    transactions: Iterable[Transaction],
    txn_type: TransactionType = EXPENSE,
) -> list[CategoryTotal]:
    """Group transactions of one type by category.

    Args:
        transactions: Transactions to aggregate.
        txn_type: Type to include (default "expense").

    Returns:
        One CategoryTotal per category present, in first-seen order.
    """
    totals: dict[CategoryName, int] = {}
    counts: dict[CategoryName, int] = {}

    for txn in transactions:
        if txn.type != txn_type:
            continue
        totals[txn.category] = totals.get(txn.category, 0) + txn.cents
        counts[txn.category] = counts.get(txn.category, 0) + 1

    return [CategoryTotal(category=cat, total=Money(total), count=counts[cat]) for cat, total in totals.items()]


def monthly_expense_series(
    transactions: Iterable[Transaction],
    txn_type: TransactionType = EXPENSE,
) -> list[MonthlyTotal]:
    """Group transactions of one type by calendar month.

    Months without matching transactions are omitted.

    Args:
        transactions: Transactions to aggregate.
        txn_type: Type to include (default "expense").

    Returns:
        One MonthlyTotal per month present, sorted ascending by month.
    """
    totals: dict[Month, int] = {}
    for txn in transactions:
        if txn.type != txn_type:
            continue
        key = month_key(txn.date)
        totals[key] = totals.get(key, 0) + txn.cents

    return [MonthlyTotal(month=month, total=Money(totals[month])) for month in sorted(totals)]


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
