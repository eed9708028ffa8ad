"""Pure functions for transaction validation and money handling.

This module contains the functional core for transaction operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Amounts travel as decimal strings (e.g. "12.50") and are converted to
cents (Money type) whenever they are summed.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from financeflow.domain.models import (
    CATEGORIES,
    TRANSACTION_TYPES,
    CategoryName,
    Description,
    Money,
    TransactionType,
)

AMOUNT_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$", re.ASCII)

MAX_DESCRIPTION_LENGTH = 255


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: int
    amount: str
    description: Description
    category: CategoryName
    type: TransactionType
    date: datetime
    created_at: datetime

    @property
    def cents(self) -> Money:
        """Amount in cents."""
        return amount_to_cents(self.amount)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire format."""
        return {
            "id": self.id,
            "amount": self.amount,
            "description": self.description,
            "category": self.category,
            "type": self.type,
            "date": format_timestamp(self.date),
            "createdAt": format_timestamp(self.created_at),
        }


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating transaction input.

    ``values`` holds the cleaned fields (``date`` parsed to a datetime) and is
    only meaningful when ``errors`` is empty.
    """

    values: dict[str, Any] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def amount_to_cents(amount: str) -> Money:
    """Convert a validated decimal amount string to cents.

    Args:
        amount: Amount such as "12.5" or "100.00".

    Returns:
        Amount in cents (e.g., 1250).
    """
    return Money(int(Decimal(amount) * 100))


def cents_to_decimal(cents: Money) -> Decimal:
    """Convert cents back to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def format_money_display(amount: Money, include_sign: bool = True) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in cents.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "-$123.45" or "$123.45").
    """
    dollars = abs(amount) / 100
    formatted = f"${dollars:,.2f}"

    if include_sign:
        if amount < 0:
            return f"-{formatted}"
        else:
            return f"+{formatted}"
    else:
        return formatted


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 with seconds precision."""
    return value.isoformat(timespec="seconds")


def parse_date(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime string.

    Offset-aware values are converted to naive local time and sub-second
    precision is dropped so stored dates sort lexically.

    Args:
        value: Date string, e.g. "2024-03-05" or "2024-03-05T10:30:00Z".

    Returns:
        Parsed datetime, or None if the string is not a valid date.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)

    return parsed.replace(microsecond=0)


def _validate_amount(raw: Any) -> tuple[Any, str | None]:
    if raw is None or raw == "":
        return None, "Amount is required"
    if not isinstance(raw, str):
        return None, "Expected string"
    if not AMOUNT_PATTERN.fullmatch(raw):
        return None, "Invalid amount format"
    return raw, None


def _validate_description(raw: Any) -> tuple[Any, str | None]:
    if raw is None or raw == "":
        return None, "Description is required"
    if not isinstance(raw, str):
        return None, "Expected string"
    if len(raw) > MAX_DESCRIPTION_LENGTH:
        return None, "Description too long"
    return Description(raw), None


def _validate_category(raw: Any) -> tuple[Any, str | None]:
    if raw not in CATEGORIES:
        return None, "Please select a valid category"
    return CategoryName(raw), None


def _validate_date(raw: Any) -> tuple[Any, str | None]:
    if raw is None or raw == "":
        return None, "Date is required"
    if not isinstance(raw, str):
        return None, "Expected string"
    parsed = parse_date(raw)
    if parsed is None:
        return None, "Invalid date"
    return parsed, None


def _validate_type(raw: Any) -> tuple[Any, str | None]:
    if raw not in TRANSACTION_TYPES:
        return None, "Please select transaction type"
    return TransactionType(raw), None


_FIELD_VALIDATORS: dict[str, Callable[[Any], tuple[Any, str | None]]] = {
    "amount": _validate_amount,
    "description": _validate_description,
    "category": _validate_category,
    "date": _validate_date,
    "type": _validate_type,
}


def validate_transaction(data: Any, partial: bool = False) -> ValidationResult:
    """Validate transaction input.

    Unknown keys (including ``id`` and ``createdAt``) are dropped.

    Args:
        data: Raw input, normally a decoded JSON object.
        partial: If True, only the supplied fields are checked (updates).

    Returns:
        ValidationResult with cleaned values or per-field errors.
    """
    if not isinstance(data, Mapping):
        return ValidationResult(errors=[FieldError(field="", message="Expected object")])

    values: dict[str, Any] = {}
    errors: list[FieldError] = []

    for name, validator in _FIELD_VALIDATORS.items():
        if name not in data and partial:
            continue

        value, message = validator(data.get(name))
        if message is not None:
            errors.append(FieldError(field=name, message=message))
        else:
            values[name] = value

    return ValidationResult(values=values, errors=errors)
