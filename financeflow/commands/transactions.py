"""Transaction management commands (add, edit, delete)."""

import sys
from datetime import datetime
from typing import Any

import pandas as pd
from rich.console import Console

from financeflow.commands.admin import format_amount, require_store
from financeflow.errors import InternalError, NotFoundError, ValidationError
from financeflow.services import TransactionService

console = Console()


def normalize_date(date: str) -> str:
    """Normalize a loosely formatted date to ISO-8601.

    Args:
        date: Date such as "2025-01-15", "15/01/2025" or "15 Jan 2025 09:30".

    Returns:
        ISO timestamp string (YYYY-MM-DDTHH:MM:SS).

    Raises:
        ValueError: If the date cannot be parsed.
    """
    return pd.to_datetime(date, dayfirst=True).strftime("%Y-%m-%dT%H:%M:%S")


def print_validation_errors(error: ValidationError) -> None:
    console.print("[red]Validation failed:[/red]", style="bold")
    for field_error in error.errors:
        console.print(f"  {field_error.field or 'input'}: {field_error.message}")


def _normalize_or_exit(date: str) -> str:
    try:
        return normalize_date(date)
    except (ValueError, OverflowError) as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)


def add_command(
    amount: str,
    description: str,
    category: str,
    txn_type: str,
    date: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        amount: Non-negative amount with up to two decimals (e.g. "12.50").
        description: Transaction description.
        category: Category name.
        txn_type: "income" or "expense".
        date: Transaction date; defaults to now.
    """
    normalized_date = _normalize_or_exit(date) if date else datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
    service = TransactionService(require_store())

    try:
        txn = service.create(
            {
                "amount": amount,
                "description": description,
                "category": category,
                "type": txn_type,
                "date": normalized_date,
            }
        )
    except ValidationError as e:
        print_validation_errors(e)
        sys.exit(1)
    except InternalError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Transaction added (ID: {txn.id}):")
    console.print(f"  Date: {txn.date:%Y-%m-%d}")
    console.print(f"  Description: {txn.description}")
    console.print(f"  Amount: {format_amount(txn)}")
    console.print(f"  Category: {txn.category}")


def edit_command(
    txn_id: int,
    amount: str | None = None,
    description: str | None = None,
    category: str | None = None,
    txn_type: str | None = None,
    date: str | None = None,
) -> None:
    """Update only the supplied fields of a transaction."""
    changes: dict[str, Any] = {}
    if amount is not None:
        changes["amount"] = amount
    if description is not None:
        changes["description"] = description
    if category is not None:
        changes["category"] = category
    if txn_type is not None:
        changes["type"] = txn_type
    if date is not None:
        changes["date"] = _normalize_or_exit(date)

    if not changes:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    service = TransactionService(require_store())

    try:
        txn = service.update(txn_id, changes)
    except ValidationError as e:
        print_validation_errors(e)
        sys.exit(1)
    except NotFoundError:
        console.print(f"[red]Transaction {txn_id} not found[/red]")
        sys.exit(1)
    except InternalError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Transaction {txn.id} updated: {txn.description} {format_amount(txn)}")


def delete_command(txn_id: int) -> None:
    """Delete a transaction permanently."""
    service = TransactionService(require_store())

    try:
        deleted = service.delete(txn_id)
    except InternalError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not deleted:
        console.print(f"[red]Transaction {txn_id} not found[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] Transaction {txn_id} deleted")
