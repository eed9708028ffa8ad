"""Admin commands for init, listing and showing transactions."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from financeflow.config import Settings, create_default_config, get_config_path, load_settings
from financeflow.domain.models import INCOME
from financeflow.domain.transactions import Transaction, format_money_display
from financeflow.errors import InternalError
from financeflow.services import TransactionService
from financeflow.store import TransactionStore, database_exists, get_db_path, init_database, open_store

console = Console()


def resolve_db_path(settings: Settings) -> Path:
    return settings.db_path or get_db_path()


def require_store(settings: Settings | None = None) -> TransactionStore:
    """Open the configured store, exiting if the database is missing."""
    if settings is None:
        settings = load_settings()

    if settings.backend == "sqlite" and not database_exists(resolve_db_path(settings)):
        console.print("[red]Database not found. Run 'financeflow init' first.[/red]", style="bold")
        sys.exit(1)

    try:
        return open_store(settings)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]", style="bold")
        sys.exit(1)


def format_amount(txn: Transaction) -> str:
    """Colored signed amount: income green, expense red."""
    if txn.type == INCOME:
        return f"[green]{format_money_display(txn.cents)}[/green]"
    return f"[red]{format_money_display(-txn.cents)}[/red]"


def render_transactions(transactions: list[Transaction], title: str) -> None:
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Type")

    for txn in transactions:
        table.add_row(
            str(txn.id),
            txn.date.strftime("%Y-%m-%d"),
            txn.description,
            format_amount(txn),
            txn.category,
            txn.type,
        )

    console.print(table)


def init_command(force: bool = False) -> None:
    """Initialize financeflow database and configuration."""
    config_path = get_config_path()
    config_exists = config_path.exists()
    settings = load_settings(config_path)
    db_path = resolve_db_path(settings)
    db_exists = db_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'financeflow init --force' to overwrite[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def list_command(limit: int = 50, all: bool = False) -> None:
    """List transactions, newest first."""
    service = TransactionService(require_store())

    try:
        transactions = service.list()
    except InternalError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    shown = transactions if all else transactions[:limit]
    title = (
        f"Transactions (showing all {len(shown)})"
        if len(shown) == len(transactions)
        else f"Transactions (showing {len(shown)} of {len(transactions)})"
    )
    render_transactions(shown, title)


def show_command(txn_id: int) -> None:
    """Show a single transaction."""
    service = TransactionService(require_store())

    try:
        txn = service.get(txn_id)
    except InternalError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if txn is None:
        console.print(f"[red]Transaction {txn_id} not found[/red]")
        sys.exit(1)

    render_transactions([txn], f"Transaction {txn_id}")
    console.print(f"[dim]Created: {txn.created_at:%Y-%m-%d %H:%M:%S}[/dim]")
