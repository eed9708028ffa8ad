"""CLI entry point for financeflow."""

import logging
import tomllib

import typer
from rich.logging import RichHandler

from financeflow.commands.admin import init_command, list_command, show_command
from financeflow.commands.report import categories_command, monthly_command, summary_command
from financeflow.commands.serve import serve_command
from financeflow.commands.transactions import add_command, delete_command, edit_command
from financeflow.config import Settings, load_settings

app = typer.Typer(
    name="financeflow",
    help="FinanceFlow - Track your income, expenses and savings rate",
    add_completion=False,
)


def configure_logging(level: str) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
        force=True,
    )


def configured_log_level() -> str:
    """Level from the [logging] section, or the default if it is unreadable."""
    try:
        level = load_settings().log_level
    except (tomllib.TOMLDecodeError, ValueError):
        return Settings().log_level
    return level if isinstance(logging.getLevelName(level), int) else Settings().log_level


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """FinanceFlow - Track your income, expenses and savings rate."""
    configure_logging("DEBUG" if verbose else configured_log_level())


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize the database and configuration."""
    init_command(force)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", help="Port (default from config)"),
) -> None:
    """Run the HTTP API."""
    serve_command(host, port)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount, e.g. 12.50"),
    description: str = typer.Argument(..., help="What the transaction was for"),
    category: str = typer.Option("other", "--category", "-c", help="Transaction category"),
    txn_type: str = typer.Option("expense", "--type", "-t", help="'income' or 'expense'"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: now)"),
) -> None:
    """Record a new transaction."""
    add_command(amount, description, category, txn_type, date)


@app.command()
def edit(
    txn_id: int = typer.Argument(..., help="Transaction ID"),
    amount: str = typer.Option(None, "--amount", help="New amount"),
    description: str = typer.Option(None, "--description", help="New description"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    txn_type: str = typer.Option(None, "--type", "-t", help="New type"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
) -> None:
    """Change fields of an existing transaction."""
    edit_command(txn_id, amount, description, category, txn_type, date)


@app.command()
def delete(txn_id: int = typer.Argument(..., help="Transaction ID")) -> None:
    """Delete a transaction permanently."""
    delete_command(txn_id)


@app.command()
def show(txn_id: int = typer.Argument(..., help="Transaction ID")) -> None:
    """Show a single transaction."""
    show_command(txn_id)


@app.command(name="list")
def list_transactions(
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions, newest first."""
    list_command(limit, all)


@app.command()
def summary() -> None:
    """Show balance, this month's totals and savings rate."""
    summary_command()


@app.command()
def categories(
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show your spending by category."""
    categories_command(histogram)


@app.command()
def monthly(
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show your spending per month."""
    monthly_command(histogram)


if __name__ == "__main__":
    app()
