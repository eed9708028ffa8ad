"""Report commands for viewing dashboard analytics."""

import sys
from datetime import datetime

from rich.console import Console
from rich.table import Table

from financeflow.commands.admin import require_store
from financeflow.dates import month_key, month_range
from financeflow.domain.analytics import calculate_histogram_bar_length
from financeflow.domain.models import Money
from financeflow.domain.transactions import format_money_display
from financeflow.errors import InternalError
from financeflow.services import AnalyticsService

console = Console()

BAR_WIDTH = 30


def format_rate_with_color(rate: float) -> str:
    """Format savings rate with color based on its value.

    Args:
        rate: Savings rate percentage.

    Returns:
        Colored string for display.
    """
    text = f"{rate:.1f}%"
    if rate < 0:
        return f"[red]{text}[/red]"
    elif rate < 10:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[green]{text}[/green]"


def _bar(amount: Money, max_amount: Money) -> str:
    return "█" * calculate_histogram_bar_length(amount, max_amount, BAR_WIDTH)


def summary_command() -> None:
    """Show balance and this month's income, expenses and savings rate."""
    service = AnalyticsService(require_store())

    try:
        summary = service.summary()
    except InternalError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    _, _, period = month_range(month_key(datetime.now()))

    console.print(f"[bold]Total balance:[/bold] {format_money_display(summary.total_balance)}")
    console.print(f"\n[bold cyan]{period}[/bold cyan]")
    console.print(f"  Income:       [green]{format_money_display(summary.monthly_income, include_sign=False)}[/green]")
    console.print(f"  Expenses:     [red]{format_money_display(summary.monthly_expenses, include_sign=False)}[/red]")
    console.print(f"  Savings rate: {format_rate_with_color(float(summary.savings_rate))}")


def categories_command(histogram: bool = True) -> None:
    """Show expense totals per category."""
    service = AnalyticsService(require_store())

    try:
        rows = service.category_breakdown()
    except InternalError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not rows:
        console.print("[dim]No expenses recorded yet[/dim]")
        return

    rows = sorted(rows, key=lambda row: row.total, reverse=True)
    max_amount = Money(max(row.total for row in rows))

    table = Table(title="Expenses by category")
    table.add_column("Category", style="magenta")
    table.add_column("Total", justify="right")
    table.add_column("Count", justify="right", style="dim")
    if histogram:
        table.add_column("")

    for row in rows:
        cells = [row.category, format_money_display(row.total, include_sign=False), str(row.count)]
        if histogram:
            cells.append(f"[red]{_bar(row.total, max_amount)}[/red]")
        table.add_row(*cells)

    console.print(table)
    total = Money(sum(row.total for row in rows))
    console.print(f"\n[bold]Total:[/bold] {format_money_display(total, include_sign=False)}")


def monthly_command(histogram: bool = True) -> None:
    """Show expense totals per month."""
    service = AnalyticsService(require_store())

    try:
        rows = service.monthly_expense_series()
    except InternalError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not rows:
        console.print("[dim]No expenses recorded yet[/dim]")
        return

    max_amount = Money(max(row.total for row in rows))

    table = Table(title="Monthly expenses")
    table.add_column("Month", style="cyan")
    table.add_column("Total", justify="right")
    if histogram:
        table.add_column("")

    for row in rows:
        cells = [row.month, format_money_display(row.total, include_sign=False)]
        if histogram:
            cells.append(f"[red]{_bar(row.total, max_amount)}[/red]")
        table.add_row(*cells)

    console.print(table)
