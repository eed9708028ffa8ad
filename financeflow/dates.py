"""Date utilities for financeflow.

Pure functions for date range calculations and formatting.
"""

from datetime import datetime, timedelta

from financeflow.domain.models import Month


def month_key(value: datetime) -> Month:
    """Return the YYYY-MM key for a timestamp."""
    return Month(value.strftime("%Y-%m"))


def month_range(month: Month) -> tuple[datetime, datetime, str]:
    """Calculate the inclusive date window and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (start, end, label) where:
        - start: First day of month at 00:00:00
        - end: Last day of month at 23:59:59
        - label: Human-readable month (e.g., "January 2025")
    """
    start = datetime.strptime(month, "%Y-%m")
    next_month = (start.replace(day=28) + timedelta(days=4)).replace(day=1)
    end = next_month - timedelta(seconds=1)
    label = start.strftime("%B %Y")
    return start, end, label


def current_month_window(now: datetime) -> tuple[datetime, datetime]:
    """Inclusive window covering the calendar month containing ``now``."""
    start, end, _ = month_range(month_key(now))
    return start, end
