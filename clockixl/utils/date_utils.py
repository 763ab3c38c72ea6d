"""Date utility functions for clockiXL."""
from datetime import datetime, date, time, timezone
from typing import Tuple

def iso_datetime(dt: date, is_end: bool = False) -> str:
    """Convert a date to the UTC timestamp string the Clockify API expects.

    Args:
        dt: Date to convert
        is_end: Whether this is an end date (23:59:59.999 instead of 00:00:00.000)

    Returns:
        Timestamp string, e.g. "2024-03-01T00:00:00.000Z"
    """
    t = time(23, 59, 59, 999000) if is_end else time.min
    stamp = datetime.combine(dt, t, tzinfo=timezone.utc)
    return stamp.strftime("%Y-%m-%dT%H:%M:%S.") + f"{stamp.microsecond // 1000:03d}Z"

def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string.

    Args:
        value: Date string

    Returns:
        Parsed date

    Raises:
        ValueError: If the string is not a valid date
    """
    return datetime.strptime(value, "%Y-%m-%d").date()

def default_range(today: date) -> Tuple[date, date]:
    """Get the default export range: the 25th of last month to the 25th of this month.

    Args:
        today: Reference date

    Returns:
        Tuple of (start_date, end_date)
    """
    if today.month == 1:
        start = date(today.year - 1, 12, 25)
    else:
        start = date(today.year, today.month - 1, 25)
    return start, date(today.year, today.month, 25)

def day_str(dt: date) -> str:
    """Format a date as a string with day of week.

    Args:
        dt: Date to format

    Returns:
        Formatted date string
    """
    return f"({['Mo','Tue','Wed','Thu','Fri','Sat','Sun'][dt.weekday()]}){dt}"
