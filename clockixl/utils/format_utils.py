"""Formatting utility functions for clockiXL."""
from datetime import datetime, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

MILLIS_PER_HOUR = 60 * 60 * 1000
CENTS = Decimal("0.01")


def format_hours(millis: int) -> str:
    """Format a duration in milliseconds as decimal hours.

    Ties round away from zero (7.5 minutes is "0.13h"), and the sign is
    applied after rounding the magnitude.

    Args:
        millis: Duration in milliseconds (can be negative)

    Returns:
        Hours with two decimals and an "h" suffix, e.g. "1.50h"
    """
    hours = (Decimal(abs(millis)) / Decimal(MILLIS_PER_HOUR)).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if millis < 0 else ""
    return f"{sign}{hours}h"


def format_clock(moment: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format an instant as a 12-hour clock time with seconds.

    Args:
        moment: Timezone-aware datetime
        tz: Target timezone (local timezone if omitted)

    Returns:
        Formatted time string, e.g. "09:05:00 AM"
    """
    return moment.astimezone(tz).strftime("%I:%M:%S %p")


def parse_clockify_datetime(value: str) -> datetime:
    """Parse a Clockify ISO-8601 timestamp.

    Args:
        value: Timestamp such as "2024-03-01T09:00:00Z"

    Returns:
        Timezone-aware datetime
    """
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
