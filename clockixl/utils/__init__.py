"""Utility modules for clockiXL."""

from .date_utils import iso_datetime, parse_date, default_range, day_str
from .format_utils import format_hours, format_clock, parse_clockify_datetime
from .file_utils import write_bytes, write_markdown

__all__ = [
    'iso_datetime', 'parse_date', 'default_range', 'day_str',
    'format_hours', 'format_clock', 'parse_clockify_datetime',
    'write_bytes', 'write_markdown'
]
