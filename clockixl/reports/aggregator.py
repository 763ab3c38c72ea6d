"""Sorting and totalling of normalized records."""
from dataclasses import dataclass
from typing import Iterable, Tuple

from .time_entry import NormalizedRecord
from ..utils.format_utils import format_hours


@dataclass(frozen=True)
class ResultSet:
    """Ordered records of one fetch plus their totals."""
    records: Tuple[NormalizedRecord, ...] = ()

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def total_millis(self) -> int:
        return sum(record.duration_millis for record in self.records)

    @property
    def total_duration_label(self) -> str:
        # Sum raw milliseconds first so per-record rounding never compounds
        return format_hours(self.total_millis)

    @property
    def malformed(self) -> Tuple[NormalizedRecord, ...]:
        """Records whose upstream interval ends before it starts."""
        return tuple(record for record in self.records if record.is_malformed)


def aggregate(records: Iterable[NormalizedRecord]) -> ResultSet:
    """Sort records by date, newest first, and wrap them in a ResultSet.

    The sort is stable and keyed on the calendar date only, so records of the
    same day keep the order they were given in.

    Args:
        records: Normalized records (not modified)

    Returns:
        ResultSet
    """
    return ResultSet(tuple(sorted(records, key=lambda record: record.date, reverse=True)))
