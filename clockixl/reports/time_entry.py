"""Raw Clockify intervals and the normalized records derived from them."""
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Dict, Any, List
from ..utils.format_utils import format_hours, format_clock, parse_clockify_datetime

NO_PROJECT = "No Project"
NO_DESCRIPTION = "No Description"

@dataclass(frozen=True)
class RawInterval:
    """A single tracked work span as returned by the Clockify API.

    An ``end`` of None means the timer is still running.
    """
    start: datetime
    end: Optional[datetime] = None
    description: Optional[str] = None
    project_name: Optional[str] = None

    @classmethod
    def from_api(cls, entry: Dict[str, Any]) -> "RawInterval":
        """Build a RawInterval from a Clockify time entry.

        Args:
            entry: Raw entry data from the Clockify API

        Returns:
            RawInterval

        Raises:
            KeyError: If the entry has no start time
            ValueError: If a timestamp cannot be parsed
        """
        interval = entry.get("timeInterval") or {}
        end = interval.get("end")
        project_name = entry.get("projectName")
        if not project_name and isinstance(entry.get("project"), dict):
            # hydrated entries nest the project
            project_name = entry["project"].get("name")
        return cls(
            start=parse_clockify_datetime(interval["start"]),
            end=parse_clockify_datetime(end) if end else None,
            description=entry.get("description") or None,
            project_name=project_name or None,
        )

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class NormalizedRecord:
    """A display-ready time entry."""
    date: str
    project: str
    task: str
    duration_millis: int
    start_label: str
    end_label: str
    is_open: bool = False

    @property
    def duration_label(self) -> str:
        return format_hours(self.duration_millis)

    @property
    def is_malformed(self) -> bool:
        """Whether upstream data ended the interval before it started."""
        return self.duration_millis < 0

    def to_row(self, include_task: bool = True, blank: str = "") -> List[Any]:
        """Convert to a table row.

        Args:
            include_task: Whether to show the task, or ``blank`` in its place
            blank: Placeholder for a hidden task

        Returns:
            Table row as a list (Date, Task, Duration, Start Time, End Time)
        """
        return [
            self.date,
            self.task if include_task else blank,
            self.duration_label,
            self.start_label,
            self.end_label,
        ]


def normalize(raw: RawInterval, now: datetime, tz: Optional[tzinfo] = None) -> NormalizedRecord:
    """Convert one raw interval into a display record.

    An open interval is measured up to ``now``. An ``end`` earlier than
    ``start`` is kept as a negative duration.

    Args:
        raw: Interval to convert
        now: The moment of processing, used as the end of open intervals
        tz: Viewer timezone for the date and clock labels (local timezone if omitted)

    Returns:
        NormalizedRecord
    """
    end = raw.end if raw.end is not None else now
    duration_millis = (end - raw.start) // timedelta(milliseconds=1)
    return NormalizedRecord(
        date=raw.start.astimezone(tz).date().isoformat(),
        project=raw.project_name or NO_PROJECT,
        task=raw.description or NO_DESCRIPTION,
        duration_millis=duration_millis,
        start_label=format_clock(raw.start, tz),
        end_label=format_clock(end, tz),
        is_open=raw.is_open,
    )
