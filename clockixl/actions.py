"""User-triggered actions.

Each action runs to completion and reports exactly one Outcome. Errors are
caught here and turned into the outcome's message; nothing is retried.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional

from .api.fetcher import fetch_entries, list_workspaces
from .errors import ClockiXLError, ValidationError
from .reports.spreadsheet import export_to_spreadsheet
from .session import Session

logger = logging.getLogger(__name__)

SUCCESS = "success"
INFO = "info"
ERROR = "error"


@dataclass(frozen=True)
class Outcome:
    level: str
    message: str
    path: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.level != ERROR


def check_workspaces(session: Session) -> Outcome:
    """Load the workspaces for the session's API key."""
    try:
        with session.begin("workspace check"):
            workspaces = list_workspaces(session.client())
    except ClockiXLError as e:
        logger.error("Loading workspaces failed: %s", e.message)
        return Outcome(ERROR, f"Failed to load workspaces: {e.message}")

    session.workspaces = workspaces
    if not workspaces:
        return Outcome(ERROR, "No workspaces found")
    if len(workspaces) == 1 and not session.workspace_id:
        session.workspace_id = workspaces[0].id
    return Outcome(SUCCESS, "Workspaces loaded successfully. Select one to continue.")


def fetch(session: Session, range_start: Optional[date], range_end: Optional[date],
          now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Outcome:
    """Fetch the time entries for a date range into the session.

    Args:
        session: Current session
        range_start: First day of the range
        range_end: Last day of the range
        now: Moment used as the end of running intervals (optional)
        tz: Viewer timezone (optional)

    Returns:
        Outcome; on success ``session.result_set`` holds the new records
    """
    try:
        with session.begin("fetch"):
            if range_start is None or range_end is None:
                raise ValidationError("Please select both start and end dates")
            result = fetch_entries(session.client(), session.workspace_id, range_start, range_end,
                                   now=now, tz=tz)
    except ClockiXLError as e:
        logger.error("Fetching time entries failed: %s", e.message)
        return Outcome(ERROR, e.message)

    session.result_set = result
    session.range_start = range_start
    session.range_end = range_end

    if result.is_empty:
        return Outcome(INFO, "No time entries found for the selected period")
    message = f"Successfully fetched {result.count} time entries"
    malformed = len(result.malformed)
    if malformed:
        message += f" ({malformed} end before they start; check them in Clockify)"
    return Outcome(SUCCESS, message)


def export(session: Session, directory: str, fmt: str = "xlsx") -> Outcome:
    """Write the session's last result set to a spreadsheet in ``directory``."""
    try:
        with session.begin("export"):
            exported = export_to_spreadsheet(session.result_set, session.include_task,
                                             session.range_start, session.range_end, fmt)
            path = exported.save(directory)
    except ClockiXLError as e:
        logger.error("Export failed: %s", e.message)
        return Outcome(ERROR, e.message)
    except OSError as e:
        logger.error("Writing export to %s failed: %s", directory, e)
        return Outcome(ERROR, f"Failed to write export file: {e}")
    return Outcome(SUCCESS, f"Successfully exported to {exported.filename}", path=path)
