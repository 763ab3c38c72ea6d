"""Two-step retrieval of time entries: resolve the user, then list their entries."""
import logging
from dataclasses import dataclass
from datetime import datetime, date, timezone, tzinfo
from typing import Optional, Dict, Any, List

from .client import ClockifyClient
from ..errors import FetchError, ValidationError
from ..reports.aggregator import ResultSet, aggregate
from ..reports.time_entry import RawInterval, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    id: str
    name: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Workspace":
        return cls(id=data["id"], name=data.get("name") or data["id"])


def list_workspaces(client: ClockifyClient) -> List[Workspace]:
    """Get the workspaces visible to the client's API key.

    Args:
        client: Clockify API client

    Returns:
        List of workspaces

    Raises:
        ValidationError: If the client has no API key
        FetchError: If the request fails
    """
    if not client.api_key:
        raise ValidationError("Please enter your Clockify API key first")
    return [Workspace.from_api(ws) for ws in client.get_workspaces()]


def fetch_entries(client: ClockifyClient, workspace_id: str, range_start: date, range_end: date,
                  now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> ResultSet:
    """Fetch, normalize and aggregate the user's time entries for a date range.

    All input is validated before the first remote call. Running intervals
    are measured up to ``now``, which is read once per call when not given.

    Args:
        client: Clockify API client
        workspace_id: Workspace to read from
        range_start: First day of the range
        range_end: Last day of the range (inclusive)
        now: Moment used as the end of running intervals (optional)
        tz: Viewer timezone for dates and clock labels (optional)

    Returns:
        ResultSet, empty if no entries were found

    Raises:
        ValidationError: If the API key, workspace or date range is missing or invalid
        AuthError: If the API key is rejected or the API is unreachable
        FetchError: If listing the entries fails
    """
    if not client.api_key:
        raise ValidationError("Please enter your Clockify API key first")
    if not workspace_id:
        raise ValidationError("Please select a workspace first")
    if not isinstance(range_start, date) or not isinstance(range_end, date):
        raise ValidationError("Please select both start and end dates")
    if isinstance(range_start, datetime) or isinstance(range_end, datetime):
        raise ValidationError("Start and end must be calendar dates without a time")
    if range_start > range_end:
        raise ValidationError(f"Start date {range_start} is after end date {range_end}")
    if now is not None and (now.tzinfo is None or now.utcoffset() is None):
        raise ValidationError("The current time must carry a timezone")

    user = client.get_user()
    user_id = user.get("id") if isinstance(user, dict) else None
    if not user_id:
        raise FetchError("Clockify did not return a user id", category="decode")

    entries = client.get_time_entries(workspace_id, user_id, range_start, range_end)
    logger.info("Fetched %d time entries for %s to %s", len(entries), range_start, range_end)

    if now is None:
        now = datetime.now(timezone.utc)
    try:
        records = [normalize(RawInterval.from_api(entry), now, tz) for entry in entries]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise FetchError(f"Malformed time entry in Clockify response: {e}", category="decode") from e

    result = aggregate(records)
    for record in result.malformed:
        logger.warning("Time entry on %s ends before it starts (%s to %s)",
                       record.date, record.start_label, record.end_label)
    return result
