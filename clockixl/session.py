"""Per-user state shared by the check-workspaces, fetch and export actions."""
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, List, Set

from .api.client import ClockifyClient, DEFAULT_BASE_URL
from .api.fetcher import Workspace
from .errors import ValidationError
from .reports.aggregator import ResultSet


@dataclass
class Session:
    """Everything an action needs, passed in explicitly instead of kept in globals.

    ``result_set`` is replaced as a whole after every successful fetch and is
    only read by export.
    """
    credential: str = ""
    workspace_id: str = ""
    include_task: bool = True
    base_url: str = DEFAULT_BASE_URL
    client_factory: Callable[..., ClockifyClient] = ClockifyClient
    workspaces: List[Workspace] = field(default_factory=list)
    result_set: Optional[ResultSet] = None
    range_start: Optional[date] = None
    range_end: Optional[date] = None
    _running: Set[str] = field(default_factory=set, repr=False)

    def client(self) -> ClockifyClient:
        """Build an API client for the current credential.

        Raises:
            ValidationError: If no API key has been entered
        """
        credential = (self.credential or "").strip()
        if not credential:
            raise ValidationError("Please enter your Clockify API key first")
        return self.client_factory(credential, base_url=self.base_url)

    def select_workspace(self, workspace_id: str) -> None:
        """Select the workspace later fetches read from.

        Raises:
            ValidationError: If the id is empty or not among the loaded workspaces
        """
        if not workspace_id:
            raise ValidationError("Please select a workspace first")
        if self.workspaces and workspace_id not in {ws.id for ws in self.workspaces}:
            raise ValidationError(f"Unknown workspace: {workspace_id}")
        self.workspace_id = workspace_id

    def is_running(self, action: str) -> bool:
        return action in self._running

    @contextmanager
    def begin(self, action: str):
        """Mark an action as running for the duration of the block.

        Raises:
            ValidationError: If the same action is already running
        """
        if action in self._running:
            raise ValidationError(f"A {action} is already in progress")
        self._running.add(action)
        try:
            yield self
        finally:
            self._running.discard(action)
