"""
ClockifyClient: A client for interacting with the Clockify API.
"""
import logging
import requests
from typing import Optional, Dict, Any, List
from datetime import date

from ..errors import AuthError, FetchError
from ..utils.date_utils import iso_datetime

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.clockify.me/api/v1"
PAGE_SIZE = 5000  # largest page the time-entry endpoint serves
MAX_PAGES = 100
DEFAULT_TIMEOUT = 30


class ClockifyClient:
    """A client for interacting with the Clockify API."""

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        """Initialize the ClockifyClient.

        Args:
            api_key: Clockify API key
            base_url: Clockify API base URL (optional)
            timeout: Request timeout in seconds (optional)
            session: requests session to reuse (optional)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def api_get(self, url: str, params: Optional[dict] = None, paginate: bool = False,
                page_size: int = PAGE_SIZE) -> Any:
        """Make a GET request to the Clockify API.

        Args:
            url: API endpoint URL
            params: Query parameters (optional)
            paginate: Whether to follow pages until the endpoint is exhausted (optional)
            page_size: Page size used when paginating (optional)

        Returns:
            API response as JSON

        Raises:
            FetchError: If a request fails or answers with a non-success status
        """
        if not paginate:
            return self._get_json(url, params)

        all_results = []
        page = 1
        while True:
            paged_params = params.copy() if params else {}
            paged_params["page"] = page
            paged_params["page-size"] = page_size
            data = self._get_json(url, paged_params)
            if not isinstance(data, list):
                raise FetchError(f"Unexpected response from {url} (page {page})", category="decode")
            all_results.extend(data)
            if len(data) < page_size:
                break  # Last page
            if page >= MAX_PAGES:
                raise FetchError(f"Gave up after {MAX_PAGES} pages of {page_size} from {url}",
                                 category="pagination")
            page += 1
        logger.debug("Fetched %d items in %d page(s) from %s", len(all_results), page, url)
        return all_results

    def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        headers = {"X-Api-Key": self.api_key}
        try:
            resp = self.session.get(url, headers=headers, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchError(f"API request failed with status {status}: {url}", status=status,
                             category="http") from e
        except requests.Timeout as e:
            raise FetchError(f"API request timed out: {url}", category="timeout") from e
        except requests.ConnectionError as e:
            raise FetchError(f"Could not reach the Clockify API: {e}", category="connection") from e
        except requests.RequestException as e:
            raise FetchError(f"API request failed: {e}", category="request") from e
        except ValueError as e:
            raise FetchError(f"API returned invalid JSON: {url}", category="decode") from e

    def _get_authenticated(self, url: str) -> Any:
        """GET an endpoint whose failure means the API key cannot be used.

        Raises:
            AuthError: If the key is rejected or the API is unreachable
            FetchError: For any other failure
        """
        try:
            return self.api_get(url)
        except FetchError as e:
            if e.status in (401, 403):
                raise AuthError("Invalid API key") from e
            if e.category in ("connection", "timeout"):
                raise AuthError(f"Could not verify API key: {e.message}") from e
            raise

    def get_user(self) -> Dict[str, Any]:
        """Get the user the API key belongs to.

        Returns:
            User information

        Raises:
            AuthError: If the key is rejected or the API is unreachable
            FetchError: For any other failure
        """
        return self._get_authenticated(f"{self.base_url}/user")

    def get_workspaces(self) -> List[Dict[str, Any]]:
        """Get all workspaces the user belongs to.

        Returns:
            List of workspaces

        Raises:
            AuthError: If the key is rejected or the API is unreachable
            FetchError: For any other failure
        """
        return self._get_authenticated(f"{self.base_url}/workspaces")

    def get_time_entries(self, workspace_id: str, user_id: str, start_date: date,
                         end_date: date) -> List[Dict[str, Any]]:
        """Get time entries for the specified date range.

        Args:
            workspace_id: Clockify workspace ID
            user_id: Clockify user ID
            start_date: Start date (from 00:00:00.000 UTC)
            end_date: End date (until 23:59:59.999 UTC)

        Returns:
            List of time entries
        """
        url = f"{self.base_url}/workspaces/{workspace_id}/user/{user_id}/time-entries"
        params = {
            "start": iso_datetime(start_date),
            "end": iso_datetime(end_date, is_end=True),
            "hydrated": "true",
        }
        return self.api_get(url, params, paginate=True)
