"""PagerDuty REST API v2 schedule source."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from oncallsummary.domain.models import ScheduleView
from oncallsummary.exceptions import ConfigurationError, RemoteLookupError
from oncallsummary.source.base import ScheduleSource

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.pagerduty.com"
ACCEPT_HEADER = "application/vnd.pagerduty+json;version=2"


@dataclass
class PagerDutyConfig:
    """Connection settings for the PagerDuty API.

    Attributes:
        token: REST API token.
        base_url: API root, without trailing slash.
        timeout_seconds: Per-request timeout.
        page_size: Users requested per page when listing engineers.
    """

    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    page_size: int = 100

    def __post_init__(self):
        if not self.token:
            raise ConfigurationError("A PagerDuty API token is required")


class PagerDutyScheduleSource(ScheduleSource):
    """Schedule source backed by the PagerDuty REST API.

    Requests are made one at a time through a single session. There is no
    retry: any transport error, non-2xx status or undecodable body raises
    RemoteLookupError.

    Example:
        >>> source = PagerDutyScheduleSource(PagerDutyConfig(token="..."))
        >>> schedule_id = source.find_schedule_id("ACDC Oncall Schedule")
    """

    def __init__(
        self,
        config: PagerDutyConfig,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": ACCEPT_HEADER,
            "Authorization": f"Token token={config.token}",
        })

    def find_schedule_id(self, name_query: str) -> Optional[str]:
        body = self._get("/schedules", {"query": name_query})
        schedules = body.get("schedules") or []
        if not schedules:
            return None
        try:
            return schedules[0].get("id")
        except (AttributeError, KeyError, TypeError) as e:
            raise RemoteLookupError(f"Malformed schedule list: {e}") from e

    def list_engineers(self) -> list[str]:
        engineers = []
        offset = 0

        while True:
            body = self._get(
                "/users",
                {"limit": self.config.page_size, "offset": offset},
            )
            users = body.get("users") or []
            try:
                engineers.extend(user.get("summary", "") for user in users)
            except (AttributeError, TypeError) as e:
                raise RemoteLookupError(f"Malformed user list: {e}") from e

            if not body.get("more") or not users:
                break
            offset += len(users)

        logger.debug("Listed %d engineers", len(engineers))
        return engineers

    def get_schedule(self, schedule_id: str, since: str, until: str) -> ScheduleView:
        body = self._get(
            f"/schedules/{schedule_id}",
            {"since": since, "until": until},
        )
        schedule = body.get("schedule")
        if not isinstance(schedule, dict):
            raise RemoteLookupError(f"Schedule {schedule_id} missing from response")
        try:
            return ScheduleView.from_payload(schedule)
        except (AttributeError, TypeError) as e:
            raise RemoteLookupError(f"Malformed schedule {schedule_id}: {e}") from e

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET a path and return the decoded JSON object."""
        url = f"{self.config.base_url}{path}"
        logger.debug("GET %s %s", url, params)

        try:
            response = self.session.get(
                url, params=params, timeout=self.config.timeout_seconds
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise RemoteLookupError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise RemoteLookupError(f"GET {path} returned invalid JSON: {e}") from e

        if not isinstance(body, dict):
            raise RemoteLookupError(f"GET {path} returned {type(body).__name__}, expected object")
        return body
