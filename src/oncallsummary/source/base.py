"""Interface for services that supply on-call schedules."""

from abc import ABC, abstractmethod
from typing import Optional

from oncallsummary.domain.models import ScheduleView


class ScheduleSource(ABC):
    """Abstract base class for schedule providers.

    Implementations raise RemoteLookupError when a lookup fails; callers
    decide how to degrade.
    """

    @abstractmethod
    def find_schedule_id(self, name_query: str) -> Optional[str]:
        """Return the id of the first schedule matching a name query.

        Args:
            name_query: Search text for the schedule name.

        Returns:
            Schedule id, or None if nothing matches.
        """
        pass

    @abstractmethod
    def list_engineers(self) -> list[str]:
        """Return the identifiers of all on-call-eligible people."""
        pass

    @abstractmethod
    def get_schedule(self, schedule_id: str, since: str, until: str) -> ScheduleView:
        """Render a schedule for a time window.

        Args:
            schedule_id: Schedule identifier.
            since: Window start, service timestamp text.
            until: Window end, service timestamp text.

        Returns:
            The rendered layers and final schedule for the window.
        """
        pass
