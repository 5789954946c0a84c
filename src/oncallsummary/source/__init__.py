"""Schedule sources (scheduling-service clients)."""

from oncallsummary.source.base import ScheduleSource
from oncallsummary.source.pagerduty import PagerDutyConfig, PagerDutyScheduleSource

__all__ = [
    "ScheduleSource",
    "PagerDutyConfig",
    "PagerDutyScheduleSource",
]
