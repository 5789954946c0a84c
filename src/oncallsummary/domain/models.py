"""Domain models for on-call coverage reconciliation.

This module contains the core data structures used throughout the tool:
service timestamps and time spans, the typed view of a rendered schedule,
the coverage records extracted from it, and the per-engineer overview the
aggregator builds.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from oncallsummary.exceptions import TimeFormatError

# Date, literal "T", time, signed zone offset. Nothing else is accepted.
SERVICE_TIME_PATTERN = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}[+-][0-9]{2}:[0-9]{2}$"
)
SERVICE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_service_time(text: str) -> datetime:
    """Parse a scheduling-service timestamp into an aware datetime.

    Args:
        text: Timestamp in the form ``YYYY-MM-DDTHH:MM:SS+HH:MM``.

    Returns:
        Timezone-aware datetime.

    Raises:
        TimeFormatError: If the text does not match the fixed layout or
            names an impossible date or time.
    """
    if not isinstance(text, str) or not SERVICE_TIME_PATTERN.match(text):
        raise TimeFormatError(text)
    try:
        return datetime.strptime(text, SERVICE_TIME_FORMAT)
    except ValueError:
        raise TimeFormatError(text)


def format_service_time(value: datetime) -> str:
    """Format an aware datetime in the service layout (inverse of parse)."""
    return value.isoformat(timespec="seconds")


@dataclass(frozen=True)
class TimeSpan:
    """One coverage interval.

    ``start <= end`` is expected but not enforced; a reversed span yields a
    negative duration that callers must handle explicitly.

    Attributes:
        start: Start of the interval (timezone-aware).
        end: End of the interval (timezone-aware).
    """

    start: datetime
    end: datetime

    @classmethod
    def from_strings(cls, start: str, end: str) -> "TimeSpan":
        """Create a span from two service timestamps.

        Raises:
            TimeFormatError: If either endpoint is malformed.
        """
        return cls(start=parse_service_time(start), end=parse_service_time(end))

    @property
    def duration_minutes(self) -> int:
        """Whole minutes between start and end, floored."""
        seconds = (self.end - self.start).total_seconds()
        return int(seconds // 60)

    @property
    def is_reversed(self) -> bool:
        return self.end < self.start


@dataclass(frozen=True)
class RenderedEntry:
    """A concrete (engineer, start, end) interval computed by the service.

    Timestamps are kept as the raw service text so that a malformed value
    only costs this entry when it is parsed during extraction.
    """

    engineer: str
    start: str
    end: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RenderedEntry":
        user = payload.get("user") or {}
        return cls(
            engineer=user.get("summary", ""),
            start=payload.get("start", ""),
            end=payload.get("end", ""),
        )


@dataclass
class ScheduleLayer:
    """A named rotation track and its top-level rendered entries."""

    name: str
    rendered_entries: list[RenderedEntry] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ScheduleLayer":
        return cls(
            name=payload.get("name", ""),
            rendered_entries=[
                RenderedEntry.from_payload(entry)
                for entry in payload.get("rendered_schedule_entries") or []
            ],
        )


@dataclass
class ScheduleView:
    """A schedule rendered for one time window.

    Attributes:
        schedule_id: Identifier of the schedule.
        layers: Named layers, each with its own top-level rendered entries.
        final_entries: Fully resolved coverage for the window as a whole,
            after all overrides are applied.
    """

    schedule_id: str
    layers: list[ScheduleLayer] = field(default_factory=list)
    final_entries: list[RenderedEntry] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ScheduleView":
        """Build a view from the ``schedule`` object of a service response."""
        final_schedule = payload.get("final_schedule") or {}
        return cls(
            schedule_id=payload.get("id", ""),
            layers=[
                ScheduleLayer.from_payload(layer)
                for layer in payload.get("schedule_layers") or []
            ],
            final_entries=[
                RenderedEntry.from_payload(entry)
                for entry in final_schedule.get("rendered_schedule_entries") or []
            ],
        )

    def layers_named(self, name: str) -> list[ScheduleLayer]:
        """All layers whose name equals ``name`` exactly."""
        return [layer for layer in self.layers if layer.name == name]


@dataclass(frozen=True)
class CoverageRecord:
    """One interval of coverage attributed to an engineer on a layer."""

    engineer: str
    layer_name: str
    duration_minutes: int
    is_override: bool


class SkipReason(Enum):
    """Why a rendered entry produced no coverage record."""

    INVALID_TIMESTAMP = "invalid_timestamp"
    NEGATIVE_DURATION = "negative_duration"


@dataclass(frozen=True)
class SkippedEntry:
    """A rendered entry that was left out of extraction."""

    layer_name: str
    engineer: str
    reason: SkipReason
    message: str = ""

    def __str__(self) -> str:
        return f"[{self.reason.value}] {self.layer_name} / {self.engineer}: {self.message}"


@dataclass
class ExtractionResult:
    """Records extracted from one narrowed window, plus what was skipped."""

    records: list[CoverageRecord] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)

    def extend(self, other: "ExtractionResult") -> None:
        """Append another result's records and skips to this one."""
        self.records.extend(other.records)
        self.skipped.extend(other.skipped)


@dataclass
class EngineerOverview:
    """Accumulated coverage for one engineer.

    Attributes:
        engineer: Engineer identifier (display name).
        shifts: Layer name -> durations of normal rotation turns, in minutes.
        overrides: Layer name -> durations of override coverage, in minutes.
    """

    engineer: str
    shifts: dict[str, list[int]] = field(default_factory=dict)
    overrides: dict[str, list[int]] = field(default_factory=dict)

    def add(self, layer_name: str, minutes: int, is_override: bool) -> None:
        """Append a duration to the normal or override list for a layer."""
        target = self.overrides if is_override else self.shifts
        target.setdefault(layer_name, []).append(minutes)

    def layer_names(self, include_override_only: bool = True) -> list[str]:
        """Layer names in first-seen order, shifts first."""
        names = list(self.shifts)
        if include_override_only:
            names.extend(name for name in self.overrides if name not in self.shifts)
        return names

    def shift_minutes(self, layer_name: str) -> int:
        return sum(self.shifts.get(layer_name, []))

    def override_minutes(self, layer_name: str) -> int:
        return sum(self.overrides.get(layer_name, []))

    def shift_count(self, layer_name: str) -> int:
        return len(self.shifts.get(layer_name, []))

    def override_count(self, layer_name: str) -> int:
        return len(self.overrides.get(layer_name, []))

    @property
    def has_coverage(self) -> bool:
        return bool(self.shifts or self.overrides)


@dataclass(frozen=True)
class LayerSummary:
    """Reported totals for one engineer on one layer."""

    engineer: str
    layer_name: str
    total_minutes: int
    shift_count: int
    override_count: int
    override_minutes: int = 0

