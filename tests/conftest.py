"""Shared fixtures: an in-memory schedule source and view builders."""

from typing import Optional

import pytest

from oncallsummary.domain.models import RenderedEntry, ScheduleLayer, ScheduleView
from oncallsummary.exceptions import RemoteLookupError
from oncallsummary.source.base import ScheduleSource

SINCE = "2018-06-01T00:00:00+00:00"
UNTIL = "2018-06-03T00:00:00+00:00"


def entry(engineer: str, start: str, end: str) -> RenderedEntry:
    return RenderedEntry(engineer=engineer, start=start, end=end)


def narrow_view(layer_name: str, *final_entries: RenderedEntry) -> ScheduleView:
    """A narrowed window echoing one layer and the given final entries."""
    return ScheduleView(
        schedule_id="PSCHED1",
        layers=[ScheduleLayer(name=layer_name)],
        final_entries=list(final_entries),
    )


class FakeScheduleSource(ScheduleSource):
    """In-memory schedule source.

    Views are looked up by their exact (since, until) window; an unknown
    window raises RemoteLookupError like a failed request would.
    """

    def __init__(
        self,
        schedules: Optional[dict[str, str]] = None,
        engineers: Optional[list[str]] = None,
        views: Optional[dict[tuple[str, str], ScheduleView]] = None,
    ):
        self.schedules = schedules or {}
        self.engineers = engineers or []
        self.views = views or {}
        self.calls: list[tuple[str, str, str]] = []
        self.fail_engineers = False
        self.fail_lookup = False

    def find_schedule_id(self, name_query: str) -> Optional[str]:
        if self.fail_lookup:
            raise RemoteLookupError("lookup failed")
        for name, schedule_id in self.schedules.items():
            if name_query in name:
                return schedule_id
        return None

    def list_engineers(self) -> list[str]:
        if self.fail_engineers:
            raise RemoteLookupError("users failed")
        return list(self.engineers)

    def get_schedule(self, schedule_id: str, since: str, until: str) -> ScheduleView:
        self.calls.append((schedule_id, since, until))
        try:
            return self.views[(since, until)]
        except KeyError:
            raise RemoteLookupError(f"no rendering for {since} - {until}")


@pytest.fixture
def two_day_source():
    """Two layers over two days; day two of Primary was split by an override.

    Primary:   Alice 06-01 (whole day), Bob 06-02 (Carol overrides 08:00-12:00)
    Secondary: Bob 06-01 00:00 through 06-02 12:00
    """
    day1 = ("2018-06-01T00:00:00+00:00", "2018-06-02T00:00:00+00:00")
    day2 = ("2018-06-02T00:00:00+00:00", "2018-06-03T00:00:00+00:00")
    secondary = ("2018-06-01T00:00:00+00:00", "2018-06-02T12:00:00+00:00")

    full = ScheduleView(
        schedule_id="PSCHED1",
        layers=[
            ScheduleLayer(
                name="Primary",
                rendered_entries=[entry("Alice", *day1), entry("Bob", *day2)],
            ),
            ScheduleLayer(
                name="Secondary",
                rendered_entries=[entry("Bob", *secondary)],
            ),
        ],
        final_entries=[],
    )

    views = {
        (SINCE, UNTIL): full,
        day1: narrow_view("Primary", entry("Alice", *day1)),
        day2: narrow_view(
            "Primary",
            entry("Bob", "2018-06-02T00:00:00+00:00", "2018-06-02T08:00:00+00:00"),
            entry("Carol", "2018-06-02T08:00:00+00:00", "2018-06-02T12:00:00+00:00"),
            entry("Bob", "2018-06-02T12:00:00+00:00", "2018-06-03T00:00:00+00:00"),
        ),
        secondary: narrow_view("Secondary", entry("Bob", *secondary)),
    }

    return FakeScheduleSource(
        schedules={"ACDC Oncall Schedule": "PSCHED1"},
        engineers=["Alice", "Bob", "Carol", "Dave"],
        views=views,
    )
