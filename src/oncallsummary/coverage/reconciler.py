"""Main reconciliation interface.

This module provides the high-level CoverageReconciler that orchestrates
schedule lookup, per-turn re-querying, extraction and aggregation.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from oncallsummary.coverage.aggregator import OnCallAggregator
from oncallsummary.coverage.extractor import CoverageExtractor
from oncallsummary.domain.models import (
    CoverageRecord,
    EngineerOverview,
    ExtractionResult,
    ScheduleView,
    SkippedEntry,
)
from oncallsummary.domain.policies import (
    EntryCountOverrideClassifier,
    NegativeDurationPolicy,
    OverrideClassifier,
    UnknownEngineerPolicy,
)
from oncallsummary.exceptions import RemoteLookupError
from oncallsummary.source.base import ScheduleSource

logger = logging.getLogger(__name__)


@dataclass
class ReconcilerConfig:
    """Configuration for a reconciliation run.

    Attributes:
        override_classifier: Policy deciding normal turn vs override.
        negative_duration_policy: Policy for reversed intervals.
        unknown_engineer_policy: Policy for coverage naming unknown engineers.
    """

    override_classifier: OverrideClassifier = field(
        default_factory=EntryCountOverrideClassifier
    )
    negative_duration_policy: NegativeDurationPolicy = NegativeDurationPolicy.REJECT
    unknown_engineer_policy: UnknownEngineerPolicy = UnknownEngineerPolicy.DROP


@dataclass
class ReconciliationResult:
    """Outcome of one reconciliation run.

    Attributes:
        schedule_id: Resolved schedule id, or None if the lookup failed.
        overviews: Engineer -> accumulated coverage.
        records: Every extracted record, in fold order.
        skipped: Entries left out during extraction.
        dropped: Records not folded because their engineer was unknown.
        failed_windows: (since, until) windows whose fetch failed.
    """

    schedule_id: Optional[str]
    overviews: dict[str, EngineerOverview] = field(default_factory=dict)
    records: list[CoverageRecord] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    dropped: list[CoverageRecord] = field(default_factory=list)
    failed_windows: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True if nothing was skipped, dropped or left unfetched."""
        return not (self.skipped or self.dropped or self.failed_windows)

    def get_stats(self) -> dict:
        """Counts describing how much of the data made it into the totals."""
        return {
            "engineers": len(self.overviews),
            "records": len(self.records),
            "override_records": sum(1 for r in self.records if r.is_override),
            "skipped_entries": len(self.skipped),
            "dropped_records": len(self.dropped),
            "failed_windows": len(self.failed_windows),
        }


class CoverageReconciler:
    """Reconstructs per-engineer coverage for a schedule over a time window.

    For each layer of the schedule rendered over the whole window, each of
    the layer's top-level rendered entries is re-queried for its exact time
    range. The narrowed rendering is what yields fine-grained coverage for
    that rotation turn. Runs are sequential, one remote call at a time, and
    every run starts from a fresh aggregator.

    Remote failures never abort the run. A failed schedule lookup or engineer
    listing degrades to absent/empty data; a failed window fetch loses that
    window only. All of it is recorded on the result.

    Example:
        >>> reconciler = CoverageReconciler(source)
        >>> result = reconciler.reconcile(
        ...     "ACDC Oncall Schedule",
        ...     "2018-06-01T00:00:01+00:00",
        ...     "2018-07-01T00:00:01+00:00",
        ... )
    """

    def __init__(
        self,
        source: ScheduleSource,
        config: Optional[ReconcilerConfig] = None,
    ):
        self.source = source
        self.config = config or ReconcilerConfig()
        self.extractor = CoverageExtractor(
            override_classifier=self.config.override_classifier,
            negative_duration_policy=self.config.negative_duration_policy,
        )

    def resolve_schedule_id(self, schedule_name: str) -> Optional[str]:
        """Find the first schedule matching a name; None if not found or failed."""
        try:
            schedule_id = self.source.find_schedule_id(schedule_name)
        except RemoteLookupError as e:
            logger.warning("Could not look up schedule %r: %s", schedule_name, e)
            return None

        if schedule_id is None:
            logger.warning("No schedule matches %r", schedule_name)
        return schedule_id

    def reconcile(self, schedule_name: str, since: str, until: str) -> ReconciliationResult:
        """Run the full pipeline for a schedule name.

        Args:
            schedule_name: Search text for the schedule.
            since: Window start, service timestamp text.
            until: Window end, service timestamp text.

        Returns:
            ReconciliationResult with the aggregation and diagnostics.
        """
        return self.reconcile_schedule(self.resolve_schedule_id(schedule_name), since, until)

    def reconcile_schedule(
        self,
        schedule_id: Optional[str],
        since: str,
        until: str,
    ) -> ReconciliationResult:
        """Run the pipeline for an already resolved schedule id.

        Raises:
            UnknownEngineerError: Only under the FAIL unknown-engineer policy.
        """
        result = ReconciliationResult(schedule_id=schedule_id)

        if schedule_id is not None:
            extraction = self.extract_coverage(schedule_id, since, until, result)
            result.records = extraction.records
            result.skipped = extraction.skipped

        aggregator = OnCallAggregator(
            self._list_engineers(),
            unknown_engineer_policy=self.config.unknown_engineer_policy,
        )
        aggregator.fold_all(result.records)

        result.overviews = aggregator.overviews
        result.dropped = aggregator.dropped

        if not result.is_complete:
            logger.warning(
                "Summary is partial: %d skipped entries, %d dropped records, "
                "%d failed windows",
                len(result.skipped), len(result.dropped), len(result.failed_windows),
            )
        return result

    def extract_coverage(
        self,
        schedule_id: str,
        since: str,
        until: str,
        result: ReconciliationResult,
    ) -> ExtractionResult:
        """Extract coverage records for every rotation turn of every layer.

        Windows that cannot be fetched are appended to
        ``result.failed_windows``.
        """
        extraction = ExtractionResult()

        schedule = self._fetch(schedule_id, since, until, result)
        if schedule is None:
            return extraction

        for layer in schedule.layers:
            for entry in layer.rendered_entries:
                narrowed = self._fetch(schedule_id, entry.start, entry.end, result)
                if narrowed is None:
                    continue
                extraction.extend(self.extractor.extract(narrowed, layer.name))

        logger.debug(
            "Extracted %d records from %d layers of %s",
            len(extraction.records), len(schedule.layers), schedule_id,
        )
        return extraction

    def _fetch(
        self,
        schedule_id: str,
        since: str,
        until: str,
        result: ReconciliationResult,
    ) -> Optional[ScheduleView]:
        try:
            return self.source.get_schedule(schedule_id, since, until)
        except RemoteLookupError as e:
            logger.warning(
                "Could not fetch schedule %s for %s - %s: %s",
                schedule_id, since, until, e,
            )
            result.failed_windows.append((since, until))
            return None

    def _list_engineers(self) -> list[str]:
        try:
            return self.source.list_engineers()
        except RemoteLookupError as e:
            logger.warning("Could not get list of engineers: %s", e)
            return []
