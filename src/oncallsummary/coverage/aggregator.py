"""Aggregation of coverage records per engineer and layer."""

import logging
from collections.abc import Iterable

from oncallsummary.domain.models import CoverageRecord, EngineerOverview
from oncallsummary.domain.policies import UnknownEngineerPolicy
from oncallsummary.exceptions import UnknownEngineerError

logger = logging.getLogger(__name__)


class OnCallAggregator:
    """Folds coverage records into one EngineerOverview per engineer.

    Every known engineer is seeded with an empty overview so that people
    without coverage still appear in the output. Overviews are owned by the
    aggregator and mutated in place.

    Example:
        >>> aggregator = OnCallAggregator(["Alice", "Bob"])
        >>> aggregator.fold_all(records)
        >>> aggregator.overviews["Alice"].shifts
        {'Primary': [60]}
    """

    def __init__(
        self,
        engineers: Iterable[str],
        unknown_engineer_policy: UnknownEngineerPolicy = UnknownEngineerPolicy.DROP,
    ):
        self.unknown_engineer_policy = unknown_engineer_policy
        self.overviews: dict[str, EngineerOverview] = {}
        self.dropped: list[CoverageRecord] = []

        for engineer in engineers:
            if engineer not in self.overviews:
                self.overviews[engineer] = EngineerOverview(engineer=engineer)

    def fold(self, record: CoverageRecord) -> bool:
        """Add one record to its engineer's overview.

        Args:
            record: Coverage record to fold.

        Returns:
            True if the record was folded, False if it was dropped.

        Raises:
            UnknownEngineerError: If the engineer is unknown and the policy
                is FAIL.
        """
        overview = self.overviews.get(record.engineer)

        if overview is None:
            if self.unknown_engineer_policy is UnknownEngineerPolicy.FAIL:
                raise UnknownEngineerError(record.engineer)
            if self.unknown_engineer_policy is UnknownEngineerPolicy.DROP:
                logger.warning(
                    "Dropping %d min on %s for unknown engineer %s",
                    record.duration_minutes, record.layer_name, record.engineer,
                )
                self.dropped.append(record)
                return False
            overview = EngineerOverview(engineer=record.engineer)
            self.overviews[record.engineer] = overview

        overview.add(record.layer_name, record.duration_minutes, record.is_override)
        return True

    def fold_all(self, records: Iterable[CoverageRecord]) -> int:
        """Fold records in order. Returns the number actually folded."""
        return sum(1 for record in records if self.fold(record))

    def total_minutes(self, engineer: str, layer_name: str, override: bool = False) -> int:
        """Sum of durations for an (engineer, layer, kind) triple."""
        overview = self.overviews.get(engineer)
        if overview is None:
            return 0
        if override:
            return overview.override_minutes(layer_name)
        return overview.shift_minutes(layer_name)

    def count(self, engineer: str, layer_name: str, override: bool = False) -> int:
        """Number of durations for an (engineer, layer, kind) triple."""
        overview = self.overviews.get(engineer)
        if overview is None:
            return 0
        if override:
            return overview.override_count(layer_name)
        return overview.shift_count(layer_name)
