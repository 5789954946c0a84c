"""Coverage extraction from narrowed schedule windows.

A narrowed window is a schedule rendering fetched for the exact time range
of one top-level rendered entry of a layer. Its final schedule reflects the
coverage actually in effect for that rotation turn once overrides are
applied, which is what the extractor turns into coverage records.
"""

import logging
from typing import Optional

from oncallsummary.domain.models import (
    CoverageRecord,
    ExtractionResult,
    RenderedEntry,
    ScheduleView,
    SkippedEntry,
    SkipReason,
    TimeSpan,
)
from oncallsummary.domain.policies import (
    EntryCountOverrideClassifier,
    NegativeDurationPolicy,
    OverrideClassifier,
    resolve_negative_duration,
)
from oncallsummary.exceptions import TimeFormatError

logger = logging.getLogger(__name__)


class CoverageExtractor:
    """Turns narrowed schedule views into coverage records for one layer.

    Extraction never fails as a whole. Entries that cannot be used are
    reported as SkippedEntry values in the result and processing continues
    with the rest of the window.

    Example:
        >>> extractor = CoverageExtractor()
        >>> result = extractor.extract(narrow_view, "Primary")
        >>> for record in result.records:
        ...     print(record.engineer, record.duration_minutes)
    """

    def __init__(
        self,
        override_classifier: Optional[OverrideClassifier] = None,
        negative_duration_policy: NegativeDurationPolicy = NegativeDurationPolicy.REJECT,
    ):
        """Initialize extractor with policies.

        Args:
            override_classifier: Policy deciding normal turn vs override.
            negative_duration_policy: Policy for intervals ending before
                they start.
        """
        self.override_classifier = override_classifier or EntryCountOverrideClassifier()
        self.negative_duration_policy = negative_duration_policy

    def extract(self, view: ScheduleView, layer_name: str) -> ExtractionResult:
        """Extract coverage records for a layer from a narrowed view.

        Every layer in the view whose name equals ``layer_name`` triggers a
        pass over the final schedule, so duplicated layer names produce
        duplicated records.

        Args:
            view: Schedule rendered for one rotation turn's window.
            layer_name: Name of the layer the window was taken from.

        Returns:
            ExtractionResult with the records and any skipped entries.
            Empty if no layer matches.
        """
        result = ExtractionResult()

        is_override = self.override_classifier.is_override(len(view.final_entries))

        for _ in view.layers_named(layer_name):
            for entry in view.final_entries:
                record, skipped = self._extract_entry(entry, layer_name, is_override)
                if record is not None:
                    result.records.append(record)
                else:
                    logger.warning("Skipping coverage entry: %s", skipped)
                    result.skipped.append(skipped)

        return result

    def _extract_entry(
        self,
        entry: RenderedEntry,
        layer_name: str,
        is_override: bool,
    ) -> tuple[Optional[CoverageRecord], Optional[SkippedEntry]]:
        """Build a record for one resolved entry, or the reason it was skipped."""
        try:
            span = TimeSpan.from_strings(entry.start, entry.end)
        except TimeFormatError as e:
            return None, SkippedEntry(
                layer_name=layer_name,
                engineer=entry.engineer,
                reason=SkipReason.INVALID_TIMESTAMP,
                message=str(e),
            )

        minutes = resolve_negative_duration(
            span.duration_minutes, self.negative_duration_policy
        )
        if minutes is None:
            return None, SkippedEntry(
                layer_name=layer_name,
                engineer=entry.engineer,
                reason=SkipReason.NEGATIVE_DURATION,
                message=f"ends before it starts ({entry.start} -> {entry.end})",
            )

        return CoverageRecord(
            engineer=entry.engineer,
            layer_name=layer_name,
            duration_minutes=minutes,
            is_override=is_override,
        ), None
