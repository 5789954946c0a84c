"""Domain models and policies for on-call coverage."""

from oncallsummary.domain.models import (
    CoverageRecord,
    EngineerOverview,
    ExtractionResult,
    LayerSummary,
    RenderedEntry,
    ScheduleLayer,
    ScheduleView,
    SkippedEntry,
    SkipReason,
    TimeSpan,
    format_service_time,
    parse_service_time,
)
from oncallsummary.domain.policies import (
    EntryCountOverrideClassifier,
    NegativeDurationPolicy,
    OverrideClassifier,
    UnknownEngineerPolicy,
)

__all__ = [
    # Models
    "CoverageRecord",
    "EngineerOverview",
    "ExtractionResult",
    "LayerSummary",
    "RenderedEntry",
    "ScheduleLayer",
    "ScheduleView",
    "SkippedEntry",
    "SkipReason",
    "TimeSpan",
    "format_service_time",
    "parse_service_time",
    # Policies
    "EntryCountOverrideClassifier",
    "NegativeDurationPolicy",
    "OverrideClassifier",
    "UnknownEngineerPolicy",
]
