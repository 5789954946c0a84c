"""Coverage extraction, aggregation and reconciliation."""

from oncallsummary.coverage.aggregator import OnCallAggregator
from oncallsummary.coverage.extractor import CoverageExtractor
from oncallsummary.coverage.reconciler import (
    CoverageReconciler,
    ReconciliationResult,
    ReconcilerConfig,
)

__all__ = [
    "CoverageExtractor",
    "OnCallAggregator",
    "CoverageReconciler",
    "ReconciliationResult",
    "ReconcilerConfig",
]
