"""Policy definitions for coverage reconciliation.

This module contains the configurable rules that decide how rendered
schedule entries turn into coverage: whether an entry is an override,
what to do with reversed intervals, and what to do when coverage names
an engineer the aggregation does not know. Policies are kept separate
from extraction and aggregation to allow independent testing and easy
modification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OverrideClassifier(ABC):
    """Abstract base class for override detection policies."""

    @abstractmethod
    def is_override(self, final_entry_count: int) -> bool:
        """Decide whether the entries of a narrowed window are overrides.

        Args:
            final_entry_count: Number of entries in the window's fully
                resolved final schedule.

        Returns:
            True if every entry of the window counts as override coverage.
        """
        pass


@dataclass
class EntryCountOverrideClassifier(OverrideClassifier):
    """Default override policy based on how a rotation turn resolves.

    The narrowed window spans exactly one top-level rotation turn. If the
    final schedule still resolves to a single entry nothing overrode the
    base rotation. If the turn is split into several entries an override
    fragmented it, and every fragment is attributed as override time.

    This is a heuristic; the service does not expose an override flag at
    this granularity.
    """

    # Windows resolving into more entries than this are overrides
    max_normal_entries: int = 1

    def is_override(self, final_entry_count: int) -> bool:
        return final_entry_count > self.max_normal_entries


class NegativeDurationPolicy(Enum):
    """What to do with an interval whose end lies before its start."""

    REJECT = "reject"  # Skip the entry and report it
    CLAMP = "clamp"  # Keep the entry with a zero duration


class UnknownEngineerPolicy(Enum):
    """What to do with coverage for an engineer outside the known set."""

    DROP = "drop"  # Log a warning and leave the record out
    CREATE = "create"  # Create an overview for the engineer on demand
    FAIL = "fail"  # Abort the run with UnknownEngineerError


def resolve_negative_duration(
    minutes: int,
    policy: NegativeDurationPolicy,
) -> Optional[int]:
    """Apply the negative-duration policy to a computed duration.

    Args:
        minutes: Duration computed from the interval, possibly negative.
        policy: Policy to apply.

    Returns:
        The duration to record, or None if the entry must be skipped.
    """
    if minutes >= 0:
        return minutes
    if policy is NegativeDurationPolicy.CLAMP:
        return 0
    return None


def minutes_to_hours(minutes: int) -> tuple[int, int]:
    """Split a minute total into whole hours and remaining minutes."""
    return divmod(minutes, 60)
