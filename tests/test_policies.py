"""Tests for reconciliation policies."""

import pytest

from oncallsummary.domain.policies import (
    EntryCountOverrideClassifier,
    NegativeDurationPolicy,
    minutes_to_hours,
    resolve_negative_duration,
)


class TestEntryCountOverrideClassifier:
    """Tests for EntryCountOverrideClassifier."""

    def test_single_entry_is_normal(self):
        """A turn that resolves to one entry was not overridden."""
        classifier = EntryCountOverrideClassifier()
        assert classifier.is_override(1) is False

    @pytest.mark.parametrize("count", [2, 3, 10])
    def test_multiple_entries_are_overrides(self, count):
        """A turn split into several entries was overridden."""
        classifier = EntryCountOverrideClassifier()
        assert classifier.is_override(count) is True

    def test_empty_window_is_normal(self):
        classifier = EntryCountOverrideClassifier()
        assert classifier.is_override(0) is False

    def test_custom_threshold(self):
        classifier = EntryCountOverrideClassifier(max_normal_entries=2)
        assert classifier.is_override(2) is False
        assert classifier.is_override(3) is True


class TestNegativeDurationPolicy:
    """Tests for resolve_negative_duration."""

    @pytest.mark.parametrize("policy", list(NegativeDurationPolicy))
    def test_non_negative_passes_through(self, policy):
        assert resolve_negative_duration(0, policy) == 0
        assert resolve_negative_duration(90, policy) == 90

    def test_reject(self):
        assert resolve_negative_duration(-5, NegativeDurationPolicy.REJECT) is None

    def test_clamp(self):
        assert resolve_negative_duration(-5, NegativeDurationPolicy.CLAMP) == 0


class TestMinutesToHours:
    """Tests for minutes_to_hours."""

    def test_split(self):
        assert minutes_to_hours(0) == (0, 0)
        assert minutes_to_hours(60) == (1, 0)
        assert minutes_to_hours(125) == (2, 5)
        assert minutes_to_hours(59) == (0, 59)
