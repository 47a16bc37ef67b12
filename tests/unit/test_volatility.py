"""Tests for cross-turn risk volatility tracking."""

from companion.conversation.volatility import (
    EMPTY_TRACKER,
    Trend,
    compute_trend,
    update,
)
from companion.safety.categories import RiskTier


class TestComputeTrend:
    """Test trend computation over a score history."""

    def test_escalating(self):
        """Test a rising window is escalating."""
        assert compute_trend([10, 20, 30]) == Trend.ESCALATING

    def test_de_escalating(self):
        """Test a falling window is de-escalating."""
        assert compute_trend([95, 60, 30]) == Trend.DE_ESCALATING

    def test_small_change_is_stable(self):
        """Test a change below the material delta is stable."""
        assert compute_trend([10, 12, 14]) == Trend.STABLE

    def test_short_history_is_stable(self):
        """Test fewer samples than the window is stable."""
        assert compute_trend([0, 95]) == Trend.STABLE

    def test_repeated_reversals_are_volatile(self):
        """Test more than one direction change is volatile."""
        assert compute_trend([0, 60, 0, 60]) == Trend.VOLATILE

    def test_single_reversal_is_stable(self):
        """Test one direction change is not volatile."""
        assert compute_trend([0, 60, 0]) == Trend.STABLE

    def test_flat_steps_ignored(self):
        """Test flat steps do not count as reversals."""
        assert compute_trend([30, 30, 30, 30]) == Trend.STABLE

    def test_custom_material_delta(self):
        """Test the material delta is configurable."""
        assert compute_trend([10, 12, 14], material_delta=4) == Trend.ESCALATING


class TestUpdate:
    """Test tracker updates."""

    def test_returns_new_tracker(self):
        """Test update never mutates its input."""
        tracker = update(EMPTY_TRACKER, 20, RiskTier.STANDARD)

        assert EMPTY_TRACKER.history == ()
        assert EMPTY_TRACKER.turn_count == 0
        assert len(tracker.history) == 1
        assert tracker.turn_count == 1
        assert tracker.latest.score == 20

    def test_history_bounded(self):
        """Test history keeps at most max_history samples."""
        tracker = EMPTY_TRACKER
        for score in (10, 20, 30, 40, 50):
            tracker = update(tracker, score, RiskTier.STANDARD, max_history=3)

        assert [s.score for s in tracker.history] == [30, 40, 50]
        assert tracker.turn_count == 5

    def test_escalation_across_turns(self):
        """Test escalation is reported after three rising turns."""
        tracker = EMPTY_TRACKER
        tracker = update(tracker, 20, RiskTier.STANDARD)
        tracker = update(tracker, 60, RiskTier.HIGH)
        tracker = update(tracker, 95, RiskTier.CRITICAL)

        assert tracker.trend == Trend.ESCALATING

    def test_explicit_turn_index(self):
        """Test an explicit turn index is recorded."""
        tracker = update(EMPTY_TRACKER, 20, RiskTier.STANDARD, turn_index=7)

        assert tracker.latest.turn_index == 7
        assert tracker.turn_count == 8

    def test_sudden_calm(self):
        """Test crisis followed by STANDARD is a sudden calm."""
        tracker = update(EMPTY_TRACKER, 95, RiskTier.CRITICAL)
        tracker = update(tracker, 0, RiskTier.STANDARD)

        assert tracker.sudden_calm is True

    def test_no_sudden_calm_without_crisis(self):
        """Test calm after calm is not sudden."""
        tracker = update(EMPTY_TRACKER, 20, RiskTier.STANDARD)
        tracker = update(tracker, 0, RiskTier.STANDARD)

        assert tracker.sudden_calm is False

    def test_turns_since_crisis(self):
        """Test turns elapsed since the last crisis sample."""
        tracker = update(EMPTY_TRACKER, 95, RiskTier.CRITICAL)
        tracker = update(tracker, 20, RiskTier.STANDARD)
        tracker = update(tracker, 0, RiskTier.STANDARD)

        assert tracker.turns_since_crisis == 2
        assert EMPTY_TRACKER.turns_since_crisis is None

    def test_to_dict(self):
        """Test serialization."""
        tracker = update(EMPTY_TRACKER, 60, RiskTier.HIGH)

        assert tracker.to_dict() == {
            "history": [{"score": 60, "tier": "HIGH", "turn_index": 0}],
            "trend": "stable",
            "turn_count": 1,
        }
