"""Cross-turn risk trend tracking."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from companion.safety.categories import RiskTier

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 8
DEFAULT_TREND_WINDOW = 3
DEFAULT_MATERIAL_DELTA = 10.0


class Trend(str, Enum):
    """Direction of risk over recent turns."""

    STABLE = "stable"
    ESCALATING = "escalating"
    DE_ESCALATING = "de_escalating"
    VOLATILE = "volatile"


@dataclass(frozen=True)
class RiskSample:
    """Score and tier observed on one turn."""

    score: float
    tier: RiskTier
    turn_index: int

    def to_dict(self) -> dict:
        return {"score": self.score, "tier": self.tier.value, "turn_index": self.turn_index}


@dataclass(frozen=True)
class VolatilityTracker:
    """Bounded risk history with the trend computed over it."""

    history: tuple[RiskSample, ...] = field(default_factory=tuple)
    trend: Trend = Trend.STABLE
    turn_count: int = 0

    @property
    def latest(self) -> Optional[RiskSample]:
        return self.history[-1] if self.history else None

    @property
    def sudden_calm(self) -> bool:
        """
        Crisis tier on the previous turn, STANDARD now.

        An abrupt calm after a crisis can mean relief or a decision made;
        callers keep the safety response until the user confirms.
        """
        if len(self.history) < 2:
            return False
        return self.history[-2].tier.is_crisis and self.history[-1].tier == RiskTier.STANDARD

    @property
    def turns_since_crisis(self) -> Optional[int]:
        """Turns since the last CRITICAL/HIGH sample, or None if none is recorded."""
        for sample in reversed(self.history):
            if sample.tier.is_crisis:
                return self.turn_count - 1 - sample.turn_index
        return None

    def to_dict(self) -> dict:
        return {
            "history": [s.to_dict() for s in self.history],
            "trend": self.trend.value,
            "turn_count": self.turn_count,
        }


EMPTY_TRACKER = VolatilityTracker()


def compute_trend(
    scores: list[float],
    trend_window: int = DEFAULT_TREND_WINDOW,
    material_delta: float = DEFAULT_MATERIAL_DELTA,
) -> Trend:
    """
    Trend of a bounded score history.

    ESCALATING and DE_ESCALATING need a monotone run over the last
    `trend_window` scores whose overall change is at least `material_delta`.
    VOLATILE means the direction reversed more than once across the whole
    retained history; flat steps do not count as a direction.
    """
    window = max(trend_window, 3)
    if len(scores) < window:
        return Trend.STABLE

    recent = scores[-window:]
    deltas = [b - a for a, b in zip(recent, recent[1:])]
    change = recent[-1] - recent[0]

    if all(d >= 0 for d in deltas) and change >= material_delta:
        return Trend.ESCALATING
    if all(d <= 0 for d in deltas) and -change >= material_delta:
        return Trend.DE_ESCALATING

    all_deltas = [b - a for a, b in zip(scores, scores[1:])]
    directions = [d > 0 for d in all_deltas if d != 0]
    reversals = sum(1 for a, b in zip(directions, directions[1:]) if a != b)
    if reversals > 1:
        return Trend.VOLATILE

    return Trend.STABLE


def update(
    tracker: VolatilityTracker,
    score: float,
    tier: RiskTier,
    turn_index: Optional[int] = None,
    *,
    max_history: int = DEFAULT_MAX_HISTORY,
    trend_window: int = DEFAULT_TREND_WINDOW,
    material_delta: float = DEFAULT_MATERIAL_DELTA,
) -> VolatilityTracker:
    """
    Record a turn's risk and recompute the trend.

    Args:
        tracker: Tracker from the previous turn
        score: Risk score for this turn (0-100)
        tier: Risk tier for this turn
        turn_index: Turn number; defaults to the tracker's turn count
        max_history: Samples kept
        trend_window: Samples the trend is computed over
        material_delta: Minimum change for a directional trend

    Returns:
        New tracker; the input is not modified
    """
    index = tracker.turn_count if turn_index is None else turn_index
    history = (tracker.history + (RiskSample(score=score, tier=tier, turn_index=index),))
    history = history[-max_history:] if max_history > 0 else ()

    trend = compute_trend([s.score for s in history], trend_window, material_delta)
    if trend != tracker.trend:
        logger.info(f"Risk trend changed: {tracker.trend.value} -> {trend.value}")

    return VolatilityTracker(
        history=history,
        trend=trend,
        turn_count=max(tracker.turn_count, index) + 1,
    )
