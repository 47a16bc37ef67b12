"""
Human Handoff Packet

Privacy-safe summary handed to a human responder when a turn needs one.
It carries the risk picture, never the user's words: no raw text, no
marker phrases (they can name means), no pet or user facts.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from companion.pipeline import PipelineOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandoffPacket:
    """What a human responder sees before joining the conversation."""

    timestamp: str
    risk_tier: str
    category: str
    marker_count: int
    guards: tuple[str, ...] = field(default_factory=tuple)
    region: str = "US"
    message_count: int = 0
    session_duration_minutes: int = 0
    volatility_trend: str = "stable"
    mode: str = "normal"
    is_bystander: bool = False

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "risk_tier": self.risk_tier,
            "category": self.category,
            "marker_count": self.marker_count,
            "guards": list(self.guards),
            "region": self.region,
            "message_count": self.message_count,
            "session_duration_minutes": self.session_duration_minutes,
            "volatility_trend": self.volatility_trend,
            "mode": self.mode,
            "is_bystander": self.is_bystander,
        }


def _guard_names(guards_triggered) -> tuple[str, ...]:
    """Guard names without the matched phrase ("negation:want to die" -> "negation")."""
    names = []
    for label in guards_triggered:
        name = label.split(":", 1)[0]
        if name not in names:
            names.append(name)
    return tuple(names)


def generate_handoff_packet(
    output: "PipelineOutput",
    message_count: int,
    session_start: datetime,
    now: Optional[datetime] = None,
) -> HandoffPacket:
    """
    Summarize a pipeline output for a human responder.

    Args:
        output: Pipeline output for the turn being escalated
        message_count: Messages in the conversation so far
        session_start: When the conversation started (timezone-aware)
        now: Current time; defaults to the system clock

    Returns:
        HandoffPacket with no user text or marker phrases
    """
    now = now or datetime.now(timezone.utc)
    minutes = max(int((now - session_start).total_seconds() // 60), 0)

    packet = HandoffPacket(
        timestamp=now.isoformat(),
        risk_tier=output.tier.value,
        category=output.analysis.category.value,
        marker_count=len(output.analysis.detected_markers),
        guards=_guard_names(output.guards_triggered),
        region=output.region.value,
        message_count=message_count,
        session_duration_minutes=minutes,
        volatility_trend=output.tracker.trend.value,
        mode=output.mode.value,
        is_bystander=output.is_bystander,
    )
    logger.info(f"Handoff packet generated: tier={packet.risk_tier}, category={packet.category}")
    return packet
