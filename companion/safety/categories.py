"""
Response categories, risk levels and the per-turn analysis record.

The Category enum is closed and versioned: every member has exactly one
response template in the catalog, and adding or removing a member bumps
CATEGORY_SCHEMA_VERSION.
"""

from dataclasses import dataclass, field
from enum import Enum

CATEGORY_SCHEMA_VERSION = "2"


class Category(str, Enum):
    """Response categories, one per template key."""

    # Human safety (always escalated)
    SUICIDE_INTENT = "suicide_intent"
    SUICIDE_ACTIVE = "suicide_active"
    SUICIDE_PASSIVE = "suicide_passive"
    DV_COERCIVE_CONTROL = "dv_coercive_control"

    # Clinical grief support
    MDD = "mdd"
    PARALYSIS = "paralysis"
    NEURODIVERGENT = "neurodivergent"
    DEATH_TRAUMATIC = "death_traumatic"
    DEATH_EUTHANASIA = "death_euthanasia"
    DEATH_GENERAL = "death_general"
    DEATH_FOUND_DECEASED = "death_found_deceased"
    ANTICIPATORY = "anticipatory"

    # Practical
    EMERGENCY = "emergency"
    SCAM = "scam"
    FOUND_PET = "found_pet"
    LOST_PET = "lost_pet"

    # Cognitive / validation support
    GUILT_CBT = "guilt_cbt"
    DISENFRANCHISED = "disenfranchised"
    PEDIATRIC = "pediatric"
    QUALITY_OF_LIFE = "quality_of_life"

    GENERAL = "general"

    @property
    def is_suicide(self) -> bool:
        return self in SUICIDE_CATEGORIES

    @property
    def is_death(self) -> bool:
        return self in DEATH_CATEGORIES


SUICIDE_CATEGORIES = frozenset({
    Category.SUICIDE_INTENT,
    Category.SUICIDE_ACTIVE,
    Category.SUICIDE_PASSIVE,
})

DEATH_CATEGORIES = frozenset({
    Category.DEATH_TRAUMATIC,
    Category.DEATH_EUTHANASIA,
    Category.DEATH_GENERAL,
    Category.DEATH_FOUND_DECEASED,
})


class SuicideRiskLevel(str, Enum):
    """Speaker's own suicide risk for this turn."""

    NONE = "none"
    PASSIVE = "passive"   # Hopelessness, "what's the point"
    ACTIVE = "active"     # Wish to die, no plan stated
    INTENT = "intent"     # Plan, means or timeline stated


class RiskTier(str, Enum):
    """Overall urgency of a turn."""

    STANDARD = "STANDARD"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    @property
    def is_crisis(self) -> bool:
        """CRITICAL and HIGH switch the UI to the low-cognition layout."""
        return self in (RiskTier.CRITICAL, RiskTier.HIGH)


_TIER_RANK = {
    RiskTier.STANDARD: 0,
    RiskTier.MEDIUM: 1,
    RiskTier.HIGH: 2,
    RiskTier.CRITICAL: 3,
}


@dataclass(frozen=True)
class ResponseAnalysis:
    """Result of priority resolution for one turn."""

    category: Category
    suicide_risk_level: SuicideRiskLevel = SuicideRiskLevel.NONE
    requires_escalation: bool = False
    detected_markers: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Any suicide risk escalates, whatever the caller passed.
        if self.suicide_risk_level != SuicideRiskLevel.NONE and not self.requires_escalation:
            object.__setattr__(self, "requires_escalation", True)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "category": self.category.value,
            "suicide_risk_level": self.suicide_risk_level.value,
            "requires_escalation": self.requires_escalation,
            "detected_markers": list(self.detected_markers),
        }
