"""
Clinical Catalog

Immutable configuration for the companion: marker phrases, per-category
policy, response templates, hotline directories and the forbidden-phrase
deny-list. Built once per process with build_default_config() and passed
into the pipeline; classifiers never read module globals.

Validation runs at build time. A catalog that leaves a category without a
template or policy, or whose templates break their own guard lists, fails
with pydantic.ValidationError before any message is processed.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from companion import defaults
from companion.conversation.modes import ResponseMode
from companion.safety.categories import Category, RiskTier
from companion.safety.hotlines import Region

logger = logging.getLogger(__name__)

Phrases = tuple[str, ...]

# Mode templates the pipeline selects by name
REQUIRED_MODE_TEMPLATES = ("waiting_room", "post_crisis", "bystander", "bystander_minor")


def _clean_phrases(value) -> Phrases:
    """Lower-case, strip and de-duplicate phrases, keeping order."""
    seen = []
    for phrase in value or ():
        cleaned = " ".join(str(phrase).lower().split())
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return tuple(seen)


# ==================================
# Markers
# ==================================

class MarkerCatalog(BaseModel):
    """Phrase lists for every classifier. All phrases are normalized on load."""

    model_config = ConfigDict(frozen=True)

    # Suicide risk tiers
    suicide_passive: Phrases
    suicide_active: Phrases
    suicide_intent: Phrases
    bystander: Phrases = ()
    minor_reporter: Phrases = ()

    # Human safety and clinical
    dv: Phrases
    mdd: Phrases
    mdd_euthanasia_self_blame: str = defaults.MDD_EUTHANASIA_SELF_BLAME
    paralysis: Phrases
    neurodivergent: Phrases

    # Death and grief
    death: Phrases
    death_traumatic: Phrases
    death_euthanasia: Phrases
    death_found_deceased: Phrases
    animal_nouns: Phrases
    idioms: Phrases = ()
    anticipatory: Phrases
    anticipatory_min_markers: int = Field(default=2, ge=1)

    # Practical
    emergency: Phrases
    scam: Phrases
    lost_pet: Phrases
    found_pet: Phrases

    # Cognitive / validation
    guilt: Phrases
    disenfranchised: Phrases
    pediatric: Phrases
    quality_of_life: Phrases

    # Conversation flow
    waiting_room: Phrases = ()
    grounding: Phrases = ()
    visual_aids: dict[str, Phrases] = Field(default_factory=dict)

    @field_validator(
        "suicide_passive", "suicide_active", "suicide_intent", "bystander",
        "minor_reporter", "dv", "mdd", "paralysis", "neurodivergent", "death",
        "death_traumatic", "death_euthanasia", "death_found_deceased",
        "animal_nouns", "idioms", "anticipatory", "emergency", "scam",
        "lost_pet", "found_pet", "guilt", "disenfranchised", "pediatric",
        "quality_of_life", "waiting_room", "grounding",
        mode="before",
    )
    @classmethod
    def normalize_phrases(cls, value) -> Phrases:
        return _clean_phrases(value)

    @field_validator("mdd_euthanasia_self_blame", mode="before")
    @classmethod
    def normalize_phrase(cls, value) -> str:
        return " ".join(str(value).lower().split())

    @field_validator("visual_aids", mode="before")
    @classmethod
    def normalize_visual_aids(cls, value) -> dict[str, Phrases]:
        return {key: _clean_phrases(phrases) for key, phrases in (value or {}).items()}


# ==================================
# Templates & Policy
# ==================================

class ResponseTemplate(BaseModel):
    """A vetted response with the phrases it must and must not contain."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    must_contain: Phrases = ()
    must_not_contain: Phrases = ()

    def missing_required(self) -> list[str]:
        """Required phrases absent from the raw template text."""
        lowered = self.text.lower()
        return [p for p in self.must_contain if p.lower() not in lowered]

    def forbidden_hits(self, global_phrases: Phrases = ()) -> list[str]:
        """Forbidden phrases (own and global) present in the raw template text."""
        lowered = self.text.lower()
        return [
            p for p in (*self.must_not_contain, *global_phrases)
            if p and p.lower() in lowered
        ]


class CategoryPolicy(BaseModel):
    """How a category is scored and which conversation mode it implies."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    escalate: bool = False
    mode: Optional[ResponseMode] = None  # None keeps the current mode
    requires_model_call: bool = False


class TierThresholds(BaseModel):
    """Score cut-offs for risk tiers."""

    model_config = ConfigDict(frozen=True)

    critical: int = 80
    high: int = 60
    medium: int = 40

    @model_validator(mode="after")
    def check_order(self) -> "TierThresholds":
        if not (self.critical > self.high > self.medium >= 0):
            raise ValueError("tier thresholds must satisfy critical > high > medium >= 0")
        return self

    def tier_for(self, score: float) -> RiskTier:
        """Map a 0-100 score to a risk tier."""
        if score >= self.critical:
            return RiskTier.CRITICAL
        if score >= self.high:
            return RiskTier.HIGH
        if score >= self.medium:
            return RiskTier.MEDIUM
        return RiskTier.STANDARD


# ==================================
# Companion Config
# ==================================

class CompanionConfig(BaseModel):
    """Complete immutable clinical configuration."""

    model_config = ConfigDict(frozen=True)

    version: str = "1"
    markers: MarkerCatalog
    categories: dict[Category, CategoryPolicy]
    templates: dict[Category, ResponseTemplate]
    mode_templates: dict[str, ResponseTemplate]
    fallback_template: ResponseTemplate
    forbidden_phrases: Phrases = ()
    hotlines: dict[Region, dict[str, str]]
    hotline_names: dict[str, str] = Field(default_factory=dict)
    region_signals: dict[Region, Phrases] = Field(default_factory=dict)
    tier_thresholds: TierThresholds = Field(default_factory=TierThresholds)
    confirmation_paraphrases: dict[Category, str] = Field(default_factory=dict)
    default_confirmation_paraphrase: str = defaults.DEFAULT_CONFIRMATION_PARAPHRASE

    @field_validator("forbidden_phrases", mode="before")
    @classmethod
    def normalize_forbidden(cls, value) -> Phrases:
        return _clean_phrases(value)

    @field_validator("region_signals", mode="before")
    @classmethod
    def normalize_signals(cls, value) -> dict:
        return {region: _clean_phrases(signals) for region, signals in (value or {}).items()}

    @model_validator(mode="after")
    def check_completeness(self) -> "CompanionConfig":
        missing_templates = [c.value for c in Category if c not in self.templates]
        if missing_templates:
            raise ValueError(f"categories without a template: {missing_templates}")

        missing_policies = [c.value for c in Category if c not in self.categories]
        if missing_policies:
            raise ValueError(f"categories without a policy: {missing_policies}")

        missing_modes = [m for m in REQUIRED_MODE_TEMPLATES if m not in self.mode_templates]
        if missing_modes:
            raise ValueError(f"missing mode templates: {missing_modes}")

        us = self.hotlines.get(Region.US, {})
        for key in ("crisis_988", "emergency"):
            if not us.get(key):
                raise ValueError(f"US hotline directory is missing '{key}'")

        return self

    @model_validator(mode="after")
    def check_template_guards(self) -> "CompanionConfig":
        named = [(c.value, t) for c, t in self.templates.items()]
        named += [(f"mode:{m}", t) for m, t in self.mode_templates.items()]
        named.append(("fallback", self.fallback_template))

        problems = []
        for name, template in named:
            missing = template.missing_required()
            if missing:
                problems.append(f"{name} lacks required {missing}")
            hits = template.forbidden_hits(self.forbidden_phrases)
            if hits:
                problems.append(f"{name} contains forbidden {hits}")

        if problems:
            raise ValueError("; ".join(problems))
        return self

    def policy_for(self, category: Category) -> CategoryPolicy:
        return self.categories[category]

    def confirmation_paraphrase(self, category: Category) -> str:
        return self.confirmation_paraphrases.get(category, self.default_confirmation_paraphrase)


# ==================================
# Defaults
# ==================================

# Score, escalation and mode per category. MDD escalates even though it is
# not a suicide tier: depression markers warrant a human follow-up.
DEFAULT_POLICIES: dict[Category, CategoryPolicy] = {
    Category.SUICIDE_INTENT: CategoryPolicy(score=95, escalate=True, mode=ResponseMode.SAFETY),
    Category.SUICIDE_ACTIVE: CategoryPolicy(score=85, escalate=True, mode=ResponseMode.SAFETY),
    Category.SUICIDE_PASSIVE: CategoryPolicy(score=60, escalate=True, mode=ResponseMode.SAFETY),
    Category.DV_COERCIVE_CONTROL: CategoryPolicy(score=75, escalate=True, mode=ResponseMode.SAFETY),
    Category.MDD: CategoryPolicy(score=50, escalate=True, mode=ResponseMode.GRIEF),
    Category.PARALYSIS: CategoryPolicy(score=40, mode=ResponseMode.GRIEF),
    Category.NEURODIVERGENT: CategoryPolicy(score=30, mode=ResponseMode.GRIEF),
    Category.DEATH_TRAUMATIC: CategoryPolicy(score=35, mode=ResponseMode.GRIEF),
    Category.DEATH_EUTHANASIA: CategoryPolicy(score=30, mode=ResponseMode.GRIEF),
    Category.DEATH_GENERAL: CategoryPolicy(score=30, mode=ResponseMode.GRIEF),
    Category.DEATH_FOUND_DECEASED: CategoryPolicy(score=30, mode=ResponseMode.GRIEF),
    Category.ANTICIPATORY: CategoryPolicy(score=35, mode=ResponseMode.GRIEF),
    Category.EMERGENCY: CategoryPolicy(score=80, escalate=True, mode=ResponseMode.PET_EMERGENCY),
    Category.SCAM: CategoryPolicy(score=25, mode=ResponseMode.SCAM),
    Category.FOUND_PET: CategoryPolicy(score=10, mode=ResponseMode.LOST_PET),
    Category.LOST_PET: CategoryPolicy(score=20, mode=ResponseMode.LOST_PET),
    Category.GUILT_CBT: CategoryPolicy(score=20, mode=ResponseMode.GRIEF),
    Category.DISENFRANCHISED: CategoryPolicy(score=15, mode=ResponseMode.GRIEF),
    Category.PEDIATRIC: CategoryPolicy(score=15, mode=ResponseMode.GRIEF),
    Category.QUALITY_OF_LIFE: CategoryPolicy(score=25, mode=ResponseMode.GRIEF),
    Category.GENERAL: CategoryPolicy(score=0, requires_model_call=True),
}


def default_marker_catalog() -> MarkerCatalog:
    """Marker catalog from companion.defaults."""
    return MarkerCatalog(
        suicide_passive=defaults.SUICIDE_PASSIVE_MARKERS,
        suicide_active=defaults.SUICIDE_ACTIVE_MARKERS,
        suicide_intent=defaults.SUICIDE_INTENT_MARKERS,
        bystander=defaults.BYSTANDER_MARKERS,
        minor_reporter=defaults.MINOR_REPORTER_MARKERS,
        dv=defaults.DV_MARKERS,
        mdd=defaults.MDD_MARKERS,
        mdd_euthanasia_self_blame=defaults.MDD_EUTHANASIA_SELF_BLAME,
        paralysis=defaults.PARALYSIS_MARKERS,
        neurodivergent=defaults.NEURODIVERGENT_MARKERS,
        death=defaults.DEATH_MARKERS,
        death_traumatic=defaults.DEATH_TRAUMATIC_INDICATORS,
        death_euthanasia=defaults.DEATH_EUTHANASIA_INDICATORS,
        death_found_deceased=defaults.DEATH_FOUND_DECEASED_INDICATORS,
        animal_nouns=defaults.ANIMAL_NOUNS,
        idioms=defaults.IDIOMS,
        anticipatory=defaults.ANTICIPATORY_MARKERS,
        emergency=defaults.EMERGENCY_MARKERS,
        scam=defaults.SCAM_MARKERS,
        lost_pet=defaults.LOST_PET_MARKERS,
        found_pet=defaults.FOUND_PET_MARKERS,
        guilt=defaults.GUILT_MARKERS,
        disenfranchised=defaults.DISENFRANCHISED_MARKERS,
        pediatric=defaults.PEDIATRIC_MARKERS,
        quality_of_life=defaults.QUALITY_OF_LIFE_MARKERS,
        waiting_room=defaults.WAITING_ROOM_TRIGGERS,
        grounding=defaults.GROUNDING_TRIGGERS,
        visual_aids=defaults.VISUAL_AID_TRIGGERS,
    )


def build_default_config() -> CompanionConfig:
    """
    Build and validate the shipped clinical configuration.

    Returns:
        CompanionConfig

    Raises:
        pydantic.ValidationError: If the defaults are inconsistent
    """
    config = CompanionConfig(
        markers=default_marker_catalog(),
        categories=DEFAULT_POLICIES,
        templates={Category(key): ResponseTemplate(**t) for key, t in defaults.TEMPLATES.items()},
        mode_templates={key: ResponseTemplate(**t) for key, t in defaults.MODE_TEMPLATES.items()},
        fallback_template=ResponseTemplate(**defaults.FALLBACK_TEMPLATE),
        forbidden_phrases=defaults.FORBIDDEN_PHRASES,
        hotlines={Region(key): dict(numbers) for key, numbers in defaults.HOTLINES.items()},
        hotline_names=defaults.HOTLINE_NAMES,
        region_signals={Region(key): signals for key, signals in defaults.REGION_SIGNALS.items()},
        confirmation_paraphrases={
            Category(key): text for key, text in defaults.CONFIRMATION_PARAPHRASES.items()
        },
        default_confirmation_paraphrase=defaults.DEFAULT_CONFIRMATION_PARAPHRASE,
    )
    logger.info(
        f"Companion config built: {len(config.templates)} templates, "
        f"{len(config.hotlines)} regions"
    )
    return config


@lru_cache
def get_default_config() -> CompanionConfig:
    """Cached default configuration, built on first use."""
    return build_default_config()
