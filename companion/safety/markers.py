"""
Marker Classifiers

One pure classifier per response category. Each reports which configured
phrases occur in the normalized message (apostrophes optional, common
contractions also matched spelled out); no fuzzy matching and no learned
model. Disambiguation (negation, attribution, idioms) is applied
afterwards by GuardSet, so the raw match results stay comparable across
turns.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from companion.safety.categories import SuicideRiskLevel
from companion.safety.guards import FilteredMarkers, GuardKind, GuardSet, MarkerTier
from companion.safety.normalizer import contains_phrase

if TYPE_CHECKING:
    from companion.catalog import CompanionConfig, MarkerCatalog

logger = logging.getLogger(__name__)

# "put him down", "putting our dog to sleep"
_EUTHANASIA_PRONOUN_RE = re.compile(
    r"\bput(?:ting)?\s+(?:him|her|them|my\s+\w+|our\s+\w+)\s+(?:down|to\s+sleep)\b"
)
# "found my dog dead", "found our old cat dead"
_FOUND_DECEASED_RE = re.compile(r"\bfound\s+(?:my|our|the|a|his|her)\s+(?:\w+\s+){0,2}dead\b")


@dataclass(frozen=True)
class MarkerResult:
    """Markers of one category present in a message."""

    detected: bool = False
    markers: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {"detected": self.detected, "markers": list(self.markers)}


@dataclass(frozen=True)
class DeathResult(MarkerResult):
    """Death markers plus subtype flags."""

    is_traumatic: bool = False
    is_euthanasia: bool = False
    is_found_deceased: bool = False

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            "is_traumatic": self.is_traumatic,
            "is_euthanasia": self.is_euthanasia,
            "is_found_deceased": self.is_found_deceased,
        })
        return data


NO_MATCH = MarkerResult()


def match_markers(text: str, phrases: Iterable[str], minimum: int = 1) -> MarkerResult:
    """
    Find configured phrases in normalized text.

    Args:
        text: Normalized (lower-case) message
        phrases: Configured marker phrases
        minimum: Distinct markers needed before the result counts as detected

    Returns:
        MarkerResult with matches in configuration order, each reported once
    """
    if not text:
        return NO_MATCH

    found: list[str] = []
    for phrase in phrases:
        if phrase and phrase not in found and contains_phrase(text, phrase):
            found.append(phrase)

    return MarkerResult(detected=len(found) >= max(minimum, 1), markers=tuple(found))


def _has_any(text: str, phrases: Iterable[str]) -> bool:
    return any(contains_phrase(text, p) for p in phrases)


def classify_death(text: str, markers: "MarkerCatalog", guards: GuardSet) -> DeathResult:
    """
    Death/grief classifier with traumatic, euthanasia and found-deceased subtypes.

    Only a death marker that survives the idiom guard detects a death. The
    subtype flags refine that hit and never detect on their own: "i put
    him down on the floor" during an emergency is not a euthanasia.
    """
    raw = match_markers(text, markers.death)
    kept = guards.filter(text, raw.markers, MarkerTier.CONTEXT).kept
    if not kept:
        return DeathResult()

    is_traumatic = _has_any(text, markers.death_traumatic)

    is_euthanasia = _has_any(text, markers.death_euthanasia)
    if not is_euthanasia and "put" in text and ("down" in text or "sleep" in text):
        is_euthanasia = _has_any(text, markers.animal_nouns)
    if not is_euthanasia:
        is_euthanasia = bool(_EUTHANASIA_PRONOUN_RE.search(text))

    is_found_deceased = _has_any(text, markers.death_found_deceased) or bool(
        _FOUND_DECEASED_RE.search(text)
    )

    return DeathResult(
        detected=True,
        markers=kept,
        is_traumatic=is_traumatic,
        is_euthanasia=is_euthanasia,
        is_found_deceased=is_found_deceased,
    )


# ==================================
# Suicide Risk
# ==================================

@dataclass(frozen=True)
class SuicideRiskResult:
    """Speaker's own suicide risk after disambiguation."""

    level: SuicideRiskLevel = SuicideRiskLevel.NONE
    markers: tuple[str, ...] = field(default_factory=tuple)
    suppressed: tuple[FilteredMarkers, ...] = field(default_factory=tuple)

    @property
    def guards_triggered(self) -> list[str]:
        labels = []
        for filtered in self.suppressed:
            labels.extend(filtered.labels)
        return labels

    @property
    def attributed_markers(self) -> list[str]:
        """Markers suppressed because someone else said them."""
        attributed = []
        for filtered in self.suppressed:
            attributed.extend(filtered.suppressed_by(GuardKind.ATTRIBUTION))
        return attributed


def analyze_suicide_risk(text: str, markers: "MarkerCatalog", guards: GuardSet) -> SuicideRiskResult:
    """
    Determine the speaker's suicide risk level.

    Intent markers are checked first and can only be suppressed by negation
    or attribution; hypothetical framing does not cancel a stated plan.

    Args:
        text: Normalized message
        markers: Marker catalog
        guards: Disambiguation guards

    Returns:
        SuicideRiskResult with the highest surviving tier
    """
    tiers = (
        (SuicideRiskLevel.INTENT, MarkerTier.INTENT, markers.suicide_intent),
        (SuicideRiskLevel.ACTIVE, MarkerTier.ACTIVE, markers.suicide_active),
        (SuicideRiskLevel.PASSIVE, MarkerTier.PASSIVE, markers.suicide_passive),
    )

    level = SuicideRiskLevel.NONE
    kept_markers: list[str] = []
    suppressed: list[FilteredMarkers] = []

    for risk_level, tier, phrases in tiers:
        raw = match_markers(text, phrases)
        if not raw.markers:
            continue
        filtered = guards.filter(text, raw.markers, tier)
        if filtered.suppressed:
            suppressed.append(filtered)
        if filtered.kept:
            kept_markers.extend(filtered.kept)
            if level == SuicideRiskLevel.NONE:
                level = risk_level

    if suppressed:
        logger.debug(f"Suicide markers suppressed: {sum(len(f.suppressed) for f in suppressed)}")

    return SuicideRiskResult(
        level=level,
        markers=tuple(kept_markers),
        suppressed=tuple(suppressed),
    )


# ==================================
# Classifier Outputs
# ==================================

@dataclass(frozen=True)
class ClassifierOutputs:
    """Every classifier result for one message."""

    suicide: SuicideRiskResult
    dv: MarkerResult
    mdd: MarkerResult
    paralysis: MarkerResult
    neurodivergent: MarkerResult
    death: DeathResult
    anticipatory: MarkerResult
    emergency: MarkerResult
    scam: MarkerResult
    lost_pet: MarkerResult
    found_pet: MarkerResult
    guilt: MarkerResult
    disenfranchised: MarkerResult
    pediatric: MarkerResult
    quality_of_life: MarkerResult
    bystander: MarkerResult
    dv_suppressed: FilteredMarkers = field(default_factory=FilteredMarkers)
    mdd_self_blame: str = ""  # MDD phrase that defers to euthanasia grief

    @property
    def guards_triggered(self) -> list[str]:
        """Suppression labels from every guarded classifier."""
        return self.suicide.guards_triggered + self.dv_suppressed.labels

    @property
    def is_bystander_report(self) -> bool:
        """User is reporting someone else's crisis."""
        return bool(self.suicide.attributed_markers) or self.bystander.detected


class MarkerClassifier:
    """
    Runs every category classifier over a normalized message.

    Usage:
        classifier = MarkerClassifier(config)
        outputs = classifier.classify(normalize_text(message))
    """

    def __init__(self, config: "CompanionConfig", guards: Optional[GuardSet] = None):
        self.markers = config.markers
        self.guards = guards or GuardSet.default(idioms=self.markers.idioms)
        logger.info("MarkerClassifier initialized")

    def classify(self, text: str) -> ClassifierOutputs:
        """
        Classify a normalized message.

        Args:
            text: Output of normalize_text()

        Returns:
            ClassifierOutputs with one result per category
        """
        m = self.markers

        dv_raw = match_markers(text, m.dv)
        dv_filtered = self.guards.filter(text, dv_raw.markers, MarkerTier.DANGER)

        anticipatory_raw = match_markers(text, m.anticipatory)
        anticipatory_kept = self.guards.filter(
            text, anticipatory_raw.markers, MarkerTier.CONTEXT
        ).kept

        return ClassifierOutputs(
            suicide=analyze_suicide_risk(text, m, self.guards),
            dv=MarkerResult(detected=bool(dv_filtered.kept), markers=dv_filtered.kept),
            dv_suppressed=dv_filtered,
            mdd=match_markers(text, m.mdd),
            paralysis=match_markers(text, m.paralysis),
            neurodivergent=match_markers(text, m.neurodivergent),
            death=classify_death(text, m, self.guards),
            anticipatory=MarkerResult(
                detected=len(anticipatory_kept) >= m.anticipatory_min_markers,
                markers=anticipatory_kept,
            ),
            emergency=match_markers(text, m.emergency),
            scam=match_markers(text, m.scam),
            lost_pet=match_markers(text, m.lost_pet),
            found_pet=match_markers(text, m.found_pet),
            guilt=match_markers(text, m.guilt),
            disenfranchised=match_markers(text, m.disenfranchised),
            pediatric=match_markers(text, m.pediatric),
            quality_of_life=match_markers(text, m.quality_of_life),
            bystander=match_markers(text, m.bystander),
            mdd_self_blame=m.mdd_euthanasia_self_blame,
        )
