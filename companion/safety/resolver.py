"""
Priority Resolver

Turns classifier outputs into exactly one response category. Rules are an
ordered table evaluated top to bottom; the first matching rule wins.
Human safety comes first, then clinical grief support, then practical
help, then cognitive and validation support.

The table is data so tests can pin the order rule by rule.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from companion.safety.categories import Category, ResponseAnalysis, SuicideRiskLevel
from companion.safety.markers import ClassifierOutputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriorityRule:
    """One step of the priority cascade."""

    name: str
    predicate: Callable[[ClassifierOutputs], bool]
    category_fn: Callable[[ClassifierOutputs], Category]
    escalate: bool = False


def _constant(category: Category) -> Callable[[ClassifierOutputs], Category]:
    return lambda outputs: category


def _suicide_is(level: SuicideRiskLevel) -> Callable[[ClassifierOutputs], bool]:
    return lambda outputs: outputs.suicide.level == level


def _mdd_applies(outputs: ClassifierOutputs) -> bool:
    """MDD markers fire, unless the only one is self-blame after euthanasia."""
    if not outputs.mdd.detected:
        return False
    if outputs.death.is_euthanasia and outputs.mdd.markers == (outputs.mdd_self_blame,):
        logger.debug("MDD deferred to euthanasia grief")
        return False
    return True


def death_subtype(outputs: ClassifierOutputs) -> Category:
    """Traumatic > euthanasia > found deceased > general."""
    death = outputs.death
    if death.is_traumatic:
        return Category.DEATH_TRAUMATIC
    if death.is_euthanasia:
        return Category.DEATH_EUTHANASIA
    if death.is_found_deceased:
        return Category.DEATH_FOUND_DECEASED
    return Category.DEATH_GENERAL


PRIORITY_RULES: tuple[PriorityRule, ...] = (
    # Human safety
    PriorityRule("suicide_intent", _suicide_is(SuicideRiskLevel.INTENT),
                 _constant(Category.SUICIDE_INTENT), escalate=True),
    PriorityRule("suicide_active", _suicide_is(SuicideRiskLevel.ACTIVE),
                 _constant(Category.SUICIDE_ACTIVE), escalate=True),
    PriorityRule("suicide_passive", _suicide_is(SuicideRiskLevel.PASSIVE),
                 _constant(Category.SUICIDE_PASSIVE), escalate=True),
    PriorityRule("dv_coercive_control", lambda o: o.dv.detected,
                 _constant(Category.DV_COERCIVE_CONTROL), escalate=True),

    # Clinical grief
    PriorityRule("mdd", _mdd_applies, _constant(Category.MDD), escalate=True),
    PriorityRule("paralysis", lambda o: o.paralysis.detected, _constant(Category.PARALYSIS)),
    PriorityRule("neurodivergent", lambda o: o.neurodivergent.detected,
                 _constant(Category.NEURODIVERGENT)),
    PriorityRule("death", lambda o: o.death.detected, death_subtype),
    PriorityRule("anticipatory", lambda o: o.anticipatory.detected,
                 _constant(Category.ANTICIPATORY)),

    # Practical
    PriorityRule("emergency", lambda o: o.emergency.detected,
                 _constant(Category.EMERGENCY), escalate=True),
    PriorityRule("scam", lambda o: o.scam.detected, _constant(Category.SCAM)),
    PriorityRule("found_pet", lambda o: o.found_pet.detected, _constant(Category.FOUND_PET)),
    PriorityRule("lost_pet", lambda o: o.lost_pet.detected and not o.death.detected,
                 _constant(Category.LOST_PET)),

    # Cognitive / validation
    PriorityRule("guilt", lambda o: o.guilt.detected, _constant(Category.GUILT_CBT)),
    PriorityRule("disenfranchised", lambda o: o.disenfranchised.detected,
                 _constant(Category.DISENFRANCHISED)),
    PriorityRule("pediatric", lambda o: o.pediatric.detected, _constant(Category.PEDIATRIC)),
    PriorityRule("quality_of_life", lambda o: o.quality_of_life.detected,
                 _constant(Category.QUALITY_OF_LIFE)),

    PriorityRule("general", lambda o: True, _constant(Category.GENERAL)),
)


def _markers_for(category: Category, outputs: ClassifierOutputs) -> tuple[str, ...]:
    if category.is_suicide:
        return outputs.suicide.markers
    if category.is_death:
        return outputs.death.markers

    source = {
        Category.DV_COERCIVE_CONTROL: outputs.dv,
        Category.MDD: outputs.mdd,
        Category.PARALYSIS: outputs.paralysis,
        Category.NEURODIVERGENT: outputs.neurodivergent,
        Category.ANTICIPATORY: outputs.anticipatory,
        Category.EMERGENCY: outputs.emergency,
        Category.SCAM: outputs.scam,
        Category.FOUND_PET: outputs.found_pet,
        Category.LOST_PET: outputs.lost_pet,
        Category.GUILT_CBT: outputs.guilt,
        Category.DISENFRANCHISED: outputs.disenfranchised,
        Category.PEDIATRIC: outputs.pediatric,
        Category.QUALITY_OF_LIFE: outputs.quality_of_life,
    }.get(category)
    return source.markers if source else ()


def resolve(outputs: ClassifierOutputs) -> ResponseAnalysis:
    """
    Pick the response category for a turn.

    Args:
        outputs: Results of every classifier for the message

    Returns:
        ResponseAnalysis for the first matching priority rule
    """
    for rule in PRIORITY_RULES:
        if rule.predicate(outputs):
            category = rule.category_fn(outputs)
            analysis = ResponseAnalysis(
                category=category,
                suicide_risk_level=outputs.suicide.level,
                requires_escalation=rule.escalate,
                detected_markers=_markers_for(category, outputs),
            )
            logger.debug(f"Priority rule '{rule.name}' selected {category.value}")
            return analysis

    # Unreachable: the last rule always matches
    return ResponseAnalysis(category=Category.GENERAL)
