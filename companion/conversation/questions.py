"""
Question Planning

Decides which clarifying questions the reply may ask this turn. People in
crisis get at most one question (are you safe right now, or what the pet's
symptoms are in an emergency); practical modes
ask for the few facts the next step needs. Every planned question passes
the intent ledger and is recorded in it.
"""

import logging
from dataclasses import dataclass, field

from companion.conversation.facts import SimpleFacts
from companion.conversation.ledger import (
    INTENT_TO_FACTS,
    DEFAULT_COOLDOWN_TURNS,
    IntentLedger,
    QuestionIntent,
    can_ask,
    record_asked,
)
from companion.conversation.modes import ResponseMode
from companion.safety.categories import RiskTier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedQuestion:
    """A question the reply is allowed to ask."""

    intent: QuestionIntent
    targets_facts: tuple[str, ...]
    priority: int
    why_needed: str

    def to_dict(self) -> dict:
        return {
            "intent": self.intent.value,
            "targets_facts": list(self.targets_facts),
            "priority": self.priority,
            "why_needed": self.why_needed,
        }


@dataclass(frozen=True)
class RequestedInfo:
    """Questions planned for this turn."""

    questions: tuple[PlannedQuestion, ...] = field(default_factory=tuple)
    max_questions: int = 2

    @property
    def question_intents(self) -> list[QuestionIntent]:
        return [q.intent for q in self.questions]

    @property
    def requested_facts(self) -> list[str]:
        facts = []
        for question in self.questions:
            facts.extend(question.targets_facts)
        return facts

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict:
        return {
            "questions": [q.to_dict() for q in self.questions],
            "question_count": self.question_count,
            "max_questions": self.max_questions,
        }


# (intent, reason, condition on known facts) per mode, in asking order
_LOST_PET_QUESTIONS = (
    (QuestionIntent.ASK_PET_SPECIES, "Species shapes search advice", lambda f: True),
    (QuestionIntent.ASK_PET_NAME, "Name is needed for flyers and calling", lambda f: True),
    (QuestionIntent.ASK_LAST_SEEN_LOCATION, "Location sets the search radius",
     lambda f: bool(f.pet_species)),
    (QuestionIntent.ASK_PET_COLOR, "Colour is needed for identification",
     lambda f: bool(f.pet_name)),
)

_EMERGENCY_QUESTIONS = (
    (QuestionIntent.ASK_SYMPTOM, "Symptoms decide the first-aid steps", lambda f: True),
)


def _candidates(mode: ResponseMode, tier: RiskTier):
    # A pet emergency is the pet's crisis, not the user's
    if mode == ResponseMode.PET_EMERGENCY:
        return _EMERGENCY_QUESTIONS
    if tier.is_crisis:
        return ((QuestionIntent.ASK_SAFE_NOW, "Safety check for crisis tier", lambda f: True),)
    if mode == ResponseMode.LOST_PET:
        return _LOST_PET_QUESTIONS
    return ()


def plan_questions(
    mode: ResponseMode,
    tier: RiskTier,
    facts: SimpleFacts,
    ledger: IntentLedger,
    turn_index: int,
    max_questions: int = 2,
    max_questions_impaired: int = 1,
    cooldown_turns: int = DEFAULT_COOLDOWN_TURNS,
) -> tuple[RequestedInfo, IntentLedger]:
    """
    Plan this turn's questions and record them in the ledger.

    Args:
        mode: Conversation mode after the transition check
        tier: Risk tier for the turn
        facts: Merged session facts
        ledger: Ledger updated with this turn's facts
        turn_index: Current turn number
        max_questions: Cap for a user who can take in a normal reply
        max_questions_impaired: Cap in CRITICAL/HIGH tier
        cooldown_turns: Ledger cooldown for repeated intents

    Returns:
        (RequestedInfo, ledger with the planned questions recorded)
    """
    limit = max_questions_impaired if tier.is_crisis else max_questions
    if tier.is_crisis:
        limit = min(limit, 1)

    planned: list[PlannedQuestion] = []
    for priority, (intent, why, condition) in enumerate(_candidates(mode, tier), start=1):
        if len(planned) >= limit:
            break
        if not condition(facts):
            continue
        check = can_ask(ledger, intent, facts, turn_index, cooldown_turns)
        if not check.allowed:
            logger.debug(f"Skipping {intent.value}: {check.reason}")
            continue
        planned.append(PlannedQuestion(
            intent=intent,
            targets_facts=INTENT_TO_FACTS[intent],
            priority=priority,
            why_needed=why,
        ))

    for question in planned:
        ledger = record_asked(ledger, question.intent, turn_index)

    return RequestedInfo(questions=tuple(planned), max_questions=limit), ledger
