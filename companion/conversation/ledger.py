"""
Intent Ledger

Append-only record of which clarifying questions were asked and when.
Before asking anything, the pipeline checks the ledger: a question whose
answer is already known, or that was asked within the cooldown window,
is never asked again.

All operations return new ledgers; nothing is mutated in place.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from companion.conversation.facts import SimpleFacts, is_known

logger = logging.getLogger(__name__)


class QuestionIntent(str, Enum):
    """What a clarifying question is trying to learn."""

    ASK_PET_NAME = "ASK_PET_NAME"
    ASK_PET_SPECIES = "ASK_PET_SPECIES"
    ASK_PET_BREED = "ASK_PET_BREED"
    ASK_PET_COLOR = "ASK_PET_COLOR"
    ASK_LAST_SEEN_LOCATION = "ASK_LAST_SEEN_LOCATION"
    ASK_LAST_SEEN_TIME = "ASK_LAST_SEEN_TIME"
    ASK_SAFE_NOW = "ASK_SAFE_NOW"
    ASK_NEED_HELP = "ASK_NEED_HELP"
    ASK_WITH_SOMEONE = "ASK_WITH_SOMEONE"
    ASK_SYMPTOM = "ASK_SYMPTOM"
    ASK_DURATION = "ASK_DURATION"
    CONFIRM_UNDERSTANDING = "CONFIRM_UNDERSTANDING"


# Facts each intent elicits
INTENT_TO_FACTS: dict[QuestionIntent, tuple[str, ...]] = {
    QuestionIntent.ASK_PET_NAME: ("pet_name",),
    QuestionIntent.ASK_PET_SPECIES: ("pet_species",),
    QuestionIntent.ASK_PET_BREED: ("pet_breed",),
    QuestionIntent.ASK_PET_COLOR: ("pet_color",),
    QuestionIntent.ASK_LAST_SEEN_LOCATION: ("last_seen_location",),
    QuestionIntent.ASK_LAST_SEEN_TIME: ("last_seen_time",),
    QuestionIntent.ASK_SAFE_NOW: ("user_confirmed_safe",),
    QuestionIntent.ASK_NEED_HELP: (),
    QuestionIntent.ASK_WITH_SOMEONE: (),
    QuestionIntent.ASK_SYMPTOM: ("symptom",),
    QuestionIntent.ASK_DURATION: ("duration",),
    QuestionIntent.CONFIRM_UNDERSTANDING: (),
}

DEFAULT_COOLDOWN_TURNS = 5


@dataclass(frozen=True)
class AskedQuestion:
    """A question the companion asked."""

    intent: QuestionIntent
    turn_index: int
    targets_facts: tuple[str, ...] = field(default_factory=tuple)
    was_answered: bool = False

    def to_dict(self) -> dict:
        return {
            "intent": self.intent.value,
            "turn_index": self.turn_index,
            "targets_facts": list(self.targets_facts),
            "was_answered": self.was_answered,
        }


@dataclass(frozen=True)
class IntentLedger:
    """Questions asked so far and facts that must not be asked for."""

    asked_questions: tuple[AskedQuestion, ...] = field(default_factory=tuple)
    known_fact_keys: frozenset[str] = field(default_factory=frozenset)

    def last_asked_turn(self, intent: QuestionIntent) -> Optional[int]:
        """Most recent turn an intent was asked on, if ever."""
        turns = [q.turn_index for q in self.asked_questions if q.intent == intent]
        return max(turns) if turns else None

    def to_dict(self) -> dict:
        return {
            "asked_questions": [q.to_dict() for q in self.asked_questions],
            "known_fact_keys": sorted(self.known_fact_keys),
        }


EMPTY_LEDGER = IntentLedger()


@dataclass(frozen=True)
class LedgerCheck:
    """Whether a question may be asked, and why not."""

    allowed: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class AntiRepetition:
    """Do-not-ask lists handed to the response writer."""

    do_not_ask_facts: tuple[str, ...] = field(default_factory=tuple)
    do_not_ask_intents: tuple[QuestionIntent, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "do_not_ask_facts": list(self.do_not_ask_facts),
            "do_not_ask_intents": [i.value for i in self.do_not_ask_intents],
        }


# ==================================
# Ledger Operations
# ==================================

def can_ask(
    ledger: IntentLedger,
    intent: QuestionIntent,
    facts: SimpleFacts,
    turn_index: int,
    cooldown_turns: int = DEFAULT_COOLDOWN_TURNS,
) -> LedgerCheck:
    """
    Check whether a question may be asked this turn.

    Args:
        ledger: Current ledger
        intent: Question intent to ask
        facts: Merged session facts
        turn_index: Current turn number
        cooldown_turns: Turns before the same intent may be asked again

    Returns:
        LedgerCheck with a reason when the question is blocked
    """
    for fact_key in INTENT_TO_FACTS.get(intent, ()):
        if is_known(getattr(facts, fact_key, None)):
            return LedgerCheck(allowed=False, reason=f"Already know {fact_key}")
        if fact_key in ledger.known_fact_keys:
            return LedgerCheck(allowed=False, reason=f"Already answered {fact_key}")

    last_turn = ledger.last_asked_turn(intent)
    if last_turn is not None and turn_index - last_turn < cooldown_turns:
        return LedgerCheck(
            allowed=False,
            reason=f"Already asked {intent.value} on turn {last_turn}",
        )

    return LedgerCheck(allowed=True)


def record_asked(ledger: IntentLedger, intent: QuestionIntent, turn_index: int) -> IntentLedger:
    """Append a question to the ledger."""
    question = AskedQuestion(
        intent=intent,
        turn_index=turn_index,
        targets_facts=INTENT_TO_FACTS.get(intent, ()),
    )
    return replace(ledger, asked_questions=ledger.asked_questions + (question,))


def mark_answered(ledger: IntentLedger, intent: QuestionIntent) -> IntentLedger:
    """Mark every ask of an intent as answered."""
    asked = tuple(
        replace(q, was_answered=True) if q.intent == intent and not q.was_answered else q
        for q in ledger.asked_questions
    )
    return replace(ledger, asked_questions=asked)


def update_from_facts(ledger: IntentLedger, facts: SimpleFacts) -> IntentLedger:
    """
    Record newly known facts and mark the questions they answer.

    Args:
        ledger: Current ledger
        facts: Facts extracted this turn

    Returns:
        New ledger; unchanged if no facts are known
    """
    new_keys = set(facts.known_keys())
    if not new_keys:
        return ledger

    updated = replace(ledger, known_fact_keys=ledger.known_fact_keys | frozenset(new_keys))
    for intent, fact_keys in INTENT_TO_FACTS.items():
        if new_keys.intersection(fact_keys):
            updated = mark_answered(updated, intent)
    return updated


def unanswered_questions(ledger: IntentLedger) -> list[AskedQuestion]:
    return [q for q in ledger.asked_questions if not q.was_answered]


def anti_repetition_context(facts: SimpleFacts, ledger: IntentLedger) -> AntiRepetition:
    """
    Build the do-not-ask lists from known facts and answered questions.

    An intent is off-limits once every fact it elicits is known.
    """
    known = list(facts.known_keys())
    for key in sorted(ledger.known_fact_keys):
        if key not in known:
            known.append(key)

    known_set = set(known)
    intents = tuple(
        intent for intent, fact_keys in INTENT_TO_FACTS.items()
        if fact_keys and known_set.issuperset(fact_keys)
    )
    return AntiRepetition(do_not_ask_facts=tuple(known), do_not_ask_intents=intents)
