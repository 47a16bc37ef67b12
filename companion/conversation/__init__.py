"""
Conversation Module

Cross-turn state for the companion: session facts, the intent ledger,
risk volatility, question planning and the mode state machine. Every
state object is immutable; each turn returns new values.
"""

from companion.conversation.modes import (
    ResponseMode,
    LEGAL_TRANSITIONS,
    TransitionCheck,
    can_transition,
    check_transition,
    get_valid_transitions,
)

from companion.conversation.facts import (
    SimpleFacts,
    extract_facts,
    merge_facts,
)

from companion.conversation.ledger import (
    QuestionIntent,
    INTENT_TO_FACTS,
    AskedQuestion,
    IntentLedger,
    LedgerCheck,
    AntiRepetition,
    can_ask,
    record_asked,
    mark_answered,
    update_from_facts,
    unanswered_questions,
    anti_repetition_context,
)

from companion.conversation.volatility import (
    Trend,
    RiskSample,
    VolatilityTracker,
    update as update_volatility,
)

from companion.conversation.questions import (
    PlannedQuestion,
    RequestedInfo,
    plan_questions,
)

__all__ = [
    # Modes
    "ResponseMode",
    "LEGAL_TRANSITIONS",
    "TransitionCheck",
    "can_transition",
    "check_transition",
    "get_valid_transitions",
    # Facts
    "SimpleFacts",
    "extract_facts",
    "merge_facts",
    # Ledger
    "QuestionIntent",
    "INTENT_TO_FACTS",
    "AskedQuestion",
    "IntentLedger",
    "LedgerCheck",
    "AntiRepetition",
    "can_ask",
    "record_asked",
    "mark_answered",
    "update_from_facts",
    "unanswered_questions",
    "anti_repetition_context",
    # Volatility
    "Trend",
    "RiskSample",
    "VolatilityTracker",
    "update_volatility",
    # Questions
    "PlannedQuestion",
    "RequestedInfo",
    "plan_questions",
]
