"""Conversation mode state machine."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set, Union

logger = logging.getLogger(__name__)


class ResponseMode(str, Enum):
    """Conversational context the companion is in."""

    NORMAL = "normal"

    # Content modes
    LOST_PET = "lost_pet"
    GRIEF = "grief"
    PET_EMERGENCY = "pet_emergency"
    SCAM = "scam"

    # Human safety
    SAFETY = "safety"
    WAITING_ROOM = "waiting_room"   # Help has been called, keep them company
    POST_CRISIS = "post_crisis"     # User confirmed safe after a crisis
    BYSTANDER = "bystander"         # User reports someone else at risk


# Legal mode transitions. Every mode may enter SAFETY; SAFETY may only
# hand over to WAITING_ROOM or POST_CRISIS.
LEGAL_TRANSITIONS: dict[ResponseMode, Set[ResponseMode]] = {
    ResponseMode.NORMAL: {
        ResponseMode.NORMAL,
        ResponseMode.SAFETY,
        ResponseMode.LOST_PET,
        ResponseMode.GRIEF,
        ResponseMode.PET_EMERGENCY,
        ResponseMode.SCAM,
        ResponseMode.BYSTANDER,
    },
    ResponseMode.LOST_PET: {
        ResponseMode.LOST_PET,
        ResponseMode.SAFETY,
        ResponseMode.GRIEF,
        ResponseMode.PET_EMERGENCY,  # Pet found injured
        ResponseMode.SCAM,           # "Finder" asks for money
        ResponseMode.WAITING_ROOM,
        ResponseMode.NORMAL,
    },
    ResponseMode.GRIEF: {
        ResponseMode.GRIEF,
        ResponseMode.SAFETY,
        ResponseMode.POST_CRISIS,
        ResponseMode.NORMAL,
    },
    ResponseMode.PET_EMERGENCY: {
        ResponseMode.PET_EMERGENCY,
        ResponseMode.SAFETY,
        ResponseMode.WAITING_ROOM,
        ResponseMode.GRIEF,          # Pet did not survive
        ResponseMode.NORMAL,
    },
    ResponseMode.SCAM: {
        ResponseMode.SCAM,
        ResponseMode.SAFETY,
        ResponseMode.LOST_PET,
        ResponseMode.NORMAL,
    },
    ResponseMode.SAFETY: {
        ResponseMode.SAFETY,
        ResponseMode.POST_CRISIS,
        ResponseMode.WAITING_ROOM,
    },
    ResponseMode.WAITING_ROOM: {
        ResponseMode.WAITING_ROOM,
        ResponseMode.SAFETY,
        ResponseMode.POST_CRISIS,
        ResponseMode.GRIEF,          # Vet could not save the pet
        ResponseMode.PET_EMERGENCY,  # Condition changed while waiting
        ResponseMode.NORMAL,
    },
    ResponseMode.POST_CRISIS: {
        ResponseMode.POST_CRISIS,
        ResponseMode.SAFETY,
        ResponseMode.NORMAL,
    },
    ResponseMode.BYSTANDER: {
        ResponseMode.BYSTANDER,
        ResponseMode.SAFETY,
        ResponseMode.NORMAL,
    },
}


@dataclass(frozen=True)
class TransitionCheck:
    """Outcome of a mode transition check, kept for audit."""

    legal: bool
    previous_mode: Optional[ResponseMode]
    proposed_mode: Optional[ResponseMode]

    @property
    def resulting_mode(self) -> Optional[ResponseMode]:
        """Mode the conversation is in after the check."""
        return self.proposed_mode if self.legal else self.previous_mode

    def to_dict(self) -> dict:
        return {
            "legal": self.legal,
            "previous_mode": self.previous_mode.value if self.previous_mode else None,
            "proposed_mode": self.proposed_mode.value if self.proposed_mode else None,
        }


def coerce_mode(value: Union[ResponseMode, str, None]) -> Optional[ResponseMode]:
    """Convert a caller-supplied mode to ResponseMode, or None if unknown."""
    if isinstance(value, ResponseMode):
        return value
    try:
        return ResponseMode(value)
    except ValueError:
        return None


def can_transition(from_mode: ResponseMode, to_mode: ResponseMode) -> bool:
    """Check if a mode transition is on the allow-list."""
    if to_mode == ResponseMode.SAFETY:
        return True
    return to_mode in LEGAL_TRANSITIONS.get(from_mode, set())


def get_valid_transitions(mode: ResponseMode) -> Set[ResponseMode]:
    """Get all modes reachable from a mode."""
    return LEGAL_TRANSITIONS.get(mode, set()) | {ResponseMode.SAFETY}


def check_transition(
    from_mode: Union[ResponseMode, str, None],
    to_mode: Union[ResponseMode, str, None],
) -> TransitionCheck:
    """
    Validate a proposed mode change.

    Never raises. Unknown mode strings are reported as an illegal
    transition; an unknown current mode may only enter SAFETY.

    Args:
        from_mode: Current conversation mode
        to_mode: Mode proposed for this turn

    Returns:
        TransitionCheck with legality and the previous mode
    """
    previous = coerce_mode(from_mode)
    proposed = coerce_mode(to_mode)

    if proposed is None:
        legal = False
    elif previous is None:
        legal = proposed == ResponseMode.SAFETY
    else:
        legal = can_transition(previous, proposed)

    if not legal:
        logger.warning(f"Illegal mode transition: {from_mode} -> {to_mode}")

    return TransitionCheck(legal=legal, previous_mode=previous, proposed_mode=proposed)
