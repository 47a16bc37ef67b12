"""Tests for the conversation mode state machine."""

import pytest

from companion.conversation.modes import (
    LEGAL_TRANSITIONS,
    ResponseMode,
    can_transition,
    check_transition,
    coerce_mode,
    get_valid_transitions,
)


class TestCanTransition:
    """Test the transition allow-list."""

    @pytest.mark.parametrize("mode", list(ResponseMode))
    def test_every_mode_may_enter_safety(self, mode):
        """Test SAFETY is reachable from every mode."""
        assert can_transition(mode, ResponseMode.SAFETY) is True

    def test_safety_cannot_return_to_normal(self):
        """Test SAFETY hands over only to waiting room or post-crisis."""
        assert can_transition(ResponseMode.SAFETY, ResponseMode.NORMAL) is False
        assert can_transition(ResponseMode.SAFETY, ResponseMode.GRIEF) is False
        assert can_transition(ResponseMode.SAFETY, ResponseMode.POST_CRISIS) is True
        assert can_transition(ResponseMode.SAFETY, ResponseMode.WAITING_ROOM) is True

    def test_lost_pet_to_scam(self):
        """Test a lost-pet conversation can turn into a scam warning."""
        assert can_transition(ResponseMode.LOST_PET, ResponseMode.SCAM) is True

    def test_grief_to_lost_pet_illegal(self):
        """Test grief does not jump to lost-pet mode."""
        assert can_transition(ResponseMode.GRIEF, ResponseMode.LOST_PET) is False

    def test_valid_transitions_from_safety(self):
        """Test the reachable set from SAFETY."""
        assert get_valid_transitions(ResponseMode.SAFETY) == {
            ResponseMode.SAFETY,
            ResponseMode.POST_CRISIS,
            ResponseMode.WAITING_ROOM,
        }

    def test_every_mode_in_table(self):
        """Test the table covers every mode."""
        assert set(LEGAL_TRANSITIONS) == set(ResponseMode)


class TestCheckTransition:
    """Test transition checks."""

    def test_illegal_keeps_previous_mode(self):
        """Test an illegal proposal leaves the conversation where it was."""
        check = check_transition("safety", "normal")

        assert check.legal is False
        assert check.resulting_mode == ResponseMode.SAFETY

    def test_legal(self):
        """Test a legal proposal is taken."""
        check = check_transition(ResponseMode.NORMAL, ResponseMode.LOST_PET)

        assert check.legal is True
        assert check.resulting_mode == ResponseMode.LOST_PET
        assert check.to_dict() == {
            "legal": True,
            "previous_mode": "normal",
            "proposed_mode": "lost_pet",
        }

    def test_unknown_proposed_mode(self):
        """Test an unknown proposed mode is illegal and never raises."""
        check = check_transition(ResponseMode.NORMAL, "dancing")

        assert check.legal is False
        assert check.resulting_mode == ResponseMode.NORMAL

    def test_unknown_previous_mode(self):
        """Test an unknown current mode may only enter SAFETY."""
        assert check_transition("dancing", "grief").legal is False
        assert check_transition("dancing", "safety").legal is True

    def test_coerce_mode(self):
        """Test mode coercion."""
        assert coerce_mode("grief") == ResponseMode.GRIEF
        assert coerce_mode(ResponseMode.SCAM) == ResponseMode.SCAM
        assert coerce_mode("dancing") is None
        assert coerce_mode(None) is None
