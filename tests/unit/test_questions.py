"""Tests for question planning."""

from companion.conversation.facts import EMPTY_FACTS, SimpleFacts
from companion.conversation.ledger import EMPTY_LEDGER, QuestionIntent, record_asked
from companion.conversation.modes import ResponseMode
from companion.conversation.questions import plan_questions
from companion.safety.categories import RiskTier


class TestPlanQuestions:
    """Test per-turn question planning."""

    def test_crisis_asks_only_safety(self):
        """Test a crisis tier asks at most one question: are you safe."""
        info, ledger = plan_questions(
            ResponseMode.SAFETY, RiskTier.CRITICAL, EMPTY_FACTS, EMPTY_LEDGER, turn_index=0,
        )

        assert info.question_intents == [QuestionIntent.ASK_SAFE_NOW]
        assert info.max_questions == 1
        assert ledger.last_asked_turn(QuestionIntent.ASK_SAFE_NOW) == 0

    def test_crisis_cap_never_above_one(self):
        """Test the impaired cap is clamped to one question."""
        info, _ = plan_questions(
            ResponseMode.LOST_PET, RiskTier.HIGH, EMPTY_FACTS, EMPTY_LEDGER,
            turn_index=0, max_questions_impaired=3,
        )

        assert info.question_count <= 1
        assert info.max_questions == 1

    def test_lost_pet_first_turn(self):
        """Test species and name come first for a lost pet."""
        info, _ = plan_questions(
            ResponseMode.LOST_PET, RiskTier.STANDARD, EMPTY_FACTS, EMPTY_LEDGER, turn_index=0,
        )

        assert info.question_intents == [
            QuestionIntent.ASK_PET_SPECIES,
            QuestionIntent.ASK_PET_NAME,
        ]
        assert info.requested_facts == ["pet_species", "pet_name"]

    def test_lost_pet_known_basics(self):
        """Test known species and name move on to location and colour."""
        facts = SimpleFacts(pet_name="Max", pet_species="dog")
        info, _ = plan_questions(
            ResponseMode.LOST_PET, RiskTier.STANDARD, facts, EMPTY_LEDGER, turn_index=0,
        )

        assert info.question_intents == [
            QuestionIntent.ASK_LAST_SEEN_LOCATION,
            QuestionIntent.ASK_PET_COLOR,
        ]

    def test_cooldown_skips_recent_question(self):
        """Test a question asked within the cooldown is skipped."""
        facts = SimpleFacts(pet_name="Max", pet_species="dog")
        ledger = record_asked(EMPTY_LEDGER, QuestionIntent.ASK_LAST_SEEN_LOCATION, turn_index=0)

        info, _ = plan_questions(
            ResponseMode.LOST_PET, RiskTier.STANDARD, facts, ledger, turn_index=2,
        )

        assert info.question_intents == [QuestionIntent.ASK_PET_COLOR]

    def test_pet_emergency(self):
        """Test an emergency asks about symptoms until they are known."""
        first, _ = plan_questions(
            ResponseMode.PET_EMERGENCY, RiskTier.STANDARD, EMPTY_FACTS, EMPTY_LEDGER, turn_index=0,
        )
        known, _ = plan_questions(
            ResponseMode.PET_EMERGENCY, RiskTier.STANDARD, SimpleFacts(symptom="choking"),
            EMPTY_LEDGER, turn_index=0,
        )

        assert first.question_intents == [QuestionIntent.ASK_SYMPTOM]
        assert known.question_intents == []

    def test_grief_asks_nothing(self):
        """Test grief mode plans no questions."""
        info, ledger = plan_questions(
            ResponseMode.GRIEF, RiskTier.STANDARD, EMPTY_FACTS, EMPTY_LEDGER, turn_index=0,
        )

        assert info.question_count == 0
        assert ledger is EMPTY_LEDGER

    def test_zero_cap(self):
        """Test a zero question cap plans nothing."""
        info, _ = plan_questions(
            ResponseMode.LOST_PET, RiskTier.STANDARD, EMPTY_FACTS, EMPTY_LEDGER,
            turn_index=0, max_questions=0,
        )
        assert info.question_count == 0

    def test_safe_user_not_asked_again(self):
        """Test a user who confirmed safety is not asked again."""
        info, _ = plan_questions(
            ResponseMode.SAFETY, RiskTier.CRITICAL, SimpleFacts(user_confirmed_safe=True),
            EMPTY_LEDGER, turn_index=0,
        )
        assert info.question_count == 0

    def test_pet_emergency_crisis_asks_symptom(self):
        """Test a critical pet emergency asks about the pet, not the user."""
        info, _ = plan_questions(
            ResponseMode.PET_EMERGENCY, RiskTier.CRITICAL, EMPTY_FACTS, EMPTY_LEDGER, turn_index=0,
        )

        assert info.question_intents == [QuestionIntent.ASK_SYMPTOM]
        assert info.max_questions == 1
