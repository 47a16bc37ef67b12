"""Tests for the priority resolver."""

import pytest

from companion.catalog import get_default_config
from companion.safety.categories import Category, ResponseAnalysis, SuicideRiskLevel
from companion.safety.guards import GuardSet
from companion.safety.markers import (
    NO_MATCH,
    ClassifierOutputs,
    DeathResult,
    MarkerClassifier,
    MarkerResult,
    SuicideRiskResult,
)
from companion.safety.normalizer import normalize_text
from companion.safety.resolver import PRIORITY_RULES, death_subtype, resolve

SELF_BLAME = "i'm a terrible person"

RESULT_FIELDS = (
    "dv", "mdd", "paralysis", "neurodivergent", "anticipatory", "emergency",
    "scam", "lost_pet", "found_pet", "guilt", "disenfranchised", "pediatric",
    "quality_of_life", "bystander",
)


def hit(*markers: str) -> MarkerResult:
    """A detected classifier result."""
    return MarkerResult(detected=True, markers=markers or ("marker",))


def make_outputs(**overrides) -> ClassifierOutputs:
    """Classifier outputs with nothing detected except the overrides."""
    values = {name: NO_MATCH for name in RESULT_FIELDS}
    values["suicide"] = SuicideRiskResult()
    values["death"] = DeathResult()
    values["mdd_self_blame"] = SELF_BLAME
    values.update(overrides)
    return ClassifierOutputs(**values)


def suicide(level: SuicideRiskLevel) -> SuicideRiskResult:
    return SuicideRiskResult(level=level, markers=("marker",))


def death(**flags) -> DeathResult:
    return DeathResult(detected=True, markers=("died",), **flags)


class TestPriorityOrder:
    """Pin each step of the cascade against the step below it."""

    def test_rule_order(self):
        """Test the rule table order."""
        assert [r.name for r in PRIORITY_RULES] == [
            "suicide_intent", "suicide_active", "suicide_passive", "dv_coercive_control",
            "mdd", "paralysis", "neurodivergent", "death", "anticipatory",
            "emergency", "scam", "found_pet", "lost_pet",
            "guilt", "disenfranchised", "pediatric", "quality_of_life",
            "general",
        ]

    # === Human Safety ===

    @pytest.mark.parametrize("level,category", [
        (SuicideRiskLevel.INTENT, Category.SUICIDE_INTENT),
        (SuicideRiskLevel.ACTIVE, Category.SUICIDE_ACTIVE),
        (SuicideRiskLevel.PASSIVE, Category.SUICIDE_PASSIVE),
    ])
    def test_suicide_outranks_dv(self, level, category):
        """Test every suicide tier outranks domestic violence."""
        analysis = resolve(make_outputs(suicide=suicide(level), dv=hit()))

        assert analysis.category == category
        assert analysis.requires_escalation is True
        assert analysis.suicide_risk_level == level

    def test_dv_outranks_mdd(self):
        """Test DV outranks depression markers."""
        analysis = resolve(make_outputs(dv=hit("abusive"), mdd=hit()))

        assert analysis.category == Category.DV_COERCIVE_CONTROL
        assert analysis.requires_escalation is True
        assert analysis.detected_markers == ("abusive",)

    # === Clinical Grief ===

    def test_mdd_outranks_death(self):
        """Test depression outranks grief."""
        analysis = resolve(make_outputs(mdd=hit("i'm worthless"), death=death()))

        assert analysis.category == Category.MDD
        assert analysis.requires_escalation is True

    def test_euthanasia_self_blame_defers_to_grief(self):
        """Test self-blame alone after euthanasia is grief, not depression."""
        analysis = resolve(make_outputs(mdd=hit(SELF_BLAME), death=death(is_euthanasia=True)))
        assert analysis.category == Category.DEATH_EUTHANASIA

    def test_euthanasia_with_other_mdd_markers(self):
        """Test additional depression markers keep MDD after euthanasia."""
        analysis = resolve(make_outputs(
            mdd=hit(SELF_BLAME, "i'm worthless"),
            death=death(is_euthanasia=True),
        ))
        assert analysis.category == Category.MDD

    def test_paralysis_outranks_neurodivergent(self):
        """Test paralysis outranks neurodivergent grief."""
        analysis = resolve(make_outputs(paralysis=hit(), neurodivergent=hit()))

        assert analysis.category == Category.PARALYSIS
        assert analysis.requires_escalation is False

    def test_neurodivergent_outranks_death(self):
        """Test neurodivergent grief outranks death subtypes."""
        analysis = resolve(make_outputs(neurodivergent=hit(), death=death()))
        assert analysis.category == Category.NEURODIVERGENT

    def test_death_outranks_anticipatory(self):
        """Test death outranks anticipatory grief."""
        analysis = resolve(make_outputs(death=death(), anticipatory=hit()))
        assert analysis.category == Category.DEATH_GENERAL

    def test_anticipatory_outranks_emergency(self):
        """Test anticipatory grief outranks the emergency category."""
        analysis = resolve(make_outputs(anticipatory=hit(), emergency=hit()))
        assert analysis.category == Category.ANTICIPATORY

    # === Practical ===

    def test_emergency_outranks_scam(self):
        """Test emergency outranks scam and escalates."""
        analysis = resolve(make_outputs(emergency=hit(), scam=hit()))

        assert analysis.category == Category.EMERGENCY
        assert analysis.requires_escalation is True

    def test_scam_outranks_found_pet(self):
        """Test scam outranks found pet."""
        analysis = resolve(make_outputs(scam=hit(), found_pet=hit()))
        assert analysis.category == Category.SCAM

    def test_found_pet_outranks_lost_pet(self):
        """Test found pet outranks lost pet."""
        analysis = resolve(make_outputs(found_pet=hit(), lost_pet=hit()))
        assert analysis.category == Category.FOUND_PET

    def test_lost_pet(self):
        """Test lost pet on its own."""
        analysis = resolve(make_outputs(lost_pet=hit("missing")))

        assert analysis.category == Category.LOST_PET
        assert analysis.detected_markers == ("missing",)

    def test_death_and_lost_is_death(self):
        """Test a message with death and lost markers is never lost_pet."""
        analysis = resolve(make_outputs(lost_pet=hit("lost"), death=death()))
        assert analysis.category == Category.DEATH_GENERAL

    def test_lost_pet_outranks_guilt(self):
        """Test lost pet outranks guilt."""
        analysis = resolve(make_outputs(lost_pet=hit(), guilt=hit()))
        assert analysis.category == Category.LOST_PET

    # === Cognitive / Validation ===

    def test_guilt_outranks_disenfranchised(self):
        """Test guilt outranks disenfranchised grief."""
        analysis = resolve(make_outputs(guilt=hit(), disenfranchised=hit()))
        assert analysis.category == Category.GUILT_CBT

    def test_disenfranchised_outranks_pediatric(self):
        """Test disenfranchised grief outranks pediatric."""
        analysis = resolve(make_outputs(disenfranchised=hit(), pediatric=hit()))
        assert analysis.category == Category.DISENFRANCHISED

    def test_pediatric_outranks_quality_of_life(self):
        """Test pediatric outranks quality of life."""
        analysis = resolve(make_outputs(pediatric=hit(), quality_of_life=hit()))
        assert analysis.category == Category.PEDIATRIC

    def test_quality_of_life(self):
        """Test quality of life on its own."""
        analysis = resolve(make_outputs(quality_of_life=hit()))
        assert analysis.category == Category.QUALITY_OF_LIFE

    def test_nothing_detected_is_general(self):
        """Test the last rule always matches."""
        analysis = resolve(make_outputs())

        assert analysis.category == Category.GENERAL
        assert analysis.requires_escalation is False
        assert analysis.detected_markers == ()


class TestDeathSubtype:
    """Test death subtype priority."""

    def test_traumatic_first(self):
        """Test traumatic outranks euthanasia."""
        outputs = make_outputs(death=death(is_traumatic=True, is_euthanasia=True))
        assert death_subtype(outputs) == Category.DEATH_TRAUMATIC

    def test_euthanasia_outranks_found_deceased(self):
        """Test euthanasia outranks found deceased."""
        outputs = make_outputs(death=death(is_euthanasia=True, is_found_deceased=True))
        assert death_subtype(outputs) == Category.DEATH_EUTHANASIA

    def test_found_deceased(self):
        """Test found deceased outranks general death."""
        outputs = make_outputs(death=death(is_found_deceased=True))
        assert death_subtype(outputs) == Category.DEATH_FOUND_DECEASED

    def test_general(self):
        """Test plain death is general."""
        assert death_subtype(make_outputs(death=death())) == Category.DEATH_GENERAL


class TestResponseAnalysis:
    """Test analysis record invariants."""

    def test_suicide_risk_forces_escalation(self):
        """Test any suicide risk level escalates."""
        analysis = ResponseAnalysis(
            category=Category.GENERAL,
            suicide_risk_level=SuicideRiskLevel.PASSIVE,
        )
        assert analysis.requires_escalation is True

    def test_to_dict(self):
        """Test serialization."""
        analysis = ResponseAnalysis(category=Category.SCAM, detected_markers=("zelle",))

        assert analysis.to_dict() == {
            "category": "scam",
            "suicide_risk_level": "none",
            "requires_escalation": False,
            "detected_markers": ["zelle"],
        }


class TestResolveMessages:
    """Resolve real messages end to end through the classifiers."""

    @pytest.fixture
    def classify(self):
        config = get_default_config()
        classifier = MarkerClassifier(config, GuardSet.default(config.markers.idioms))
        return lambda message: resolve(classifier.classify(normalize_text(message)))

    @pytest.mark.parametrize("message,category", [
        ("I have pills and I'm going to take them tonight", Category.SUICIDE_INTENT),
        ("My dog died and I want to join her, I have pills", Category.SUICIDE_INTENT),
        ("I want to die", Category.SUICIDE_ACTIVE),
        ("I don't want to die but I miss my dog", Category.GENERAL),
        ("I do not want to kill myself", Category.GENERAL),
        ("I never want to end it", Category.GENERAL),
        ("My husband controls my money and I feel trapped", Category.DV_COERCIVE_CONTROL),
        ("My cat died and I'm worthless, I destroy everything", Category.MDD),
        ("I'm a terrible person for putting her down, she died in my arms", Category.DEATH_EUTHANASIA),
        ("I lost my best friend, he died yesterday", Category.DEATH_GENERAL),
        ("I found my dog dead", Category.DEATH_FOUND_DECEASED),
        ("MY DOG WAS HIT BY A CAR AND KILLED", Category.DEATH_TRAUMATIC),
        ("My dog is dying and the vet says not long", Category.ANTICIPATORY),
        ("The vet says her quality of life is declining", Category.QUALITY_OF_LIFE),
        ("The finder wants a shipping fee paid with a gift card", Category.SCAM),
        ("My dog Max is missing", Category.LOST_PET),
        ("My dog is sick", Category.GENERAL),
        ("My dog is choking and not breathing, I put him down on the floor", Category.EMERGENCY),
        ("I can't imagine life without her, I want to die", Category.SUICIDE_ACTIVE),
        ("i dont want to live anymore", Category.SUICIDE_ACTIVE),
        ("I was scared to death", Category.GENERAL),
        ("", Category.GENERAL),
    ])
    def test_message_category(self, classify, message, category):
        """Test real messages resolve to the expected category."""
        assert classify(message).category == category

    def test_put_down_without_death_is_not_grief(self, classify):
        """Test setting something down never reads as euthanasia grief."""
        analysis = classify("I put my dog's bowl down and he won't eat")

        assert analysis.category != Category.DEATH_EUTHANASIA
        assert analysis.category.value.startswith("death") is False
