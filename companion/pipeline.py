"""
Companion Pipeline Orchestrator

Single entry point for one conversation turn. Takes the user's message
plus the state threaded from the previous turn and returns one structured
result: category, tier, mode, UI directives, questions allowed, updated
state and either a vetted response or a prompt for a response writer.

Pipeline order:
1. Normalize text
2. Run every marker classifier (guards applied to suicide/DV markers)
3. Resolve one category by priority
4. Score and tier (bystander reports raised to HIGH)
5. Update volatility, facts and intent ledger
6. Determine mode and check the transition is legal
7. Build UI directives and plan questions
8. Render a template or build a model prompt

The pipeline performs no I/O and reads no clock: identical input yields
an identical output. It never raises; internal errors produce a safe
fallback output that keeps the caller's state.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Union

from companion.catalog import CompanionConfig, CategoryPolicy, get_default_config
from companion.config import Settings, get_settings
from companion.conversation.facts import (
    EMPTY_FACTS,
    SimpleFacts,
    extract_bystander_relation,
    extract_facts,
    merge_facts,
)
from companion.conversation.ledger import (
    EMPTY_LEDGER,
    AntiRepetition,
    IntentLedger,
    anti_repetition_context,
    update_from_facts,
)
from companion.conversation.modes import ResponseMode, check_transition, coerce_mode
from companion.conversation.questions import RequestedInfo, plan_questions
from companion.conversation.volatility import EMPTY_TRACKER, VolatilityTracker
from companion.conversation.volatility import update as update_volatility
from companion.prompt import PromptBuilder
from companion.safety.categories import Category, ResponseAnalysis, RiskTier, SuicideRiskLevel
from companion.safety.hotlines import Region, detect_region, lookup_hotline
from companion.safety.markers import ClassifierOutputs, MarkerClassifier
from companion.safety.normalizer import contains_phrase, normalize_text
from companion.safety.resolver import resolve
from companion.safety.templates import FALLBACK_KEY, RenderResult, TemplateResolver

logger = logging.getLogger(__name__)

# Categories that put the conversation into SAFETY mode
SAFETY_CATEGORIES = frozenset({
    Category.SUICIDE_INTENT,
    Category.SUICIDE_ACTIVE,
    Category.SUICIDE_PASSIVE,
    Category.DV_COERCIVE_CONTROL,
})

# Modes a waiting-room trigger may hand over from
WAITING_ROOM_SOURCES = frozenset({
    ResponseMode.SAFETY,
    ResponseMode.PET_EMERGENCY,
    ResponseMode.LOST_PET,
    ResponseMode.WAITING_ROOM,
})

# "i'm 14", "i am 9"
MINOR_AGE_RE = re.compile(r"\bi(?:'?m| am) (?:1[0-7]|[5-9])\b")

PIPELINE_ERROR_GUARD = "pipeline_error"


# ==================================
# Input / Output
# ==================================

@dataclass(frozen=True)
class PipelineInput:
    """One turn's message plus the state returned by the previous turn."""

    user_message: str
    facts: SimpleFacts = EMPTY_FACTS
    ledger: IntentLedger = EMPTY_LEDGER
    tracker: VolatilityTracker = EMPTY_TRACKER
    current_mode: Union[ResponseMode, str] = ResponseMode.NORMAL
    crisis_confirmed: bool = False
    is_post_crisis: bool = False
    turn_index: Optional[int] = None
    region: Optional[Region] = None
    message_history: Sequence[dict] = ()  # {"role": ..., "content": ...}


@dataclass(frozen=True)
class UIDirectives:
    """What the client should show alongside the response."""

    show_low_cognition: bool = False
    show_hotline_cta: bool = False
    hotline_number: Optional[str] = None
    hotline_type: Optional[str] = None  # dv, crisis_988, pet_poison
    show_grounding_tool: Optional[str] = None  # box_breathing
    show_scam_warning: bool = False
    show_waiting_room: bool = False
    show_visual_aid: Optional[str] = None  # heimlich, cpr, gum_color
    show_takeaway_card: Optional[str] = None  # vet_er, lost_pet_flyer, safety_plan
    requires_confirmation: bool = False
    confirmation_paraphrase: Optional[str] = None
    enter_post_crisis: bool = False

    def to_dict(self) -> dict:
        return {
            "show_low_cognition": self.show_low_cognition,
            "show_hotline_cta": self.show_hotline_cta,
            "hotline_number": self.hotline_number,
            "hotline_type": self.hotline_type,
            "show_grounding_tool": self.show_grounding_tool,
            "show_scam_warning": self.show_scam_warning,
            "show_waiting_room": self.show_waiting_room,
            "show_visual_aid": self.show_visual_aid,
            "show_takeaway_card": self.show_takeaway_card,
            "requires_confirmation": self.requires_confirmation,
            "confirmation_paraphrase": self.confirmation_paraphrase,
            "enter_post_crisis": self.enter_post_crisis,
        }


@dataclass(frozen=True)
class PipelineOutput:
    """Complete result of one turn."""

    # Assessment
    tier: RiskTier
    score: float
    analysis: ResponseAnalysis

    # Mode
    mode: ResponseMode
    previous_mode: ResponseMode
    mode_transition_legal: bool

    # Client guidance
    ui: UIDirectives
    requested_info: RequestedInfo
    anti_repetition: AntiRepetition

    # State for the next turn
    facts: SimpleFacts
    facts_extracted: SimpleFacts
    tracker: VolatilityTracker
    ledger: IntentLedger
    region: Region

    guards_triggered: tuple[str, ...] = field(default_factory=tuple)

    # Response: a vetted template, or a prompt for a response writer
    response_template: Optional[str] = None
    template_key: Optional[str] = None
    requires_model_call: bool = False
    prompt_for_model: Optional[str] = None

    requires_human_handoff: bool = False
    is_bystander: bool = False

    @property
    def category(self) -> Category:
        return self.analysis.category

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "tier": self.tier.value,
            "score": self.score,
            "analysis": self.analysis.to_dict(),
            "mode": self.mode.value,
            "previous_mode": self.previous_mode.value,
            "mode_transition_legal": self.mode_transition_legal,
            "ui": self.ui.to_dict(),
            "requested_info": self.requested_info.to_dict(),
            "anti_repetition": self.anti_repetition.to_dict(),
            "facts": self.facts.to_dict(),
            "facts_extracted": self.facts_extracted.to_dict(),
            "tracker": self.tracker.to_dict(),
            "ledger": self.ledger.to_dict(),
            "region": self.region.value,
            "guards_triggered": list(self.guards_triggered),
            "response_template": self.response_template,
            "template_key": self.template_key,
            "requires_model_call": self.requires_model_call,
            "prompt_for_model": self.prompt_for_model,
            "requires_human_handoff": self.requires_human_handoff,
            "is_bystander": self.is_bystander,
        }


# ==================================
# Pipeline
# ==================================

class CompanionPipeline:
    """
    Per-turn crisis triage and conversation pipeline.

    Usage:
        pipeline = CompanionPipeline(build_default_config(), get_settings())

        output = pipeline.process(PipelineInput(user_message="My dog Max is missing"))
        send(output.response_template or write_reply(output.prompt_for_model))

        # Next turn: thread the returned state back in
        output = pipeline.process(PipelineInput(
            user_message="He's a husky",
            facts=output.facts,
            ledger=output.ledger,
            tracker=output.tracker,
            current_mode=output.mode,
        ))
    """

    def __init__(
        self,
        config: Optional[CompanionConfig] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Clinical configuration (defaults to the shipped catalog)
            settings: Process tunables (defaults to environment settings)
        """
        self.config = config or get_default_config()
        self.settings = settings or get_settings()

        self.classifier = MarkerClassifier(self.config)
        self.templates = TemplateResolver(self.config)
        self.prompt_builder = PromptBuilder(max_history_turns=self.settings.prompt_history_turns)
        self.default_region = Region(self.settings.default_region)

        logger.info(
            f"CompanionPipeline initialized: config v{self.config.version}, "
            f"default_region={self.default_region.value}"
        )

    def process(self, pipeline_input: PipelineInput) -> PipelineOutput:
        """
        Process one conversation turn.

        Args:
            pipeline_input: Message and state from the previous turn

        Returns:
            PipelineOutput; a safe fallback output if anything fails
        """
        try:
            return self._process(pipeline_input)
        except Exception as e:
            logger.error(f"Companion pipeline error: {e}", exc_info=True)
            return self.fallback_output(pipeline_input)

    def _process(self, inp: PipelineInput) -> PipelineOutput:
        current_mode = coerce_mode(inp.current_mode)
        if current_mode is None:
            logger.warning(f"Unknown current mode {inp.current_mode!r}, treating as normal")
            current_mode = ResponseMode.NORMAL

        turn_index = inp.turn_index if inp.turn_index is not None else inp.tracker.turn_count

        # 1-3. Classify and resolve
        text = normalize_text(inp.user_message)
        outputs = self.classifier.classify(text)
        analysis = resolve(outputs)
        policy = self.config.policy_for(analysis.category)

        # 4. Score and tier
        is_bystander = self._is_bystander(outputs, analysis)
        score = float(policy.score)
        if is_bystander:
            score = max(score, float(self.config.tier_thresholds.high))
        tier = self.config.tier_thresholds.tier_for(score)

        # 5. Cross-turn state
        tracker = update_volatility(
            inp.tracker,
            score,
            tier,
            turn_index,
            max_history=self.settings.volatility_history_size,
            trend_window=self.settings.volatility_trend_window,
            material_delta=self.settings.volatility_material_delta,
        )

        extracted = extract_facts(inp.user_message)
        if is_bystander:
            extracted = replace(extracted, bystander_relation=extract_bystander_relation(text))
        if analysis.category in SAFETY_CATEGORIES:
            extracted = replace(extracted, crisis_type=analysis.category.value)
        facts = merge_facts(inp.facts, extracted)
        ledger = update_from_facts(inp.ledger, extracted)

        region = inp.region or self._detect_region(text, inp.message_history)

        # 6. Mode
        waiting = self._has_any(text, self.config.markers.waiting_room)
        proposed = self.determine_mode(
            analysis, policy, is_bystander, waiting, current_mode, facts, inp.is_post_crisis
        )
        transition = check_transition(current_mode, proposed)
        mode = transition.resulting_mode or current_mode

        # 7. UI and questions
        ui = self.build_ui_directives(analysis, tier, mode, region, text, facts, inp.crisis_confirmed)
        requested_info, ledger = plan_questions(
            mode,
            tier,
            facts,
            ledger,
            turn_index,
            max_questions=self.settings.max_questions_per_turn,
            max_questions_impaired=self.settings.max_questions_impaired,
            cooldown_turns=self.settings.question_cooldown_turns,
        )
        anti_repetition = anti_repetition_context(facts, ledger)

        # 8. Response
        guards_triggered = list(outputs.guards_triggered)
        rendered: Optional[RenderResult] = None
        prompt: Optional[str] = None

        template_key = self.select_template(analysis, mode, is_bystander, text)
        if template_key is not None:
            rendered = self.templates.render(template_key, region)
            guards_triggered.extend(rendered.guards_triggered)
        else:
            prompt = self.prompt_builder.build(
                facts, requested_info, anti_repetition, mode,
                history=inp.message_history, user_message=inp.user_message,
            )

        logger.info(
            f"Turn processed: category={analysis.category.value}, tier={tier.value}, "
            f"mode={mode.value}, legal={transition.legal}, guards={len(guards_triggered)}"
        )

        return PipelineOutput(
            tier=tier,
            score=score,
            analysis=analysis,
            mode=mode,
            previous_mode=current_mode,
            mode_transition_legal=transition.legal,
            ui=ui,
            requested_info=requested_info,
            anti_repetition=anti_repetition,
            facts=facts,
            facts_extracted=extracted,
            tracker=tracker,
            ledger=ledger,
            region=region,
            guards_triggered=tuple(guards_triggered),
            response_template=rendered.text if rendered else None,
            template_key=rendered.template_key if rendered else None,
            requires_model_call=prompt is not None,
            prompt_for_model=prompt,
            requires_human_handoff=tier == RiskTier.CRITICAL,
            is_bystander=is_bystander,
        )

    # ==================================
    # Decisions
    # ==================================

    @staticmethod
    def _has_any(text: str, phrases: Sequence[str]) -> bool:
        return any(contains_phrase(text, p) for p in phrases)

    @staticmethod
    def _is_bystander(outputs: ClassifierOutputs, analysis: ResponseAnalysis) -> bool:
        """Someone else is at risk and the speaker is not."""
        if analysis.suicide_risk_level != SuicideRiskLevel.NONE:
            return False
        if analysis.category == Category.DV_COERCIVE_CONTROL:
            return False
        return outputs.is_bystander_report

    def _detect_region(self, text: str, history: Sequence[dict]) -> Region:
        texts = [
            normalize_text(m.get("content", ""))
            for m in history
            if m.get("role", "user") == "user"
        ]
        texts.append(text)
        return detect_region(texts, self.config.region_signals, default=self.default_region)

    def is_minor_reporter(self, text: str) -> bool:
        return self._has_any(text, self.config.markers.minor_reporter) or bool(
            MINOR_AGE_RE.search(text)
        )

    def determine_mode(
        self,
        analysis: ResponseAnalysis,
        policy: CategoryPolicy,
        is_bystander: bool,
        waiting: bool,
        current_mode: ResponseMode,
        facts: SimpleFacts,
        is_post_crisis: bool,
    ) -> ResponseMode:
        """
        Propose this turn's mode, before the legality check.

        Order: human safety, bystander, pet emergency, waiting room,
        post-crisis, the category's own mode, else stay where we are.
        """
        category = analysis.category

        if category in SAFETY_CATEGORIES:
            return ResponseMode.SAFETY
        if is_bystander:
            return ResponseMode.BYSTANDER
        if category == Category.EMERGENCY:
            return ResponseMode.PET_EMERGENCY
        if waiting and current_mode in WAITING_ROOM_SOURCES:
            return ResponseMode.WAITING_ROOM
        if (
            is_post_crisis
            and facts.user_confirmed_safe
            and current_mode in (ResponseMode.SAFETY, ResponseMode.POST_CRISIS)
        ):
            return ResponseMode.POST_CRISIS
        if policy.mode is not None:
            return policy.mode
        return current_mode

    def build_ui_directives(
        self,
        analysis: ResponseAnalysis,
        tier: RiskTier,
        mode: ResponseMode,
        region: Region,
        text: str,
        facts: SimpleFacts,
        crisis_confirmed: bool,
    ) -> UIDirectives:
        """Client directives for the turn."""
        markers = self.config.markers

        hotline_type = None
        hotline_number = None
        if mode != ResponseMode.SCAM and (
            tier.is_crisis or mode in (ResponseMode.PET_EMERGENCY, ResponseMode.SAFETY)
        ):
            if analysis.category == Category.DV_COERCIVE_CONTROL:
                hotline_type, key = "dv", "domestic_violence"
            elif mode == ResponseMode.PET_EMERGENCY:
                hotline_type, key = "pet_poison", "pet_poison"
            else:
                hotline_type, key = "crisis_988", "crisis_988"
            hotline_number = lookup_hotline(self.config.hotlines, region, key)
            if hotline_number is None:
                hotline_type = None

        grounding = None
        if tier != RiskTier.CRITICAL and self._has_any(text, markers.grounding):
            grounding = "box_breathing"

        visual_aid = None
        if mode == ResponseMode.PET_EMERGENCY:
            for aid, triggers in markers.visual_aids.items():
                if self._has_any(text, triggers):
                    visual_aid = aid
                    break

        takeaway = None
        if mode == ResponseMode.PET_EMERGENCY and facts.pet_name:
            takeaway = "vet_er"
        elif mode == ResponseMode.LOST_PET and facts.pet_name:
            takeaway = "lost_pet_flyer"
        elif mode in (ResponseMode.SAFETY, ResponseMode.POST_CRISIS):
            takeaway = "safety_plan"

        requires_confirmation = (
            mode == ResponseMode.SAFETY
            and tier == RiskTier.CRITICAL
            and not crisis_confirmed
            and not facts.user_confirmed_safe
        )

        return UIDirectives(
            show_low_cognition=tier.is_crisis,
            show_hotline_cta=hotline_number is not None,
            hotline_number=hotline_number,
            hotline_type=hotline_type,
            show_grounding_tool=grounding,
            show_scam_warning=mode == ResponseMode.SCAM,
            show_waiting_room=mode == ResponseMode.WAITING_ROOM,
            show_visual_aid=visual_aid,
            show_takeaway_card=takeaway,
            requires_confirmation=requires_confirmation,
            confirmation_paraphrase=(
                self.config.confirmation_paraphrase(analysis.category)
                if requires_confirmation else None
            ),
            enter_post_crisis=facts.user_confirmed_safe is True and tier == RiskTier.STANDARD,
        )

    def select_template(
        self,
        analysis: ResponseAnalysis,
        mode: ResponseMode,
        is_bystander: bool,
        text: str,
    ) -> Optional[Union[Category, str]]:
        """
        Template key for the turn, or None when a response writer is needed.

        Human-safety categories always get their vetted template. Any
        other message while in SAFETY mode (grief, a lost pet, small talk)
        gets the safe fallback so the crisis line stays in the reply.
        """
        category = analysis.category

        if category in SAFETY_CATEGORIES:
            return category
        if is_bystander:
            return "bystander_minor" if self.is_minor_reporter(text) else "bystander"
        if mode == ResponseMode.SAFETY:
            return FALLBACK_KEY
        if mode == ResponseMode.WAITING_ROOM:
            return "waiting_room"
        if category == Category.GENERAL:
            if mode == ResponseMode.POST_CRISIS:
                return "post_crisis"
            if not text:
                return Category.GENERAL
            return None
        return category

    # ==================================
    # Fallback
    # ==================================

    def fallback_output(self, inp: PipelineInput) -> PipelineOutput:
        """
        Safe output used when processing fails.

        Keeps the caller's facts, ledger, tracker and mode, shows the
        crisis line and sends the fallback template.
        """
        mode = coerce_mode(inp.current_mode) or ResponseMode.NORMAL
        region = inp.region or self.default_region
        tier = inp.tracker.latest.tier if inp.tracker.latest else RiskTier.STANDARD
        rendered = self.templates.fallback(region, (PIPELINE_ERROR_GUARD,))

        return PipelineOutput(
            tier=tier,
            score=inp.tracker.latest.score if inp.tracker.latest else 0.0,
            analysis=ResponseAnalysis(category=Category.GENERAL),
            mode=mode,
            previous_mode=mode,
            mode_transition_legal=True,
            ui=UIDirectives(
                show_low_cognition=tier.is_crisis,
                show_hotline_cta=True,
                hotline_number=lookup_hotline(self.config.hotlines, region, "crisis_988"),
                hotline_type="crisis_988",
            ),
            requested_info=RequestedInfo(max_questions=0),
            anti_repetition=anti_repetition_context(inp.facts, inp.ledger),
            facts=inp.facts,
            facts_extracted=EMPTY_FACTS,
            tracker=inp.tracker,
            ledger=inp.ledger,
            region=region,
            guards_triggered=rendered.guards_triggered,
            response_template=rendered.text,
            template_key=rendered.template_key,
            requires_human_handoff=tier == RiskTier.CRITICAL,
        )


# ==================================
# Convenience Functions
# ==================================

_pipeline: Optional[CompanionPipeline] = None


def get_pipeline() -> CompanionPipeline:
    """
    Get the shared pipeline built from the default config and settings.

    Returns:
        CompanionPipeline singleton
    """
    global _pipeline
    if _pipeline is None:
        _pipeline = CompanionPipeline()
    return _pipeline


def process_turn(user_message: str, **state) -> PipelineOutput:
    """
    Convenience function to process one turn with the shared pipeline.

    Args:
        user_message: User's message
        **state: Any other PipelineInput field (facts, ledger, tracker, ...)

    Returns:
        PipelineOutput
    """
    return get_pipeline().process(PipelineInput(user_message=user_message, **state))
