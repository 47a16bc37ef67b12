"""Build the free-form model prompt for turns without a vetted template."""

import logging
from typing import Optional, Sequence

from companion.conversation.facts import SimpleFacts
from companion.conversation.ledger import AntiRepetition
from companion.conversation.modes import ResponseMode
from companion.conversation.questions import RequestedInfo

logger = logging.getLogger(__name__)

MAX_RESPONSE_CHARS = 200
MAX_HISTORY_CONTENT_CHARS = 500

BANNED_CONTENT = (
    "Do NOT claim professional credentials (therapist, counselor, doctor)",
    "Do NOT say you called 911 or contacted anyone on the user's behalf",
    "Do NOT use platitudes such as \"time heals\" or \"everything happens for a reason\"",
    "Do NOT minimize with \"others have it worse\" or \"at least...\"",
    "Do NOT ask for the user's home address",
)


class PromptBuilder:
    """
    Builds the instruction block for a downstream response writer.

    The prompt carries known facts and do-not-ask rules so the writer
    cannot re-ask for something the user already said.
    """

    def __init__(self, max_history_turns: int = 10):
        """Initialize prompt builder.

        Args:
            max_history_turns: Maximum conversation messages to include
        """
        self.max_history_turns = max_history_turns

    def build(
        self,
        facts: SimpleFacts,
        requested_info: RequestedInfo,
        anti_repetition: AntiRepetition,
        mode: ResponseMode,
        history: Sequence[dict] = (),
        user_message: Optional[str] = None,
    ) -> str:
        """
        Build the model prompt.

        Args:
            facts: Merged session facts
            requested_info: Questions planned for this turn
            anti_repetition: Do-not-ask lists
            mode: Current conversation mode
            history: Previous messages as {"role", "content"} dicts
            user_message: The message being answered

        Returns:
            Prompt text
        """
        lines = []

        known = facts.to_dict()
        known_text = ", ".join(f"{k}: {v}" for k, v in known.items())
        lines.append(f"KNOWN FACTS: {known_text or 'None'}")
        lines.append("")

        if anti_repetition.do_not_ask_facts:
            lines.append(
                "RULE: Do NOT ask about these facts (already known): "
                + ", ".join(anti_repetition.do_not_ask_facts)
            )
        if anti_repetition.do_not_ask_intents:
            lines.append(
                "RULE: Do NOT ask these questions again: "
                + ", ".join(i.value for i in anti_repetition.do_not_ask_intents)
            )

        lines.append(f"RULE: Ask at most {requested_info.question_count} question(s) this turn")
        if requested_info.questions:
            lines.append(
                "RULE: If you ask, ask about: "
                + ", ".join(q.intent.value for q in requested_info.questions)
            )
        lines.append(f"RULE: Keep the response under {MAX_RESPONSE_CHARS} characters")
        lines.append("")

        lines.append("BANNED CONTENT:")
        for rule in BANNED_CONTENT:
            lines.append(f"- {rule}")
        lines.append("")

        lines.append(f"MODE: {mode.value}")
        lines.append("")

        history_lines = self._format_history(history, user_message)
        if history_lines:
            lines.append("CONVERSATION HISTORY:")
            lines.extend(history_lines)
            lines.append("")

        name_hint = f" Use {facts.pet_name}'s name." if facts.pet_name else ""
        lines.append(
            "Respond with empathy. If you need information, ask ONE question at a time."
            + name_hint
        )
        return "\n".join(lines)

    def _format_history(self, history: Sequence[dict], user_message: Optional[str]) -> list[str]:
        """Format the most recent messages, oldest first."""
        messages = list(history)
        if user_message:
            messages.append({"role": "user", "content": user_message})

        lines = []
        for turn in messages[-self.max_history_turns:] if self.max_history_turns else []:
            role = str(turn.get("role", "unknown")).upper()
            content = str(turn.get("content", ""))[:MAX_HISTORY_CONTENT_CHARS]
            lines.append(f"{role}: {content}")
        return lines


def build_model_prompt(
    facts: SimpleFacts,
    requested_info: RequestedInfo,
    anti_repetition: AntiRepetition,
    mode: ResponseMode,
    history: Sequence[dict] = (),
    user_message: Optional[str] = None,
    max_history_turns: int = 10,
) -> str:
    """Convenience wrapper around PromptBuilder.build()."""
    builder = PromptBuilder(max_history_turns=max_history_turns)
    return builder.build(facts, requested_info, anti_repetition, mode, history, user_message)
