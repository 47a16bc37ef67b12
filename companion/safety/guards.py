"""
Disambiguation Guards

Suppress crisis-marker matches that do not describe the speaker's own
risk: negated statements ("I don't want to die"), someone else's words
("my friend said 'I want to die'", "he wants to end it all"), hypothetical
framing ("what if someone wanted to end it all") and idioms ("scared to
death").

Each guard answers one question: is this marker occurrence inside a span
the guard covers? Suppression is decided per marker, never per message,
and a marker with any uncovered occurrence is kept. When in doubt, do
not suppress.

The regex guards are heuristics. They sit behind DisambiguationGuard so a
tokenizer-based implementation can replace them without touching the
priority resolver.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from companion.safety.normalizer import phrase_pattern

logger = logging.getLogger(__name__)


class GuardKind(str, Enum):
    """Names reported in guards_triggered."""

    NEGATION = "negation"
    ATTRIBUTION = "attribution"
    HYPOTHETICAL = "hypothetical"
    IDIOM = "idiom"


class MarkerTier(str, Enum):
    """How much suppression a marker tolerates."""

    INTENT = "intent"       # Only negation/attribution may suppress
    ACTIVE = "active"
    PASSIVE = "passive"
    DANGER = "danger"       # Domestic violence: only negation may suppress
    CONTEXT = "context"     # Death/anticipatory words: idioms only


# Guards allowed to suppress each tier
TIER_GUARDS: dict[MarkerTier, frozenset[GuardKind]] = {
    MarkerTier.INTENT: frozenset({GuardKind.NEGATION, GuardKind.ATTRIBUTION}),
    MarkerTier.ACTIVE: frozenset({
        GuardKind.NEGATION, GuardKind.ATTRIBUTION, GuardKind.HYPOTHETICAL, GuardKind.IDIOM,
    }),
    MarkerTier.PASSIVE: frozenset({
        GuardKind.NEGATION, GuardKind.ATTRIBUTION, GuardKind.HYPOTHETICAL, GuardKind.IDIOM,
    }),
    MarkerTier.DANGER: frozenset({GuardKind.NEGATION}),
    MarkerTier.CONTEXT: frozenset({GuardKind.IDIOM}),
}

# Sentence boundary used to bound look-behind windows
_SENTENCE_BREAK_RE = re.compile(r"[.!?;\n]")

# First-person subject, with or without the apostrophe
_FIRST_PERSON_RE = re.compile(r"\b(?:i|i'?m|i'?ve|i'll|i'?d|me|myself)\b")


def _speaker_resumes(between: str) -> bool:
    """A clause break or first-person subject after a framing phrase ends its reach."""
    return "," in between or bool(_FIRST_PERSON_RE.search(between))


def _sentence_prefix(text: str, start: int) -> str:
    """Text from the start of the sentence containing `start` up to `start`."""
    prefix = text[:start]
    breaks = list(_SENTENCE_BREAK_RE.finditer(prefix))
    if breaks:
        prefix = prefix[breaks[-1].end():]
    return prefix


def find_occurrences(text: str, phrase: str) -> list[tuple[int, int]]:
    """All (start, end) spans of a phrase in text, overlapping allowed.

    Uses the same apostrophe-tolerant matching as the marker classifiers,
    so "dont want to live" yields a span for "don't want to live".
    """
    spans = []
    if not phrase:
        return spans
    pattern = phrase_pattern(phrase)
    match = pattern.search(text)
    while match:
        spans.append(match.span())
        match = pattern.search(text, match.start() + 1)
    return spans


# ==================================
# Guard Interface
# ==================================

class DisambiguationGuard(ABC):
    """A rule deciding whether a marker occurrence is outside the speaker's own voice."""

    kind: GuardKind

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def covers(self, text: str, start: int, end: int) -> bool:
        """
        Check whether the occurrence text[start:end] lies in a guarded span.

        Args:
            text: Normalized message
            start: Start offset of the marker occurrence
            end: End offset of the marker occurrence

        Returns:
            True if this guard suppresses the occurrence
        """


class NegationGuard(DisambiguationGuard):
    """
    Negation token followed by up to three words, then the marker.

    "i don't want to die", "i would never kill myself",
    "i'm not going to do it". Intervening words may not contain a new
    first-person clause ("i don't know if i want to die" is kept).
    """

    kind = GuardKind.NEGATION

    NEGATIONS = (
        r"(?:no longer|don'?t|do not|never|won'?t|will not|doesn'?t|does not|"
        r"didn'?t|did not|not)"
    )
    # Words that open a new clause and end the negated span
    CLAUSE_BREAKERS = frozenset({
        "i", "i'm", "im", "i'd", "id", "i'll", "i've", "ive", "but", "and", "if", "or",
        "yet", "still", "maybe", "sometimes", "because",
    })

    def __init__(self, max_gap_words: int = 3):
        self.max_gap_words = max_gap_words
        self._pattern = re.compile(
            rf"\b{self.NEGATIONS}((?:\s+[\w']+){{0,{max_gap_words}}})\s*$"
        )

    def covers(self, text: str, start: int, end: int) -> bool:
        prefix = _sentence_prefix(text, start)
        match = self._pattern.search(prefix)
        if not match:
            return False
        gap_words = match.group(1).split()
        return not any(w in self.CLAUSE_BREAKERS for w in gap_words)


class AttributionGuard(DisambiguationGuard):
    """
    Quoted speech or a third-party subject reporting the phrase.

    'my friend said "i want to die"', "he keeps saying he wants to end it all".
    A first-person subject or a comma between the attribution and the
    marker hands the sentence back to the speaker ("they said i should
    rest but i want to die", "she told me to stop crying, want to die").
    """

    kind = GuardKind.ATTRIBUTION

    SUBJECTS = (
        r"(?:he|she|they|someone|somebody|my\s+(?:friend|brother|sister|mom|mother|dad|father|"
        r"son|daughter|partner|husband|wife|boyfriend|girlfriend|roommate|neighbor|neighbour|"
        r"cousin|coworker|kid|child|teen)|(?:his|her|their)\s+\w+)"
    )
    VERBS = (
        r"(?:wants?|wanted|is\s+going\s+to|are\s+going\s+to|was\s+going\s+to|said|says|"
        r"told\s+me|tells\s+me|texted|messaged|posted|wrote|keeps\s+saying|kept\s+saying|"
        r"threatened|talks\s+about|talked\s+about|tried|attempted|mentioned)"
    )
    def __init__(self):
        self._attribution_re = re.compile(
            rf"\b{self.SUBJECTS}\s+(?:[\w']+\s+){{0,2}}?{self.VERBS}\b"
        )

    def covers(self, text: str, start: int, end: int) -> bool:
        if self._inside_quotes(text, start, end):
            return True

        prefix = _sentence_prefix(text, start)
        last = None
        for match in self._attribution_re.finditer(prefix):
            last = match
        if last is None:
            return False

        # The speaker takes the sentence back ("... but i want to die")
        return not _speaker_resumes(prefix[last.end():])

    @staticmethod
    def _inside_quotes(text: str, start: int, end: int) -> bool:
        """True when an odd number of double quotes precede the marker and one follows."""
        before = text[:start].count('"')
        after = text[end:].count('"')
        return before % 2 == 1 and after >= 1


class HypotheticalGuard(DisambiguationGuard):
    """
    Hypothetical or fictional framing that governs the marker.

    "what if someone wanted to end it all", "in a movie the hero says he
    will kill myself". The frame only reaches the marker when no comma or
    first-person subject comes between them, so "i can't imagine life
    without her, i want to die" is the speaker's own statement.
    """

    kind = GuardKind.HYPOTHETICAL

    PATTERN = re.compile(
        r"\b(?:what\s+if|hypothetically|imagine\s+if|"
        r"in\s+a\s+(?:movie|book|show|story|game|song)|asking\s+for\s+a\s+friend|"
        r"if\s+someone|if\s+somebody|if\s+a\s+person)\b"
    )

    def covers(self, text: str, start: int, end: int) -> bool:
        prefix = _sentence_prefix(text, start)
        last = None
        for match in self.PATTERN.finditer(prefix):
            last = match
        if last is None:
            return False
        return not _speaker_resumes(prefix[last.end():])


class IdiomGuard(DisambiguationGuard):
    """Figures of speech such as "scared to death" or "dying to see him"."""

    kind = GuardKind.IDIOM

    def __init__(self, idioms: Iterable[str]):
        self.idioms = tuple(idioms)

    def covers(self, text: str, start: int, end: int) -> bool:
        for idiom in self.idioms:
            for i_start, i_end in find_occurrences(text, idiom):
                if i_start <= start and end <= i_end:
                    return True
                # Marker overlapping the idiom ("dying" in "dying to")
                if start < i_end and i_start < end:
                    return True
        return False


# ==================================
# Guard Set
# ==================================

@dataclass(frozen=True)
class GuardVerdict:
    """Decision for one configured marker phrase."""

    marker: str
    suppressed: bool
    guards: tuple[GuardKind, ...] = field(default_factory=tuple)

    @property
    def labels(self) -> list[str]:
        """Entries for guards_triggered, e.g. "negation:want to die"."""
        return [f"{g.value}:{self.marker}" for g in self.guards]


@dataclass(frozen=True)
class FilteredMarkers:
    """Markers surviving the guards, plus what was suppressed."""

    kept: tuple[str, ...] = field(default_factory=tuple)
    suppressed: tuple[GuardVerdict, ...] = field(default_factory=tuple)

    @property
    def labels(self) -> list[str]:
        labels = []
        for verdict in self.suppressed:
            labels.extend(verdict.labels)
        return labels

    def suppressed_by(self, kind: GuardKind) -> list[str]:
        return [v.marker for v in self.suppressed if kind in v.guards]


class GuardSet:
    """
    Applies a set of disambiguation guards to matched markers.

    Usage:
        guards = GuardSet.default(idioms=["scared to death"])
        verdict = guards.evaluate(text, "want to die", MarkerTier.ACTIVE)
        if not verdict.suppressed:
            ...
    """

    def __init__(self, guards: Sequence[DisambiguationGuard]):
        self.guards = tuple(guards)
        logger.info(
            f"GuardSet initialized with guards={[g.kind.value for g in self.guards]}"
        )

    @classmethod
    def default(cls, idioms: Iterable[str] = ()) -> "GuardSet":
        """Regex guard set used by the shipped pipeline."""
        return cls([
            NegationGuard(),
            AttributionGuard(),
            HypotheticalGuard(),
            IdiomGuard(idioms),
        ])

    def evaluate(self, text: str, marker: str, tier: MarkerTier) -> GuardVerdict:
        """
        Decide whether a matched marker is suppressed.

        Every occurrence is checked against every guard allowed for the
        tier. The marker is suppressed only if all occurrences are covered.

        Args:
            text: Normalized message
            marker: Configured marker phrase known to be present
            tier: Suppression tier of the marker

        Returns:
            GuardVerdict naming the guards that covered it
        """
        allowed = TIER_GUARDS[tier]
        active = [g for g in self.guards if g.kind in allowed]
        occurrences = find_occurrences(text, marker)

        if not occurrences or not active:
            return GuardVerdict(marker=marker, suppressed=False)

        fired: list[GuardKind] = []
        for start, end in occurrences:
            covering = [g.kind for g in active if g.covers(text, start, end)]
            if not covering:
                return GuardVerdict(marker=marker, suppressed=False)
            for kind in covering:
                if kind not in fired:
                    fired.append(kind)

        logger.debug(f"Marker suppressed: '{marker}' by {[k.value for k in fired]}")
        return GuardVerdict(marker=marker, suppressed=True, guards=tuple(fired))

    def filter(
        self,
        text: str,
        markers: Iterable[str],
        tier: MarkerTier,
    ) -> FilteredMarkers:
        """Split matched markers into kept and suppressed, preserving order."""
        kept: list[str] = []
        suppressed: list[GuardVerdict] = []
        for marker in markers:
            verdict = self.evaluate(text, marker, tier)
            if verdict.suppressed:
                suppressed.append(verdict)
            else:
                kept.append(marker)
        return FilteredMarkers(kept=tuple(kept), suppressed=tuple(suppressed))
