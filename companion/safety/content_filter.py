"""
Content Filter Module

Forbidden-phrase guard for outgoing responses. Every resolved template is
scanned against the global deny-list (platitudes, minimisation, authority
claims, AI disclaimers) and the template's own must_not_contain list. A
hit is a hard stop: the caller must not send the text.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

logger = logging.getLogger(__name__)


class ForbiddenPhraseError(Exception):
    """Resolved response text contains a forbidden phrase."""

    def __init__(self, phrases: list[str]):
        self.phrases = phrases
        super().__init__(f"Forbidden phrases in response: {phrases}")

    @property
    def phrase(self) -> str:
        """First offending phrase."""
        return self.phrases[0]


@dataclass
class ContentFilterResult:
    """Result of scanning a response."""

    is_appropriate: bool
    forbidden_phrases: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "is_appropriate": self.is_appropriate,
            "forbidden_phrases": self.forbidden_phrases,
        }


class ForbiddenPhraseGuard:
    """
    Case-insensitive deny-list check for outgoing text.

    Usage:
        guard = ForbiddenPhraseGuard(config.forbidden_phrases)
        guard.enforce(text, template.must_not_contain)  # raises on a hit
    """

    def __init__(self, forbidden_phrases: Iterable[str]):
        self.forbidden_phrases = tuple(p.lower() for p in forbidden_phrases if p)
        logger.info(f"ForbiddenPhraseGuard initialized with {len(self.forbidden_phrases)} phrases")

    def scan(self, text: str, extra: Iterable[str] = ()) -> ContentFilterResult:
        """
        Find forbidden phrases in text.

        Args:
            text: Resolved response text
            extra: Template-specific phrases to forbid as well

        Returns:
            ContentFilterResult listing every hit
        """
        lowered = (text or "").lower()
        hits = []
        for phrase in (*self.forbidden_phrases, *(p.lower() for p in extra if p)):
            if phrase in lowered and phrase not in hits:
                hits.append(phrase)
        return ContentFilterResult(is_appropriate=not hits, forbidden_phrases=hits)

    def enforce(self, text: str, extra: Iterable[str] = ()) -> str:
        """
        Return text unchanged, or raise if it contains a forbidden phrase.

        Raises:
            ForbiddenPhraseError: On any hit
        """
        result = self.scan(text, extra)
        if not result.is_appropriate:
            logger.warning(f"Forbidden phrase blocked: {result.forbidden_phrases}")
            raise ForbiddenPhraseError(result.forbidden_phrases)
        return text
