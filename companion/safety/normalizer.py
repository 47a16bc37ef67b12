"""Text normalization and phrase matching applied before any marker check."""

import re
import unicodedata
from functools import lru_cache

# Zero-width and invisible formatting characters
ZERO_WIDTH_CHARS = "\u200b\u200c\u200d\u2060\ufeff\u00ad"

_ZERO_WIDTH_TABLE = {ord(c): None for c in ZERO_WIDTH_CHARS}

# Phone keyboards insert typographic quotes; markers are written with ASCII.
_QUOTE_TABLE = str.maketrans({
    "\u2018": "'",
    "\u2019": "'",
    "\u02bc": "'",
    "\u201b": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u201e": '"',
    "\u00ab": '"',
    "\u00bb": '"',
})

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text) -> str:
    """
    Normalize a raw user message for marker matching.

    Lower-cases, strips zero-width characters, folds typographic quotes
    to ASCII and collapses whitespace. Never raises; anything that is not
    a string normalizes to "".

    Args:
        text: Raw user message

    Returns:
        Normalized text
    """
    if not isinstance(text, str) or not text:
        return ""

    cleaned = unicodedata.normalize("NFC", text)
    cleaned = cleaned.translate(_ZERO_WIDTH_TABLE).translate(_QUOTE_TABLE)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned.lower())
    return cleaned.strip()


# ==================================
# Phrase Matching
# ==================================

# People type contractions without the apostrophe or spell them out
CONTRACTION_FORMS = {
    "don't": r"(?:don'?t|do not)",
    "doesn't": r"(?:doesn'?t|does not)",
    "didn't": r"(?:didn'?t|did not)",
    "can't": r"(?:can'?t|cannot|can not)",
    "won't": r"(?:won'?t|will not)",
    "wasn't": r"(?:wasn'?t|was not)",
    "isn't": r"(?:isn'?t|is not)",
    "hadn't": r"(?:hadn'?t|had not)",
    "i'm": r"(?:i'?m|i am)",
}

_NEVER_MATCHES = re.compile(r"(?!)")


@lru_cache(maxsize=4096)
def phrase_pattern(phrase: str) -> re.Pattern:
    """
    Compile a configured phrase into an apostrophe-tolerant pattern.

    Plain words still match as substrings ("euthaniz" matches
    "euthanized"). Words with an apostrophe match with or without it,
    and common contractions also match their spelled-out form, so
    "don't want to live" matches "dont want to live" and
    "do not want to live".

    Args:
        phrase: Normalized marker phrase

    Returns:
        Compiled pattern; an empty phrase never matches
    """
    words = phrase.split()
    if not words:
        return _NEVER_MATCHES

    parts = [
        CONTRACTION_FORMS.get(word) or re.escape(word).replace("'", "'?")
        for word in words
    ]
    pattern = " ".join(parts)

    # A contraction at either edge must not match inside another word ("him")
    if "'" in words[0]:
        pattern = r"(?<!\w)" + pattern
    if "'" in words[-1]:
        pattern = pattern + r"(?!\w)"
    return re.compile(pattern)


def contains_phrase(text: str, phrase: str) -> bool:
    """True if a configured phrase occurs in normalized text."""
    if not text or not phrase:
        return False
    return phrase_pattern(phrase).search(text) is not None
