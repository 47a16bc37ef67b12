"""
Session Facts

Rule-based extraction of pet and situation facts from user messages, and
the merge that threads them across turns. Known facts feed the intent
ledger so the companion never asks for something it was already told.
"""

import logging
import re
from dataclasses import asdict, dataclass, fields, replace
from typing import Optional

from companion.safety.normalizer import contains_phrase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimpleFacts:
    """Facts known about the pet, the situation and the user."""

    # Pet
    pet_name: Optional[str] = None
    pet_species: Optional[str] = None
    pet_breed: Optional[str] = None
    pet_age: Optional[str] = None
    pet_color: Optional[str] = None
    pet_weight: Optional[str] = None
    pet_microchipped: Optional[bool] = None

    # Emergency
    symptom: Optional[str] = None
    duration: Optional[str] = None
    severity: Optional[str] = None

    # Loss
    loss_type: Optional[str] = None  # lost, death, anticipatory, stolen
    last_seen_location: Optional[str] = None
    last_seen_time: Optional[str] = None
    last_seen_date: Optional[str] = None
    wearing_collar: Optional[bool] = None

    # User
    user_name: Optional[str] = None
    user_location: Optional[str] = None
    user_timezone: Optional[str] = None
    user_confirmed_safe: Optional[bool] = None
    contact_phone: Optional[str] = None

    # Crisis context
    crisis_type: Optional[str] = None
    bystander_relation: Optional[str] = None

    def known_keys(self) -> list[str]:
        """Names of fields holding a value."""
        return [f.name for f in fields(self) if is_known(getattr(self, f.name))]

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if is_known(v)}


EMPTY_FACTS = SimpleFacts()


def is_known(value) -> bool:
    """None and "" are unknown; False is a known answer."""
    return value is not None and value != ""


def merge_facts(existing: SimpleFacts, new: SimpleFacts) -> SimpleFacts:
    """
    Merge newly extracted facts into the session facts.

    New non-empty values win; empty values never overwrite.

    Args:
        existing: Facts known before this turn
        new: Facts extracted from this turn

    Returns:
        New SimpleFacts; neither input is modified
    """
    updates = {
        f.name: getattr(new, f.name)
        for f in fields(new)
        if is_known(getattr(new, f.name))
    }
    if not updates:
        return existing
    return replace(existing, **updates)


# ==================================
# Extraction Patterns
# ==================================

SPECIES_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("dog", re.compile(r"\b(?:dogs?|pupp(?:y|ies)|pup|doggo)\b")),
    ("cat", re.compile(r"\b(?:cats?|kittens?|kitty)\b")),
    ("bird", re.compile(r"\b(?:birds?|parrots?|parakeets?|budgies?)\b")),
    ("rabbit", re.compile(r"\b(?:rabbits?|bunn(?:y|ies))\b")),
]

NAME_PATTERNS = [
    re.compile(r"\bmy (?:dog|cat|pet|bird|puppy|kitten|rabbit) (?:named |called )?(\w+)", re.IGNORECASE),
    re.compile(r"\b(\w+),? (?:is )?my (?:dog|cat|pet|bird)\b", re.IGNORECASE),
    re.compile(r"\b(?:named|called) (\w+)", re.IGNORECASE),
    re.compile(r"\b(?:his|her|their) name (?:is|was) (\w+)", re.IGNORECASE),
    re.compile(r"\bname (?:is|was) (\w+)", re.IGNORECASE),
]

# Words the name patterns pick up that are never a pet's name
NAME_EXCLUSIONS = frozenset({
    "is", "was", "has", "had", "the", "a", "an", "my", "our", "their", "his", "her",
    "and", "but", "or", "so", "just", "he", "she", "they", "it", "who", "that",
    "died", "dies", "dying", "passed", "ran", "got", "escaped", "went",
    "missing", "lost", "gone", "sick", "hurt", "injured", "ate", "won't",
    "can't", "isn't", "wasn't", "hasn't", "didn't", "doesn't", "not", "never",
    "always", "still", "also", "really", "very", "too", "of", "to", "in", "on",
    "at", "for", "with", "from", "be", "been", "being", "will", "would",
    "jumped", "slipped", "keeps", "kept", "needs", "needed", "seems", "looks",
    "dog", "cat", "pet", "bird", "puppy", "kitten", "rabbit", "i", "me", "you",
})

BREEDS = (
    "golden retriever", "labrador", "german shepherd", "bulldog", "poodle",
    "beagle", "chihuahua", "husky", "boxer", "dachshund", "shih tzu", "yorkie",
    "corgi", "pitbull", "pit bull", "rottweiler", "great dane", "border collie",
    "australian shepherd", "cocker spaniel", "boston terrier", "pomeranian",
    "siamese", "persian", "maine coon", "ragdoll", "british shorthair",
    "bengal", "scottish fold", "abyssinian", "sphynx",
)

COLORS = (
    "black", "white", "brown", "golden", "gray", "grey", "orange", "tan",
    "cream", "brindle", "spotted", "striped", "tabby", "calico", "tortoiseshell",
)
COLOR_RE = re.compile(r"\b(" + "|".join(COLORS) + r")\b")

SYMPTOMS = (
    "vomiting", "throwing up", "not eating", "won't eat", "lethargic", "limping",
    "bleeding", "shaking", "trembling", "seizure", "collapsed", "not breathing",
    "difficulty breathing", "diarrhea", "swollen", "coughing", "choking",
)

AGE_PATTERNS = [
    re.compile(r"\b(\d+\s*(?:year|yr|month|mo|week|wk)s?)\s*old\b"),
    re.compile(r"\b(?:is|about)\s*(\d+\s*(?:year|yr|month|mo|week|wk)s?)\b"),
]

DURATION_PATTERNS = [
    re.compile(r"\b(?:for|since|about)\s*(\d+\s*(?:hour|hr|minute|min|day|week)s?)\b"),
    re.compile(r"\b(just now|just started|all day|all night|few hours|couple hours|few days)\b"),
]

LAST_SEEN_TIME_PATTERNS = [
    re.compile(r"\b(this morning|this afternoon|this evening|last night|yesterday|earlier today|\d+\s*(?:hour|minute)s?\s*ago)\b"),
    re.compile(r"\b(?:at|around|about)\s*(\d{1,2}(?::\d{2})?\s*(?:am|pm))\b"),
]

# Runs on the raw message: place names are recognised by capitalisation
LOCATION_PATTERN = re.compile(
    r"\b(?:near|at|around|from|by) (?:the )?"
    r"([A-Z][a-z]+(?: [A-Z][a-z]+)*(?: (?:[Pp]ark|[Ss]treet|[Aa]venue|[Rr]oad|[Aa]rea|[Nn]eighborhood))?)"
)

CONTACT_PATTERN = re.compile(r"\b(?:call|reach|contact|text)(?: me)?(?: at)?\s*(\d{3}[-.\s]?\d{3}[-.\s]?\d{4})\b")

SAFETY_CONFIRMATIONS = ("i'm safe", "i am safe", "i'm okay", "i am okay", "i'm ok now", "i am ok now")

BYSTANDER_RELATION_RE = re.compile(
    r"\bmy (friend|best friend|brother|sister|mom|mother|dad|father|son|daughter|partner|"
    r"husband|wife|boyfriend|girlfriend|roommate|cousin|coworker|neighbou?r)\b"
)

LOSS_TYPES: list[tuple[str, tuple[str, ...]]] = [
    ("death", ("died", "passed away", "put down", "put to sleep", "euthan", "is dead")),
    ("stolen", ("stolen", "took my", "stole")),
    ("lost", ("lost", "missing", "got out", "ran away", "escaped", "ran off")),
    ("anticipatory", ("terminal", "cancer", "going to die", "not long", "dying")),
]


def _first_match(text: str, patterns: list[re.Pattern]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1).strip()
    return None


def _first_phrase(text: str, phrases) -> Optional[str]:
    for phrase in phrases:
        if contains_phrase(text, phrase):
            return phrase
    return None


def extract_pet_name(raw: str) -> Optional[str]:
    """Pet name from the raw (case-preserved) message, if stated."""
    for pattern in NAME_PATTERNS:
        for match in pattern.finditer(raw):
            name = match.group(1)
            if name and name.lower() not in NAME_EXCLUSIONS and not name.isdigit():
                return name[:1].upper() + name[1:]
    return None


def extract_bystander_relation(text: str) -> Optional[str]:
    """Relationship of a third party the user is worried about."""
    match = BYSTANDER_RELATION_RE.search(text.lower())
    return match.group(1) if match else None


def extract_facts(text: str) -> SimpleFacts:
    """
    Extract facts from one user message.

    Args:
        text: Raw user message; case matters for names and place names

    Returns:
        SimpleFacts holding only what this message states
    """
    if not isinstance(text, str) or not text.strip():
        return EMPTY_FACTS

    lower = text.lower()
    found: dict = {}

    for species, pattern in SPECIES_PATTERNS:
        if pattern.search(lower):
            found["pet_species"] = species
            break

    found["pet_name"] = extract_pet_name(text)
    found["pet_breed"] = _first_phrase(lower, BREEDS)
    color = COLOR_RE.search(lower)
    if color:
        found["pet_color"] = color.group(1)
    found["pet_age"] = _first_match(lower, AGE_PATTERNS)

    for loss_type, phrases in LOSS_TYPES:
        if _first_phrase(lower, phrases):
            found["loss_type"] = loss_type
            break

    location = LOCATION_PATTERN.search(text)
    if location:
        found["last_seen_location"] = location.group(1)
    found["last_seen_time"] = _first_match(lower, LAST_SEEN_TIME_PATTERNS)

    if _first_phrase(lower, SAFETY_CONFIRMATIONS):
        found["user_confirmed_safe"] = True

    found["symptom"] = _first_phrase(lower, SYMPTOMS)
    found["duration"] = _first_match(lower, DURATION_PATTERNS)
    found["contact_phone"] = _first_match(lower, [CONTACT_PATTERN])

    if re.search(r"\b(?:not|isn't|isnt|no) (?:microchipped|chipped)\b|\bno (?:micro)?chip\b", lower):
        found["pet_microchipped"] = False
    elif re.search(r"\b(?:microchipped|has a (?:micro)?chip|is chipped)\b", lower):
        found["pet_microchipped"] = True

    if re.search(r"\b(?:no collar|without (?:a|his|her) collar|not wearing (?:a|his|her) collar)\b", lower):
        found["wearing_collar"] = False
    elif re.search(r"\b(?:wearing (?:a|his|her) collar|has (?:a|his|her) collar on|collar on)\b", lower):
        found["wearing_collar"] = True

    facts = SimpleFacts(**{k: v for k, v in found.items() if is_known(v)})
    if facts.known_keys():
        logger.debug(f"Extracted facts: {facts.known_keys()}")
    return facts
