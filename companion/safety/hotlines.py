"""
Hotline Resolution

Region detection from locale keywords and substitution of hotline
placeholders in response templates.

Supported placeholders:
    {REGION}                      Detected region code
    {HOTLINES.key}                Hotline for the detected region
    {HOTLINES.{REGION}.key}       Same, written explicitly
    {HOTLINES.US.key}             Hotline for a fixed region

A key missing for the region falls back to the US directory. A
placeholder that still cannot be resolved is left in the text so the
caller can detect and log it.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


class Region(str, Enum):
    """Regions with their own hotline directory."""

    US = "US"
    UK = "UK"
    CA = "CA"
    AU = "AU"


DEFAULT_REGION = Region.US

# Non-US regions need this many signal hits before they are trusted
MIN_REGION_SIGNALS = 2

_REGION_PLACEHOLDER_RE = re.compile(r"\{REGION\}")
_SCOPED_HOTLINE_RE = re.compile(r"\{HOTLINES\.(?:\{REGION\}|([A-Z]{2}))\.(\w+)\}")
_HOTLINE_RE = re.compile(r"\{HOTLINES\.(\w+)\}")
_UNRESOLVED_RE = re.compile(r"\{(?:REGION|HOTLINES\.[^}]*)\}")

HotlineDirectory = Mapping[str, Mapping[str, str]]


# ==================================
# Region Detection
# ==================================

def detect_region(
    texts: Iterable[str],
    region_signals: Mapping[Region, Iterable[str]],
    default: Region = DEFAULT_REGION,
) -> Region:
    """
    Detect the user's region from conversation text.

    Args:
        texts: Normalized messages (current and recent history)
        region_signals: Locale keywords per non-default region
        default: Region returned when no region has enough signals

    Returns:
        Detected region
    """
    combined = " ".join(t for t in texts if t)
    if not combined:
        return default

    for region, signals in region_signals.items():
        hits = [s for s in signals if s in combined]
        if len(hits) >= MIN_REGION_SIGNALS:
            logger.debug(f"Region {region.value} detected from {len(hits)} signals")
            return region

    return default


# ==================================
# Placeholder Resolution
# ==================================

def lookup_hotline(
    hotlines: HotlineDirectory,
    region: Region,
    key: str,
) -> Optional[str]:
    """Look up a hotline for a region, falling back to the US directory."""
    regional = hotlines.get(region, {})
    value = regional.get(key)
    if value:
        return value
    return hotlines.get(Region.US, {}).get(key)


def resolve_placeholders(
    template: str,
    region: Region,
    hotlines: HotlineDirectory,
) -> str:
    """
    Substitute region and hotline placeholders in a template.

    Args:
        template: Template text
        region: Region to resolve for
        hotlines: Hotline directory keyed by region

    Returns:
        Text with every resolvable placeholder substituted
    """

    def _scoped(match: re.Match) -> str:
        target = region
        if match.group(1):
            try:
                target = Region(match.group(1))
            except ValueError:
                return match.group(0)
        return lookup_hotline(hotlines, target, match.group(2)) or match.group(0)

    def _current(match: re.Match) -> str:
        return lookup_hotline(hotlines, region, match.group(1)) or match.group(0)

    resolved = _SCOPED_HOTLINE_RE.sub(_scoped, template)
    resolved = _HOTLINE_RE.sub(_current, resolved)
    resolved = _REGION_PLACEHOLDER_RE.sub(region.value, resolved)
    return resolved


def find_unresolved(text: str) -> list[str]:
    """Return placeholders that are still present in resolved text."""
    return _UNRESOLVED_RE.findall(text)


# ==================================
# Hotline Formatting
# ==================================

def format_phone_number(number: str) -> str:
    """Format a bare digit string for display; formatted numbers pass through."""
    if len(number) <= 4:
        return number

    if any(c in number for c in "- ()"):
        return number

    if number.startswith("1") and len(number) == 11:
        return f"1-{number[1:4]}-{number[4:7]}-{number[7:]}"

    if len(number) == 10:
        return f"{number[0:3]}-{number[3:6]}-{number[6:]}"

    return number


def tel_link(number: str) -> str:
    """Build a tel: link from a formatted number."""
    digits = re.sub(r"\D", "", number)
    return f"tel:{digits}"


def primary_crisis_hotline(hotlines: HotlineDirectory, region: Region) -> str:
    """Get the main crisis line for a region."""
    return lookup_hotline(hotlines, region, "crisis_988") or "988"


@dataclass(frozen=True)
class HotlineCard:
    """Display data for a hotline call-to-action."""

    key: str
    name: str
    phone: str
    phone_formatted: str
    tel_link: str
    text_option: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "phone": self.phone,
            "phone_formatted": self.phone_formatted,
            "tel_link": self.tel_link,
            "text_option": self.text_option,
        }


def hotline_card(
    hotlines: HotlineDirectory,
    names: Mapping[str, str],
    region: Region,
    key: str,
) -> Optional[HotlineCard]:
    """
    Build a hotline card for the UI.

    Returns None when neither the region nor the US directory has the key.
    """
    phone = lookup_hotline(hotlines, region, key)
    if not phone:
        return None

    text_option = None
    if key == "crisis_988":
        text_option = lookup_hotline(hotlines, region, "crisis_text")

    return HotlineCard(
        key=key,
        name=names.get(key, key.replace("_", " ").title()),
        phone=phone,
        phone_formatted=format_phone_number(phone),
        tel_link=tel_link(phone),
        text_option=text_option,
    )
