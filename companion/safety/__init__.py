"""
Safety Module

Text normalization, crisis marker classification, disambiguation guards,
priority resolution and safe response rendering.
"""

from companion.safety.categories import (
    CATEGORY_SCHEMA_VERSION,
    Category,
    SuicideRiskLevel,
    RiskTier,
    ResponseAnalysis,
)

from companion.safety.normalizer import normalize_text

from companion.safety.hotlines import (
    Region,
    detect_region,
    resolve_placeholders,
    format_phone_number,
    tel_link,
    primary_crisis_hotline,
    hotline_card,
)

from companion.safety.guards import (
    DisambiguationGuard,
    NegationGuard,
    AttributionGuard,
    HypotheticalGuard,
    IdiomGuard,
    GuardSet,
    GuardVerdict,
    MarkerTier,
)

from companion.safety.markers import (
    MarkerResult,
    DeathResult,
    SuicideRiskResult,
    ClassifierOutputs,
    MarkerClassifier,
    match_markers,
    analyze_suicide_risk,
)

from companion.safety.resolver import PriorityRule, PRIORITY_RULES, resolve

from companion.safety.content_filter import ForbiddenPhraseError, ForbiddenPhraseGuard

from companion.safety.templates import (
    RenderResult,
    TemplateNotFoundError,
    TemplateResolver,
)

__all__ = [
    # Categories
    "CATEGORY_SCHEMA_VERSION",
    "Category",
    "SuicideRiskLevel",
    "RiskTier",
    "ResponseAnalysis",
    # Normalizer
    "normalize_text",
    # Hotlines
    "Region",
    "detect_region",
    "resolve_placeholders",
    "format_phone_number",
    "tel_link",
    "primary_crisis_hotline",
    "hotline_card",
    # Guards
    "DisambiguationGuard",
    "NegationGuard",
    "AttributionGuard",
    "HypotheticalGuard",
    "IdiomGuard",
    "GuardSet",
    "GuardVerdict",
    "MarkerTier",
    # Markers
    "MarkerResult",
    "DeathResult",
    "SuicideRiskResult",
    "ClassifierOutputs",
    "MarkerClassifier",
    "match_markers",
    "analyze_suicide_risk",
    # Resolver
    "PriorityRule",
    "PRIORITY_RULES",
    "resolve",
    # Content filter
    "ForbiddenPhraseError",
    "ForbiddenPhraseGuard",
    # Templates
    "RenderResult",
    "TemplateNotFoundError",
    "TemplateResolver",
]
