"""
Response Template Resolver

Looks up the vetted template for a category or mode, substitutes hotline
placeholders for the user's region and runs the forbidden-phrase guard.
Anything that goes wrong here yields the safe fallback template instead
of an exception: a user in crisis always gets a response with a crisis
line in it.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from companion.safety.categories import Category
from companion.safety.content_filter import ForbiddenPhraseError, ForbiddenPhraseGuard
from companion.safety.hotlines import Region, find_unresolved, resolve_placeholders

if TYPE_CHECKING:
    from companion.catalog import CompanionConfig, ResponseTemplate

logger = logging.getLogger(__name__)

FALLBACK_KEY = "fallback"


class TemplateNotFoundError(KeyError):
    """No template is configured under the requested key."""


@dataclass(frozen=True)
class RenderResult:
    """A resolved response ready to send."""

    text: str
    template_key: str
    used_fallback: bool = False
    guards_triggered: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "template_key": self.template_key,
            "used_fallback": self.used_fallback,
            "guards_triggered": list(self.guards_triggered),
        }


class TemplateResolver:
    """
    Renders category and mode templates for a region.

    Usage:
        resolver = TemplateResolver(config)
        result = resolver.render(Category.SUICIDE_INTENT, Region.US)
        send(result.text)
    """

    def __init__(self, config: "CompanionConfig"):
        self.config = config
        self.guard = ForbiddenPhraseGuard(config.forbidden_phrases)
        logger.info("TemplateResolver initialized")

    def get_template(self, key: Union[Category, str]) -> "ResponseTemplate":
        """
        Look up a template by category or mode-template name.

        Raises:
            TemplateNotFoundError: If nothing is configured under the key
        """
        if key == FALLBACK_KEY:
            return self.config.fallback_template

        if isinstance(key, Category):
            template = self.config.templates.get(key)
        else:
            template = self.config.mode_templates.get(key)
            if template is None:
                try:
                    template = self.config.templates.get(Category(key))
                except ValueError:
                    template = None

        if template is None:
            raise TemplateNotFoundError(str(key))
        return template

    def resolve_text(self, template: "ResponseTemplate", region: Region) -> str:
        """Substitute placeholders and enforce forbidden phrases."""
        text = resolve_placeholders(template.text, region, self.config.hotlines)
        unresolved = find_unresolved(text)
        if unresolved:
            logger.warning(f"Unresolved template placeholders: {unresolved}")
        return self.guard.enforce(text, template.must_not_contain)

    def render(self, key: Union[Category, str], region: Region = Region.US) -> RenderResult:
        """
        Render a template, falling back to the safe template on any guard failure.

        Args:
            key: Category or mode-template name
            region: Region for hotline substitution

        Returns:
            RenderResult; guards_triggered names any forbidden phrase hit
        """
        name = key.value if isinstance(key, Category) else str(key)

        try:
            template = self.get_template(key)
            return RenderResult(
                text=self.resolve_text(template, region),
                template_key=name,
                used_fallback=name == FALLBACK_KEY,
            )

        except ForbiddenPhraseError as e:
            logger.warning(f"Template '{name}' blocked, using fallback")
            return self.fallback(region, tuple(f"forbidden_phrase:{p}" for p in e.phrases))

        except TemplateNotFoundError:
            logger.error(f"No template configured for '{name}', using fallback")
            return self.fallback(region, (f"template_missing:{name}",))

    def fallback(self, region: Region = Region.US, guards_triggered: tuple[str, ...] = ()) -> RenderResult:
        """Render the configured safe fallback template."""
        text = resolve_placeholders(
            self.config.fallback_template.text, region, self.config.hotlines
        )
        return RenderResult(
            text=text,
            template_key=FALLBACK_KEY,
            used_fallback=True,
            guards_triggered=guards_triggered,
        )
