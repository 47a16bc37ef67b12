"""Tests for the clinical catalog and its build-time validation."""

import pytest
from pydantic import ValidationError

from companion.catalog import (
    CompanionConfig,
    MarkerCatalog,
    ResponseTemplate,
    TierThresholds,
    build_default_config,
    default_marker_catalog,
    get_default_config,
)
from companion.conversation.modes import ResponseMode
from companion.safety.categories import Category, RiskTier
from companion.safety.hotlines import Region


def config_fields(config: CompanionConfig, **overrides) -> dict:
    """Constructor arguments for a copy of config with overrides."""
    values = {name: getattr(config, name) for name in CompanionConfig.model_fields}
    values.update(overrides)
    return values


class TestDefaultConfig:
    """Test the shipped configuration."""

    @pytest.fixture
    def config(self):
        return build_default_config()

    def test_every_category_configured(self, config):
        """Test every category has a template and a policy."""
        for category in Category:
            assert category in config.templates
            assert category in config.categories

    def test_safety_policies(self, config):
        """Test human-safety categories escalate into SAFETY mode."""
        for category in (
            Category.SUICIDE_INTENT,
            Category.SUICIDE_ACTIVE,
            Category.SUICIDE_PASSIVE,
            Category.DV_COERCIVE_CONTROL,
        ):
            policy = config.policy_for(category)
            assert policy.escalate is True
            assert policy.mode == ResponseMode.SAFETY

    def test_general_needs_model_call(self, config):
        """Test the general category defers to a response writer."""
        policy = config.policy_for(Category.GENERAL)

        assert policy.requires_model_call is True
        assert policy.mode is None
        assert policy.score == 0

    def test_cached_default(self):
        """Test the default config is built once."""
        assert get_default_config() is get_default_config()

    def test_frozen(self, config):
        """Test the config cannot be modified after build."""
        with pytest.raises(ValidationError):
            config.version = "2"

    def test_confirmation_paraphrase(self, config):
        """Test category paraphrases with a default."""
        assert "ending your life" in config.confirmation_paraphrase(Category.SUICIDE_INTENT)
        assert config.confirmation_paraphrase(Category.SCAM) == config.default_confirmation_paraphrase


class TestTierThresholds:
    """Test score to tier mapping."""

    @pytest.mark.parametrize("score,tier", [
        (95, RiskTier.CRITICAL),
        (80, RiskTier.CRITICAL),
        (79, RiskTier.HIGH),
        (60, RiskTier.HIGH),
        (50, RiskTier.MEDIUM),
        (40, RiskTier.MEDIUM),
        (39, RiskTier.STANDARD),
        (0, RiskTier.STANDARD),
    ])
    def test_tier_for(self, score, tier):
        """Test tier boundaries are inclusive."""
        assert TierThresholds().tier_for(score) == tier

    def test_order_enforced(self):
        """Test thresholds out of order are rejected."""
        with pytest.raises(ValidationError):
            TierThresholds(critical=50, high=60)


class TestCatalogValidation:
    """Test build-time validation failures."""

    @pytest.fixture
    def config(self):
        return get_default_config()

    def test_missing_template(self, config):
        """Test a category without a template fails validation."""
        templates = dict(config.templates)
        del templates[Category.SCAM]

        with pytest.raises(ValidationError, match="without a template"):
            CompanionConfig(**config_fields(config, templates=templates))

    def test_missing_policy(self, config):
        """Test a category without a policy fails validation."""
        categories = dict(config.categories)
        del categories[Category.LOST_PET]

        with pytest.raises(ValidationError, match="without a policy"):
            CompanionConfig(**config_fields(config, categories=categories))

    def test_missing_mode_template(self, config):
        """Test a missing mode template fails validation."""
        mode_templates = dict(config.mode_templates)
        del mode_templates["bystander"]

        with pytest.raises(ValidationError, match="missing mode templates"):
            CompanionConfig(**config_fields(config, mode_templates=mode_templates))

    def test_forbidden_phrase_in_template(self, config):
        """Test a template containing a forbidden phrase fails validation."""
        templates = dict(config.templates)
        templates[Category.DEATH_GENERAL] = ResponseTemplate(text="They are in a better place.")

        with pytest.raises(ValidationError, match="contains forbidden"):
            CompanionConfig(**config_fields(config, templates=templates))

    def test_required_phrase_missing(self, config):
        """Test a template dropping its required phrase fails validation."""
        templates = dict(config.templates)
        templates[Category.SUICIDE_INTENT] = ResponseTemplate(
            text="Please reach out.",
            must_contain=("{HOTLINES.crisis_988}",),
        )

        with pytest.raises(ValidationError, match="lacks required"):
            CompanionConfig(**config_fields(config, templates=templates))

    def test_us_crisis_line_required(self, config):
        """Test the US directory must carry the crisis line."""
        hotlines = {region: dict(numbers) for region, numbers in config.hotlines.items()}
        del hotlines[Region.US]["crisis_988"]

        with pytest.raises(ValidationError, match="crisis_988"):
            CompanionConfig(**config_fields(config, hotlines=hotlines))


class TestMarkerCatalog:
    """Test marker normalization."""

    def test_phrases_normalized(self):
        """Test phrases are lower-cased, trimmed and de-duplicated."""
        values = default_marker_catalog().model_dump()
        values["dv"] = ["  Hitting   ME ", "hitting me", ""]

        catalog = MarkerCatalog(**values)

        assert catalog.dv == ("hitting me",)

    def test_required_phrases_case_insensitive(self):
        """Test required phrase checks ignore case."""
        template = ResponseTemplate(text="Your Life Matters.", must_contain=("your life matters",))
        assert template.missing_required() == []
