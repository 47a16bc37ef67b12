"""
Configuration Management

Uses Pydantic BaseSettings to load process tunables from environment variables.
All settings can be overridden via .env file or environment variables.

The clinical catalog (markers, templates, hotlines) is NOT read from here:
it is an immutable CompanionConfig built once at startup and passed into
the pipeline explicitly. See companion.catalog.

Environment Variables:
    COMPANION_VOLATILITY_HISTORY_SIZE: Samples kept by the tracker (default: 8)
    COMPANION_VOLATILITY_TREND_WINDOW: Samples used for trend detection (default: 3)
    COMPANION_VOLATILITY_MATERIAL_DELTA: Minimum score change for a trend (default: 10)
    COMPANION_QUESTION_COOLDOWN_TURNS: Turns before a question may be re-asked (default: 5)
    COMPANION_MAX_QUESTIONS_PER_TURN: Question cap for normal cognition (default: 2)
    COMPANION_DEFAULT_REGION: Region used when no locale signal is found (default: US)
    COMPANION_LOG_LEVEL: Root log level (default: INFO)
    COMPANION_APP_ENV: Environment name (development/staging/production)
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings loaded from environment variables."""

    # Volatility Tracking
    volatility_history_size: int = Field(default=8, ge=3)
    """Number of (score, tier) samples kept across turns.

    Oldest samples drop off once the history is full.
    """

    volatility_trend_window: int = Field(default=3, ge=3)
    """Number of most recent samples a trend is computed over.

    Must be at least 3; a two-point "trend" is just noise.
    """

    volatility_material_delta: float = Field(default=10.0, ge=0.0)
    """Minimum score change between first and last sample of the window
    before the tracker reports ESCALATING or DE_ESCALATING."""

    # Anti-Repetition
    question_cooldown_turns: int = Field(default=5, ge=0)
    """Turns that must elapse before the same question intent is asked again."""

    max_questions_per_turn: int = Field(default=2, ge=0)
    """Maximum clarifying questions in one reply."""

    max_questions_impaired: int = Field(default=1, ge=0)
    """Maximum clarifying questions when the user is in CRITICAL/HIGH tier."""

    prompt_history_turns: int = Field(default=10, ge=0)
    """Recent messages included in a free-form model prompt."""

    # Localisation
    default_region: Literal["US", "UK", "CA", "AU"] = "US"
    """Region used when no locale keyword heuristics match."""

    # Application Environment
    app_env: Literal["development", "staging", "production"] = "development"
    """Current application environment."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    """Root log level applied by configure_logging()."""

    app_name: str = "pet-crisis-companion"
    """Application name."""

    # Pydantic configuration
    model_config = SettingsConfigDict(
        env_prefix="COMPANION_",
        env_file=".env",  # Load from .env file if it exists
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
        frozen=True,
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached settings instance

    Example:
        >>> from companion.config import get_settings
        >>> get_settings().question_cooldown_turns
        5
    """
    return Settings()
