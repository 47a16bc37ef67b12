"""Logging setup for processes embedding the companion pipeline."""

import logging
from typing import Optional

from companion.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure the root logger from settings.

    The pipeline never logs raw user text, only categories, counts and
    configured marker names, so DEBUG is safe to enable in staging.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger("companion").setLevel(settings.log_level)
    logging.getLogger(__name__).info(
        f"Logging configured: level={settings.log_level}, env={settings.app_env}"
    )
