"""
Backgammon Engine - Logging Configuration
"""

import logging

from backgammon.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured level to the root logger.

    Debug mode forces DEBUG regardless of log_level.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {settings.log_level!r}.")

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
