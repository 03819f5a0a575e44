"""
Backgammon Engine Configuration.

Environment variables, settings, and logging configuration.
"""

from backgammon.config.log import configure_logging
from backgammon.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
