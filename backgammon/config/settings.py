"""
Backgammon Engine - Application Settings

Loads configuration from environment variables using Pydantic Settings.
Rule constants (board size, starting layout) live in backgammon.engine.base;
only tunable behavior is configured here.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from BACKGAMMON_* environment variables."""

    # Command history
    history_capacity: int = Field(default=50, ge=1)

    # Turn flow
    turn_transition_delay: float = Field(default=1.0, ge=0.0)
    auto_end_turn: bool = False

    # Dice
    dice_seed: int | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "BACKGAMMON_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
