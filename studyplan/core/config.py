"""
Engine configuration using Pydantic Settings.

Per-user scheduling preferences travel with each call as ``UserSettings``;
this module only holds process-wide knobs (search horizons, logging).
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Application
    # ===========================================
    APP_TITLE: str = "Study Plan Engine"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ===========================================
    # Search horizons (days)
    # ===========================================
    # Forward search for a free slot (findNextAvailableTimeSlot)
    SLOT_SEARCH_DAYS: int = 30
    # Destination search when evicting sessions from a day being locked
    LOCK_REDISTRIBUTION_DAYS: int = 14
    # Spare-capacity analysis window used by lock validation
    LOCK_ANALYSIS_DAYS: int = 14

    # ===========================================
    # Scheduling policy
    # ===========================================
    # A task is "urgent" when its deadline is at most this many days away
    URGENCY_THRESHOLD_DAYS: int = 3
    # Upper bound for a single (merged) session
    MAX_SESSION_HOURS: float = 4.0


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
