"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from TABLECHECK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TABLECHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging Configuration
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FILE: Optional[str] = None  # Also log to this file when set

    # Report Configuration
    ROW_NUMBER_WIDTH: int = 6  # Zero-padded width of the row tag in text reports

    # Validation Behaviour
    RESET_STATE_ON_VALIDATE: bool = False  # Clear uniqueness tracking before every validate()
    REJECT_DUPLICATE_HEADERS: bool = False  # Raise instead of aliasing to the first match
    STRICT_ROW_LENGTH: bool = True  # Reject data rows not aligned with the header

    # Table IO
    CSV_DELIMITER: str = ","


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
