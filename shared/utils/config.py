"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    APP_NAME: str = "Municipal Asset Records Validation"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FILE: str | None = None  # Optional: also write logs to this file

    # Validation Configuration
    VALIDATION_RULES_PATH: str | None = None  # Defaults to config/validation/rules.yaml

    @property
    def validation_rules_file(self) -> Path:
        """Resolve the validation rules file, falling back to the bundled default."""
        if self.VALIDATION_RULES_PATH:
            return Path(self.VALIDATION_RULES_PATH)
        base_dir = Path(__file__).parent.parent.parent
        return base_dir / "config" / "validation" / "rules.yaml"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
