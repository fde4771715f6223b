"""
Application settings and configuration.
Values are loaded from environment variables or a local .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Registered user (single user), used as the sender of every message
    user_cell_number: str  # Format: +27XXXXXXXXX

    # Message store location
    data_dir: str = "."
    messages_filename: str = "messages.json"

    @property
    def messages_path(self) -> Path:
        """Full path of the JSON message document."""
        return Path(self.data_dir) / self.messages_filename

    # Application Settings
    log_level: str = "INFO"
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise the level name and reject unknown ones."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
