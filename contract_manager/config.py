"""
Contract Manager Configuration

Centralized settings for the registry. Environment-specific values load from
CONTRACT_MANAGER_* environment variables or the project .env file.
"""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from contract_manager.utils.validation import MAX_DESCRIPTION_LENGTH, MAX_STORED_DESCRIPTION_LENGTH


# Get the project root directory (one level up from contract_manager/)
PROJECT_ROOT = Path(__file__).parent.parent

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """
    Application settings for the contract manager

    Descriptions are capped in UTF-8 bytes, not characters.
    """

    log_level: str = "INFO"

    # Registry rules
    max_description_length: int = Field(default=MAX_DESCRIPTION_LENGTH, ge=1, le=MAX_STORED_DESCRIPTION_LENGTH)

    model_config = SettingsConfigDict(
        env_prefix="CONTRACT_MANAGER_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging for scripts and services embedding the registry

    Args:
        level: Log level name (defaults to settings.log_level)
    """
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format=LOG_FORMAT,
    )


# ============================================================================
# Global settings instance
# ============================================================================

settings = Settings()
