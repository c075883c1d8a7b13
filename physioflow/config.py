"""Configuration management for PhysioFlow."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # PhysioFlow API
    api_base_url: str = Field(
        default="http://localhost:7011/api",
        description="Base URL of the PhysioFlow REST API",
    )
    api_token: str = Field(
        default="",
        description="Bearer token sent with every API request",
    )
    api_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for API requests",
    )

    # Debounce delays
    coverage_debounce_ms: int = Field(
        default=300,
        description="Delay before the coverage calculator queries the API",
    )
    autosave_debounce_ms: int = Field(
        default=500,
        description="Delay before queued checklist responses are saved",
    )

    # Downloads (claim XML, discharge PDF, report CSV, exercise handouts)
    download_dir: Path = Field(
        default=Path("./downloads"),
        description="Directory where downloaded files are written",
    )

    # Offline sync queue
    offline_database_url: str = Field(
        default="sqlite+aiosqlite:///./data/offline.db",
        description="SQLAlchemy URL for the local offline queue",
    )
    offline_max_attempts: int = Field(
        default=5,
        description="Queued items with this many failed attempts are skipped",
    )
    offline_batch_size: int = Field(
        default=50,
        description="Max queued items replayed per sync",
    )

    # Observability
    observability_enabled: bool = Field(default=True)
    observability_log_dir: Path = Field(default=Path("data/logs"))

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
