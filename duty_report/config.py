"""
Configuration settings for the Duty Report dashboard.

Uses Pydantic Settings to load environment variables for logging, the
aggregation conventions of the service log (placeholder personnel, highlighted
categories) and the import task limits.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Aggregation conventions
    placeholder_personnel: str = Field("GENERICO", alias="PLACEHOLDER_PERSONNEL")
    highlight_category: str = Field("Sentinela", alias="HIGHLIGHT_CATEGORY")
    student_category: str = Field("Escala Alunos", alias="STUDENT_CATEGORY")
    personnel_prefix: str = Field("AL SD ", alias="PERSONNEL_PREFIX")

    # Import task
    import_timeout_seconds: float = Field(30.0, gt=0, alias="IMPORT_TIMEOUT_SECONDS")
    import_delay_seconds: float = Field(1.5, ge=0, alias="IMPORT_DELAY_SECONDS")
    import_batch_size: int = Field(5, ge=1, alias="IMPORT_BATCH_SIZE")
    import_retry_attempts: int = Field(3, ge=1, alias="IMPORT_RETRY_ATTEMPTS")
    import_retry_backoff_seconds: float = Field(1.0, ge=0, alias="IMPORT_RETRY_BACKOFF_SECONDS")
    import_seed: Optional[int] = Field(None, alias="IMPORT_SEED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
