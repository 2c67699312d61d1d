"""
Application configuration using Pydantic Settings.
Loads configuration from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from workstealing.constants import DEFAULT_QUEUE_WORK_COUNT, DEFAULT_REAP_BATCH_SIZE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis
    redis_url: str = "redis://localhost:6379/0"

    # Recruiter Configuration
    recruiter_seed: int | None = None

    # Maintenance Jobs
    queue_tracker_work_count: int = DEFAULT_QUEUE_WORK_COUNT
    volatile_reap_batch_size: int = DEFAULT_REAP_BATCH_SIZE

    # Observability
    otel_exporter_otlp_endpoint: str = "http://localhost:4317"
    otel_service_name: str = "workstealing"
    log_level: str = "INFO"
    log_format: str = "json"  # json or console


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
