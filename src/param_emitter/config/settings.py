"""Emitter settings using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class EmitterSettings(BaseSettings):
    """Settings loaded from ``PARAM_EMITTER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PARAM_EMITTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Canonical keys: False keeps mapping insertion order significant
    sort_payload_keys: bool = False


@lru_cache
def get_settings() -> EmitterSettings:
    """Get cached settings instance."""
    return EmitterSettings()
