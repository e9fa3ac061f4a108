"""Configuration models for the Designer News service."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, PositiveInt, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration for the API clients."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    designer_news_endpoint: str = Field(
        "https://api.designernews.co/api/v2/",
        alias="DESIGNER_NEWS_ENDPOINT",
        description="Designer News API base URL.",
    )
    designer_news_timeout_seconds: PositiveInt = Field(
        10, alias="DESIGNER_NEWS_TIMEOUT_SECONDS", description="Designer News request timeout (seconds)."
    )
    designer_news_user_agent: str = Field(
        "designernews-client", alias="DESIGNER_NEWS_USER_AGENT", description="User-Agent header."
    )
    smmry_api_key: Optional[SecretStr] = Field(None, alias="SMMRY_API_KEY", description="SMMRY API key.")
    smmry_endpoint: str = Field("https://api.smmry.com/", alias="SMMRY_ENDPOINT", description="SMMRY endpoint.")
    smmry_timeout_seconds: PositiveInt = Field(15, alias="SMMRY_TIMEOUT_SECONDS", description="SMMRY timeout (seconds).")
    log_level: str = Field("INFO", alias="LOG_LEVEL", description="Root log level.")
    log_json: bool = Field(False, alias="LOG_JSON", description="Emit logs as JSON lines.")

    @field_validator("designer_news_endpoint")
    @classmethod
    def _normalize_endpoint(cls, value: str) -> str:
        endpoint = value.strip()
        if "://" not in endpoint:
            raise ValueError("DESIGNER_NEWS_ENDPOINT must be an absolute URL.")
        if not endpoint.endswith("/"):
            endpoint += "/"
        return endpoint

    @field_validator("smmry_endpoint")
    @classmethod
    def _validate_smmry_endpoint(cls, value: str) -> str:
        endpoint = value.strip()
        if "://" not in endpoint:
            raise ValueError("SMMRY_ENDPOINT must be an absolute URL.")
        return endpoint

    @field_validator("designer_news_user_agent")
    @classmethod
    def _non_empty_user_agent(cls, value: str) -> str:
        agent = value.strip()
        if not agent:
            raise ValueError("DESIGNER_NEWS_USER_AGENT must not be blank.")
        return agent


@lru_cache()
def get_settings() -> Settings:
    """Return a Settings instance built from the environment."""
    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


def reset_settings_cache() -> None:
    """Clear the Settings LRU cache (for tests)."""
    get_settings.cache_clear()  # type: ignore[attr-defined]
