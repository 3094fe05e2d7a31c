"""
Configuration for the trace.moe API client.

Values are read from environment variables prefixed with ``TRACE_MOE_`` or
from a local ``.env`` file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URI = "https://trace.moe/api"


class TraceMoeSettings(BaseSettings):
    """trace.moe client settings."""

    model_config = SettingsConfigDict(
        env_prefix="TRACE_MOE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_uri: str = Field(
        default=DEFAULT_BASE_URI,
        description="Base URI of the trace.moe API (override to point at a test server)",
    )
    token: str | None = Field(
        default=None,
        description="Access token for registered developers, sent as the `token` query parameter",
    )

    @field_validator("base_uri")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Strip trailing slashes so paths can be joined with a single '/'."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("base_uri must not be empty")
        return v

    @field_validator("token")
    @classmethod
    def blank_token_is_none(cls, v: str | None) -> str | None:
        """Treat an empty token (e.g. ``TRACE_MOE_TOKEN=``) as no token."""
        if v is None:
            return None
        v = v.strip()
        return v or None


@lru_cache
def get_settings() -> TraceMoeSettings:
    """Get cached TraceMoeSettings instance populated from environment variables.

    Environment variables:
        TRACE_MOE_BASE_URI (default: "https://trace.moe/api")
        TRACE_MOE_TOKEN (default: unset)

    Returns:
        Cached TraceMoeSettings instance.

    Note:
        For testing, call get_settings.cache_clear() to reset the cache.
    """
    return TraceMoeSettings()
