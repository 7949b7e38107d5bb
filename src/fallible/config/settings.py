"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files.

Example:
    >>> from fallible.config import get_settings
    >>> settings = get_settings()
    >>> settings.check_contracts
    True
    >>> settings.unwrap_payload_limit
    500

    # Or with environment variables:
    # FALLIBLE_CHECK_CONTRACTS=false
    # FALLIBLE_LOG_CAUGHT_EXCEPTIONS=true
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class FallibleSettings(BaseSettings):
    """Root settings for fallible.

    Loads configuration from environment variables with FALLIBLE_ prefix.

    Example environment variables:
        FALLIBLE_CHECK_CONTRACTS=false
        FALLIBLE_LOG_CAUGHT_EXCEPTIONS=true
        FALLIBLE_UNWRAP_PAYLOAD_LIMIT=2000
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    check_contracts: bool = Field(
        default=True,
        description="Reject non-callable transformers and non-Result arguments with ContractError",
    )
    log_caught_exceptions: bool = Field(
        default=False,
        description="Log exceptions converted to Err by handle() and friends at DEBUG",
    )
    unwrap_payload_limit: PositiveInt = Field(
        default=500,
        description="Max characters of a serialized Err payload embedded in UnwrapError messages",
    )


@lru_cache(maxsize=1)
def get_settings() -> FallibleSettings:
    """Get the global settings instance (cached).

    Example:
        >>> get_settings().log_caught_exceptions
        False
    """
    return FallibleSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
