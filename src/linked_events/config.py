"""Configuration management with pydantic-settings for the LinkedEvents client.

Loads from (in order of precedence):
1. Environment variables prefixed with LINKED_EVENTS_ (highest priority)
2. .env file in the working directory
3. Default values (lowest priority)

The config is frozen after load, so a single instance can be shared between
threads.
"""

from functools import lru_cache

import httpx
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


__all__ = [
    "ClientConfig",
    "get_config",
    "reset_config",
]


class ClientConfig(BaseSettings):
    """Configuration for LinkedEventsClient.

    Attributes:
        base_url: API base URL (e.g., https://api.hel.fi/linkedevents/v1)
        connect_timeout: Connection establishment timeout in seconds
        read_timeout: Read timeout for API responses in seconds
        write_timeout: Write timeout for request bodies in seconds
        pool_timeout: Connection pool acquisition timeout in seconds
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json for production, text for development)
    """

    model_config = SettingsConfigDict(
        env_prefix="LINKED_EVENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
    )

    base_url: str = Field(
        default="",
        description="API base URL. Validated when a client is built from it.",
    )

    connect_timeout: float = Field(
        default=5.0, gt=0, le=300, description="Connection timeout in seconds"
    )

    read_timeout: float = Field(
        default=30.0, gt=0, le=600, description="Read timeout in seconds"
    )

    write_timeout: float = Field(
        default=5.0, gt=0, le=300, description="Write timeout in seconds"
    )

    pool_timeout: float = Field(
        default=5.0, gt=0, le=300, description="Pool acquisition timeout in seconds"
    )

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    log_format: str = Field(
        default="json",
        pattern="^(json|text)$",
        description="Log format: json (production), text (development)",
    )

    def get_timeout(self) -> httpx.Timeout:
        """Build the httpx timeout used for every request."""
        return httpx.Timeout(
            connect=self.connect_timeout,
            read=self.read_timeout,
            write=self.write_timeout,
            pool=self.pool_timeout,
        )


@lru_cache(maxsize=1)
def get_config() -> ClientConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Returns:
        ClientConfig singleton instance.

    Raises:
        ValidationError: If configuration values are invalid.

    Example:
        >>> config = get_config()
        >>> config.read_timeout
        30.0
    """
    return ClientConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Warning:
        Only use in test code. Production code should not reset config.
    """
    get_config.cache_clear()
