"""Binding configuration using pydantic-settings.

Configuration hierarchy:
- ConnectionConfig: Engine socket and request settings
- LoggingConfig: Logging behavior
- PodbindConfig: Main config aggregating all sub-configs

Environment variable prefix: PODBIND_
Example: PODBIND_CONNECTION_HOST=tcp://127.0.0.1:8080
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConnectionConfig(BaseSettings):
    """Container engine connection configuration."""

    model_config = SettingsConfigDict(env_prefix="PODBIND_CONNECTION_")

    host: str = Field(
        default="unix:///run/podman/podman.sock",
        description="Engine socket (unix://) or TCP address (tcp://, http://, https://)",
    )
    api_version: str | None = Field(
        default=None,
        description="Libpod API version; when set, paths become /v{version}/libpod/...",
    )

    # Timeouts
    api_timeout: float = Field(default=30.0, description="Engine API call timeout (seconds)")

    # Uploads
    upload_chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Chunk size for streamed request bodies (bytes)",
    )

    ping_on_acquire: bool = Field(
        default=False,
        description="Check GET /_ping before handing out the first connection",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Supports both text and JSON formats for different environments:
    - text: Human-readable for local development
    - json: Structured logging for production (log aggregation)
    """

    model_config = SettingsConfigDict(env_prefix="PODBIND_LOGGING_")

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="text", description="Log format (text, json)")
    service_name: str = Field(default="podbind", description="Service identifier in logs")


class PodbindConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

    Sub-configs use their own prefixes (PODBIND_CONNECTION_, PODBIND_LOGGING_).
    """

    model_config = SettingsConfigDict(
        env_prefix="PODBIND_",
        env_nested_delimiter="__",
    )

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_config() -> PodbindConfig:
    """Get cached configuration singleton."""
    return PodbindConfig()
