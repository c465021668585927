"""
Shared configuration management for the Currency Layer Access service.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CACHE_KEY_PREFIX = "route:/api/currency:"
DEFAULT_CACHE_TTL_SECONDS = 86400


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="CURRENCY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Upstream currency API
    api_url: str = Field(default="https://api.apilayer.com/currency_data/live")
    api_key: str = Field(default="")
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)

    # Cache store
    redis_url: str = Field(default="redis://localhost:6379/0")
    cache_backend: Literal["redis", "memory"] = Field(default="redis")
    cache_ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL_SECONDS, gt=0)
    cache_key_prefix: str = Field(default=DEFAULT_CACHE_KEY_PREFIX)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
