"""
Shared configuration management for the Creator platform.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CREATOR_",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: Literal["development", "test", "production"] = "development"
    log_level: Literal["critical", "error", "warning", "info", "debug"] = "info"

    # Remote cache url and access token
    cache_url: Optional[str] = None
    cache_token: Optional[str] = None
    cache_connect_timeout: float = Field(default=5, gt=0)
    cache_socket_timeout: float = Field(default=5, gt=0)

    # Error reporting
    sentry_dsn: Optional[str] = None
    sentry_traces_sample_rate: float = Field(default=0.2, ge=0, le=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase_log_level(cls, value):
        return value.lower() if isinstance(value, str) else value


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"


def _describe(exc: PydanticValidationError) -> str:
    return ", ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def load_config(**overrides) -> BaseConfig:
    """Build configuration from the environment, raising ConfigurationError when invalid."""
    try:
        return BaseConfig(**overrides)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Invalid environment configuration: {_describe(exc)}") from exc


@lru_cache(maxsize=None)
def get_base_config() -> BaseConfig:
    """Process-wide configuration, read once."""
    return load_config()


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    try:
        return ServiceConfig(service_name=service_name, port=port)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Invalid environment configuration: {_describe(exc)}") from exc
