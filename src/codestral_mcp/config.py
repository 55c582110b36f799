"""
config.py

PURPOSE: Configuration loading and settings management.
DEPENDENCIES: pydantic, pydantic-settings

ARCHITECTURE NOTES:
Configuration comes from multiple sources (in priority order):
1. CLI flags (highest priority)
2. Environment variables
3. A .env file in the working directory
4. Defaults (lowest priority)

An empty API key is allowed here; the client rejects it with ConfigError
when it is constructed.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from codestral_mcp.llm.mistral import MISTRAL_API_BASE
from codestral_mcp.llm.models import PRIMARY_MODEL, CodestralModel


class MistralSettings(BaseSettings):
    """Settings for the Mistral completion service."""

    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("MISTRAL_API_KEY", "CODESTRAL_API_KEY"),
        description="Mistral API key (or set MISTRAL_API_KEY env var)",
    )
    base_url: str = Field(
        default=MISTRAL_API_BASE,
        description="Base URL of the Mistral API",
    )
    model: CodestralModel = Field(
        default=PRIMARY_MODEL,
        description="Model used for chat completions",
    )
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Per-request timeout in seconds",
    )
    min_request_interval: float = Field(
        default=0.1,
        ge=0.0,
        description="Minimum seconds between request starts",
    )

    model_config = SettingsConfigDict(
        env_prefix="CODESTRAL_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


class OpenTelemetrySettings(BaseSettings):
    """Settings for OpenTelemetry tracing."""

    enabled: bool = Field(
        default=False,
        description="Enable tracing",
    )
    service_name: str = Field(
        default="codestral-mcp",
        description="Service name reported on spans",
    )
    endpoint: str | None = Field(
        default=None,
        description="OTLP/HTTP endpoint (console export when unset)",
    )

    model_config = SettingsConfigDict(env_prefix="CODESTRAL_OTEL_", env_file=".env", extra="ignore")


class Settings(BaseSettings):
    """Main application settings."""

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug output",
    )
    mistral: MistralSettings = Field(
        default_factory=MistralSettings,
        description="Mistral settings",
    )
    otel: OpenTelemetrySettings = Field(
        default_factory=OpenTelemetrySettings,
        description="OpenTelemetry settings",
    )

    model_config = SettingsConfigDict(env_prefix="CODESTRAL_", env_file=".env", extra="ignore")


def get_settings() -> Settings:
    """Get application settings, loading from environment."""
    return Settings()
