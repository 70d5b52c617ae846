"""
NL2Scry Configuration

Service settings using pydantic-settings for environment variable support.
Provider selection and credentials are not here: they belong to the
settings store and are read per request (see gateway.settings_store).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NL2ScryConfig(BaseSettings):
    """
    Configuration for the translation service.

    Reads from environment variables with NL2SCRY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="NL2SCRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scryfall lookup
    scryfall_base_url: str = Field(
        default="https://api.scryfall.com",
        description="Base URL of the Scryfall API",
    )
    scryfall_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for card lookups",
    )

    # LLM interaction
    llm_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts for one translation, tool round trips included",
    )
    llm_retry_base_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Base delay in seconds between attempts",
    )
    llm_retry_max_delay: float = Field(
        default=10.0,
        ge=0.0,
        description="Upper bound for the delay between attempts",
    )
    llm_temperature: float = Field(
        default=0.0,
        description="Temperature for LLM completions",
    )
    llm_max_tokens: int = Field(
        default=1024,
        description="Maximum tokens for each LLM completion",
    )

    # Settings store
    settings_source: Literal["file", "env"] = Field(
        default="file",
        description="Where provider settings are read from",
    )
    settings_path: Path = Field(
        default=Path.home() / ".config" / "nl2scry" / "settings.json",
        description="JSON settings file used when settings_source is 'file'",
    )

    # HTTP transport
    host: str = Field(
        default="127.0.0.1",
        description="Host to bind the gateway",
    )
    port: int = Field(
        default=8765,
        description="Port for the gateway",
    )

    # Observability
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    telemetry_enabled: bool = Field(
        default=False,
        description="Export traces over OTLP",
    )
    otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP collector endpoint",
    )


def load_config() -> NL2ScryConfig:
    """Load configuration from environment."""
    return NL2ScryConfig()
