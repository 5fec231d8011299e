"""Configuration management for gemini-search."""

from __future__ import annotations

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_search.errors import ConfigurationError, MissingCredentialError

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # API Configuration
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GSEARCH_API_KEY"),
        description="Gemini API key",
    )
    model: str = Field(default=DEFAULT_MODEL, description="Gemini model name")
    api_base: str = Field(default=DEFAULT_API_BASE, description="Base URL of the models endpoint")
    temperature: float = Field(default=0.3, description="Sampling temperature")
    max_output_tokens: int = Field(default=512, description="Maximum tokens in the answer")
    timeout_seconds: float = Field(default=30, description="HTTP timeout in seconds")

    # Output Configuration
    track_fences: bool = Field(default=True, description="Track open/closed state of code fences")

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")

    def require_api_key(self) -> str:
        """Return the API key or raise when it is missing or blank."""
        if self.api_key is None or not self.api_key.strip():
            raise MissingCredentialError("GEMINI_API_KEY environment variable not set")
        return self.api_key.strip()


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment and ``.env``, then apply non-None overrides."""

    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    return settings
