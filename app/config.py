"""Configuration management - loads environment variables into typed settings."""

from functools import lru_cache
from pathlib import Path
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from meeting_digest import SummarizerConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service Configuration
    service_host: str = Field(default="127.0.0.1", description="Host for the service to listen on")
    service_port: int = Field(default=8095, description="Port for the service to listen on")

    # Upstream API
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Base URL of the generative-language API",
    )
    gemini_model: str = Field(default="gemini-2.5-flash", description="Model used for summary and chat")
    gemini_temperature: float = Field(
        default=0.3,
        description="Sampling temperature for the summarization call (low for factual output)",
    )
    gemini_api_key: str | None = Field(
        default=None,
        description="Default credential used until a user sets one through /v1/credential",
    )

    # Timeout Configuration
    upstream_timeout_s: float = Field(
        default=300.0,
        description="Total timeout for upstream requests (seconds)",
    )
    upstream_connect_timeout_s: float = Field(
        default=10.0,
        description="Connection timeout for upstream requests (seconds)",
    )

    # Security Configuration
    api_key: str | None = Field(
        default=None,
        description="API key for service authentication (optional). If set, requires Authorization: Bearer <API_KEY>",
    )
    allow_origins: str = Field(
        default="",
        description="CORS allowed origins (comma-separated list, empty = no CORS)",
    )
    max_upload_bytes: int = Field(
        default=200_000_000,
        description="Largest request body accepted by /v1/files (bytes)",
    )

    # Persisted user preferences
    preferences_path: Path = Field(
        default=Path.home() / ".config" / "meeting-digest" / "preferences.json",
        description="JSON file holding the credential and theme between runs",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    @field_validator("service_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError(f"service_port must be between 1 and 65535, got {v}")
        return v

    @field_validator("upstream_timeout_s", "upstream_connect_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("gemini_temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        """Validate temperature is within the API's accepted range."""
        if not (0.0 <= v <= 2.0):
            raise ValueError(f"gemini_temperature must be between 0 and 2, got {v}")
        return v

    @field_validator("max_upload_bytes")
    @classmethod
    def validate_max_upload(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"max_upload_bytes must be positive, got {v}")
        return v

    @field_validator("gemini_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme, got {v}")
        if not parsed.netloc:
            raise ValueError(f"URL must have a valid host, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()

    @property
    def allow_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if not self.allow_origins:
            return []
        return [origin.strip() for origin in self.allow_origins.split(",") if origin.strip()]

    def to_summarizer_config(self) -> SummarizerConfig:
        """Build the library configuration from these settings."""
        return SummarizerConfig(
            api_base_url=self.gemini_base_url,
            model=self.gemini_model,
            temperature=self.gemini_temperature,
            timeout_s=self.upstream_timeout_s,
            connect_timeout_s=self.upstream_connect_timeout_s,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Settings are loaded from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Raises:
        ValueError: If settings are invalid.

    Returns:
        Settings: The validated settings instance.
    """
    try:
        return Settings()
    except Exception as e:
        raise ValueError(
            f"Failed to load configuration: {e}\n"
            "Please check your .env file and ensure all settings are valid."
        ) from e
