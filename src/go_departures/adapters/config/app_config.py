"""12-factor configuration adapter using environment variables and an optional .env file."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=5000, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root logging level")

    # Metrolinx OpenData API configuration
    metrolinx_api_key: str | None = Field(
        default=None,
        description="Metrolinx OpenData API key (METROLINX_API_KEY). Required for every feed.",
    )
    metrolinx_base_url: str = Field(
        default="https://api.openmetrolinx.com/OpenDataAPI",
        description="Base URL of the Metrolinx OpenData API",
    )
    api_timeout_seconds: float = Field(
        default=10.0, description="Timeout for each upstream API request in seconds"
    )
    journey_max_results: int = Field(
        default=50,
        description="Maximum journeys requested from the schedule feed (covers the rest of the day)",
    )
    stop_departures_limit: int = Field(
        default=10, description="Maximum departures returned for a single stop"
    )
    timezone: str = Field(
        default="America/Toronto",
        description="IANA timezone the schedule is expressed in",
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=120,
        description="Maximum number of requests allowed per IP address per minute (0 disables)",
    )

    @field_validator("metrolinx_api_key")
    @classmethod
    def blank_api_key_is_missing(cls, v: str | None) -> str | None:
        """Treat an empty or whitespace-only key as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("api_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Upstream calls must carry a finite, positive timeout."""
        if v <= 0:
            raise ValueError("api_timeout_seconds must be positive")
        return v

    @field_validator("journey_max_results", "stop_departures_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Result caps must be positive."""
        if v <= 0:
            raise ValueError("result limits must be positive")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate the timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got '{v}'") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is one understood by the logging module."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @property
    def has_api_key(self) -> bool:
        """Whether an API key is configured."""
        return self.metrolinx_api_key is not None
