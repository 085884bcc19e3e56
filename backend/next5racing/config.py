"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Race Feed ===
    feed_base_url: str = Field(
        default="https://api.neds.com.au/rest/v1/racing/",
        description="Next-to-go racing feed endpoint"
    )
    feed_race_count: int = Field(default=10, gt=0, description="Races requested per fetch")
    feed_timeout_seconds: float = Field(default=10.0, gt=0)

    # === Refresh Cadence ===
    refresh_interval_seconds: float = Field(
        default=60.0,
        description="Full refresh interval"
    )
    tick_interval_seconds: float = Field(
        default=1.0,
        description="Countdown / expiry sweep interval"
    )

    # === Connectivity ===
    connectivity_probe_enabled: bool = Field(default=True)
    connectivity_probe_url: str = Field(
        default="https://api.neds.com.au",
        description="URL probed to decide whether the network is reachable"
    )
    connectivity_check_interval_seconds: float = Field(default=10.0)

    @field_validator(
        'refresh_interval_seconds',
        'tick_interval_seconds',
        'connectivity_check_interval_seconds',
    )
    @classmethod
    def check_positive_interval(cls, v: float) -> float:
        """Timer intervals must be positive."""
        if v <= 0:
            raise ValueError("interval must be positive")
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
