"""Application configuration."""
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON (always on in production)",
    )

    # Prize structure validation
    prize_percentage_tolerance: float = Field(
        default=0.01,
        description="Allowed absolute deviation of a percentage total from 100",
    )

    # Blind clock
    low_time_threshold_seconds: int = Field(
        default=60,
        description="Remaining seconds at or below which a level is flagged as low on time",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got '{v}'"
            )
        return level

    @field_validator("prize_percentage_tolerance")
    @classmethod
    def validate_tolerance(cls, v: float) -> float:
        """Tolerance must be non-negative."""
        if v < 0:
            raise ValueError("prize_percentage_tolerance must not be negative")
        return v

    @field_validator("low_time_threshold_seconds")
    @classmethod
    def validate_low_time_threshold(cls, v: int) -> int:
        """Threshold must be non-negative."""
        if v < 0:
            raise ValueError("low_time_threshold_seconds must not be negative")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate settings for production environment."""
        if self.app_env == "production":
            # 프로덕션에서는 JSON 로그 강제
            object.__setattr__(self, "json_logs", True)
        return self

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
