"""Engine configuration with validation."""
from typing import Literal
from functools import lru_cache
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_SCALES = (5, 10)


class Settings(BaseSettings):
    """Scoring engine settings, read from the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    APP_NAME: str = "JTBD Readiness Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Input scale of forceStrengthScore as delivered by the scoring call.
    # Classification always happens on 0-10.
    FORCE_SCORE_SCALE: int = 5

    # Classification thresholds (0-10 scale)
    DOMINANT_THRESHOLD: float = Field(default=7.0, ge=0, le=10)
    WEAK_THRESHOLD: float = Field(default=3.0, ge=0, le=10)

    # Theme handling
    MAX_KEY_THEMES: int = Field(default=20, ge=1, le=100)
    TOP_THEMES_LIMIT: int = Field(default=5, ge=1, le=50)

    @field_validator("FORCE_SCORE_SCALE")
    @classmethod
    def validate_scale(cls, v: int) -> int:
        if v not in SUPPORTED_SCALES:
            raise ValueError(f"FORCE_SCORE_SCALE must be one of {SUPPORTED_SCALES}, got {v}")
        return v

    @model_validator(mode="after")
    def validate_thresholds(self):
        """Dominant and weak bands must not overlap."""
        if self.DOMINANT_THRESHOLD <= self.WEAK_THRESHOLD:
            raise ValueError(
                f"DOMINANT_THRESHOLD ({self.DOMINANT_THRESHOLD}) must be greater "
                f"than WEAK_THRESHOLD ({self.WEAK_THRESHOLD})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
