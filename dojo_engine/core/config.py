"""Engine settings and configuration."""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "test", "prod"] = Field(default="dev")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=True)

    # Content sources
    CONTENT_BASE_URL: str = Field(default="http://localhost:3000")
    KANJI_LEVEL_PATH: str = Field(default="/data-kanji/{LEVEL}.json")
    VOCAB_LEVEL_PATH: str = Field(default="/data-vocab/{level}.json")
    CONTENT_DATA_DIR: str | None = Field(default=None)  # Read levels from disk when set
    CONTENT_FETCH_TIMEOUT_SECONDS: float = Field(default=10.0)

    # Redis (session-scoped content store)
    REDIS_ENABLED: bool = Field(default=False)
    REDIS_URL: str | None = Field(default=None)
    REDIS_REQUIRED: bool = Field(default=False)
    SESSION_CACHE_TTL_SECONDS: int = Field(default=86400)  # 24 hours

    # Progressive difficulty (pick mode)
    DIFFICULTY_MIN_OPTIONS: int = Field(default=3)
    DIFFICULTY_MAX_OPTIONS: int = Field(default=6)
    DIFFICULTY_STREAK_PER_LEVEL: int = Field(default=3)
    DIFFICULTY_WRONGS_TO_DECREASE: int = Field(default=2)

    @model_validator(mode="after")
    def validate_difficulty(self) -> "Settings":
        """Reject difficulty bounds the controller cannot honor."""
        if self.DIFFICULTY_MIN_OPTIONS < 1:
            raise ValueError("DIFFICULTY_MIN_OPTIONS must be at least 1")
        if self.DIFFICULTY_MIN_OPTIONS > self.DIFFICULTY_MAX_OPTIONS:
            raise ValueError("DIFFICULTY_MIN_OPTIONS must not exceed DIFFICULTY_MAX_OPTIONS")
        if self.DIFFICULTY_STREAK_PER_LEVEL < 1 or self.DIFFICULTY_WRONGS_TO_DECREASE < 1:
            raise ValueError("Difficulty thresholds must be at least 1")
        return self


settings = Settings()
