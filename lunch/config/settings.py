from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LUNCH_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LUNCH_LOG_FILE", description="Optional rotating log file")
    log_rotation: str = Field(default="10 MB", validation_alias="LUNCH_LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LUNCH_LOG_RETENTION")
    default_weekly_capacity: float = Field(
        default=200.0,
        ge=0,
        validation_alias="LUNCH_DEFAULT_WEEKLY_CAPACITY",
        description="Weekly capacity used before preferences are loaded, and by the setup wizard",
    )
    default_target_experiences: int = Field(
        default=10,
        ge=0,
        validation_alias="LUNCH_DEFAULT_TARGET_EXPERIENCES",
    )
    min_target_experiences: int = Field(default=5, ge=0, validation_alias="LUNCH_MIN_TARGET_EXPERIENCES")
    max_target_experiences: int = Field(default=21, ge=0, validation_alias="LUNCH_MAX_TARGET_EXPERIENCES")
    refresh_interval_seconds: float = Field(
        default=300.0,
        ge=0,
        validation_alias="LUNCH_REFRESH_INTERVAL_SECONDS",
        description="Periodic tracker refresh interval (0 disables periodic refresh)",
    )
    history_lookback_days: int = Field(
        default=1825,
        gt=0,
        validation_alias="LUNCH_HISTORY_LOOKBACK_DAYS",
        description="How far back meal history is loaded for achievement checks",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LUNCH_LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @model_validator(mode="after")
    def validate_target_bounds(self) -> "Settings":
        """Swap target experience bounds if they were configured backwards."""
        if self.min_target_experiences > self.max_target_experiences:
            logger.warning(
                f"LUNCH_MIN_TARGET_EXPERIENCES ({self.min_target_experiences}) is greater than "
                f"LUNCH_MAX_TARGET_EXPERIENCES ({self.max_target_experiences}). Swapping bounds."
            )
            self.min_target_experiences, self.max_target_experiences = (
                self.max_target_experiences,
                self.min_target_experiences,
            )
        return self


settings = Settings()
