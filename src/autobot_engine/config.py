from functools import lru_cache
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Verbosity = Literal["debug", "info", "warn", "error"]


class EngineSettings(BaseSettings):
    """
    Engine configuration, read from AUTOBOT_* environment variables or a .env file.
    """
    log_level: Verbosity = Field(default="info", description="Minimum verbosity written by the logging sink")

    # Backoff retrier defaults
    retry_max_attempts: int = 5
    retry_base_delay_ms: int = Field(default=5000, ge=0)

    # Number of job records kept per task
    job_history_limit: int = Field(default=10, gt=0)

    # IANA zone used to evaluate cron expressions; None means the local zone
    timezone: Optional[str] = None

    model_config = SettingsConfigDict(env_prefix="AUTOBOT_", env_file=".env", extra="ignore")

    @field_validator("timezone")
    def check_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone '{v}'")
        return v


@lru_cache
def get_settings() -> EngineSettings:
    return EngineSettings()
