from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "SMS Rate Limiter"
    max_messages_per_phone_number_per_second: int = Field(default=1, ge=0)
    max_messages_per_account_per_second: int = Field(default=5, ge=0)
    cleanup_interval_minutes: float = Field(default=60, gt=0)
    inactivity_threshold_hours: float = Field(default=24, gt=0)
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    frontend_dir: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_prefix="SMSGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
