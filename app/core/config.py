# app/core/config.py

from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    # Azure Computer Vision (Read API)
    VISION_ENDPOINT: Optional[str] = None
    VISION_API_KEY: Optional[str] = None

    # Read operation polling
    POLL_INTERVAL_SECONDS: float = 1.0
    MAX_POLL_ATTEMPTS: int = 60

    # Outbound HTTP
    FETCH_TIMEOUT_SECONDS: float = 30.0
    HTTP_TIMEOUT_SECONDS: float = 30.0

    LOG_LEVEL: LogLevel = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @property
    def vision_configured(self) -> bool:
        return bool(self.VISION_ENDPOINT and self.VISION_API_KEY)


CONFIG = Settings()


@lru_cache
def get_settings() -> Settings:
    """FastAPI dependency; tests override it through app.dependency_overrides."""
    return CONFIG
