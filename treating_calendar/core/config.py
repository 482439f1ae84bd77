# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration, all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os
from datetime import date
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


def _optional_date(name: str) -> Optional[date]:
    raw = os.getenv(name, "").strip()
    return date.fromisoformat(raw) if raw else None


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "treating-calendar")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8010"))

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./treating_calendar.db")
    POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))
    POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "10"))

    # 0 = Sunday ... 6 = Saturday
    OCCURRENCE_WEEKDAY: int = int(os.getenv("OCCURRENCE_WEEKDAY", "4"))
    SCHEDULE_WINDOW_WEEKS: int = int(os.getenv("SCHEDULE_WINDOW_WEEKS", "52"))
    DEFAULT_SORT_TYPE: str = os.getenv("DEFAULT_SORT_TYPE", "byName")
    RANDOM_SEED: Optional[int] = _optional_int("RANDOM_SEED")
    DEBUG_DATE: Optional[date] = _optional_date("DEBUG_DATE")

    NOTIFICATION_SERVICE_URL: str = os.getenv(
        "NOTIFICATION_SERVICE_URL", "http://notification-service:8004"
    )
    NOTIFICATION_TIMEOUT: float = float(os.getenv("NOTIFICATION_TIMEOUT", "3.0"))
    APP_URL: str = os.getenv("APP_URL", "http://localhost:8010")

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
