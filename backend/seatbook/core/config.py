"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Event Seat Booking API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Catalog
    SEED_SAMPLE_EVENTS: bool = True

    # Booking rules
    GROUP_DISCOUNT_THRESHOLD: int = 4
    GROUP_DISCOUNT_RATE: Decimal = Decimal("0.10")
    MAX_TICKETS_PER_BOOKING: int = 10

    # Row locks. A lease older than this is considered abandoned; 0 disables expiry.
    ROW_LOCK_LEASE_SECONDS: Optional[float] = 30.0

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
