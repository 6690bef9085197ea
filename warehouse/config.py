from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Warehouse Inventory Tracker"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./warehouse.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security
    # ==============================
    API_KEY_HEADER: str = "X-API-Key"
    ADMIN_API_KEYS: Optional[str] = None
    USER_API_KEYS: Optional[str] = None
    AUTH_REQUIRED: bool = False
    LOCAL_ACTOR_NAME: str = "local-admin"

    # ==============================
    # Inventory rules
    # ==============================
    STAGNANT_AFTER_DAYS: int = 30
    # Ledger dates typed by hand; ISO dates are always accepted as well.
    DATE_FORMAT: str = "%d/%m/%Y"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
