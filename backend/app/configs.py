"""Application settings loaded from environment variables.

Defines all environment-driven configuration used by the API and the
watchlist client.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration model for the application."""

    # Target marketplace
    TARGET_DOMAIN: str = "trendyol.com"
    PLATFORM_NAME: str = "Trendyol"
    CURRENCY_SUFFIX: str = "TL"

    # Outbound page fetch
    FETCH_TIMEOUT_SECONDS: float = 30.0

    # Watchlist client
    EXTRACTION_SERVICE_URL: str = "http://localhost:8000/api/check-stock"
    CLIENT_TIMEOUT_SECONDS: float = 35.0
    REFRESH_DELAY_SECONDS: float = 1.0

    # Redis configuration (client-scoped watchlist store)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: Optional[str] = None
    REDIS_SSL: bool = False
    REDIS_DB: int = 0
    WATCHLIST_STORAGE_KEY: str = "trackedProducts"

    # API parameters
    ROOT_PATH_BACKEND: str = ""
    ALLOWED_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
