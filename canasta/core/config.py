from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # App
    APP_NAME: str = "Canasta Campesina"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Catalog API connecting rural producers with consumers"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./canasta.db"
    DB_ECHO: bool = False

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost", "http://localhost:3000"]
    )

    # Product listing
    LISTING_TIMEOUT_SECONDS: float = 10.0
    DEFAULT_PAGE_SIZE: int = 12
    MAX_PAGE_SIZE: int = 100
    FEATURED_LIMIT: int = 8

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
