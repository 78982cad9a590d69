"""Application settings.

Values come from ``STOREFRONT_``-prefixed environment variables or a ``.env``
file, e.g. ``STOREFRONT_PORT=8080`` or ``STOREFRONT_CATALOG_CSV=data/catalog.csv``.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized application settings loaded from the environment."""

    project_name: str = "Storefront API"
    api_prefix: str = "/api/v1"

    host: str = "0.0.0.0"
    port: int = 3001

    log_level: str = "INFO"
    json_logs: bool = True

    # Seed from this CSV instead of the built-in sample products
    catalog_csv: Optional[str] = None
    default_limit: int = 5

    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:3002",
    ]

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_", env_file=".env", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader."""
    return Settings()
