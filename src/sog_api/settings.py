"""
sog_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API and store layers.
- Hide the MongoDB connection string from repr/logging (it may carry credentials).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration, `SOG_` prefixed.
    Defaults target a local `docker compose` MongoDB.
    """

    model_config = SettingsConfigDict(env_prefix="SOG_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "sog-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Persistence
    mongodb_url: str = Field(default="mongodb://localhost:27017", repr=False)
    mongo_database: str = "sog"
    users_collection: str = "users"
    blogs_collection: str = "blogs"
    mongo_server_selection_timeout_ms: int = 5000

    # Pagination default when the caller omits `limit`.
    default_page_limit: int = Field(default=10, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Collection names are settings so the same image can serve separate databases
# per environment without code changes.
