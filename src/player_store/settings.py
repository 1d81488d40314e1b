"""
player_store.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the KV backend, logging and API.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `PLAYER_STORE_`).
    Defaults are safe for local dev: a SQLite file next to the process.
    """

    model_config = SettingsConfigDict(env_prefix="PLAYER_STORE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "player-store"
    log_level: str = "INFO"
    # JSON lines for log shippers; set false for a human-readable console renderer.
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Persistence (any async SQLAlchemy URL works; sqlite+aiosqlite is the default engine).
    database_url: str = Field(default="sqlite+aiosqlite:///./player_store.db", repr=False)
    database_echo: bool = False
    # None means "create tables outside prod".
    create_tables: bool | None = None

    @property
    def should_create_tables(self) -> bool:
        if self.create_tables is not None:
            return self.create_tables
        return self.env != "prod"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `database_url` is hidden from repr because production URLs usually embed credentials.
