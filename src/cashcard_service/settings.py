"""
cashcard_service.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API, auth and persistence layers.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Every field can be overridden with a `CASHCARD_`-prefixed environment variable,
    e.g. `CASHCARD_DATABASE_URL` or `CASHCARD_SEED_TEST_USERS=false`.
    """

    model_config = SettingsConfigDict(env_prefix="CASHCARD_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "cashcard-service"
    log_level: str = "INFO"
    # JSON lines for log shipping; False switches to the human-readable console renderer.
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./cashcard.db"

    # Auth: the fixed sarah1/kumar2/hank-owns-no-cards directory.
    seed_test_users: bool = True

    # argon2 cost parameters; tests lower these to keep hashing cheap.
    password_time_cost: int = Field(default=3, ge=1)
    password_memory_cost: int = Field(default=65536, ge=8)
    password_parallelism: int = Field(default=4, ge=1)

    # Pagination
    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `create_app` receives a Settings instance explicitly; `get_settings` is only the
# default used by the process entrypoint and by Alembic.
