"""
library_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide seeded credentials from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SeedUser(BaseModel):
    username: str = Field(min_length=1, max_length=128)
    password: str = Field(min_length=1, repr=False)
    roles: list[str] = Field(default_factory=list)


def _default_seed_users() -> list[SeedUser]:
    return [
        SeedUser(username="user", password="pass", roles=["USER"]),
        SeedUser(username="admin", password="pass", roles=["USER", "ADMIN"]),
    ]


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `LIBRARY_`).
    Defaults are safe for local dev; `seed_users` accepts a JSON list.
    """

    model_config = SettingsConfigDict(env_prefix="LIBRARY_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and user seeding.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "library-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    auth_realm: str = "library"
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    seed_users: list[SeedUser] = Field(default_factory=_default_seed_users, repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./library.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()
