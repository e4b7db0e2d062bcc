"""
library_api.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Seed the configured users so Basic auth works out of the box.
- Keep production migration workflow separate (Alembic).
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from library_api.auth.models import parse_roles
from library_api.auth.passwords import hash_password
from library_api.db.base import Base
from library_api.db.repositories.users import UserRepo
from library_api.observability.logging import get_logger
from library_api.settings import SeedUser

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production should rely on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_users(
    session_factory: async_sessionmaker[AsyncSession],
    users: Iterable[SeedUser],
    *,
    rounds: int,
) -> None:
    async with session_factory() as session:
        repo = UserRepo(session)
        for seed in users:
            roles = sorted(r.value for r in parse_roles(seed.roles))
            password_hash = await asyncio.to_thread(hash_password, seed.password, rounds=rounds)
            await repo.upsert(username=seed.username, password_hash=password_hash, roles=roles)
            log.info("user_seeded", username=seed.username, roles=roles)
        await session.commit()
