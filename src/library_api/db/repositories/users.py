"""
library_api.db.repositories.users

Repository for `User` credential records.

Responsibilities:
- Look up a user by username for the credential store.
- Upsert seeded users (dev/test bootstrap).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from library_api.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, username: str) -> User | None:
        return await self._session.get(User, username)

    async def upsert(self, *, username: str, password_hash: str, roles: list[str]) -> User:
        user = await self._session.get(User, username)
        if user is None:
            user = User(username=username, password_hash=password_hash, roles=roles)
            self._session.add(user)
        else:
            user.password_hash = password_hash
            user.roles = roles
        await self._session.flush()
        return user
