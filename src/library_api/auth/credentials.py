"""
library_api.auth.credentials

SQL-backed credential store.

Responsibilities:
- Verify a username/secret pair against the `users` table.
- Build a `Principal` with the stored (expanded) roles.
- Surface database failures as `CredentialStoreError`.
"""

from __future__ import annotations

import asyncio

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from library_api.auth.models import Principal, parse_roles
from library_api.auth.passwords import verify_password
from library_api.db.repositories.users import UserRepo
from library_api.errors import CredentialStoreError


class SqlCredentialStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        # Shared across requests; each verification opens its own short-lived session.
        self._session_factory = session_factory

    async def verify(self, username: str, secret: str) -> Principal | None:
        try:
            async with self._session_factory() as session:
                user = await UserRepo(session).get(username)
        except SQLAlchemyError as e:
            raise CredentialStoreError("credential store unavailable") from e

        if user is None:
            return None
        # bcrypt is CPU-bound; keep it off the event loop.
        if not await asyncio.to_thread(verify_password, secret, user.password_hash):
            return None
        return Principal(username=user.username, roles=parse_roles(user.roles))
