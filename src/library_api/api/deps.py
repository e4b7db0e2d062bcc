"""
library_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide request-scoped DB sessions from the app's sessionmaker.
- Build per-request services.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from library_api.services.books import BookService


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `library_api.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed by the service layer.
    async with session_factory() as session:
        yield session


def book_service(session: AsyncSession = Depends(db_session)) -> BookService:
    return BookService(session)
