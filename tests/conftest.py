"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build an app against a per-test sqlite database with its lifespan entered.
- Provide an httpx client bound to the app in-process.
- Provide fake collaborators for gate/authenticator unit tests.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from library_api.api.app import create_app
from library_api.auth.models import Principal, Role
from library_api.db.models import Book
from library_api.db.repositories.books import BookRepo
from library_api.errors import CredentialStoreError
from library_api.settings import Settings

BOOKS_ENDPOINT = "/api/books/"

USER_AUTH = ("user", "pass")
ADMIN_AUTH = ("admin", "pass")

UNAUTHORIZED_STRING = "Unauthorized"
FORBIDDEN_STRING = "Forbidden"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'library.db'}",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def save_book(app: FastAPI, title: str, description: str) -> Book:
    async with app.state.sessionmaker() as session:
        book = await BookRepo(session).save(Book(title=title, description=description))
        await session.commit()
        return book


async def find_book(app: FastAPI, book_id: int) -> Book | None:
    async with app.state.sessionmaker() as session:
        return await BookRepo(session).find_one(book_id)


async def all_books(app: FastAPI) -> list[Book]:
    async with app.state.sessionmaker() as session:
        return await BookRepo(session).list()


class FakeCredentialStore:
    """In-memory credential store recording every lookup."""

    def __init__(self, users: dict[str, tuple[str, set[Role]]] | None = None) -> None:
        self.users = users if users is not None else {
            "user": ("pass", {Role.USER}),
            "admin": ("pass", {Role.USER, Role.ADMIN}),
            "nobody": ("pass", set()),
        }
        self.calls: list[str] = []

    async def verify(self, username: str, secret: str) -> Principal | None:
        self.calls.append(username)
        entry = self.users.get(username)
        if entry is None or entry[0] != secret:
            return None
        return Principal(username=username, roles=frozenset(entry[1]))


class BrokenCredentialStore:
    async def verify(self, username: str, secret: str) -> Principal | None:
        raise CredentialStoreError("credential store unavailable")
