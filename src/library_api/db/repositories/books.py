"""
library_api.db.repositories.books

Repository for `Book` entities (the storage collaborator of the book handlers).
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.db.models import Book


class BookRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list(self) -> list[Book]:
        stmt = select(Book).order_by(Book.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def save(self, book: Book) -> Book:
        self._session.add(book)
        # Flush so the database assigns the identifier before returning.
        await self._session.flush()
        return book

    async def find_one(self, book_id: int) -> Book | None:
        return await self._session.get(Book, book_id)

    async def delete(self, book_id: int) -> None:
        await self._session.execute(delete(Book).where(Book.id == book_id))
