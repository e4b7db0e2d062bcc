"""
library_api.services.books

Book resource handlers.

Responsibilities:
- List, create and delete books through the storage repository.
- Own the transaction boundary (commit after mutations).
- Translate storage failures into `StorageError` and missing records into `BookNotFoundError`.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.db.models import Book
from library_api.db.repositories.books import BookRepo
from library_api.errors import StorageError
from library_api.observability.logging import get_logger

log = get_logger(__name__)


class BookNotFoundError(LookupError):
    def __init__(self, book_id: int) -> None:
        super().__init__(f"book {book_id} not found")
        self.book_id = book_id


class BookService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._books = BookRepo(session)

    async def list_books(self) -> list[Book]:
        try:
            return await self._books.list()
        except SQLAlchemyError as e:
            raise StorageError("book storage unavailable") from e

    async def create_book(
        self, *, title: str, description: str, actor: str | None = None
    ) -> Book:
        try:
            book = await self._books.save(Book(title=title, description=description))
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StorageError("book storage unavailable") from e
        log.info("book_created", book_id=book.id, actor=actor)
        return book

    async def delete_book(self, book_id: int) -> Book:
        try:
            book = await self._books.find_one(book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            await self._books.delete(book_id)
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StorageError("book storage unavailable") from e
        log.info("book_deleted", book_id=book_id)
        return book
