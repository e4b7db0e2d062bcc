"""
library_api.api.routers.books

Book catalog endpoints.

Responsibilities:
- GET /api/books/ (public), POST /api/books/ (USER), DELETE /api/books/{book_id} (ADMIN).
- Access is enforced by `GatedRoute` before the body is parsed; handlers hold no role checks.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from library_api.api.deps import book_service
from library_api.auth.deps import GatedRoute, current_principal
from library_api.auth.models import Principal
from library_api.services.books import BookNotFoundError, BookService

router = APIRouter(
    prefix="/api/books",
    tags=["books"],
    route_class=GatedRoute,
)


class BookCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str


@router.get("/", response_model=list[BookResponse])
async def list_books(books: BookService = Depends(book_service)) -> list[BookResponse]:
    return [BookResponse.model_validate(b) for b in await books.list_books()]


@router.post("/", response_model=BookResponse, status_code=HTTP_201_CREATED)
async def create_book(
    body: BookCreateRequest,
    principal: Principal | None = Depends(current_principal),
    books: BookService = Depends(book_service),
) -> BookResponse:
    book = await books.create_book(
        title=body.title,
        description=body.description,
        actor=principal.username if principal is not None else None,
    )
    return BookResponse.model_validate(book)


@router.delete("/{book_id}", response_model=BookResponse)
async def delete_book(
    book_id: int,
    books: BookService = Depends(book_service),
) -> BookResponse:
    # 200 with the removed book; callers rely on 200 rather than 204.
    try:
        book = await books.delete_book(book_id)
    except BookNotFoundError as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Book not found") from e
    return BookResponse.model_validate(book)
