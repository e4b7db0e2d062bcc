"""
library_api.db.models

Persistence schema.

Responsibilities:
- `Book`: the catalog resource exposed by the API.
- `User`: credential records backing HTTP Basic authentication.
"""

from __future__ import annotations

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from library_api.db.base import Base


class Book(Base):
    __tablename__ = "books"

    # Assigned by the database on insert; None until flushed.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r})"


class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(128), primary_key=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    # Role names as stored; unknown names are ignored when building a Principal.
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
