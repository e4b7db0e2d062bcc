"""
library_api.auth.policy

Static access policy: which role each protected operation requires.

Responsibilities:
- Enumerate the protected operations.
- Map each operation to its HTTP route and minimum role.
- Fail fast (at construction / startup) on incomplete or ambiguous tables.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from library_api.auth.models import Role


class Operation(enum.StrEnum):
    LIST_BOOKS = "LIST_BOOKS"
    CREATE_BOOK = "CREATE_BOOK"
    DELETE_BOOK = "DELETE_BOOK"


class PolicyConfigError(Exception):
    """The policy table is incomplete or does not match the routes being served."""


@dataclass(frozen=True, slots=True)
class PolicyEntry:
    method: str
    path: str
    # None means the operation is public.
    required: Role | None


class AccessPolicy:
    """
    Immutable operation table.

    Build once at startup and pass by reference into the Gate.
    """

    __slots__ = ("_entries", "_routes")

    def __init__(self, entries: Mapping[Operation, PolicyEntry]) -> None:
        missing = [op for op in Operation if op not in entries]
        if missing:
            raise PolicyConfigError(
                f"no policy entry for operations: {', '.join(sorted(missing))}"
            )

        routes: dict[tuple[str, str], Operation] = {}
        for op, entry in entries.items():
            key = (entry.method.upper(), entry.path)
            if key in routes:
                raise PolicyConfigError(
                    f"{key[0]} {key[1]} is bound to both {routes[key]} and {op}"
                )
            routes[key] = op

        self._entries: Mapping[Operation, PolicyEntry] = MappingProxyType(dict(entries))
        self._routes: Mapping[tuple[str, str], Operation] = MappingProxyType(routes)

    @classmethod
    def default(cls) -> AccessPolicy:
        return cls(
            {
                Operation.LIST_BOOKS: PolicyEntry("GET", "/api/books/", None),
                Operation.CREATE_BOOK: PolicyEntry("POST", "/api/books/", Role.USER),
                Operation.DELETE_BOOK: PolicyEntry("DELETE", "/api/books/{book_id}", Role.ADMIN),
            }
        )

    @property
    def operations(self) -> Iterable[Operation]:
        return self._entries.keys()

    def entry(self, operation: Operation) -> PolicyEntry:
        try:
            return self._entries[operation]
        except KeyError:
            raise PolicyConfigError(f"no policy entry for operation {operation!s}") from None

    def required_role(self, operation: Operation) -> Role | None:
        return self.entry(operation).required

    def resolve(self, method: str, path: str) -> Operation:
        """Map an HTTP method and route template (e.g. `/api/books/{book_id}`) to its operation."""
        method = method.upper()
        if method == "HEAD":
            method = "GET"
        try:
            return self._routes[(method, path)]
        except KeyError:
            raise PolicyConfigError(f"no policy entry for route {method} {path}") from None


# --- Module Notes -----------------------------------------------------------
# Adding an operation means adding an enum member and one table entry; the Gate
# and Authorizer do not change.
