"""
tests.test_policy

Access policy table: totality, route resolution, startup verification.
"""

from __future__ import annotations

import pytest

from library_api.api.app import GATED_ROUTERS, create_app, verify_gated_routes
from library_api.auth.deps import GatedRoute
from library_api.auth.models import Role
from library_api.auth.policy import AccessPolicy, Operation, PolicyConfigError, PolicyEntry
from library_api.settings import Settings


def test_default_policy_table() -> None:
    policy = AccessPolicy.default()
    assert policy.required_role(Operation.LIST_BOOKS) is None
    assert policy.required_role(Operation.CREATE_BOOK) is Role.USER
    assert policy.required_role(Operation.DELETE_BOOK) is Role.ADMIN


def test_resolve_maps_method_and_route_template() -> None:
    policy = AccessPolicy.default()
    assert policy.resolve("GET", "/api/books/") is Operation.LIST_BOOKS
    assert policy.resolve("post", "/api/books/") is Operation.CREATE_BOOK
    assert policy.resolve("DELETE", "/api/books/{book_id}") is Operation.DELETE_BOOK


def test_resolve_unknown_route_is_a_config_error() -> None:
    with pytest.raises(PolicyConfigError):
        AccessPolicy.default().resolve("PUT", "/api/books/{book_id}")


def test_incomplete_table_fails_at_construction() -> None:
    with pytest.raises(PolicyConfigError, match="DELETE_BOOK"):
        AccessPolicy(
            {
                Operation.LIST_BOOKS: PolicyEntry("GET", "/api/books/", None),
                Operation.CREATE_BOOK: PolicyEntry("POST", "/api/books/", Role.USER),
            }
        )


def test_route_bound_twice_fails_at_construction() -> None:
    with pytest.raises(PolicyConfigError):
        AccessPolicy(
            {
                Operation.LIST_BOOKS: PolicyEntry("GET", "/api/books/", None),
                Operation.CREATE_BOOK: PolicyEntry("GET", "/api/books/", Role.USER),
                Operation.DELETE_BOOK: PolicyEntry("DELETE", "/api/books/{book_id}", Role.ADMIN),
            }
        )


def test_policy_is_read_only() -> None:
    policy = AccessPolicy.default()
    with pytest.raises(AttributeError):
        policy.extra = 1  # type: ignore[attr-defined]
    with pytest.raises(TypeError):
        policy._entries[Operation.LIST_BOOKS] = PolicyEntry("GET", "/x", Role.ADMIN)  # type: ignore[index]


@pytest.mark.asyncio
async def test_gated_route_without_policy_entry_aborts_startup(settings: Settings) -> None:
    policy = AccessPolicy(
        {
            Operation.LIST_BOOKS: PolicyEntry("GET", "/api/books/", None),
            Operation.CREATE_BOOK: PolicyEntry("POST", "/api/books/", Role.USER),
            Operation.DELETE_BOOK: PolicyEntry("DELETE", "/api/books/{id}", Role.ADMIN),
        }
    )
    app = create_app(settings=settings, policy=policy)
    with pytest.raises(PolicyConfigError, match="DELETE /api/books/{book_id}"):
        async with app.router.lifespan_context(app):
            pass


def test_verify_gated_routes_checks_the_books_router() -> None:
    verify_gated_routes(GATED_ROUTERS, AccessPolicy.default())

    renamed = AccessPolicy(
        {
            Operation.LIST_BOOKS: PolicyEntry("GET", "/api/books/", None),
            Operation.CREATE_BOOK: PolicyEntry("POST", "/api/books", Role.USER),
            Operation.DELETE_BOOK: PolicyEntry("DELETE", "/api/books/{book_id}", Role.ADMIN),
        }
    )
    with pytest.raises(PolicyConfigError, match="POST /api/books/"):
        verify_gated_routes(GATED_ROUTERS, renamed)


def test_every_books_route_is_gated() -> None:
    gated = [r for r in GATED_ROUTERS[0].routes if isinstance(r, GatedRoute)]
    assert {(m, r.path) for r in gated for m in r.methods} == {
        ("GET", "/api/books/"),
        ("POST", "/api/books/"),
        ("DELETE", "/api/books/{book_id}"),
    }
