"""
tests.test_authorizer

Pure authorization decisions for every (principal x required role) pair.
"""

from __future__ import annotations

import pytest

from library_api.auth.authorizer import (
    Allowed,
    DeniedInsufficientRole,
    DeniedUnauthenticated,
    authorize,
)
from library_api.auth.models import Principal, Role

USER = Principal(username="user", roles=frozenset({Role.USER}))
ADMIN = Principal(username="admin", roles=frozenset({Role.USER, Role.ADMIN}))
NO_ROLES = Principal(username="nobody", roles=frozenset())


@pytest.mark.parametrize("principal", [None, NO_ROLES, USER, ADMIN])
def test_public_operation_allows_everyone(principal) -> None:
    assert authorize(principal, None) == Allowed(principal)


@pytest.mark.parametrize("required", [Role.USER, Role.ADMIN])
def test_anonymous_is_unauthenticated(required) -> None:
    assert authorize(None, required) == DeniedUnauthenticated()


def test_user_requirement() -> None:
    assert authorize(USER, Role.USER) == Allowed(USER)
    assert authorize(ADMIN, Role.USER) == Allowed(ADMIN)
    assert isinstance(authorize(NO_ROLES, Role.USER), DeniedInsufficientRole)


def test_admin_requirement() -> None:
    assert authorize(ADMIN, Role.ADMIN) == Allowed(ADMIN)
    assert authorize(USER, Role.ADMIN) == DeniedInsufficientRole(principal=USER, required=Role.ADMIN)
    assert isinstance(authorize(NO_ROLES, Role.ADMIN), DeniedInsufficientRole)


def test_admin_only_principal_satisfies_user_requirement() -> None:
    # Holding ADMIN alone (USER not listed) must still satisfy USER.
    admin_only = Principal(username="root", roles=frozenset({Role.ADMIN}))
    assert authorize(admin_only, Role.USER) == Allowed(admin_only)
