"""
library_api.auth.authorizer

Pure authorization decision.

Responsibilities:
- Compare an optional Principal against an operation's required role.
- Produce a per-request `AuthDecision` (allowed / unauthenticated / insufficient role).
"""

from __future__ import annotations

from dataclasses import dataclass

from library_api.auth.models import Principal, Role, role_satisfies


@dataclass(frozen=True, slots=True)
class AuthDecision:
    pass


@dataclass(frozen=True, slots=True)
class Allowed(AuthDecision):
    # None when a public operation is reached anonymously.
    principal: Principal | None


@dataclass(frozen=True, slots=True)
class DeniedUnauthenticated(AuthDecision):
    pass


@dataclass(frozen=True, slots=True)
class DeniedInsufficientRole(AuthDecision):
    principal: Principal
    required: Role


def authorize(principal: Principal | None, required: Role | None) -> AuthDecision:
    if required is None:
        return Allowed(principal)
    if principal is None:
        return DeniedUnauthenticated()
    if not role_satisfies(principal.roles, required):
        return DeniedInsufficientRole(principal=principal, required=required)
    return Allowed(principal)
