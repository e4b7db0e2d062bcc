"""
library_api.auth.models

Auth domain models.

Responsibilities:
- Define the closed `Role` set and its hierarchy (ADMIN implies USER).
- Define the authenticated identity type (`Principal`).
- Define the raw `Credentials` pair presented by a caller.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field


class Role(enum.StrEnum):
    USER = "USER"
    ADMIN = "ADMIN"


# Direct implications only; `expand_roles` computes the closure.
_IMPLIES: dict[Role, frozenset[Role]] = {
    Role.ADMIN: frozenset({Role.USER}),
    Role.USER: frozenset(),
}


def expand_roles(roles: Iterable[Role]) -> frozenset[Role]:
    """Return `roles` plus every role they imply, transitively."""
    pending = list(roles)
    expanded: set[Role] = set()
    while pending:
        role = pending.pop()
        if role in expanded:
            continue
        expanded.add(role)
        pending.extend(_IMPLIES.get(role, ()))
    return frozenset(expanded)


def role_satisfies(held: Iterable[Role], required: Role) -> bool:
    """
    Capability comparison used by the Authorizer.

    A requirement is met when any held role is, or implies, the required one.
    This is the single place the hierarchy is consulted.
    """
    return required in expand_roles(held)


def parse_roles(raw: Iterable[str]) -> frozenset[Role]:
    """Map stored role names onto `Role`, ignoring names outside the closed set."""
    known = {r.value for r in Role}
    return frozenset(Role(name) for name in (str(r).upper() for r in raw) if name in known)


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.

    Roles are stored expanded, so an ADMIN principal always also holds USER.
    """

    username: str
    roles: frozenset[Role]

    def __post_init__(self) -> None:
        object.__setattr__(self, "roles", expand_roles(self.roles))

    def has_role(self, role: Role) -> bool:
        return role_satisfies(self.roles, role)


@dataclass(frozen=True, slots=True)
class Credentials:
    username: str
    secret: str = field(default="", repr=False)
