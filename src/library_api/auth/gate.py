"""
library_api.auth.gate

Access enforcement pipeline.

Responsibilities:
- Resolve the operation being invoked and its required role (AccessPolicy).
- Authenticate, then authorize; authentication alone never rejects.
- Translate decisions into the HTTP contract: proceed, 401 "Unauthorized", 403 "Forbidden".
- Compose around arbitrary async handlers (`Gate.wrap`).
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import HTTPException
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from library_api.auth.authenticator import Authenticator
from library_api.auth.authorizer import (
    Allowed,
    AuthDecision,
    DeniedInsufficientRole,
    DeniedUnauthenticated,
    authorize,
)
from library_api.auth.models import Credentials, Principal
from library_api.auth.policy import AccessPolicy, Operation
from library_api.observability.logging import get_logger

log = get_logger(__name__)

UNAUTHORIZED = "Unauthorized"
FORBIDDEN = "Forbidden"

T = TypeVar("T")


class Gate:
    """
    Stateless across requests: holds only the immutable policy and the authenticator.
    """

    def __init__(
        self,
        *,
        policy: AccessPolicy,
        authenticator: Authenticator,
        realm: str = "library",
    ) -> None:
        self._policy = policy
        self._authenticator = authenticator
        self._realm = realm

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    def resolve(self, method: str, path: str) -> Operation:
        return self._policy.resolve(method, path)

    async def decide(self, operation: Operation, credentials: Credentials | None) -> AuthDecision:
        required = self._policy.required_role(operation)
        principal = await self._authenticator.authenticate(credentials)
        decision = authorize(principal, required)

        username = principal.username if principal is not None else None
        if isinstance(decision, Allowed):
            log.debug("access_granted", operation=operation, principal=username, required=required)
        else:
            log.warning(
                "access_denied",
                operation=operation,
                principal=username,
                required=required,
                reason=type(decision).__name__,
            )
        return decision

    async def admit(self, operation: Operation, credentials: Credentials | None) -> Principal | None:
        """
        Run the decision and raise the HTTP rejection for denials.

        Returns the principal (None for anonymous access to a public operation).
        """
        decision = await self.decide(operation, credentials)
        if isinstance(decision, Allowed):
            return decision.principal
        if isinstance(decision, DeniedUnauthenticated):
            raise HTTPException(
                status_code=HTTP_401_UNAUTHORIZED,
                detail=UNAUTHORIZED,
                headers={"WWW-Authenticate": f'Basic realm="{self._realm}"'},
            )
        if isinstance(decision, DeniedInsufficientRole):
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail=FORBIDDEN)
        raise TypeError(f"unhandled auth decision: {decision!r}")

    def wrap(
        self,
        operation: Operation,
        handler: Callable[..., Awaitable[T]],
    ) -> Callable[..., Awaitable[T]]:
        """
        Guard `handler` with this gate outside of a router.

        The wrapped callable takes the caller's credentials as its first argument;
        remaining arguments are forwarded to `handler` once access is admitted.
        """

        @functools.wraps(handler)
        async def guarded(credentials: Credentials | None, *args: Any, **kwargs: Any) -> T:
            await self.admit(operation, credentials)
            return await handler(*args, **kwargs)

        return guarded


# --- Module Notes -----------------------------------------------------------
# Routers use the gate through `auth.deps.GatedRoute`, which resolves the
# operation from the matched route rather than from per-handler role checks.
