"""
library_api.auth.deps

FastAPI integration of the access gate.

Responsibilities:
- Extract optional HTTP Basic credentials from the request.
- `GatedRoute`: run every request through the `Gate` before the body is read
  or any dependency is resolved.
- Expose the admitted principal to handlers.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Callable, Coroutine
from typing import Any

import structlog
from fastapi import HTTPException, Request, Response
from fastapi.routing import APIRoute
from fastapi.security import HTTPBasic
from fastapi.security.utils import get_authorization_scheme_param

from library_api.auth.gate import Gate
from library_api.auth.models import Credentials, Principal
from library_api.observability.logging import get_logger

log = get_logger(__name__)

_basic = HTTPBasic(auto_error=False)


def gate_from_app(request: Request) -> Gate:
    # The gate is built on app startup in `library_api.api.app.create_app`.
    return request.app.state.gate  # type: ignore[attr-defined]


def _decode_utf8_basic(request: Request) -> Credentials | None:
    # HTTPBasic only accepts ASCII; clients such as browsers and httpx send UTF-8.
    scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "basic":
        return None
    try:
        data = base64.b64decode(param, validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError, binascii.Error):
        return None
    username, separator, secret = data.partition(":")
    if not separator:
        return None
    return Credentials(username=username, secret=secret)


async def get_credentials(request: Request) -> Credentials | None:
    try:
        basic = await _basic(request)
    except HTTPException:
        credentials = _decode_utf8_basic(request)
        if credentials is None:
            # Undecodable Basic header: no usable credentials, same as an absent header.
            log.info("malformed_basic_credentials")
        return credentials
    if basic is None:
        return None
    return Credentials(username=basic.username, secret=basic.password)


async def enforce_access(request: Request, route_path: str) -> Principal | None:
    """Admit or reject `request` for the route template it matched."""
    gate = gate_from_app(request)
    operation = gate.resolve(request.method, route_path)
    credentials = await get_credentials(request)
    principal = await gate.admit(operation, credentials)
    # Cleared per request by RequestContextMiddleware.
    structlog.contextvars.bind_contextvars(
        operation=str(operation),
        principal=principal.username if principal is not None else None,
    )
    return principal


class GatedRoute(APIRoute):
    """
    Route class that enforces the gate ahead of FastAPI's own request handling.

    FastAPI parses the JSON body before resolving dependencies, so a dependency
    cannot reject an anonymous caller before a malformed body yields 422.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def gated_handler(request: Request) -> Response:
            request.state.principal = await enforce_access(request, self.path)
            return await handler(request)

        return gated_handler


def current_principal(request: Request) -> Principal | None:
    # Set by GatedRoute before dependencies run; None for anonymous public access.
    return getattr(request.state, "principal", None)


# --- Module Notes -----------------------------------------------------------
# Every route of a router built with `route_class=GatedRoute` must have a policy
# entry; `api.app` verifies this at startup.
