"""
library_api.auth.authenticator

Credential verification.

Responsibilities:
- Turn optional Basic credentials into an optional `Principal`.
- Keep "no credentials" and "bad credentials" indistinguishable to callers.
- Let credential-store outages propagate as infrastructure errors.
"""

from __future__ import annotations

from typing import Protocol

from library_api.auth.models import Credentials, Principal
from library_api.observability.logging import get_logger

log = get_logger(__name__)


class CredentialStore(Protocol):
    async def verify(self, username: str, secret: str) -> Principal | None:
        """Return the matching principal, or None for unknown user / wrong secret."""
        ...


class Authenticator:
    def __init__(self, store: CredentialStore) -> None:
        self._store = store

    async def authenticate(self, credentials: Credentials | None) -> Principal | None:
        if credentials is None:
            return None
        # CredentialStoreError propagates to the caller.
        principal = await self._store.verify(credentials.username, credentials.secret)
        if principal is None:
            log.info("authentication_failed", username=credentials.username)
        return principal
