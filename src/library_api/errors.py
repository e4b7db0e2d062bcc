"""
library_api.errors

Infrastructure error taxonomy.

Responsibilities:
- Separate collaborator failures (storage, credential store) from
  access-control decisions so they surface as 5xx, never as 401/403.
"""

from __future__ import annotations


class InfrastructureError(Exception):
    """A backing collaborator could not serve the request."""


class CredentialStoreError(InfrastructureError):
    pass


class StorageError(InfrastructureError):
    pass


# --- Module Notes -----------------------------------------------------------
# Mapped to HTTP 503 by the exception handler registered in `api.app.create_app`.
