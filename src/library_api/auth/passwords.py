"""
library_api.auth.passwords

bcrypt password hashing helpers.
"""

from __future__ import annotations

import bcrypt


def hash_password(secret: str, *, rounds: int = 12) -> str:
    return bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(secret: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(secret.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        # Malformed stored hash; treat as a non-match.
        return False
