"""Password hashing helpers (bcrypt via Flask-Bcrypt)."""

from __future__ import annotations

import secrets
from functools import lru_cache
from typing import Optional

from moodlog.extensions import bcrypt


def hash_password(plain_password: str) -> str:
    return bcrypt.generate_password_hash(plain_password).decode("utf-8")


@lru_cache(maxsize=1)
def _unknown_user_hash() -> str:
    return hash_password(secrets.token_hex(16))


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Validate a plaintext password against a stored hash.

    ``hashed_password`` is None when the account does not exist; a throwaway
    hash is still checked so both failures cost one bcrypt round.
    """
    if not hashed_password:
        bcrypt.check_password_hash(_unknown_user_hash(), plain_password)
        return False
    return bcrypt.check_password_hash(hashed_password, plain_password)
