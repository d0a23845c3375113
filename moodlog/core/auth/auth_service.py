"""Authentication service layer."""

from __future__ import annotations

import logging
from typing import Optional

from flask_jwt_extended import create_access_token
from sqlalchemy import func

from moodlog.core.auth.password import hash_password, verify_password
from moodlog.core.auth.schemas import RegisterRequest
from moodlog.core.users.models import User
from moodlog.extensions import db

logger = logging.getLogger(__name__)


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    user = User.query.filter(func.lower(User.email) == email.strip().lower()).first()
    if not verify_password(password, user.password_hash if user else None):
        return None
    return user


def issue_token(user: User) -> str:
    """Create a bearer access token whose identity is the user id."""
    return create_access_token(identity=str(user.id))


def register_user(payload: RegisterRequest) -> User:
    """Create a user; raises ValueError("email_already_exists") on duplicates."""
    normalized_email = payload.email.strip().lower()
    existing = User.query.filter(func.lower(User.email) == normalized_email).first()
    if existing:
        raise ValueError("email_already_exists")

    user = User(
        name=payload.name,
        email=normalized_email,
        password_hash=hash_password(payload.password),
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user id=%s", user.id)
    return user


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)
