"""Typed schemas for user IO."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from moodlog.core.users.models import User


class UserResponse(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(UserResponse):
    token: Optional[str] = None


def serialize_user(user: "User", token: Optional[str] = None) -> dict:
    """Public profile, plus the bearer token when one was just issued."""
    if token is None:
        return UserResponse.model_validate(user).model_dump()
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token).model_dump()
