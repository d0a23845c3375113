"""Shared test helpers: fake model client and user/token builders."""

from __future__ import annotations

import json

from moodlog.core.ai.client import ModelClientError
from moodlog.core.auth.auth_service import issue_token
from moodlog.core.auth.password import hash_password
from moodlog.core.users.models import User
from moodlog.extensions import db


class FakeModelClient:
    """Stands in for GeminiClient; replies are queued or every call fails."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if not self.replies:
            raise ModelClientError("no reply queued")
        reply = self.replies.pop(0)
        return reply if isinstance(reply, str) else json.dumps(reply)


def make_user(email: str, name: str = "Tester", password: str = "secret123") -> User:
    user = User(email=email, name=name, password_hash=hash_password(password))
    db.session.add(user)
    db.session.commit()
    return user


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user)}"}
