import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from moodlog import create_app
from moodlog.core.ai.client import ModelClientError
from moodlog.extensions import db
from moodlog.tests.helpers import FakeModelClient, auth_headers, make_user


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


@pytest.fixture()
def model_client():
    """Unreachable model by default; tests queue replies when they need them."""
    return FakeModelClient(error=ModelClientError("model unreachable"))


@pytest.fixture()
def app(model_client):
    """Per-test app on a fresh in-memory database."""
    app = create_app("testing")
    app.extensions["model_client"] = model_client
    ctx = app.app_context()
    ctx.push()
    db.create_all()
    try:
        yield app
    finally:
        db.session.remove()
        db.drop_all()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def user(app):
    return make_user("owner@example.com", name="Owner")


@pytest.fixture()
def other_user(app):
    return make_user("other@example.com", name="Other")


@pytest.fixture()
def headers(user):
    return auth_headers(user)


@pytest.fixture()
def other_headers(other_user):
    return auth_headers(other_user)
