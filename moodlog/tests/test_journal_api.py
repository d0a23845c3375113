"""Journal entries API.

- GET /api/entries - list with filters and pagination
- POST /api/entries - create (annotate then persist)
- GET /api/entries/<id> - point lookup
- PUT /api/entries/<id> - partial update
- DELETE /api/entries/<id> - delete
"""

from __future__ import annotations

import pytest

from moodlog.domains.journal.models import JournalEntry
from moodlog.tests.helpers import FakeModelClient

pytestmark = pytest.mark.integration


def _create(client, headers, text):
    resp = client.post("/api/entries", json={"text": text}, headers=headers)
    assert resp.status_code == 201
    return resp.get_json()


# ==================== Create ====================


def test_create_with_model_unreachable_uses_fallback(client, headers, user):
    body = _create(client, headers, "I had a great day with friends")
    assert body["moodScore"] == 6
    assert body["tags"] == ["offline-analysis"]
    assert body["ownerId"] == user.id
    assert body["moodBucket"] == "neutral"
    assert body["text"] == "I had a great day with friends"
    assert body["id"]
    assert body["createdAt"].endswith("Z")


def test_create_with_model_annotation(app, client, headers):
    app.extensions["model_client"] = FakeModelClient(replies=[{"moodScore": 9, "tags": ["beach"]}])
    body = _create(client, headers, "Sunny beach day")
    assert body["moodScore"] == 9
    assert body["tags"] == ["beach"]
    assert body["moodBucket"] == "happy"


@pytest.mark.parametrize("payload", [{}, {"text": ""}, {"text": "   "}, {"text": None}])
def test_create_requires_text(client, headers, payload):
    resp = client.post("/api/entries", json=payload, headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"
    assert JournalEntry.query.count() == 0


def test_create_ignores_client_supplied_owner(client, headers, user, other_user):
    resp = client.post(
        "/api/entries", json={"text": "mine", "ownerId": other_user.id, "userId": other_user.id}, headers=headers
    )
    assert resp.get_json()["ownerId"] == user.id


def test_routes_require_token(client):
    assert client.get("/api/entries").status_code == 401
    assert client.post("/api/entries", json={"text": "x"}).status_code == 401
    resp = client.delete("/api/entries/abc", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthorized"


# ==================== List ====================


def test_list_empty_for_other_user(client, headers, other_headers):
    for i in range(10):
        _create(client, headers, f"entry {i}")
    resp = client.get("/api/entries", headers=other_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {
        "entries": [],
        "pagination": {"total": 0, "pages": 1, "page": 1, "limit": 8},
    }


def test_list_paginates(client, headers):
    for i in range(21):
        _create(client, headers, f"entry {i}")
    body = client.get("/api/entries?page=3", headers=headers).get_json()
    assert len(body["entries"]) == 5
    assert body["pagination"] == {"total": 21, "pages": 3, "page": 3, "limit": 8}

    body = client.get("/api/entries?page=4", headers=headers).get_json()
    assert body["entries"] == []
    assert body["pagination"]["total"] == 21


def test_list_filters_and_sorts(app, client, headers):
    app.extensions["model_client"] = FakeModelClient(
        replies=[
            {"moodScore": 8, "tags": ["gym"]},
            {"moodScore": 2, "tags": ["rain"]},
            {"moodScore": 9, "tags": ["gym", "friends"]},
        ]
    )
    _create(client, headers, "Leg day")
    _create(client, headers, "Gloomy commute")
    _create(client, headers, "Climbing session")

    body = client.get("/api/entries?mood=happy&sortBy=lowest", headers=headers).get_json()
    assert [e["moodScore"] for e in body["entries"]] == [8, 9]

    body = client.get("/api/entries?search=GYM&sortBy=highest", headers=headers).get_json()
    assert [e["text"] for e in body["entries"]] == ["Climbing session", "Leg day"]


def test_list_rejects_bad_params(client, headers):
    resp = client.get("/api/entries?mood=ecstatic", headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_list_latest_first_by_default(client, headers):
    first = _create(client, headers, "first")
    second = _create(client, headers, "second")
    client.put(f"/api/entries/{first['id']}", json={"createdAt": "2020-01-01T00:00:00Z"}, headers=headers)
    body = client.get("/api/entries", headers=headers).get_json()
    assert [e["id"] for e in body["entries"]] == [second["id"], first["id"]]


# ==================== Get / Update / Delete ====================


def test_get_entry(client, headers, other_headers):
    created = _create(client, headers, "lookup")
    assert client.get(f"/api/entries/{created['id']}", headers=headers).get_json()["text"] == "lookup"
    assert client.get(f"/api/entries/{created['id']}", headers=other_headers).status_code == 403
    assert client.get("/api/entries/nope", headers=headers).status_code == 404


def test_update_entry(client, headers):
    created = _create(client, headers, "draft")
    resp = client.put(
        f"/api/entries/{created['id']}",
        json={"text": "final", "tags": ["edited", " "], "createdAt": "2024-02-29T10:00:00Z"},
        headers=headers,
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["text"] == "final"
    assert body["tags"] == ["edited"]
    assert body["createdAt"] == "2024-02-29T10:00:00.000Z"
    assert body["moodScore"] == created["moodScore"]


def test_update_by_non_owner_forbidden(client, headers, other_headers):
    created = _create(client, headers, "private")
    resp = client.put(f"/api/entries/{created['id']}", json={"text": "mine now"}, headers=other_headers)
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["error"] == "forbidden"
    assert "private" not in str(body)


def test_update_unknown_entry(client, headers):
    resp = client.put("/api/entries/nope", json={"text": "x"}, headers=headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"


def test_update_rejects_blank_text(client, headers):
    created = _create(client, headers, "keep me")
    resp = client.put(f"/api/entries/{created['id']}", json={"text": " "}, headers=headers)
    assert resp.status_code == 400


def test_update_reannotates_when_enabled(app, client, headers):
    created = _create(client, headers, "ok day")
    app.config["REANNOTATE_ON_EDIT"] = True
    app.extensions["model_client"] = FakeModelClient(replies=[{"moodScore": 10, "tags": ["promotion"]}])
    body = client.put(f"/api/entries/{created['id']}", json={"text": "Got promoted!"}, headers=headers).get_json()
    assert body["moodScore"] == 10
    assert body["tags"] == ["promotion"]


def test_delete_entry(client, headers, other_headers):
    created = _create(client, headers, "to delete")
    assert client.delete(f"/api/entries/{created['id']}", headers=other_headers).status_code == 403
    resp = client.delete(f"/api/entries/{created['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Entry removed"}
    assert client.delete(f"/api/entries/{created['id']}", headers=headers).status_code == 404
