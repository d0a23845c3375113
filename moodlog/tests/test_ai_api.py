"""AI endpoints: /api/ai/analyze and /api/ai/search."""

from __future__ import annotations

import pytest

from moodlog.core.ai.client import ModelClientError
from moodlog.tests.helpers import FakeModelClient

pytestmark = pytest.mark.integration

ENTRIES = [
    {"id": "e1", "text": "Walked the dog along the beach", "tags": ["walk"], "moodScore": 8},
    {"id": "e2", "text": "Tax paperwork", "tags": ["admin"]},
]


def test_search_returns_matching_ids(app, client, headers):
    app.extensions["model_client"] = FakeModelClient(replies=[["e1"]])
    resp = client.post("/api/ai/search", json={"query": "time outside", "entries": ENTRIES}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == ["e1"]


def test_search_failure_returns_empty_list(client, headers):
    resp = client.post("/api/ai/search", json={"query": "time outside", "entries": ENTRIES}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_search_requires_query_and_entries(client, headers):
    assert client.post("/api/ai/search", json={"entries": ENTRIES}, headers=headers).status_code == 400
    assert client.post("/api/ai/search", json={"query": "x"}, headers=headers).status_code == 400
    assert client.post("/api/ai/search", json={"query": " ", "entries": []}, headers=headers).status_code == 400


def test_search_requires_token(client):
    assert client.post("/api/ai/search", json={"query": "x", "entries": []}).status_code == 401


def test_search_accepts_numeric_ids(app, client, headers):
    app.extensions["model_client"] = FakeModelClient(replies=[["7"]])
    resp = client.post(
        "/api/ai/search", json={"query": "x", "entries": [{"id": 7, "text": "seven"}]}, headers=headers
    )
    assert resp.get_json() == ["7"]


def test_analyze_without_persisting(app, client):
    app.extensions["model_client"] = FakeModelClient(replies=[{"moodScore": 3, "tags": ["exam"]}])
    resp = client.post("/api/ai/analyze", json={"text": "Exam went badly"})
    assert resp.status_code == 200
    assert resp.get_json() == {"moodScore": 3, "tags": ["exam"]}


def test_analyze_falls_back(app, client):
    app.extensions["model_client"] = FakeModelClient(error=ModelClientError("down"))
    resp = client.post("/api/ai/analyze", json={"text": "so happy and excited"})
    assert resp.get_json() == {"moodScore": 7, "tags": ["offline-analysis"]}


def test_analyze_requires_text(client):
    assert client.post("/api/ai/analyze", json={}).status_code == 400
