import json

import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from selfsight.api.dependencies import (
    get_account_service,
    get_entry_store,
    get_llm_analyzer,
    get_recommendation_service,
)
from selfsight.features.analysis.functions import ANALYZE_JOURNAL
from selfsight.services.llm import ClaudeJournalAnalyzer

from conftest import VALID_TOKEN

AUTH = {"Authorization": f"Bearer {VALID_TOKEN}"}

CLAUDE_ANALYSIS = json.dumps({
    "mood": "grateful",
    "emotions": ["warm", "content", "calm"],
    "strength": "perspective",
    "weakness": "rest",
    "insight": "Small moments matter to you.",
})


@pytest.fixture
def client(accounts, store, recommendation_service, make_anthropic):
    claude = ClaudeJournalAnalyzer(api_key="test", model="claude-test", client=make_anthropic(CLAUDE_ANALYSIS))

    app.dependency_overrides[get_account_service] = lambda: accounts
    app.dependency_overrides[get_entry_store] = lambda: store
    app.dependency_overrides[get_recommendation_service] = lambda: recommendation_service
    app.dependency_overrides[get_llm_analyzer] = lambda: claude
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_entry(client, **fields):
    body = {"title": "Morning", "content": "Coffee on the balcony.", "tags": ["home"], **fields}
    response = client.post("/api/v1/entries", json=body, headers=AUTH)
    assert response.status_code == 201
    return response.json()["entry"]


def test_health(client):
    assert client.get("/api/v1/health").json() == {"status": "healthy"}


def test_missing_token_gets_error_envelope(client):
    response = client.get("/api/v1/entries")

    assert response.status_code == 401
    error = response.json()["error"]
    assert error["code"] == "UNAUTHORIZED"
    assert error["correlation_id"] == response.headers["X-Correlation-ID"]


def test_invalid_token(client):
    response = client.get("/api/v1/me", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401


def test_correlation_id_is_echoed(client):
    response = client.get("/api/v1/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Correlation-ID"] == "req-42"


def test_blank_entry_is_rejected(client):
    response = client.post("/api/v1/entries", json={"title": " ", "content": "x"}, headers=AUTH)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_create_list_and_search(client):
    first = create_entry(client)
    second = create_entry(client, title="Evening", content="Long run by the river.", tags=["health"])

    listing = client.get("/api/v1/entries", headers=AUTH).json()
    assert [entry["id"] for entry in listing["entries"]] == [second["id"], first["id"]]
    assert listing["degraded"] is False
    assert listing["groups"] == {"3/7/2025": [second["id"], first["id"]]}

    found = client.get("/api/v1/entries", params={"q": "RIVER"}, headers=AUTH).json()
    assert [entry["id"] for entry in found["entries"]] == [second["id"]]

    tagged = client.get("/api/v1/entries", params={"tag": "home"}, headers=AUTH).json()
    assert [entry["id"] for entry in tagged["entries"]] == [first["id"]]

    tags = client.get("/api/v1/entries/tags", headers=AUTH).json()
    assert tags["tags"] == ["health", "home"]


def test_offline_create_is_degraded(client, supabase):
    supabase.entries_table().fail = True

    response = client.post("/api/v1/entries", json={"title": "Train", "content": "No signal."}, headers=AUTH)

    assert response.status_code == 201
    body = response.json()
    assert body["degraded"] is True
    assert body["entry"]["is_fallback"] is True

    listing = client.get("/api/v1/entries", headers=AUTH).json()
    assert listing["status"] == "degraded"
    assert [entry["id"] for entry in listing["entries"]] == [body["entry"]["id"]]


def test_update_and_delete(client):
    entry = create_entry(client)

    response = client.put(
        f"/api/v1/entries/{entry['id']}",
        json={"title": "Morning, revised", "content": "Tea instead.", "tags": []},
        headers=AUTH,
    )
    assert response.status_code == 200
    assert response.json()["entry"]["title"] == "Morning, revised"

    assert client.delete(f"/api/v1/entries/{entry['id']}", headers=AUTH).status_code == 200
    response = client.get(f"/api/v1/entries/{entry['id']}", headers=AUTH)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_analyze_with_functions_down(client, function_stub):
    entry = create_entry(client, title="Great Day", content="So happy, we laughed a lot.")
    function_stub.reply(ANALYZE_JOURNAL, httpx.Response(429, json={"error": "quota"}))

    response = client.post(f"/api/v1/entries/{entry['id']}/analyze", headers=AUTH)

    body = response.json()
    assert response.status_code == 200
    assert body["degraded"] is True
    assert body["entry"]["mood"] == "happy"
    assert body["entry"]["analysis"]["_quotaExceeded"] is True


def test_export_download(client):
    entry = create_entry(client)

    response = client.get(f"/api/v1/entries/{entry['id']}/export", params={"format": "text"}, headers=AUTH)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["content-disposition"] == 'attachment; filename="journal-3-7-2025.txt"'
    assert response.text.startswith("Morning\n3/7/2025")


def test_export_rejects_unknown_format(client):
    entry = create_entry(client)

    response = client.get(f"/api/v1/entries/{entry['id']}/export", params={"format": "pdf"}, headers=AUTH)

    assert response.status_code == 400


def test_insights_summary(client):
    create_entry(client)

    summary = client.get("/api/v1/insights", headers=AUTH).json()

    assert summary["total_entries"] == 1
    assert summary["analyzed_entries"] == 0
    assert client.get("/api/v1/insights/trends", headers=AUTH).json() == []


def test_recommendations_generate_and_vote(client):
    batch = client.post("/api/v1/recommendations", headers=AUTH).json()
    assert batch["degraded"] is True
    assert len(batch["generated"]) == 4

    rec_id = batch["generated"][0]["id"]
    voted = client.post(f"/api/v1/recommendations/{rec_id}/vote", json={"helpful": True}, headers=AUTH).json()
    assert voted["recommendation"]["is_helpful"] is True

    listed = client.get("/api/v1/recommendations", headers=AUTH).json()["recommendations"]
    assert listed[0]["is_helpful"] is True


def test_vote_body_is_validated(client):
    response = client.post("/api/v1/recommendations/rec-1/vote", json={"helpful": "maybe"}, headers=AUTH)

    assert response.status_code == 400
    assert "helpful" in response.json()["error"]["details"]["fields"]


def test_profile_roundtrip(client):
    assert client.get("/api/v1/profile", headers=AUTH).json()["is_new_user"] is True

    response = client.put(
        "/api/v1/profile",
        json={"personality": "quiet", "values": "family", "strengths": "patience", "goals": "sleep more"},
        headers=AUTH,
    )

    assert response.status_code == 200
    assert response.json()["is_new_user"] is False
    assert response.json()["profile"]["goals"] == "sleep more"


def test_analyze_journal_function(client):
    response = client.post("/functions/v1/analyze-journal", json={"title": "Walk", "content": "Sunny park."})

    assert response.status_code == 200
    assert response.json()["mood"] == "grateful"
    assert "_fallback" not in response.json()


def test_analyze_journal_function_requires_fields(client):
    response = client.post("/functions/v1/analyze-journal", json={"title": "Walk"})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing required parameters: title and content"


def test_signup_endpoint(client, supabase):
    response = client.post(
        "/api/v1/auth/signup",
        json={"name": "Grace", "email": "grace@example.com", "password": "hunter22"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["access_token"] == "new-token"
    assert body["user"]["is_new_user"] is True
    assert supabase.auth.signups[0]["options"]["data"]["isNewUser"] is True


def test_signup_endpoint_without_session(client, supabase):
    supabase.auth.require_confirmation = True

    response = client.post(
        "/api/v1/auth/signup",
        json={"name": "Grace", "email": "grace@example.com", "password": "hunter22"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_reset_password_endpoint(client, supabase):
    response = client.post("/api/v1/auth/reset-password", json={"email": "ada@example.com"})

    assert response.status_code == 200
    assert supabase.auth.reset_requests == ["ada@example.com"]


def test_reset_password_endpoint_failure(client, supabase):
    supabase.auth.fail_reset = True

    response = client.post("/api/v1/auth/reset-password", json={"email": "ada@example.com"})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "DATABASE_ERROR"
