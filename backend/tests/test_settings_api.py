import pytest
from fastapi.testclient import TestClient

import db
from dashboard import default_document

FULL_DOCUMENT = {
    "widgets": [],
    "appTitle": "Home",
    "showTitle": False,
    "enableSearchPreview": True,
    "lockWidgets": False,
}


def test_get_on_fresh_store_returns_default_widgets(client):
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    body = resp.json()
    assert body == default_document()
    assert [w["type"] for w in body["widgets"]] == ["clock", "weather", "stocks", "shortcuts"]


def test_first_get_is_persisted(client, store):
    first = client.get("/api/settings").json()
    second = client.get("/api/settings").json()
    assert first == second


def test_full_document_round_trips_unchanged(client):
    resp = client.post("/api/settings", json=FULL_DOCUMENT)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert client.get("/api/settings").json() == FULL_DOCUMENT


@pytest.mark.parametrize("payload", ['"hello"', "null", "[1, 2]", "42", "{not json"])
def test_non_object_body_is_rejected(client, payload):
    client.post("/api/settings", json=FULL_DOCUMENT)
    resp = client.post("/api/settings", content=payload, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert client.get("/api/settings").json() == FULL_DOCUMENT


def test_empty_body_is_rejected(client):
    resp = client.post("/api/settings", content=b"", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400


def test_partial_post_merges_and_is_idempotent(client):
    client.post("/api/settings", json=FULL_DOCUMENT)
    for _ in range(3):
        assert client.post("/api/settings", json={"appTitle": "X"}).status_code == 200
        assert client.get("/api/settings").json() == {**FULL_DOCUMENT, "appTitle": "X"}


def test_mistyped_fields_keep_correct_types(client):
    client.post("/api/settings", json={"appTitle": None, "showTitle": "false", "widgets": 3, "lockWidgets": 1})
    body = client.get("/api/settings").json()
    assert isinstance(body["appTitle"], str)
    assert isinstance(body["showTitle"], bool)
    assert isinstance(body["enableSearchPreview"], bool)
    assert isinstance(body["lockWidgets"], bool)
    assert isinstance(body["widgets"], list)


def test_reordered_widgets_round_trip(client):
    widgets = [
        {"id": "a", "type": "clock", "title": "Clock", "config": {}},
        {"id": "b", "type": "notes", "title": "Notes", "config": {"notes": ["x"]}},
        {"id": "c", "type": "quote", "title": "Quote", "config": {"quoteText": "hi"}},
    ]
    client.post("/api/settings", json={"widgets": widgets})
    reordered = [widgets[2], widgets[0], widgets[1]]
    client.post("/api/settings", json={"widgets": reordered})
    body = client.get("/api/settings").json()
    assert [w["id"] for w in body["widgets"]] == ["c", "a", "b"]
    assert body["widgets"] == reordered


def test_storage_failure_returns_500(client, monkeypatch):
    async def broken_read():
        raise db.StorageError("disk on fire")

    async def broken_write(document):
        raise db.StorageError("disk on fire")

    monkeypatch.setattr(db.get_store(), "read", broken_read)
    monkeypatch.setattr(db.get_store(), "write", broken_write)
    resp = client.get("/api/settings")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to read settings"}
    resp = client.post("/api/settings", json={"appTitle": "X"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to save settings"}


def test_health_reports_backend(client, store):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "backend": store.name}


def test_cors_headers_present(client):
    resp = client.get("/api/settings", headers={"Origin": "http://localhost:3033"})
    assert resp.headers.get("access-control-allow-origin") in ("*", "http://localhost:3033")


def test_full_post_heals_unreadable_file(file_store, app):
    file_store.path.write_text("null", encoding="utf-8")
    with TestClient(app) as c:
        assert c.get("/api/settings").status_code == 500
        assert c.post("/api/settings", json=FULL_DOCUMENT).status_code == 200
        assert c.get("/api/settings").json() == FULL_DOCUMENT
