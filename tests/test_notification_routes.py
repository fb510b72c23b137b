import pytest
from fastapi.testclient import TestClient

import app.api as api_module
import app.routes.notifications as notifications_route
from core.notifications.memory import InMemoryDirectory, InMemoryNotificationQueue


@pytest.fixture
def client():
    return TestClient(api_module.app)


@pytest.fixture
def wired(monkeypatch, directory, queue):
    monkeypatch.setattr(notifications_route, "get_directory", lambda: directory)
    monkeypatch.setattr(notifications_route, "get_queue", lambda: queue)
    return directory, queue


def test_send_to_job_applicants(client, wired):
    _, queue = wired
    resp = client.post("/notifications/send", json={"jobIds": ["1", "2"], "title": "T", "message": "M"})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "queued": True, "recipients": 2}
    assert len(queue.items) == 2


def test_send_with_no_applicants(client, wired):
    resp = client.post("/notifications/send", json={"jobIds": ["9"]})
    assert resp.status_code == 200
    assert resp.json() == {
        "ok": True,
        "queued": False,
        "recipients": 0,
        "message": "No applicants found for provided job(s)",
    }


def test_send_with_no_audience_match(client, monkeypatch, make_users):
    directory = InMemoryDirectory(users=make_users(premium=0, free=2))
    monkeypatch.setattr(notifications_route, "get_directory", lambda: directory)
    monkeypatch.setattr(notifications_route, "get_queue", lambda: InMemoryNotificationQueue())

    resp = client.post("/notifications/send", json={"targetAudience": "premium"})
    assert resp.json() == {
        "ok": True,
        "queued": False,
        "recipients": 0,
        "message": "No users found for provided audience",
    }


def test_send_to_premium_audience(client, wired):
    resp = client.post("/notifications/send", json={"targetAudience": "premium", "title": "Hi"})
    assert resp.json()["recipients"] == 3


def test_send_to_single_user(client, wired):
    _, queue = wired
    resp = client.post("/notifications/send", json={"toUserId": "5", "message": "hello"})
    assert resp.json() == {"ok": True, "queued": True, "recipients": 1}
    assert queue.items == [{"toUserId": "5", "message": "hello"}]


def test_send_rejects_malformed_job_id(client, wired):
    directory, queue = wired
    resp = client.post("/notifications/send", json={"jobIds": ["J1"]})
    assert resp.status_code == 400
    assert "jobIds" in resp.json()["details"]
    assert directory.calls == []
    assert queue.attempts == 0


def test_send_reports_store_failure_as_500(client, monkeypatch, queue):
    class BrokenDirectory(InMemoryDirectory):
        async def find_all_users(self):
            raise ConnectionError("connection refused")

    monkeypatch.setattr(notifications_route, "get_directory", lambda: BrokenDirectory())
    monkeypatch.setattr(notifications_route, "get_queue", lambda: queue)

    resp = client.post("/notifications/send", json={"targetAudience": "all"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "failed to enqueue notification"
    assert "connection refused" in body["details"]


def test_send_with_empty_body(client, wired):
    resp = client.post("/notifications/send")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "queued": False, "recipients": 0, "message": "No recipient specified"}


def test_preview_never_touches_queue(client, monkeypatch, directory):
    def _no_queue():
        raise AssertionError("preview must not use the queue")

    monkeypatch.setattr(notifications_route, "get_directory", lambda: directory)
    monkeypatch.setattr(notifications_route, "get_queue", _no_queue)

    resp = client.post("/notifications/preview", json={"jobIds": ["1", "2"]})
    assert resp.status_code == 200
    assert resp.json() == {
        "recipients": 2,
        "sample": [
            {"id": "1", "email": "user1@example.com", "name": "User 1"},
            {"id": "2", "email": "user2@example.com", "name": "User 2"},
        ],
    }


def test_preview_rejects_unknown_audience(client, wired):
    resp = client.post("/notifications/preview", json={"targetAudience": "platinum"})
    assert resp.status_code == 400


def test_health_and_security_headers(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_stream_relays_queue_events_and_pings(client, monkeypatch):
    async def _source():
        yield '{"id": 1, "toUserId": "5", "status": "queued"}'
        yield None
        yield '{"id": 1, "toUserId": "5", "status": "sent"}'

    monkeypatch.setattr(notifications_route, "get_event_source", _source)

    resp = client.get("/notifications/stream")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/event-stream")
    assert resp.headers["cache-control"] == "no-cache"
    assert resp.text == (
        'data: {"id": 1, "toUserId": "5", "status": "queued"}\n\n'
        ": ping\n\n"
        'data: {"id": 1, "toUserId": "5", "status": "sent"}\n\n'
    )
