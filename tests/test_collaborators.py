import pytest
from fastapi.testclient import TestClient

import app.api as api_module
from core.notifications import collaborators, config
from core.notifications.memory import InMemoryDirectory, InMemoryNotificationQueue


@pytest.fixture
def memory_backend(monkeypatch):
    monkeypatch.setattr(config, "QUEUE_BACKEND", "memory")
    monkeypatch.setattr(collaborators, "_memory_directory", None)
    monkeypatch.setattr(collaborators, "_memory_queue", None)


def test_memory_backend_selects_both_in_process_collaborators(memory_backend):
    directory = collaborators.get_directory()
    queue = collaborators.get_queue()

    assert isinstance(directory, InMemoryDirectory)
    assert isinstance(queue, InMemoryNotificationQueue)
    # shared across requests
    assert collaborators.get_directory() is directory
    assert collaborators.get_queue() is queue


def test_postgres_backend_is_the_default(monkeypatch):
    monkeypatch.setattr(config, "QUEUE_BACKEND", "postgres")
    assert isinstance(collaborators.get_directory(), collaborators.PostgresDirectory)
    assert isinstance(collaborators.get_queue(), collaborators.PostgresNotificationQueue)


def test_unknown_backend_is_rejected(monkeypatch):
    monkeypatch.setattr(config, "QUEUE_BACKEND", "kafka")
    with pytest.raises(RuntimeError, match="kafka"):
        collaborators.get_directory()
    with pytest.raises(RuntimeError, match="kafka"):
        collaborators.get_queue()


def test_memory_backend_starts_without_a_database(memory_backend, monkeypatch):
    def _no_db():
        raise AssertionError("init_db must not run in memory mode")

    monkeypatch.setattr(api_module, "init_db", _no_db)

    with TestClient(api_module.app) as client:
        resp = client.post("/notifications/send", json={"toUserId": 7, "title": "Hi"})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "queued": True, "recipients": 1}
    assert collaborators.get_queue().items == [{"toUserId": "7", "title": "Hi"}]
