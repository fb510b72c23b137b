import asyncio

import worker.main as worker


def _row(id_, to_user_id=1, channel="email", title="Hello", message="Body"):
    return {
        "id": id_,
        "to_user_id": to_user_id,
        "channel": channel,
        "title": title,
        "message": message,
        "payload": "{}",
        "created_at": "2025-01-01T00:00:00",
    }


def _wire(monkeypatch, rows, users, send_email=None):
    marks = []
    sent = []
    monkeypatch.setattr(worker, "claim_queued_notifications", lambda limit=50, stale_after_seconds=600: rows)
    monkeypatch.setattr(worker, "get_user_by_id", lambda uid: users.get(uid))
    monkeypatch.setattr(worker, "mark_notification_sent", lambda nid: marks.append(("sent", nid)))
    monkeypatch.setattr(worker, "mark_notification_failed", lambda nid, error: marks.append(("failed", nid, error)))
    monkeypatch.setattr(worker, "send_text_email", send_email or (lambda to, subject, body: sent.append((to, subject, body))))
    return marks, sent


def test_run_once_delivers_email_rows(monkeypatch):
    users = {1: {"id": 1, "email": "ada@example.com", "active": 1}}
    marks, sent = _wire(monkeypatch, [_row(10)], users)

    assert asyncio.run(worker.run_once()) == 1
    assert sent == [("ada@example.com", "Hello", "Body")]
    assert marks == [("sent", 10)]


def test_run_once_empty_queue(monkeypatch):
    marks, sent = _wire(monkeypatch, [], {})
    assert asyncio.run(worker.run_once()) == 0
    assert marks == [] and sent == []


def test_run_once_marks_unsupported_channel_and_missing_user_failed(monkeypatch):
    users = {1: {"id": 1, "email": "ada@example.com", "active": 1}}
    rows = [_row(1, channel="whatsapp"), _row(2, to_user_id=99), _row(3)]
    marks, sent = _wire(monkeypatch, rows, users)

    assert asyncio.run(worker.run_once()) == 1
    assert [m[:2] for m in marks] == [("failed", 1), ("failed", 2), ("sent", 3)]
    assert "whatsapp" in marks[0][2]
    assert len(sent) == 1


def test_run_once_logs_and_continues_on_smtp_failure(monkeypatch, caplog):
    users = {1: {"id": 1, "email": "ada@example.com", "active": 1}}

    def _fail(*args, **kwargs):
        raise RuntimeError("SMTP down")

    marks, _ = _wire(monkeypatch, [_row(1), _row(2)], users, send_email=_fail)

    with caplog.at_level("ERROR"):
        sent_count = asyncio.run(worker.run_once())
        assert any("Failed to deliver notification" in rec.message for rec in caplog.records)

    assert sent_count == 0
    assert marks == [("failed", 1, "SMTP down"), ("failed", 2, "SMTP down")]


def test_run_once_keeps_going_when_a_status_update_fails(monkeypatch, caplog):
    users = {1: {"id": 1, "email": "ada@example.com", "active": 1}}
    rows = [_row(1), _row(2, to_user_id=99), _row(3)]
    marks, sent = _wire(monkeypatch, rows, users)

    def _mark_sent(nid):
        if nid == 1:
            raise ConnectionError("server closed the connection")
        marks.append(("sent", nid))

    monkeypatch.setattr(worker, "mark_notification_sent", _mark_sent)

    with caplog.at_level("ERROR"):
        assert asyncio.run(worker.run_once()) == 2
        assert any("Failed to record delivery status" in rec.message for rec in caplog.records)

    assert [m[:2] for m in marks] == [("failed", 2), ("sent", 3)]
    assert len(sent) == 2


def test_run_once_passes_claim_timeout(monkeypatch):
    seen = {}

    def _claim(limit=50, stale_after_seconds=600):
        seen.update(limit=limit, stale_after_seconds=stale_after_seconds)
        return []

    _wire(monkeypatch, [], {})
    monkeypatch.setattr(worker, "claim_queued_notifications", _claim)
    monkeypatch.setattr(worker, "CLAIM_TIMEOUT", 120)

    asyncio.run(worker.run_once())
    assert seen == {"limit": worker.BATCH_SIZE, "stale_after_seconds": 120}
