"""
Notification queue store.

Each row is one individualized notification waiting for (or done with) delivery.
Status moves queued -> sending -> sent | failed.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from typing import Dict, List

from core.db.base import get_conn

log = logging.getLogger(__name__)

# LISTEN/NOTIFY channel carrying queue status changes to the realtime stream
EVENT_CHANNEL = "notification_events"


def _publish_event(cur, row: Dict | None) -> None:
    """Announce a queue row change; delivered to listeners when the transaction commits."""
    if not row:
        return
    event = {"id": row["id"], "toUserId": str(row["to_user_id"]), "status": row["status"]}
    cur.execute("SELECT pg_notify(?, ?)", (EVENT_CHANNEL, json.dumps(event)))


def enqueue_notification(notification: Dict) -> int:
    """
    Insert one individualized notification with status 'queued'.

    Returns the new row id.
    """
    to_user_id = int(notification["toUserId"])
    now = datetime.utcnow().isoformat(timespec="seconds")

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO notification_queue
          (to_user_id, channel, title, message, payload, status, created_at)
        VALUES (?, ?, ?, ?, ?, 'queued', ?)
        RETURNING id, to_user_id, status
        """,
        (
            to_user_id,
            notification.get("channel") or "email",
            notification.get("title"),
            notification.get("message"),
            json.dumps(notification, default=str),
            now,
        ),
    )
    row = cur.fetchone()
    _publish_event(cur, row)
    conn.commit()
    conn.close()
    return int(row["id"]) if row else 0


def claim_queued_notifications(limit: int = 50, stale_after_seconds: int = 600) -> List[Dict]:
    """
    Move up to `limit` queued rows to 'sending' and return them, oldest first.

    Rows left in 'sending' for longer than `stale_after_seconds` (a worker died or
    lost the database mid-batch) go back to 'queued' first so they are retried.
    SKIP LOCKED lets several workers drain the queue without double delivery.
    """
    now = datetime.utcnow()
    cutoff = (now - timedelta(seconds=int(stale_after_seconds))).isoformat(timespec="seconds")

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE notification_queue
        SET status='queued', claimed_at=NULL
        WHERE status='sending'
          AND (claimed_at IS NULL OR claimed_at < ?)
        """,
        (cutoff,),
    )
    requeued = cur.rowcount
    cur.execute(
        """
        UPDATE notification_queue
        SET status='sending', claimed_at=?
        WHERE id IN (
            SELECT id FROM notification_queue
            WHERE status='queued'
            ORDER BY id
            LIMIT ?
            FOR UPDATE SKIP LOCKED
        )
        RETURNING id, to_user_id, channel, title, message, payload, created_at
        """,
        (now.isoformat(timespec="seconds"), int(limit)),
    )
    rows = cur.fetchall()
    conn.commit()
    conn.close()
    if requeued:
        log.warning("Re-queued stale notifications", extra={"count": requeued})
    return sorted((dict(r) for r in rows), key=lambda r: r["id"])


def mark_notification_sent(notification_id: int) -> None:
    now = datetime.utcnow().isoformat(timespec="seconds")
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE notification_queue
        SET status='sent', sent_at=?, error=NULL
        WHERE id=?
        RETURNING id, to_user_id, status
        """,
        (now, notification_id),
    )
    _publish_event(cur, cur.fetchone())
    conn.commit()
    conn.close()


def mark_notification_failed(notification_id: int, error: str) -> None:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE notification_queue
        SET status='failed', sent_at=NULL, error=?
        WHERE id=?
        RETURNING id, to_user_id, status
        """,
        (f"{error}".strip()[:500], notification_id),
    )
    _publish_event(cur, cur.fetchone())
    conn.commit()
    conn.close()


def get_recent_notifications(limit: int = 20) -> List[Dict]:
    """Return the newest queue rows, newest first."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT id, to_user_id, channel, title, message, status, created_at, sent_at, error
        FROM notification_queue
        ORDER BY created_at DESC, id DESC
        LIMIT ?
        """,
        (int(limit),),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


__all__ = [
    "EVENT_CHANNEL",
    "enqueue_notification",
    "claim_queued_notifications",
    "mark_notification_sent",
    "mark_notification_failed",
    "get_recent_notifications",
]
