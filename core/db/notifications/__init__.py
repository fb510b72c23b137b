"""
Notification queue storage re-exports.

Each queued row is one individualized notification addressed to a single user.
The delivery worker claims queued rows and marks them sent or failed.
"""
from core.db.notifications.queue_store import (
    EVENT_CHANNEL,
    enqueue_notification,
    claim_queued_notifications,
    mark_notification_sent,
    mark_notification_failed,
    get_recent_notifications,
)

__all__ = [
    "EVENT_CHANNEL",
    "enqueue_notification",
    "claim_queued_notifications",
    "mark_notification_sent",
    "mark_notification_failed",
    "get_recent_notifications",
]
