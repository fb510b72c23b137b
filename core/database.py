"""
Single import point for the storage helpers used by routes and workers.
"""
from core.db.schema import init_db
from core.db.users import (
    create_user,
    get_user_by_id,
    get_users_by_ids,
    get_users_by_tier,
    get_all_users,
)
from core.db.jobs import (
    create_job,
    create_application,
    get_applications_for_jobs,
)
from core.db.notifications import (
    EVENT_CHANNEL,
    enqueue_notification,
    claim_queued_notifications,
    mark_notification_sent,
    mark_notification_failed,
    get_recent_notifications,
)

__all__ = [
    "init_db",
    "create_user",
    "get_user_by_id",
    "get_users_by_ids",
    "get_users_by_tier",
    "get_all_users",
    "create_job",
    "create_application",
    "get_applications_for_jobs",
    "EVENT_CHANNEL",
    "enqueue_notification",
    "claim_queued_notifications",
    "mark_notification_sent",
    "mark_notification_failed",
    "get_recent_notifications",
]
