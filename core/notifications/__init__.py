"""
Notification targeting and fan-out.

A request addresses recipients in one of three ways, in priority order:
  - jobId / jobIds: every user who applied to any of those jobs.
  - targetAudience: every user ("all") or the users on one tier.
  - toUserId: a single user.
"""
from core.notifications.errors import (
    CollaboratorUnavailable,
    InvalidArgument,
    NotificationError,
)
from core.notifications.models import (
    AudienceTarget,
    DirectTarget,
    DispatchResult,
    JobTarget,
    NotificationRequest,
    PreviewResult,
    Resolution,
    parse_request,
)
from core.notifications.resolver import resolve_recipients
from core.notifications.dispatcher import dispatch
from core.notifications.preview import preview
from core.notifications.service import preview_notification, send_notification

__all__ = [
    "CollaboratorUnavailable",
    "InvalidArgument",
    "NotificationError",
    "AudienceTarget",
    "DirectTarget",
    "DispatchResult",
    "JobTarget",
    "NotificationRequest",
    "PreviewResult",
    "Resolution",
    "parse_request",
    "resolve_recipients",
    "dispatch",
    "preview",
    "preview_notification",
    "send_notification",
]
