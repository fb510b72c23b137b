"""
Read-only preview: who would receive a notification, without queueing anything.
"""
from __future__ import annotations

from typing import Dict, List

from core.notifications import config
from core.notifications.collaborators import NotificationDirectory
from core.notifications.errors import CollaboratorUnavailable
from core.notifications.identifiers import canonical_id, sorted_ids
from core.notifications.models import DirectTarget, NotificationRequest, PreviewResult
from core.notifications.resolver import resolve_recipients


def _sample_record(user: Dict) -> Dict:
    return {
        "id": canonical_id(user["id"], "id"),
        "email": user.get("email"),
        "name": user.get("name"),
    }


async def preview(
    request: NotificationRequest,
    directory: NotificationDirectory,
    sample_size: int | None = None,
) -> PreviewResult:
    """Count the recipients `request` resolves to and describe the first few of them."""
    resolution = await resolve_recipients(request, directory)
    if not resolution.recipients:
        return PreviewResult(recipients=0)

    limit = config.SAMPLE_SIZE if sample_size is None else sample_size
    head = sorted_ids(resolution.recipients)[:limit]
    if not head:
        return PreviewResult(recipients=len(resolution.recipients))

    try:
        if isinstance(resolution.target, DirectTarget):
            user = await directory.find_user_by_id(head[0])
            users = [user] if user else []
        else:
            users = await directory.find_users_by_ids(head)
    except Exception as exc:
        raise CollaboratorUnavailable(f"Sample lookup failed: {exc}") from exc

    by_id = {canonical_id(u["id"], "id"): u for u in users if u.get("id") is not None}
    sample: List[Dict] = [_sample_record(by_id[uid]) for uid in head if uid in by_id]
    return PreviewResult(recipients=len(resolution.recipients), sample=sample)


__all__ = ["preview"]
