"""
Fan-out of one request into one queued notification per recipient.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional, Tuple

from core.notifications import config
from core.notifications.collaborators import NotificationQueue
from core.notifications.identifiers import sorted_ids
from core.notifications.models import (
    DispatchResult,
    NotificationRequest,
    Resolution,
    build_individual,
)

log = logging.getLogger(__name__)


async def _submit(
    queue: NotificationQueue,
    notification: Dict,
    semaphore: asyncio.Semaphore,
) -> Optional[Tuple[str, str]]:
    """Enqueue one notification. Returns (user_id, error) on failure, else None."""
    user_id = notification["toUserId"]
    async with semaphore:
        try:
            accepted = await queue.enqueue(notification)
        except Exception as exc:
            log.error("Failed to enqueue notification", extra={"to_user_id": user_id, "error": str(exc)})
            return user_id, str(exc)

    if not accepted:
        log.error("Queue did not accept notification", extra={"to_user_id": user_id})
        return user_id, "not accepted by queue"
    return None


async def dispatch(
    request: NotificationRequest,
    resolution: Resolution,
    queue: NotificationQueue,
    concurrency: int | None = None,
) -> DispatchResult:
    """
    Enqueue one individualized notification per resolved recipient.

    A failure for one recipient is logged and counted but never stops the others.
    Enqueues that are already running finish even if the caller is cancelled.
    """
    if not resolution.recipients:
        return DispatchResult(queued=False, recipients=0, message=resolution.empty_message)

    semaphore = asyncio.Semaphore(concurrency or config.ENQUEUE_CONCURRENCY)
    notifications = [build_individual(request, uid) for uid in sorted_ids(resolution.recipients)]

    outcomes = await asyncio.shield(
        asyncio.gather(*(_submit(queue, n, semaphore) for n in notifications))
    )

    failed = [outcome for outcome in outcomes if outcome is not None]
    accepted = len(notifications) - len(failed)

    log.info(
        "Notification fan-out complete",
        extra={"recipients": len(notifications), "accepted": accepted, "failed": len(failed)},
    )
    return DispatchResult(queued=accepted > 0, recipients=accepted, failed=failed)


__all__ = ["dispatch"]
