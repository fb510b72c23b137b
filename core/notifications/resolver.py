"""
Recipient resolution.

Only the request's target decides which store is consulted. An empty result from a
job or audience lookup is final and never falls back to a lower-priority field.
"""
from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable

from core.notifications.collaborators import NotificationDirectory
from core.notifications.errors import CollaboratorUnavailable, InvalidArgument
from core.notifications.identifiers import canonical_id
from core.notifications.models import (
    AudienceTarget,
    DirectTarget,
    JobTarget,
    NotificationRequest,
    Resolution,
)

log = logging.getLogger(__name__)


def _user_ids(rows: Iterable[Dict], key: str) -> FrozenSet[str]:
    recipients = set()
    for row in rows:
        value = row.get(key)
        if value is None:
            continue
        try:
            recipients.add(canonical_id(value, key))
        except InvalidArgument:
            # a bad row in the store must not poison the whole fan-out
            log.warning("Skipping row with malformed user id", extra={"key": key, "value": value})
    return frozenset(recipients)


async def _lookup(target, directory: NotificationDirectory):
    if isinstance(target, JobTarget):
        apps = await directory.find_applications_by_job_ids(list(target.job_ids))
        return _user_ids(apps, "user_id")

    if isinstance(target, AudienceTarget):
        if target.is_everyone:
            users = await directory.find_all_users()
        else:
            users = await directory.find_users_by_tier(target.audience)
        return _user_ids(users, "id")

    if isinstance(target, DirectTarget):
        if target.user_id is None:
            return frozenset()
        return frozenset([target.user_id])

    raise TypeError(f"Unsupported notification target: {target!r}")


async def resolve_recipients(request: NotificationRequest, directory: NotificationDirectory) -> Resolution:
    """
    Return the de-duplicated recipients for `request`.

    Store failures are raised as CollaboratorUnavailable; a partial recipient set is
    never returned.
    """
    try:
        recipients = await _lookup(request.target, directory)
    except Exception as exc:
        raise CollaboratorUnavailable(f"Recipient lookup failed: {exc}") from exc

    log.info(
        "Resolved notification recipients",
        extra={"target": type(request.target).__name__, "recipients": len(recipients)},
    )
    return Resolution(target=request.target, recipients=recipients)


__all__ = ["resolve_recipients"]
