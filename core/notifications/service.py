"""
Entry points used by the HTTP routes: parse, resolve, then dispatch or preview.
"""
from __future__ import annotations

from typing import Dict, Optional

from core.notifications.collaborators import NotificationDirectory, NotificationQueue
from core.notifications.dispatcher import dispatch
from core.notifications.models import DispatchResult, PreviewResult, parse_request
from core.notifications.preview import preview
from core.notifications.resolver import resolve_recipients


async def send_notification(
    payload: Optional[Dict],
    directory: NotificationDirectory,
    queue: NotificationQueue,
) -> DispatchResult:
    request = parse_request(payload)
    resolution = await resolve_recipients(request, directory)
    return await dispatch(request, resolution, queue)


async def preview_notification(payload: Optional[Dict], directory: NotificationDirectory) -> PreviewResult:
    request = parse_request(payload)
    return await preview(request, directory)


__all__ = ["send_notification", "preview_notification"]
