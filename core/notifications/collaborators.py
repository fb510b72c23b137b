"""
Store and queue interfaces consumed by the resolver and dispatcher.

The Postgres implementations wrap the synchronous psycopg stores in worker threads
so a slow query only suspends the request that issued it.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Protocol

from core import database
from core.notifications import config

log = logging.getLogger(__name__)


class NotificationDirectory(Protocol):
    async def find_applications_by_job_ids(self, job_ids: List[str]) -> List[Dict]:
        ...

    async def find_users_by_tier(self, tier: str) -> List[Dict]:
        ...

    async def find_all_users(self) -> List[Dict]:
        ...

    async def find_user_by_id(self, user_id: str) -> Optional[Dict]:
        ...

    async def find_users_by_ids(self, user_ids: List[str]) -> List[Dict]:
        ...


class NotificationQueue(Protocol):
    async def enqueue(self, notification: Dict) -> bool:
        ...


def _ints(ids: Iterable[str]) -> List[int]:
    return [int(i) for i in ids]


class PostgresDirectory:
    async def find_applications_by_job_ids(self, job_ids: List[str]) -> List[Dict]:
        return await asyncio.to_thread(database.get_applications_for_jobs, _ints(job_ids))

    async def find_users_by_tier(self, tier: str) -> List[Dict]:
        return await asyncio.to_thread(database.get_users_by_tier, tier)

    async def find_all_users(self) -> List[Dict]:
        return await asyncio.to_thread(database.get_all_users)

    async def find_user_by_id(self, user_id: str) -> Optional[Dict]:
        return await asyncio.to_thread(database.get_user_by_id, int(user_id))

    async def find_users_by_ids(self, user_ids: List[str]) -> List[Dict]:
        return await asyncio.to_thread(database.get_users_by_ids, _ints(user_ids))


class PostgresNotificationQueue:
    async def enqueue(self, notification: Dict) -> bool:
        row_id = await asyncio.to_thread(database.enqueue_notification, notification)
        return row_id > 0


_memory_directory = None
_memory_queue = None


def _check_backend() -> None:
    if config.QUEUE_BACKEND not in ("postgres", "memory"):
        raise RuntimeError(f"Unknown NOTIFICATION_QUEUE backend: {config.QUEUE_BACKEND!r}")


def get_directory() -> NotificationDirectory:
    """Return the configured directory; memory mode shares one in-process directory."""
    global _memory_directory
    _check_backend()
    if config.QUEUE_BACKEND == "memory":
        if _memory_directory is None:
            from core.notifications.memory import InMemoryDirectory

            _memory_directory = InMemoryDirectory()
        return _memory_directory
    return PostgresDirectory()


def get_queue() -> NotificationQueue:
    """Return the configured queue; NOTIFICATION_QUEUE=memory keeps everything in-process."""
    global _memory_queue
    _check_backend()
    if config.QUEUE_BACKEND == "memory":
        if _memory_queue is None:
            from core.notifications.memory import InMemoryNotificationQueue

            _memory_queue = InMemoryNotificationQueue()
            log.warning("Using the in-memory notification queue; nothing delivers it outside this process")
        return _memory_queue
    return PostgresNotificationQueue()


__all__ = [
    "NotificationDirectory",
    "NotificationQueue",
    "PostgresDirectory",
    "PostgresNotificationQueue",
    "get_directory",
    "get_queue",
]
