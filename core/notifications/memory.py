"""
In-process directory and queue.

Used by the test suite and by local runs with NOTIFICATION_QUEUE=memory. Every
call is recorded in `calls` so callers can check which lookups happened.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional


class InMemoryDirectory:
    def __init__(self, users: Iterable[Dict] = (), applications: Iterable[Dict] = ()):
        self.users: List[Dict] = [dict(u) for u in users]
        self.applications: List[Dict] = [dict(a) for a in applications]
        self.calls: List[tuple] = []

    async def find_applications_by_job_ids(self, job_ids: List[str]) -> List[Dict]:
        self.calls.append(("find_applications_by_job_ids", list(job_ids)))
        wanted = {str(j) for j in job_ids}
        return [a for a in self.applications if str(a.get("job_id")) in wanted]

    async def find_users_by_tier(self, tier: str) -> List[Dict]:
        self.calls.append(("find_users_by_tier", tier))
        return [u for u in self.users if u.get("tier") == tier]

    async def find_all_users(self) -> List[Dict]:
        self.calls.append(("find_all_users",))
        return list(self.users)

    async def find_user_by_id(self, user_id: str) -> Optional[Dict]:
        self.calls.append(("find_user_by_id", user_id))
        for user in self.users:
            if str(user.get("id")) == str(user_id):
                return user
        return None

    async def find_users_by_ids(self, user_ids: List[str]) -> List[Dict]:
        self.calls.append(("find_users_by_ids", list(user_ids)))
        wanted = {str(u) for u in user_ids}
        return [u for u in self.users if str(u.get("id")) in wanted]


class InMemoryNotificationQueue:
    """
    Append-only list of accepted notifications.

    `fail_for` is an optional predicate; when it returns True for a notification the
    enqueue raises instead of accepting it.
    """

    def __init__(self, fail_for: Optional[Callable[[Dict], bool]] = None):
        self.items: List[Dict] = []
        self.attempts = 0
        self._fail_for = fail_for

    async def enqueue(self, notification: Dict) -> bool:
        self.attempts += 1
        if self._fail_for is not None and self._fail_for(notification):
            raise RuntimeError(f"queue rejected notification for user {notification.get('toUserId')}")
        self.items.append(dict(notification))
        return True


__all__ = ["InMemoryDirectory", "InMemoryNotificationQueue"]
