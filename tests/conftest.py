import pytest

from core.notifications.memory import InMemoryDirectory, InMemoryNotificationQueue


def _make_users(premium: int = 3, free: int = 7, ultra: int = 0):
    users = []
    next_id = 1
    for tier, count in (("premium", premium), ("free", free), ("ultra", ultra)):
        for _ in range(count):
            users.append(
                {
                    "id": next_id,
                    "email": f"user{next_id}@example.com",
                    "name": f"User {next_id}",
                    "tier": tier,
                }
            )
            next_id += 1
    return users


@pytest.fixture
def users():
    return _make_users()


@pytest.fixture
def directory(users):
    # user 1 applied to jobs 1 and 2, user 2 only to job 1
    applications = [
        {"user_id": 1, "job_id": 1},
        {"user_id": 2, "job_id": 1},
        {"user_id": 1, "job_id": 2},
    ]
    return InMemoryDirectory(users=users, applications=applications)


@pytest.fixture
def queue():
    return InMemoryNotificationQueue()


@pytest.fixture
def make_users():
    return _make_users
