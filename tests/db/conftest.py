import os

import pytest


_TABLES = [
    "notification_queue",
    "applications",
    "jobs",
    "users",
]


def _truncate_all():
    from core.db.base import get_conn

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "TRUNCATE " + ", ".join(_TABLES) + " RESTART IDENTITY CASCADE"
    )
    conn.commit()
    conn.close()


@pytest.fixture(autouse=True)
def _clean_db():
    if not os.getenv("DATABASE_URL"):
        pytest.skip("DATABASE_URL must be set for Postgres-only tests.")

    from core.db.schema import init_db

    init_db()
    _truncate_all()
    yield
    _truncate_all()
