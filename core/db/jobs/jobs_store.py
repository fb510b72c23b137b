"""
Jobs and applications storage helpers.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List

from core.db.base import get_conn


def create_job(title: str, company: str | None = None, location: str | None = None, url: str | None = None) -> int:
    conn = get_conn()
    cur = conn.cursor()
    now = datetime.utcnow().isoformat(timespec="seconds")

    cur.execute(
        """
        INSERT INTO jobs (title, company, location, url, first_seen_at)
        VALUES (?, ?, ?, ?, ?)
        RETURNING id
        """,
        (title, company, location or "", url or "", now),
    )
    row = cur.fetchone()
    job_id = int(row["id"]) if row else 0

    conn.commit()
    conn.close()
    return job_id


def create_application(user_id: int, job_id: int) -> bool:
    """
    Record that `user_id` applied to `job_id`.

    Returns False when the application already existed.
    """
    conn = get_conn()
    cur = conn.cursor()
    now = datetime.utcnow().isoformat(timespec="seconds")

    cur.execute(
        """
        INSERT INTO applications (user_id, job_id, created_at)
        VALUES (?, ?, ?)
        ON CONFLICT (user_id, job_id) DO NOTHING
        """,
        (user_id, job_id, now),
    )
    inserted = bool(cur.rowcount)

    conn.commit()
    conn.close()
    return inserted


def get_applications_for_jobs(job_ids: Iterable[int]) -> List[Dict]:
    """Return `{user_id, job_id}` rows for every application to any of `job_ids`."""
    ids = [int(j) for j in job_ids]
    if not ids:
        return []

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT user_id, job_id
        FROM applications
        WHERE job_id = ANY(?)
        ORDER BY id
        """,
        (ids,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


__all__ = [
    "create_job",
    "create_application",
    "get_applications_for_jobs",
]
