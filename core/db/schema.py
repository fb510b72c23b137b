"""
Schema helpers for Postgres.
"""
from __future__ import annotations

from core.db.base import get_conn


def init_db() -> None:
    """Create the users, jobs, applications, and notification_queue tables if they don't exist."""
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS users(
            id SERIAL PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            name TEXT,
            tier TEXT NOT NULL DEFAULT 'free',
            role TEXT NOT NULL DEFAULT 'user',
            active INTEGER NOT NULL DEFAULT 1,
            created_at TEXT
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS jobs(
            id SERIAL PRIMARY KEY,
            title TEXT NOT NULL,
            company TEXT,
            location TEXT,
            url TEXT,
            first_seen_at TEXT,
            UNIQUE(title, location, url)
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS applications(
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL,
            job_id INTEGER NOT NULL,
            status TEXT NOT NULL DEFAULT 'applied',
            created_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY(job_id) REFERENCES jobs(id) ON DELETE CASCADE,
            UNIQUE(user_id, job_id)
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS notification_queue(
            id SERIAL PRIMARY KEY,
            to_user_id INTEGER NOT NULL,
            channel TEXT NOT NULL DEFAULT 'email',
            title TEXT,
            message TEXT,
            payload TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'queued',
            created_at TEXT NOT NULL,
            claimed_at TEXT,
            sent_at TEXT,
            error TEXT
        )
        """
    )
    cur.execute(
        """
        ALTER TABLE notification_queue ADD COLUMN IF NOT EXISTS claimed_at TEXT
        """
    )
    cur.execute(
        """
        CREATE INDEX IF NOT EXISTS idx_applications_job_id ON applications(job_id)
        """
    )
    cur.execute(
        """
        CREATE INDEX IF NOT EXISTS idx_notification_queue_status ON notification_queue(status, id)
        """
    )

    conn.commit()
    conn.close()
