"""
User lookups used for notification targeting.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from core.db.base import get_conn

_USER_COLUMNS = "id, email, name, tier, role, active, created_at"


def create_user(email: str, name: str | None = None, tier: str = "free", role: str = "user") -> int:
    conn = get_conn()
    cur = conn.cursor()
    now = datetime.utcnow().isoformat(timespec="seconds")

    cur.execute(
        """
        INSERT INTO users (email, name, tier, role, created_at)
        VALUES (?, ?, ?, ?, ?)
        RETURNING id
        """,
        (email.strip().lower(), name, tier, role, now),
    )
    row = cur.fetchone()
    user_id = int(row["id"]) if row else 0

    conn.commit()
    conn.close()
    return user_id


def get_user_by_id(user_id: int) -> Optional[Dict]:
    """Look up a user by numeric id. Returns dict or None."""
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE id = ?
        """,
        (user_id,),
    )
    row = cur.fetchone()
    conn.close()

    return dict(row) if row else None


def get_users_by_ids(user_ids: Iterable[int]) -> List[Dict]:
    ids = [int(u) for u in user_ids]
    if not ids:
        return []

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE id = ANY(?)
        ORDER BY id
        """,
        (ids,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def get_users_by_tier(tier: str) -> List[Dict]:
    """Return users whose tier equals `tier` exactly."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE tier = ?
        ORDER BY id
        """,
        (tier,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def get_all_users() -> List[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        ORDER BY id
        """
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


__all__ = [
    "create_user",
    "get_user_by_id",
    "get_users_by_ids",
    "get_users_by_tier",
    "get_all_users",
]
