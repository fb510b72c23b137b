"""
User storage re-exports.
"""
from core.db.users.user_store import (
    create_user,
    get_user_by_id,
    get_users_by_ids,
    get_users_by_tier,
    get_all_users,
)

__all__ = [
    "create_user",
    "get_user_by_id",
    "get_users_by_ids",
    "get_users_by_tier",
    "get_all_users",
]
