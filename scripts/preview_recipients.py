"""
Show who a notification would reach, straight from the database. Nothing is queued.

Usage:
  python -m scripts.preview_recipients --job 3 --job 4
  python -m scripts.preview_recipients --audience premium
  python -m scripts.preview_recipients --user 12
"""
from __future__ import annotations

import argparse
import asyncio
import json

from core.notifications import NotificationError, preview_notification
from core.notifications.collaborators import get_directory


def main() -> int:
    parser = argparse.ArgumentParser(description="Preview notification recipients")
    parser.add_argument("--job", action="append", dest="jobs", help="Job id (repeatable)")
    parser.add_argument("--audience", help="'all' or a tier name")
    parser.add_argument("--user", help="Single recipient user id")
    args = parser.parse_args()

    payload = {}
    if args.jobs:
        payload["jobIds"] = args.jobs
    if args.audience:
        payload["targetAudience"] = args.audience
    if args.user:
        payload["toUserId"] = args.user

    try:
        result = asyncio.run(preview_notification(payload, get_directory()))
    except NotificationError as exc:
        print(f"Error: {exc}")
        return 1

    print(json.dumps(result.to_response(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
