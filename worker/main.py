import asyncio
import os
import logging
from typing import Dict

from dotenv import load_dotenv

from app.email_utils import send_text_email
from core.database import (
    claim_queued_notifications,
    get_user_by_id,
    init_db,
    mark_notification_failed,
    mark_notification_sent,
)

load_dotenv(override=True)

# -------- CONFIG --------
CHECK_INTERVAL = int(os.getenv("CHECK_INTERVAL", "30"))  # seconds between queue polls
BATCH_SIZE = int(os.getenv("WORKER_BATCH_SIZE", "50"))
CLAIM_TIMEOUT = int(os.getenv("WORKER_CLAIM_TIMEOUT", "600"))  # seconds before an unfinished claim is retried
TEST_MODE = os.getenv("TEST_MODE", "False").lower() == "true"
DEFAULT_SUBJECT = "New notification from the job board"
# ------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("worker")


def deliver(notification: Dict) -> None:
    """Deliver one claimed queue row. Raises on any delivery problem."""
    channel = (notification.get("channel") or "email").lower()
    if channel != "email":
        raise RuntimeError(f"Channel '{channel}' is not supported by this worker")

    user = get_user_by_id(int(notification["to_user_id"]))
    if not user or not user.get("email"):
        raise RuntimeError("Recipient has no email address")
    if user.get("active") is not None and not user.get("active"):
        raise RuntimeError("Recipient is deactivated")

    send_text_email(
        user["email"],
        notification.get("title") or DEFAULT_SUBJECT,
        notification.get("message") or "",
    )
    log.info("Email sent", extra={"to": user["email"], "notification_id": notification["id"]})


def _record(mark, notification_id: int, *args) -> None:
    """Store a delivery outcome. A row left in 'sending' is re-queued after CLAIM_TIMEOUT."""
    try:
        mark(notification_id, *args)
    except Exception as e:
        log.error(
            "Failed to record delivery status",
            extra={"notification_id": notification_id, "error": str(e)},
        )


async def run_once() -> int:
    log.info("Checking notification queue...")

    batch = claim_queued_notifications(limit=BATCH_SIZE, stale_after_seconds=CLAIM_TIMEOUT)
    if not batch:
        log.info("Queue empty. Nothing to send.")
        return 0

    sent_count = 0
    for notification in batch:
        try:
            deliver(notification)
        except Exception as e:
            log.error(
                "Failed to deliver notification",
                extra={"notification_id": notification.get("id"), "error": str(e)},
            )
            _record(mark_notification_failed, notification["id"], str(e))
            continue

        sent_count += 1
        _record(mark_notification_sent, notification["id"])

    log.info("Cycle complete", extra={"claimed": len(batch), "sent": sent_count})
    return sent_count


async def main():
    init_db()

    while True:
        try:
            await run_once()
        except Exception as e:
            log.exception("Error during run", extra={"error": str(e)})

        if TEST_MODE:
            break

        log.info("Sleeping", extra={"seconds": CHECK_INTERVAL})
        await asyncio.sleep(CHECK_INTERVAL)


if __name__ == "__main__":
    asyncio.run(main())
