"""Shared configuration for notification targeting and fan-out."""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv(override=True)

AUDIENCE_ALL = "all"
AUDIENCE_TIERS = tuple(
    t.strip().lower()
    for t in os.getenv("NOTIFY_AUDIENCE_TIERS", "free,premium,ultra").split(",")
    if t.strip()
)

SAMPLE_SIZE = int(os.getenv("NOTIFY_SAMPLE_SIZE", "5"))
ENQUEUE_CONCURRENCY = max(1, int(os.getenv("NOTIFY_ENQUEUE_CONCURRENCY", "10")))

# "postgres" or "memory"
QUEUE_BACKEND = os.getenv("NOTIFICATION_QUEUE", "postgres").strip().lower()

NO_APPLICANTS_MESSAGE = "No applicants found for provided job(s)"
NO_AUDIENCE_MESSAGE = "No users found for provided audience"
NO_RECIPIENT_MESSAGE = "No recipient specified"

# seconds between keep-alive comments on an idle /notifications/stream
STREAM_PING_SECONDS = float(os.getenv("NOTIFY_STREAM_PING_SECONDS", "15"))
