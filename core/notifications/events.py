"""
Realtime queue events for the /notifications/stream relay.

An event source is an async iterator of JSON strings. It yields None when a ping
interval passes with nothing to report, so the stream can send a keep-alive.
"""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Optional

from core.db.base import get_async_conn
from core.database import EVENT_CHANNEL
from core.notifications import config

log = logging.getLogger(__name__)

EventSource = AsyncIterator[Optional[str]]


async def ping_only(interval: float) -> EventSource:
    while True:
        await asyncio.sleep(interval)
        yield None


async def postgres_events(interval: float) -> EventSource:
    """Relay NOTIFY payloads from the queue store; pings only if LISTEN cannot be set up."""
    try:
        conn = await get_async_conn()
        await conn.execute(f"LISTEN {EVENT_CHANNEL}")
    except Exception as exc:
        log.warning("Realtime listener unavailable, sending pings only", extra={"error": str(exc)})
        async for item in ping_only(interval):
            yield item
        return

    try:
        while True:
            received = False
            async for notify in conn.notifies(timeout=interval):
                received = True
                yield notify.payload
            if not received:
                yield None
    finally:
        await conn.close()


def get_event_source() -> EventSource:
    interval = config.STREAM_PING_SECONDS
    if config.QUEUE_BACKEND == "memory":
        return ping_only(interval)
    return postgres_events(interval)


__all__ = ["EventSource", "get_event_source", "ping_only", "postgres_events"]
