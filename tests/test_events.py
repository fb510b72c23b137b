import asyncio

from core.notifications import config, events


async def _take(source, n):
    items = []
    async for item in source:
        items.append(item)
        if len(items) == n:
            break
    await source.aclose()
    return items


def test_memory_backend_streams_pings_only(monkeypatch):
    monkeypatch.setattr(config, "QUEUE_BACKEND", "memory")
    monkeypatch.setattr(config, "STREAM_PING_SECONDS", 0.001)
    assert asyncio.run(_take(events.get_event_source(), 2)) == [None, None]


def test_listener_failure_falls_back_to_pings(monkeypatch, caplog):
    async def _refused():
        raise ConnectionError("connection refused")

    monkeypatch.setattr(events, "get_async_conn", _refused)

    with caplog.at_level("WARNING"):
        items = asyncio.run(_take(events.postgres_events(0.001), 3))

    assert items == [None, None, None]
    assert any("Realtime listener unavailable" in rec.message for rec in caplog.records)
