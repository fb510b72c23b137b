import logging
from typing import Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse

from core.notifications import InvalidArgument, preview_notification, send_notification
from core.notifications.collaborators import get_directory, get_queue
from core.notifications.events import get_event_source

router = APIRouter(prefix="/notifications")
log = logging.getLogger(__name__)


async def _read_payload(request: Request) -> Dict:
    """Parse the JSON body; an empty or non-JSON body counts as {}."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if payload is not None else {}


@router.post("/send")
async def send(request: Request):
    payload = await _read_payload(request)
    try:
        result = await send_notification(payload, get_directory(), get_queue())
    except InvalidArgument as exc:
        return JSONResponse({"error": "invalid notification request", "details": str(exc)}, status_code=400)
    except Exception as exc:
        log.exception("Notification send failed", extra={"error": str(exc)})
        return JSONResponse({"error": "failed to enqueue notification", "details": str(exc)}, status_code=500)
    return JSONResponse(result.to_response())


@router.post("/preview")
async def preview(request: Request):
    payload = await _read_payload(request)
    try:
        result = await preview_notification(payload, get_directory())
    except InvalidArgument as exc:
        return JSONResponse({"error": "invalid notification request", "details": str(exc)}, status_code=400)
    except Exception as exc:
        log.exception("Notification preview failed", extra={"error": str(exc)})
        return JSONResponse({"error": "failed to preview notification", "details": str(exc)}, status_code=500)
    return JSONResponse(result.to_response())


@router.get("/stream")
async def stream():
    """Server-sent events: one `data:` line per queue status change, `: ping` while idle."""
    source = get_event_source()

    async def _frames():
        async for event in source:
            if event is None:
                yield ": ping\n\n"
            else:
                yield f"data: {event}\n\n"

    return StreamingResponse(
        _frames(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
