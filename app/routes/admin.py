from typing import Dict, Optional

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from datetime import datetime, timezone

from app.email_utils import send_text_email, verify_smtp
from core.database import get_recent_notifications

router = APIRouter(prefix="/admin")


def _format_dt(dt_str: str | None) -> str:
    """Render ISO timestamp as an explicit UTC ISO string."""
    if not dt_str:
        return ""
    try:
        dt = datetime.fromisoformat(dt_str)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.isoformat()
    except Exception:
        return dt_str or ""


@router.get("/notifications")
def list_notifications():
    try:
        rows = get_recent_notifications(limit=20)
    except Exception as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)

    for row in rows:
        row["created_at"] = _format_dt(row.get("created_at"))
        row["sent_at"] = _format_dt(row.get("sent_at"))
    return JSONResponse(rows)


@router.post("/notifications/test-email")
def test_email(payload: Optional[Dict] = Body(default=None)):
    payload = payload or {}
    to = (payload.get("to") or "").strip()
    subject = (payload.get("subject") or "").strip()
    if not to or not subject:
        return JSONResponse({"error": "to and subject are required"}, status_code=400)

    try:
        send_text_email(to, subject, payload.get("message") or "Test message from the job board")
    except Exception as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)
    return JSONResponse({"ok": True, "message": "Test email sent"})


@router.post("/notifications/verify-smtp")
def verify_smtp_route():
    try:
        verified = verify_smtp()
    except Exception as exc:
        return JSONResponse({"ok": False, "error": str(exc)}, status_code=500)
    return JSONResponse({"ok": True, "verified": bool(verified)})
