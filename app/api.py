from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from dotenv import load_dotenv

from app.routes import admin, notifications
from core.database import init_db
from core.notifications import config

load_dotenv(override=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # memory mode runs without a database
    if config.QUEUE_BACKEND != "memory":
        init_db()
    yield


app = FastAPI(lifespan=lifespan)


app.include_router(notifications.router)
app.include_router(admin.router)


@app.get("/health")
def health():
    return {"ok": True}


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'")
    return response
