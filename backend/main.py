"""
RefineAI — photo-based bathroom refinishing quotes
FastAPI application entry point.
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api import admin, chat, health, quotes, service_types
from config import settings
from storage import build_storage

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("refineai")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("RefineAI starting up…")
    app.state.storage = build_storage(settings.STORAGE_BACKEND, settings.DATABASE_URL)
    if not settings.ADMIN_PASSWORD_HASH:
        logger.warning("ADMIN_PASSWORD_HASH is not set; admin login is disabled")
    yield
    app.state.storage.close()
    logger.info("RefineAI shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="RefineAI — Bathroom Refinishing Quotes",
    description="AI photo pricing, admin dashboard API and chat relay.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request logging ───────────────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        latency_ms = round((time.perf_counter() - start) * 1000.0, 2)
        logger.info("%s %s -> %d (%.2f ms)", request.method, request.url.path, status, latency_ms)


# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router,        prefix="/api")
app.include_router(service_types.router, prefix="/api")
app.include_router(quotes.router,        prefix="/api")
app.include_router(chat.router,          prefix="/api")
app.include_router(admin.router,         prefix="/api")
app.include_router(admin.protected,      prefix="/api")
app.include_router(chat.ws_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
