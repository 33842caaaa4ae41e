import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlmodel import Session

from historyaddress.core.cache import cache
from historyaddress.core.config import settings
from historyaddress.core.db import engine, init_db
from historyaddress.core.errors import register_exception_handlers
from historyaddress.core.logging_config import VisitThrottle  # configures logging on import
from historyaddress.api.v1 import admin, calendar, health, homes, pages, partners, tags
from historyaddress.services.housekeeping import CacheJanitor
from historyaddress.services.seed import import_initial_data

logger = logging.getLogger(__name__)

janitor = CacheJanitor(cache, interval=settings.CACHE_PRUNE_INTERVAL)
visits = VisitThrottle()


def ensure_data_dir() -> None:
    try:
        os.makedirs(settings.DATA_DIR, exist_ok=True)
    except OSError as e:
        logger.critical(f"cannot create data directory {settings.DATA_DIR}: {e}")
        raise SystemExit(1)


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_data_dir()
    init_db()
    with Session(engine) as session:
        import_initial_data(session, settings.SEED_FILE)
    janitor.start()
    logger.info(f"{settings.PROJECT_NAME} ready, db: {settings.DATABASE_URL}")
    try:
        yield
    finally:
        janitor.stop()
        engine.dispose()
        logger.info("database closed")


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_visits(request: Request, call_next):
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() or (request.client.host if request.client else "unknown")
    if visits.should_log(request.url.path, ip, time.monotonic()):
        logger.info(f"[{request.method}] {request.url.path[:50]} - {ip[:15]}")
    return await call_next(request)


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(homes.router, prefix="/api/homes", tags=["homes"])
app.include_router(tags.router, prefix="/api/tags", tags=["tags"])
app.include_router(calendar.router, prefix="/api/calendar", tags=["calendar"])
app.include_router(partners.router, prefix="/api/partners", tags=["partners"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
ASSETS_DIR = os.path.join(settings.STATIC_DIR, "assets")
if os.path.isdir(ASSETS_DIR):
    app.mount("/assets", StaticFiles(directory=ASSETS_DIR), name="assets")
# last: catches / and /{page}.html
app.include_router(pages.router, tags=["pages"])


def run() -> None:
    import uvicorn

    uvicorn.run("historyaddress.main:app", host="0.0.0.0", port=settings.PORT)
