"""Academic Tracker API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TrackerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module's imports small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import tracker.infrastructure.database as db_module
from tracker.api.error_handlers import register_error_handlers
from tracker.api.routes import auth, goals, health, scores, subjects
from tracker.config import get_settings
from tracker.infrastructure.database import init_db
from tracker.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Academic Tracker API started")
    yield
    if db_module.db_manager:
        await db_module.db_manager.dispose()
    logger.info("Academic Tracker API shutting down")


app = FastAPI(
    title="Academic Tracker API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(subjects.router)
app.include_router(scores.router)
app.include_router(goals.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the API with uvicorn on settings.port."""
    import uvicorn

    uvicorn.run("tracker.main:app", host="0.0.0.0", port=get_settings().port)
