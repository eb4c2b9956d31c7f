"""Boonkosang Projects API — FastAPI application entry point.

Invariants:
    - create_app() is the only place routers, middleware and error handlers are wired
    - Routes mounted explicitly from their route tables (no auto-discovery)
    - Global error handlers map BoonkosangError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager, disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Module-level `app` kept for `uvicorn app.main:app`
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes.health import build_health_router
from app.api.routes.projects import build_project_router
from app.config import Settings, get_settings
from app.infrastructure.database import close_db, init_db
from app.infrastructure.observability import setup_logging

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
        echo=settings.database_echo,
    )
    logger.info("Boonkosang API started")
    yield
    await close_db()
    logger.info("Boonkosang API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application: middleware, routers, error handlers."""
    settings = settings or get_settings()
    application = FastAPI(
        title="Boonkosang Projects API", version="1.0.0", lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(build_health_router())
    application.include_router(build_project_router())

    register_error_handlers(application)
    return application


app = create_app()
