"""Sake Hack API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SakeHackError → {data, errors} envelope
    - CORS and request IDs configured from settings (not hardcoded)
    - Database and cache pools created on startup and verified with a ping;
      startup fails if either is unreachable
    - Pools released on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.error_handlers import register_error_handlers
from app.api.middleware import register_middleware
from app.api.routes import health, sakes
from app.config import get_settings
from app.infrastructure.cache import close_cache, init_cache
from app.infrastructure.database import close_db, init_db
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_recycle=settings.database_pool_recycle_seconds,
        statement_timeout=settings.database_statement_timeout_seconds,
    )
    cache = init_cache(
        settings.cache_url,
        max_connections=settings.cache_max_connections,
        socket_timeout=settings.cache_socket_timeout_seconds,
        connect_timeout=settings.cache_connect_timeout_seconds,
    )
    try:
        if not await db.health_check():
            raise RuntimeError("PostgreSQL is unreachable")
        logger.info("Connected to PostgreSQL")
        if not await cache.health_check():
            raise RuntimeError("Valkey is unreachable")
        logger.info("Connected to Valkey")
    except RuntimeError:
        await close_cache()
        await close_db()
        raise

    logger.info(f"{settings.service_name} started")
    yield
    logger.info(f"{settings.service_name} shutting down")
    await close_cache()
    await close_db()


settings = get_settings()
app = FastAPI(
    title="Sake Hack API", version=settings.service_version, lifespan=lifespan,
)

register_middleware(app, settings)
register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(sakes.router)
