"""Local Library API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CatalogError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - DatabaseSessionManager built on startup, kept on app.state, disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from locallibrary.api.error_handlers import register_error_handlers
from locallibrary.api.routes import catalog_home, health
from locallibrary.api.routes.catalog_entities import build_catalog_router
from locallibrary.config import get_settings
from locallibrary.core.domain_types import EntityKind
from locallibrary.infrastructure.database import DatabaseSessionManager
from locallibrary.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    if settings.create_schema_on_startup:
        await db_manager.create_schema()
    app.state.db_manager = db_manager
    logger.info("Local Library API started")
    yield
    logger.info("Local Library API shutting down")
    await db_manager.close()


app = FastAPI(
    title="Local Library API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration, home before the per-kind routers
app.include_router(health.router)
app.include_router(catalog_home.router)
app.include_router(build_catalog_router(EntityKind.AUTHOR))
app.include_router(build_catalog_router(EntityKind.GENRE))
app.include_router(build_catalog_router(EntityKind.BOOK))
app.include_router(build_catalog_router(EntityKind.BOOK_INSTANCE))

register_error_handlers(app)


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse("/catalog/", status_code=status.HTTP_302_FOUND)
