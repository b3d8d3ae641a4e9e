"""Storefront API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StorefrontError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and catalog client initialized on startup, released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; registered here once
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from storefront.api.error_handlers import register_error_handlers
from storefront.api.routes import catalog, health, orders, store
from storefront.config import get_settings
from storefront.infrastructure.catalog_client import (
    close_catalog_client, init_catalog_client,
)
from storefront.infrastructure.database import init_db
from storefront.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_catalog_client(settings)
    logger.info("Storefront API started")
    yield
    logger.info("Storefront API shutting down")
    await close_catalog_client()
    await manager.dispose()


app = FastAPI(
    title="Storefront API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(catalog.router)
app.include_router(orders.router)
app.include_router(store.router)

register_error_handlers(app)

# Static assets (built picker UI). Mounted after API routes so /api/v1/* wins.
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
