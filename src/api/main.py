"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryRegistrantStore
from src.adapters.repository.postgres import (
    PostgresRegistrantStore,
    apply_phone_policy,
    run_migrations,
)
from src.api.errors import install_error_handlers
from src.api.routes import router
from src.config.settings import Settings, get_settings
from src.domain.ports import StoreBackend

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "registration",
        "description": "Workshop registration - Gmail-only, one registration per email",
    },
]


def open_pool(settings: Settings) -> ConnectionPool:
    """Create the connection pool, run migrations and apply the phone policy."""
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)
    apply_phone_policy(pool, settings.unique_phone)
    return pool


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Builds the registrant store selected by STORE_BACKEND
    - For postgres: opens the pool and runs migrations on startup
    - Closes the connection pool on shutdown
    """
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    logger.info("Starting application...")

    pool = None
    if settings.store_backend == StoreBackend.MEMORY:
        logger.warning("Using in-memory store; registrations are lost on restart")
        app.state.store = InMemoryRegistrantStore(unique_phone=settings.unique_phone)
    else:
        logger.info("Connecting to database...")
        pool = open_pool(settings)
        app.state.store = PostgresRegistrantStore(pool)

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="gmail-waitlist",
    description="Workshop registration API - Gmail-only sign-ups with duplicate protection",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

install_error_handlers(app)
app.include_router(router, prefix="/api")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with store validation.

    Returns 200 OK if application and store are healthy.
    Raises exception if the store cannot be reached.
    """
    request.app.state.store.ping()
    return {"status": "healthy"}
