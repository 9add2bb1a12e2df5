"""Factory for constructing the FastAPI application."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from user_management_backend.api.errors import register_exception_handlers
from user_management_backend.api.middleware import request_logging_middleware
from user_management_backend.api.routers import users_router
from user_management_backend.database import DatabaseService
from user_management_backend.settings import BackendSettings, get_settings

logger = logging.getLogger(__name__)


async def _prepare_database(database: DatabaseService) -> None:
    """Create the users table once and log whether the database answered."""
    try:
        await run_in_threadpool(database.create_schema)
    except SQLAlchemyError as exc:
        logger.error("Database connection failed for %s: %s", database.safe_url, exc)
    else:
        logger.info("Connected to database")


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Prepare the database in the background; requests are served meanwhile."""
    database: DatabaseService = app.state.database
    task = asyncio.create_task(_prepare_database(database))
    app.state.database_ready = task
    yield
    if not task.done():
        task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task
    database.dispose()


def create_api(
    *,
    settings: BackendSettings | None = None,
    database: DatabaseService | None = None,
) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    ``database`` lets callers supply their own engine (tests use in-memory
    SQLite); otherwise one is built from ``settings.database_url``.
    """
    config = settings or get_settings()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="User Management API", lifespan=_lifespan)
    app.state.database = database or DatabaseService(settings=config)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials="*" not in config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_logging_middleware)
    register_exception_handlers(app)
    app.include_router(users_router)
    return app
