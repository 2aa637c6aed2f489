# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the campus events API.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from campus_events import __version__
from campus_events.api.errors import participation_error_handler
from campus_events.api.routes import health
from campus_events.api.v1 import router as v1_router
from campus_events.core.config import Settings, get_settings
from campus_events.domains.exceptions import ParticipationError
from campus_events.infrastructure.database import Database, KeyedLockRegistry
from campus_events.utils.logging import bind_context, clear_context, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates the database handle and the registration lock registry on
    startup and disposes of the connection pool on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting Campus Events API: environment=%s, debug=%s",
        settings.environment,
        settings.debug,
    )

    database = Database.from_settings(settings)
    if settings.database.create_schema:
        await database.create_schema()
        logger.info("Database schema ensured")

    app.state.database = database
    app.state.registration_locks = KeyedLockRegistry(
        timeout=settings.registration.lock_timeout_seconds
    )

    yield

    await database.dispose()
    app.state.database = None
    logger.info("Shutting down Campus Events API")


async def request_context_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Bind a request id and path to every log line of the request."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    bind_context(request_id=request_id, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Campus Events API",
        description="Campus event registration, attendance, feedback and reports",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.settings = settings
    app.state.database = None

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(ParticipationError, participation_error_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================
    app.middleware("http")(request_context_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
