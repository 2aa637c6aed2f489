# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

The database handle and the registration lock registry are created in
the application lifespan and stored on app.state; these dependencies
hand them, and the services built from them, to the endpoints.

Example:
    @router.post("/register")
    async def register(
        service: RegistrationService = Depends(get_registration_service),
    ):
        ...
"""

from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.config import Settings, get_settings
from campus_events.domains.analytics import AnalyticsService
from campus_events.domains.catalog import CatalogService
from campus_events.domains.interaction import InteractionService
from campus_events.domains.registration import RegistrationService
from campus_events.infrastructure.database import Database, KeyedLockRegistry


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_database(request: Request) -> Database:
    """Get the database handle.

    Raises:
        HTTPException: If the database was not initialized.
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized",
        )
    return database


async def get_db(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """Get a database session scoped to the request.

    Yields:
        AsyncSession for the request.
    """
    async with database.session() as session:
        yield session


def get_registration_locks(request: Request) -> KeyedLockRegistry:
    """Get the process-wide registration lock registry."""
    return request.app.state.registration_locks


def get_catalog_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> CatalogService:
    """Get catalog service instance."""
    return CatalogService(db=db, default_capacity=settings.registration.default_capacity)


def get_registration_service(
    db: AsyncSession = Depends(get_db),
    locks: KeyedLockRegistry = Depends(get_registration_locks),
) -> RegistrationService:
    """Get registration service instance."""
    return RegistrationService(db=db, locks=locks)


def get_interaction_service(db: AsyncSession = Depends(get_db)) -> InteractionService:
    """Get interaction service instance."""
    return InteractionService(db=db)


def get_analytics_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AnalyticsService:
    """Get analytics service instance."""
    return AnalyticsService(db=db, top_students_limit=settings.reports.top_students_limit)
