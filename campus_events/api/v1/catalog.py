# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Catalog API endpoints.

- GET /colleges - List colleges
- POST /colleges - Create a college
- POST /students - Create a student record
- GET /events - List events
- POST /events - Create an event
- GET /events/{event_id} - Get event details
"""

import logging

from fastapi import APIRouter, Depends, status

from campus_events.api.dependencies import get_catalog_service
from campus_events.domains.catalog import CatalogService
from campus_events.models.catalog import (
    CollegeCreateRequest,
    CollegeResponse,
    EventCreateRequest,
    EventResponse,
    StudentCreateRequest,
    StudentResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/colleges", response_model=list[CollegeResponse], summary="List colleges")
async def list_colleges(
    service: CatalogService = Depends(get_catalog_service),
) -> list[CollegeResponse]:
    """List colleges ordered by name."""
    return await service.list_colleges()


@router.post(
    "/colleges",
    response_model=CollegeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create college",
)
async def create_college(
    data: CollegeCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> CollegeResponse:
    """Create a college."""
    return await service.create_college(data)


@router.post(
    "/students",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create student",
)
async def create_student(
    data: StudentCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> StudentResponse:
    """Create a student record.

    Raises 404 when the college does not exist and 409 when the email
    is already registered.
    """
    return await service.create_student(data)


@router.get("/events", response_model=list[EventResponse], summary="List events")
async def list_events(
    service: CatalogService = Depends(get_catalog_service),
) -> list[EventResponse]:
    """List events, most recent first."""
    return await service.list_events()


@router.post(
    "/events",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
    description="Create an event. Capacity defaults to 100 and must be positive when given.",
)
async def create_event(
    data: EventCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> EventResponse:
    """Create an event."""
    return await service.create_event(data)


@router.get("/events/{event_id}", response_model=EventResponse, summary="Get event")
async def get_event(
    event_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> EventResponse:
    """Get event details."""
    return await service.get_event(event_id)
