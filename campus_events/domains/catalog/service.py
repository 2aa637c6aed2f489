# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Catalog service for colleges, students and events.

This module provides the CatalogService class for:
- College creation and listing
- Student signup records (credentials live elsewhere)
- Event creation, listing and lookup
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.domains.exceptions import (
    CollegeNotFoundError,
    EmailAlreadyRegisteredError,
    EventNotFoundError,
    ParticipationError,
    StorageFailureError,
    ValidationError,
)
from campus_events.infrastructure.database.errors import is_unique_violation
from campus_events.infrastructure.database.models import Base, College, Event, Student
from campus_events.models.catalog import (
    CollegeCreateRequest,
    CollegeResponse,
    EventCreateRequest,
    EventResponse,
    StudentCreateRequest,
    StudentResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_CREATED_BY = "Admin"


def resolve_capacity(max_capacity: Any, default: int) -> int:
    """Resolve the capacity for a new event.

    Args:
        max_capacity: Submitted capacity, or None.
        default: Capacity used when none is submitted.

    Returns:
        The capacity to store.

    Raises:
        ValidationError: If a capacity is submitted and is not a positive integer.
    """
    if max_capacity is None:
        return default
    if isinstance(max_capacity, bool) or not isinstance(max_capacity, int) or max_capacity <= 0:
        raise ValidationError("max_capacity must be a positive integer")
    return max_capacity


class CatalogService:
    """Service for catalog records.

    Attributes:
        db: Async database session.
        default_capacity: Capacity for events created without one.
    """

    def __init__(self, db: AsyncSession, default_capacity: int = 100) -> None:
        """Initialize catalog service.

        Args:
            db: Async database session.
            default_capacity: Capacity for events created without one.
        """
        self.db = db
        self.default_capacity = default_capacity

    async def create_college(self, request: CollegeCreateRequest) -> CollegeResponse:
        """Create a college.

        Args:
            request: College data.

        Returns:
            Created college.
        """
        college = College(
            name=request.name.strip(),
            location=request.location.strip(),
            contact_email=str(request.contact_email) if request.contact_email else None,
        )
        await self._persist(college)

        logger.info("Created college: id=%s, name=%s", college.id, college.name)

        return CollegeResponse.model_validate(college)

    async def list_colleges(self) -> list[CollegeResponse]:
        """List colleges ordered by name."""
        result = await self._execute(select(College).order_by(College.name.asc(), College.id))
        return [CollegeResponse.model_validate(c) for c in result.scalars().all()]

    async def create_student(self, request: StudentCreateRequest) -> StudentResponse:
        """Create a student record.

        Args:
            request: Student signup data.

        Returns:
            Created student.

        Raises:
            CollegeNotFoundError: If the college does not exist.
            EmailAlreadyRegisteredError: If the email is already used.
        """
        await self._get_college(request.college_id)

        email = str(request.email).lower()
        taken = EmailAlreadyRegisteredError(f"Email {email} already registered")
        existing = await self._execute(select(Student.id).where(Student.email == email))
        if existing.scalar_one_or_none() is not None:
            raise taken

        student = Student(
            name=request.name.strip(),
            email=email,
            phone=request.phone,
            college_id=request.college_id,
            course=request.course,
            year=request.year,
        )
        await self._persist(student, duplicate_error=taken)

        logger.info("Created student: id=%s, college=%s", student.id, student.college_id)

        return StudentResponse.model_validate(student)

    async def create_event(self, request: EventCreateRequest) -> EventResponse:
        """Create an event.

        Args:
            request: Event data.

        Returns:
            Created event.

        Raises:
            ValidationError: If max_capacity is given and not positive.
            CollegeNotFoundError: If the college does not exist.
        """
        capacity = resolve_capacity(request.max_capacity, self.default_capacity)
        await self._get_college(request.college_id)

        event = Event(
            title=request.title.strip(),
            description=request.description,
            event_type=request.event_type.strip(),
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            venue=request.venue.strip(),
            max_capacity=capacity,
            college_id=request.college_id,
            created_by=request.created_by or DEFAULT_CREATED_BY,
        )
        await self._persist(event)

        logger.info(
            "Created event: id=%s, type=%s, capacity=%s",
            event.id,
            event.event_type,
            event.max_capacity,
        )

        return EventResponse.model_validate(event)

    async def list_events(self) -> list[EventResponse]:
        """List events, most recent date first."""
        result = await self._execute(select(Event).order_by(Event.date.desc(), Event.id.desc()))
        return [EventResponse.model_validate(e) for e in result.scalars().all()]

    async def get_event(self, event_id: int) -> EventResponse:
        """Get an event by ID.

        Raises:
            EventNotFoundError: If not found.
        """
        result = await self._execute(select(Event).where(Event.id == event_id))
        event = result.scalar_one_or_none()

        if not event:
            raise EventNotFoundError(f"Event {event_id} not found")

        return EventResponse.model_validate(event)

    async def _get_college(self, college_id: int) -> College:
        result = await self._execute(select(College).where(College.id == college_id))
        college = result.scalar_one_or_none()

        if not college:
            raise CollegeNotFoundError(f"College {college_id} not found")

        return college

    async def _execute(self, query):
        try:
            return await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Catalog query failed: %s", e)
            raise StorageFailureError() from e

    async def _persist(
        self,
        record: Base,
        duplicate_error: ParticipationError | None = None,
    ) -> None:
        """Add, commit and refresh a new record.

        Args:
            record: New ORM instance.
            duplicate_error: Raised instead of StorageFailureError when a
                unique constraint rejects the insert.
        """
        try:
            self.db.add(record)
            await self.db.commit()
            await self.db.refresh(record)
        except IntegrityError as e:
            await self.db.rollback()
            if duplicate_error is not None and is_unique_violation(e):
                raise duplicate_error from e
            logger.error("Insert into %s failed: %s", record.__tablename__, e)
            raise StorageFailureError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Insert into %s failed: %s", record.__tablename__, e)
            raise StorageFailureError() from e
