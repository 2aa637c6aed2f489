# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration service for the registration ledger.

This module provides the RegistrationService class for:
- Registering a student for an event
- Enforcing the event capacity ceiling
- Rejecting a second registration for the same student and event

Capacity is enforced by a conditional insert: the registration is
flushed first and the event's registrations are counted afterwards in
the same transaction, which is rolled back when the new row overflows
the capacity. Every attempt for an event runs inside that event's
critical section (an asyncio lock from a registry shared by the
process) and takes a row lock on the event before inserting. On
PostgreSQL the row lock serializes attempts across processes as well;
on SQLite the lock is a no-op and the in-process critical section is
the guard.

Uniqueness is enforced by the registrations unique constraint. The
constraint violation, not a pre-check, is what produces
DuplicateRegistrationError. Since the insert comes before the count, a
student already registered for a full event gets the duplicate error.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.domains.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    EventNotFoundError,
    ParticipationError,
    StorageFailureError,
    StudentNotFoundError,
    ValidationError,
)
from campus_events.infrastructure.database.errors import (
    is_foreign_key_violation,
    is_unique_violation,
)
from campus_events.infrastructure.database.locks import KeyedLockRegistry, LockTimeoutError
from campus_events.infrastructure.database.models import Event, Registration
from campus_events.models.participation import RegistrationResponse

logger = logging.getLogger(__name__)

REGISTERED = "registered"


def _require_id(value: Any, field: str) -> int:
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} is required and must be an integer")
    return value


class RegistrationService:
    """Service for registering students for events.

    Attributes:
        db: Async database session.
        locks: Per-event lock registry shared by every service instance
            of the process.
    """

    def __init__(self, db: AsyncSession, locks: KeyedLockRegistry | None = None) -> None:
        """Initialize registration service.

        Args:
            db: Async database session.
            locks: Shared per-event lock registry. A private registry is
                created when omitted, which only serializes calls made
                through this instance.
        """
        self.db = db
        self.locks = locks if locks is not None else KeyedLockRegistry()

    async def register(self, student_id: Any, event_id: Any) -> RegistrationResponse:
        """Register a student for an event.

        Uniqueness is decided before capacity, so a student re-registering
        for a full event gets DuplicateRegistrationError.

        Args:
            student_id: Student identifier.
            event_id: Event identifier.

        Returns:
            The persisted registration with status "registered".

        Raises:
            ValidationError: If either id is missing or not an integer.
            EventNotFoundError: If the event does not exist.
            StudentNotFoundError: If the student does not exist.
            CapacityExceededError: If the event is full.
            DuplicateRegistrationError: If the student is already registered.
            StorageFailureError: On any other storage error.
        """
        student_id = _require_id(student_id, "student_id")
        event_id = _require_id(event_id, "event_id")

        try:
            async with self.locks.hold(event_id):
                return await self._register_locked(student_id, event_id)
        except LockTimeoutError as e:
            logger.error("Registration lock timeout: event=%s", event_id)
            raise StorageFailureError("Registration could not be processed, try again") from e

    async def count_registrations(self, event_id: int) -> int:
        """Count registrations recorded for an event.

        Args:
            event_id: Event identifier.

        Returns:
            Number of registrations.
        """
        result = await self.db.execute(
            select(func.count(Registration.id)).where(Registration.event_id == event_id)
        )
        return result.scalar_one()

    async def _register_locked(self, student_id: int, event_id: int) -> RegistrationResponse:
        try:
            event = await self._lock_event(event_id)

            registration = Registration(
                student_id=student_id,
                event_id=event_id,
                status=REGISTERED,
            )
            self.db.add(registration)
            await self.db.flush()

            if event.has_capacity_limit:
                # Count includes the row just flushed
                count = await self.count_registrations(event_id)
                if count > event.max_capacity:
                    logger.info(
                        "Registration rejected, event full: student=%s, event=%s, capacity=%s",
                        student_id,
                        event_id,
                        event.max_capacity,
                    )
                    raise CapacityExceededError(
                        f"Event {event_id} has reached its capacity of {event.max_capacity}"
                    )

            await self.db.commit()
            await self.db.refresh(registration)
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                logger.info(
                    "Registration rejected, duplicate: student=%s, event=%s",
                    student_id,
                    event_id,
                )
                raise DuplicateRegistrationError(
                    f"Student {student_id} is already registered for event {event_id}"
                ) from e
            if is_foreign_key_violation(e):
                raise StudentNotFoundError(f"Student {student_id} not found") from e
            logger.error("Registration failed: %s", e)
            raise StorageFailureError() from e
        except ParticipationError:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Registration failed: %s", e)
            raise StorageFailureError() from e

        logger.info(
            "Registered student: student=%s, event=%s, registration=%s",
            student_id,
            event_id,
            registration.id,
        )

        return RegistrationResponse.model_validate(registration)

    async def _lock_event(self, event_id: int) -> Event:
        """Get an event by ID, locking its row for the transaction.

        Args:
            event_id: Event identifier.

        Returns:
            Event model instance.

        Raises:
            EventNotFoundError: If not found.
        """
        query = select(Event).where(Event.id == event_id).with_for_update()
        result = await self.db.execute(query)
        event = result.scalar_one_or_none()

        if not event:
            raise EventNotFoundError(f"Event {event_id} not found")

        return event
