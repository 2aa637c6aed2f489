# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics service module.

This module provides read-only participation reports computed from
registrations, attendance, feedback and the event catalog:

- Event popularity: registrations per event
- Attendance: registrations, presents and attendance percentage per event
- Student participation: present marks per student
- Feedback: average rating and feedback count per event
- Top students: head of the participation ranking

Every report is recomputed from the store on each call. Events and
students without any participation rows are always included (outer
joins), and every ordering ends with a unique column so that two calls
with no write in between return identical output.

Usage:
    from campus_events.domains.analytics import AnalyticsService

    service = AnalyticsService(db=db_session)
    rows = await service.get_event_popularity(event_type="Workshop")
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import and_, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.domains.exceptions import StorageFailureError
from campus_events.domains.interaction.service import PRESENT
from campus_events.infrastructure.database.models import (
    Attendance,
    Event,
    Feedback,
    Registration,
    Student,
)

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def _round2(value: Decimal) -> float:
    return float(value.quantize(_CENTS, rounding=ROUND_HALF_UP))


def attendance_percentage(presents: int, registrations: int) -> float:
    """Share of registrations marked present, in percent.

    Args:
        presents: Registrations whose student was marked present.
        registrations: Total registrations.

    Returns:
        Percentage rounded half-up to 2 decimals; 0 when nobody registered.
    """
    if registrations == 0:
        return 0.0
    return _round2(Decimal(100 * presents) / Decimal(registrations))


def average_rating(rating_total: int | None, feedback_count: int) -> float | None:
    """Mean rating rounded half-up to 2 decimals, or None without feedback."""
    if not feedback_count:
        return None
    return _round2(Decimal(int(rating_total)) / Decimal(feedback_count))


@dataclass
class EventPopularity:
    """Registration count for one event."""

    event_id: int
    title: str
    event_type: str
    date: date
    registrations: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "id": self.event_id,
            "title": self.title,
            "event_type": self.event_type,
            "date": self.date.isoformat(),
            "registrations": self.registrations,
        }


@dataclass
class EventAttendance:
    """Attendance figures for one event."""

    event_id: int
    title: str
    registrations: int = 0
    presents: int = 0
    attendance_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "id": self.event_id,
            "title": self.title,
            "registrations": self.registrations,
            "presents": self.presents,
            "attendance_percentage": self.attendance_percentage,
        }


@dataclass
class StudentParticipation:
    """Number of events a student was marked present at."""

    student_id: int
    name: str
    email: str
    events_attended: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return asdict(self)


@dataclass
class EventFeedbackSummary:
    """Feedback figures for one event."""

    event_id: int
    title: str
    avg_rating: float | None = None
    feedback_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "id": self.event_id,
            "title": self.title,
            "avg_rating": self.avg_rating,
            "feedback_count": self.feedback_count,
        }


class AnalyticsService:
    """Service computing participation reports.

    Attributes:
        _db: Database session.
        top_students_limit: Number of rows in the top students report.
    """

    def __init__(self, db: AsyncSession, top_students_limit: int = 3) -> None:
        """Initialize the analytics service.

        Args:
            db: Database session.
            top_students_limit: Number of rows in the top students report.
        """
        self._db = db
        self.top_students_limit = top_students_limit

    async def get_event_popularity(self, event_type: str | None = None) -> list[EventPopularity]:
        """Registrations per event, most registered first.

        Args:
            event_type: Only include events of this type.

        Returns:
            One entry per event, including events nobody registered for.
        """
        registrations = func.count(Registration.id).label("registrations")
        query = (
            select(Event.id, Event.title, Event.event_type, Event.date, registrations)
            .select_from(Event)
            .outerjoin(Registration, Registration.event_id == Event.id)
        )
        if event_type:
            query = query.where(Event.event_type == event_type)
        query = query.group_by(
            Event.id, Event.title, Event.event_type, Event.date
        ).order_by(registrations.desc(), Event.id)

        rows = await self._fetch(query, "event popularity")
        return [
            EventPopularity(
                event_id=row.id,
                title=row.title,
                event_type=row.event_type,
                date=row.date,
                registrations=row.registrations or 0,
            )
            for row in rows
        ]

    async def get_attendance_report(self) -> list[EventAttendance]:
        """Registrations, presents and attendance percentage per event.

        A present mark only counts when the student is registered for
        the event.

        Returns:
            One entry per event, ordered by event id.
        """
        presents = func.coalesce(
            func.sum(case((Attendance.status == PRESENT, 1), else_=0)), 0
        ).label("presents")
        query = (
            select(
                Event.id,
                Event.title,
                func.count(Registration.id).label("registrations"),
                presents,
            )
            .select_from(Event)
            .outerjoin(Registration, Registration.event_id == Event.id)
            .outerjoin(
                Attendance,
                and_(
                    Attendance.event_id == Event.id,
                    Attendance.student_id == Registration.student_id,
                ),
            )
            .group_by(Event.id, Event.title)
            .order_by(Event.id)
        )

        rows = await self._fetch(query, "attendance")
        report = []
        for row in rows:
            registered = row.registrations or 0
            present = int(row.presents or 0)
            report.append(
                EventAttendance(
                    event_id=row.id,
                    title=row.title,
                    registrations=registered,
                    presents=present,
                    attendance_percentage=attendance_percentage(present, registered),
                )
            )
        return report

    async def get_student_participation(self) -> list[StudentParticipation]:
        """Present marks per student across all events.

        Registrations are not consulted. Students with no marks appear
        with zero.

        Returns:
            Students ordered by events attended (desc), then name.
        """
        return await self._participation(limit=None)

    async def get_feedback_report(self) -> list[EventFeedbackSummary]:
        """Average rating and feedback count per event.

        Returns:
            One entry per event, highest average first; events without
            feedback come last with a None average.
        """
        feedback_count = func.count(Feedback.id).label("feedback_count")
        query = (
            select(
                Event.id,
                Event.title,
                func.sum(Feedback.rating).label("rating_total"),
                feedback_count,
            )
            .select_from(Event)
            .outerjoin(Feedback, Feedback.event_id == Event.id)
            .group_by(Event.id, Event.title)
            .order_by(func.avg(Feedback.rating).desc().nulls_last(), Event.id)
        )

        rows = await self._fetch(query, "feedback")
        return [
            EventFeedbackSummary(
                event_id=row.id,
                title=row.title,
                avg_rating=average_rating(row.rating_total, row.feedback_count or 0),
                feedback_count=row.feedback_count or 0,
            )
            for row in rows
        ]

    async def get_top_students(self) -> list[StudentParticipation]:
        """Head of the student participation ranking.

        Returns:
            At most top_students_limit students, same order as
            get_student_participation.
        """
        return await self._participation(limit=self.top_students_limit)

    async def _participation(self, limit: int | None) -> list[StudentParticipation]:
        events_attended = func.coalesce(
            func.sum(case((Attendance.status == PRESENT, 1), else_=0)), 0
        ).label("events_attended")
        query = (
            select(Student.id, Student.name, Student.email, events_attended)
            .select_from(Student)
            .outerjoin(Attendance, Attendance.student_id == Student.id)
            .group_by(Student.id, Student.name, Student.email)
            .order_by(events_attended.desc(), Student.name.asc(), Student.id.asc())
        )
        if limit is not None:
            query = query.limit(limit)

        rows = await self._fetch(query, "student participation")
        return [
            StudentParticipation(
                student_id=row.id,
                name=row.name,
                email=row.email,
                events_attended=int(row.events_attended or 0),
            )
            for row in rows
        ]

    async def _fetch(self, query, report: str) -> list[Any]:
        try:
            result = await self._db.execute(query)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error("Failed to build %s report: %s", report, e)
            raise StorageFailureError(f"Failed to build {report} report") from e
