# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Participation models: registrations, attendance and feedback.

Each table holds at most one row per (student_id, event_id). The unique
constraints are the authoritative guard; the services never rely on an
application-level pre-check alone.

Attendance and feedback carry a revision counter: 1 for the first
submission, incremented by every overwrite.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from campus_events.infrastructure.database.models.base import Base
from campus_events.utils.datetime import utc_now

REGISTRATION_UNIQUE = "uq_registrations_student_event"
ATTENDANCE_UNIQUE = "uq_attendance_student_event"
FEEDBACK_UNIQUE = "uq_feedback_student_event"


class Registration(Base):
    """A student's registration for an event. Never updated or deleted."""

    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("student_id", "event_id", name=REGISTRATION_UNIQUE),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="registered")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )


class Attendance(Base):
    """Latest attendance mark for a student at an event."""

    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("student_id", "event_id", name=ATTENDANCE_UNIQUE),
        CheckConstraint("status IN ('present', 'absent')", name="status_valid"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="present")
    marked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    revision: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default=text("1")
    )


class Feedback(Base):
    """Latest feedback submitted by a student for an event."""

    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("student_id", "event_id", name=FEEDBACK_UNIQUE),
        CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    revision: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default=text("1")
    )
