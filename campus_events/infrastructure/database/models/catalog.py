# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Catalog models: colleges, students and events.

These records are created once through administrative input or signup
and only read by the participation services.
"""

import datetime as dt

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_events.infrastructure.database.models.base import Base
from campus_events.utils.datetime import utc_now


class College(Base):
    """A college hosting events and enrolling students."""

    __tablename__ = "colleges"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    students: Mapped[list["Student"]] = relationship(back_populates="college")
    events: Mapped[list["Event"]] = relationship(back_populates="college")

    def __repr__(self) -> str:
        return f"<College id={self.id} name={self.name!r}>"


class Student(Base):
    """A student belonging to exactly one college."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    college_id: Mapped[int] = mapped_column(
        ForeignKey("colleges.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course: Mapped[str | None] = mapped_column(String(120), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    college: Mapped[College] = relationship(back_populates="students")

    def __repr__(self) -> str:
        return f"<Student id={self.id} email={self.email!r}>"


class Event(Base):
    """An event with a registration capacity.

    A NULL or non-positive max_capacity means unlimited registrations.
    """

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("max_capacity IS NULL OR max_capacity >= 0", name="capacity_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    venue: Mapped[str] = mapped_column(String(200), nullable=False)
    max_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    college_id: Mapped[int] = mapped_column(
        ForeignKey("colleges.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_by: Mapped[str] = mapped_column(String(120), nullable=False, default="Admin")
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    college: Mapped[College] = relationship(back_populates="events")

    @property
    def has_capacity_limit(self) -> bool:
        """Whether registrations for this event are capped."""
        return bool(self.max_capacity) and self.max_capacity > 0

    def __repr__(self) -> str:
        return f"<Event id={self.id} title={self.title!r}>"
