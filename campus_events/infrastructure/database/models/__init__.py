# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the six campus events tables."""

from campus_events.infrastructure.database.models.base import Base
from campus_events.infrastructure.database.models.catalog import College, Event, Student
from campus_events.infrastructure.database.models.participation import (
    ATTENDANCE_UNIQUE,
    FEEDBACK_UNIQUE,
    REGISTRATION_UNIQUE,
    Attendance,
    Feedback,
    Registration,
)

__all__ = [
    "Base",
    "College",
    "Student",
    "Event",
    "Registration",
    "Attendance",
    "Feedback",
    "REGISTRATION_UNIQUE",
    "ATTENDANCE_UNIQUE",
    "FEEDBACK_UNIQUE",
]
