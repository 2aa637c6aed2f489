# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request and response models for registrations, attendance and feedback.

Request fields are deliberately loose: required-field and range checks
belong to the services, which reject bad input before touching storage.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from campus_events.models.base import RowResponse


class RegisterRequest(BaseModel):
    """Register a student for an event."""

    student_id: int | None = None
    event_id: int | None = None


class RegistrationResponse(RowResponse):
    """Registration record."""

    id: int
    student_id: int
    event_id: int
    status: str
    created_at: datetime


class AttendanceRequest(BaseModel):
    """Mark attendance. Unknown or missing status counts as present."""

    student_id: int | None = None
    event_id: int | None = None
    status: Any = Field(None, description="present or absent, anything else means present")


class AttendanceResponse(RowResponse):
    """Attendance record as stored after the latest mark."""

    id: int
    student_id: int
    event_id: int
    status: Literal["present", "absent"]
    marked_at: datetime


class FeedbackRequest(BaseModel):
    """Submit feedback for an event."""

    student_id: int | None = None
    event_id: int | None = None
    rating: Any = Field(None, description="Integer from 1 to 5")
    comment: str | None = None


class FeedbackResponse(RowResponse):
    """Feedback record as stored after the latest submission."""

    id: int
    student_id: int
    event_id: int
    rating: int
    comment: str | None = None
    submitted_at: datetime
