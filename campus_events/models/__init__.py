# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response models."""

from campus_events.models.catalog import (
    CollegeCreateRequest,
    CollegeResponse,
    EventCreateRequest,
    EventResponse,
    StudentCreateRequest,
    StudentResponse,
)
from campus_events.models.participation import (
    AttendanceRequest,
    AttendanceResponse,
    FeedbackRequest,
    FeedbackResponse,
    RegisterRequest,
    RegistrationResponse,
)

__all__ = [
    "CollegeCreateRequest",
    "CollegeResponse",
    "StudentCreateRequest",
    "StudentResponse",
    "EventCreateRequest",
    "EventResponse",
    "RegisterRequest",
    "RegistrationResponse",
    "AttendanceRequest",
    "AttendanceResponse",
    "FeedbackRequest",
    "FeedbackResponse",
]
