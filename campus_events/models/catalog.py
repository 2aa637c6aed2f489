# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request and response models for colleges, students and events."""

from datetime import date, datetime, time

from pydantic import BaseModel, EmailStr, Field

from campus_events.models.base import RowResponse


class CollegeCreateRequest(BaseModel):
    """Request to create a college."""

    name: str = Field(..., min_length=1, max_length=200, description="College name")
    location: str = Field(..., min_length=1, max_length=200, description="City or campus")
    contact_email: EmailStr | None = Field(None, description="Contact address")


class CollegeResponse(RowResponse):
    """College record."""

    id: int
    name: str
    location: str
    contact_email: str | None = None
    created_at: datetime


class StudentCreateRequest(BaseModel):
    """Student signup record (credentials are handled elsewhere)."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    college_id: int
    phone: str | None = Field(None, max_length=30)
    course: str | None = Field(None, max_length=120)
    year: int | None = Field(None, ge=1, le=10)


class StudentResponse(RowResponse):
    """Student record."""

    id: int
    name: str
    email: str
    phone: str | None = None
    college_id: int
    course: str | None = None
    year: int | None = None
    created_at: datetime


class EventCreateRequest(BaseModel):
    """Request to create an event.

    max_capacity is validated by the catalog service so that a bad value
    is reported the same way whether it arrives over HTTP or not.
    """

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    event_type: str = Field(..., min_length=1, max_length=50, description="e.g. Workshop, Hackathon")
    date: date
    start_time: time
    end_time: time
    venue: str = Field(..., min_length=1, max_length=200)
    max_capacity: int | None = Field(None, description="Defaults to 100 when omitted")
    college_id: int
    created_by: str | None = Field(None, max_length=120)


class EventResponse(RowResponse):
    """Event record."""

    id: int
    title: str
    description: str | None = None
    event_type: str
    date: date
    start_time: time
    end_time: time
    venue: str
    max_capacity: int | None = None
    college_id: int
    created_by: str
    created_at: datetime
