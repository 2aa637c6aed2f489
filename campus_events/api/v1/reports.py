# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Participation report endpoints.

- GET /event-popularity?type= - Registrations per event
- GET /attendance - Attendance percentage per event
- GET /student-participation - Events attended per student
- GET /feedback - Average rating per event
- GET /top-students - Most active students
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from campus_events.api.dependencies import get_analytics_service
from campus_events.domains.analytics import AnalyticsService

router = APIRouter()


@router.get("/event-popularity", summary="Event popularity")
async def event_popularity(
    event_type: str | None = Query(None, alias="type", description="Filter by event type"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[dict[str, Any]]:
    """Registrations per event, most popular first."""
    rows = await service.get_event_popularity(event_type=event_type)
    return [row.to_dict() for row in rows]


@router.get("/attendance", summary="Attendance report")
async def attendance_report(
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[dict[str, Any]]:
    """Registrations, presents and attendance percentage per event."""
    rows = await service.get_attendance_report()
    return [row.to_dict() for row in rows]


@router.get("/student-participation", summary="Student participation")
async def student_participation(
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[dict[str, Any]]:
    """Events attended per student."""
    rows = await service.get_student_participation()
    return [row.to_dict() for row in rows]


@router.get("/feedback", summary="Feedback report")
async def feedback_report(
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[dict[str, Any]]:
    """Average rating and feedback count per event."""
    rows = await service.get_feedback_report()
    return [row.to_dict() for row in rows]


@router.get("/top-students", summary="Top students")
async def top_students(
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[dict[str, Any]]:
    """Students who attended the most events."""
    rows = await service.get_top_students()
    return [row.to_dict() for row in rows]
