# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics domain services.

Read-only reports over registrations, attendance and feedback:
event popularity, attendance, student participation, feedback and
top students.

Usage:
    from campus_events.domains.analytics import AnalyticsService

    service = AnalyticsService(db)
    report = await service.get_attendance_report()
"""

from campus_events.domains.analytics.service import (
    AnalyticsService,
    EventAttendance,
    EventFeedbackSummary,
    EventPopularity,
    StudentParticipation,
    attendance_percentage,
    average_rating,
)

__all__ = [
    "AnalyticsService",
    "EventPopularity",
    "EventAttendance",
    "StudentParticipation",
    "EventFeedbackSummary",
    "attendance_percentage",
    "average_rating",
]
