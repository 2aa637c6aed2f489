# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Interaction domain package.

This package records per-student interactions with an event:
- Attendance marks (present/absent), last mark wins
- Feedback ratings with optional comment, last submission wins
"""

from campus_events.domains.interaction.service import (
    ABSENT,
    ATTENDANCE_STATUSES,
    MAX_RATING,
    MIN_RATING,
    PRESENT,
    InteractionService,
    normalize_attendance_status,
    validate_rating,
)

__all__ = [
    "InteractionService",
    "normalize_attendance_status",
    "validate_rating",
    "PRESENT",
    "ABSENT",
    "ATTENDANCE_STATUSES",
    "MIN_RATING",
    "MAX_RATING",
]
