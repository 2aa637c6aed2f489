# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for participation reports against a real SQLite store.

The scenario seeded here:

    registrations   small: Asha, Bilal   talk: Asha, Bilal, Chen   open: Asha
    attendance      small: Asha present, Bilal absent, Chen present (unregistered)
                    talk:  Asha present, Bilal present
    feedback        small: Asha 5, Bilal 3   talk: Asha 5
"""

import pytest
import pytest_asyncio

from campus_events.domains.analytics import AnalyticsService
from campus_events.domains.interaction import ABSENT, PRESENT, InteractionService
from campus_events.domains.registration import RegistrationService

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def scenario(database, catalog, locks):
    """Record the registrations, marks and ratings described above."""
    asha, bilal, chen, _ = catalog.student_ids
    small, open_, talk = (catalog.event_ids[k] for k in ("small", "open", "talk"))

    async with database.sessionmaker() as session:
        registrations = RegistrationService(db=session, locks=locks)
        for student_id, event_id in [
            (asha, small), (bilal, small),
            (asha, talk), (bilal, talk), (chen, talk),
            (asha, open_),
        ]:
            await registrations.register(student_id, event_id)

        interactions = InteractionService(db=session)
        await interactions.record_attendance(asha, small, PRESENT)
        await interactions.record_attendance(bilal, small, ABSENT)
        await interactions.record_attendance(chen, small, PRESENT)
        await interactions.record_attendance(asha, talk, PRESENT)
        await interactions.record_attendance(bilal, talk, PRESENT)

        await interactions.record_feedback(asha, small, 5)
        await interactions.record_feedback(bilal, small, 3)
        await interactions.record_feedback(asha, talk, 5)

    return catalog


@pytest_asyncio.fixture
async def analytics(database, scenario):
    """Analytics service on its own session."""
    async with database.sessionmaker() as session:
        yield AnalyticsService(db=session, top_students_limit=3)


class TestEventPopularity:
    """Tests for the event popularity report."""

    @pytest.mark.asyncio
    async def test_ordered_by_registrations(self, analytics, scenario):
        """Test events are ranked by registrations, unregistered events included."""
        report = await analytics.get_event_popularity()

        ids = scenario.event_ids
        assert [(r.event_id, r.registrations) for r in report] == [
            (ids["talk"], 3),
            (ids["small"], 2),
            (ids["open"], 1),
            (ids["quiet"], 0),
        ]

    @pytest.mark.asyncio
    async def test_type_filter(self, analytics, scenario):
        """Test filtering by event type."""
        report = await analytics.get_event_popularity(event_type="Seminar")

        assert [r.event_id for r in report] == [scenario.event_ids["talk"], scenario.event_ids["quiet"]]
        assert all(r.event_type == "Seminar" for r in report)


class TestAttendanceReport:
    """Tests for the attendance report."""

    @pytest.mark.asyncio
    async def test_percentages(self, analytics, scenario):
        """Test presents only count for registered students."""
        report = {r.event_id: r for r in await analytics.get_attendance_report()}
        ids = scenario.event_ids

        assert (report[ids["small"]].registrations, report[ids["small"]].presents) == (2, 1)
        assert report[ids["small"]].attendance_percentage == 50.0
        assert report[ids["talk"]].attendance_percentage == 66.67
        assert report[ids["open"]].attendance_percentage == 0.0
        assert report[ids["quiet"]].registrations == 0
        assert report[ids["quiet"]].attendance_percentage == 0.0

    @pytest.mark.asyncio
    async def test_ordered_by_event_id(self, analytics):
        """Test rows come back in event id order."""
        report = await analytics.get_attendance_report()

        assert [r.event_id for r in report] == sorted(r.event_id for r in report)


class TestStudentParticipation:
    """Tests for student participation and top students."""

    @pytest.mark.asyncio
    async def test_counts_present_marks(self, analytics):
        """Test present marks are counted and idle students are listed."""
        report = await analytics.get_student_participation()

        assert [(r.name, r.events_attended) for r in report] == [
            ("Asha", 2),
            ("Bilal", 1),
            ("Chen", 1),
            ("Dana", 0),
        ]

    @pytest.mark.asyncio
    async def test_top_students(self, analytics):
        """Test the top students report is the head of the ranking."""
        top = await analytics.get_top_students()

        assert [r.name for r in top] == ["Asha", "Bilal", "Chen"]


class TestFeedbackReport:
    """Tests for the feedback report."""

    @pytest.mark.asyncio
    async def test_averages_and_nulls_last(self, analytics, scenario):
        """Test averages are ranked and events without feedback come last."""
        report = await analytics.get_feedback_report()
        ids = scenario.event_ids

        assert [(r.event_id, r.avg_rating, r.feedback_count) for r in report] == [
            (ids["talk"], 5.0, 1),
            (ids["small"], 4.0, 2),
            *sorted([(ids["open"], None, 0), (ids["quiet"], None, 0)]),
        ]


class TestReportStability:
    """Tests for repeatable report output."""

    @pytest.mark.asyncio
    async def test_reports_are_repeatable(self, analytics):
        """Test two calls with no write in between return the same rows."""
        for build in (
            analytics.get_event_popularity,
            analytics.get_attendance_report,
            analytics.get_student_participation,
            analytics.get_feedback_report,
            analytics.get_top_students,
        ):
            assert await build() == await build()
