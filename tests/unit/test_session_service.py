"""
Unit tests for SessionService (merging and manual edits).
"""

from datetime import date

import pytest

from studyplan.core.exceptions import LockedDayError, NotFoundError, ValidationError
from studyplan.models.enums import SessionStatus
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import StudyPlan, StudySession
from studyplan.services.session_service import SessionService

TUESDAY = date(2024, 1, 9)
WEDNESDAY = date(2024, 1, 10)


def make_session(
    session_number: int,
    start_time: str,
    end_time: str,
    hours: float,
    task_id: str = "task-1",
    **kwargs,
) -> StudySession:
    return StudySession(
        task_id=task_id,
        session_number=session_number,
        start_time=start_time,
        end_time=end_time,
        allocated_hours=hours,
        **kwargs,
    )


def test_combine_merges_same_task_sessions():
    service = SessionService()
    plans = [
        StudyPlan(
            date=TUESDAY,
            sessions=[
                make_session(3, "13:00", "14:30", 1.5),
                make_session(2, "09:00", "10:00", 1.0),
                make_session(1, "10:00", "11:00", 1.0, task_id="task-2"),
            ],
        )
    ]

    result = service.combine_sessions(plans, UserSettings())

    sessions = {session.task_id: session for session in result[0].sessions}
    assert len(result[0].sessions) == 2
    merged = sessions["task-1"]
    assert (merged.start_time, merged.end_time) == ("09:00", "11:30")
    assert merged.allocated_hours == 2.5
    assert merged.session_number == 2
    assert result[0].total_study_hours == 3.5


def test_combine_respects_max_session_hours():
    service = SessionService()
    plans = [
        StudyPlan(
            date=TUESDAY,
            sessions=[make_session(1, "09:00", "12:00", 3.0), make_session(2, "13:00", "15:00", 2.0)],
        )
    ]

    assert service.combine_sessions(plans, UserSettings()) == plans
    assert service.combine_sessions(plans, UserSettings(daily_available_hours=2.0)) == plans


def test_combine_leaves_locked_and_other_days_alone():
    service = SessionService()
    sessions = [make_session(1, "09:00", "10:00", 1.0), make_session(2, "11:00", "12:00", 1.0)]
    plans = [
        StudyPlan(date=TUESDAY, is_locked=True, sessions=sessions),
        StudyPlan(date=WEDNESDAY, sessions=sessions),
    ]

    all_days = service.combine_sessions(plans, UserSettings())
    other_day = service.combine_sessions(plans, UserSettings(), target_date=TUESDAY)

    assert all_days[0] == plans[0]
    assert len(all_days[1].sessions) == 1
    assert other_day == plans


def test_combine_keeps_finished_sessions_separate():
    service = SessionService()
    plans = [
        StudyPlan(
            date=TUESDAY,
            sessions=[
                make_session(1, "09:00", "10:00", 1.0, done=True),
                make_session(2, "11:00", "12:00", 1.0, status=SessionStatus.SKIPPED),
                make_session(3, "13:00", "14:00", 1.0),
            ],
        )
    ]

    assert service.combine_sessions(plans, UserSettings()) == plans


def test_update_start_time_keeps_end():
    service = SessionService()
    plans = [StudyPlan(date=TUESDAY, sessions=[make_session(1, "09:00", "11:00", 2.0)])]

    result = service.update_session_start_time(plans, TUESDAY, "task-1", 1, "09:30")

    session = result[0].sessions[0]
    assert (session.start_time, session.end_time) == ("09:30", "11:00")
    assert session.allocated_hours == 1.5
    assert session.is_manual_override
    assert result[0].total_study_hours == 1.5
    assert plans[0].sessions[0].start_time == "09:00"


def test_update_start_time_rejects_bad_input():
    service = SessionService()
    plans = [
        StudyPlan(date=TUESDAY, sessions=[make_session(1, "09:00", "11:00", 2.0)]),
        StudyPlan(date=WEDNESDAY, is_locked=True, sessions=[make_session(2, "09:00", "10:00", 1.0)]),
    ]

    with pytest.raises(ValidationError):
        service.update_session_start_time(plans, TUESDAY, "task-1", 1, "9:75")
    with pytest.raises(ValidationError):
        service.update_session_start_time(plans, TUESDAY, "task-1", 1, "11:00")
    with pytest.raises(LockedDayError):
        service.update_session_start_time(plans, WEDNESDAY, "task-1", 2, "09:15")
    with pytest.raises(NotFoundError):
        service.update_session_start_time(plans, TUESDAY, "task-1", 7, "09:15")
    with pytest.raises(NotFoundError):
        service.update_session_start_time(plans, date(2024, 1, 11), "task-1", 1, "09:15")
