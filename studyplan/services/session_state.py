"""
Computed session status relative to the current time.
"""

from datetime import date, datetime
from typing import Optional

from studyplan.models.enums import SessionState, SessionStatus
from studyplan.models.study_plan import StudySession
from studyplan.utils.datetime_utils import combine_clock_time, get_now


def get_session_state(
    session: StudySession,
    plan_date: date,
    now: Optional[datetime] = None,
) -> SessionState:
    """
    Resolve a session's effective status.

    A past-day session whose end time has passed without being done,
    completed or skipped is missed; the same situation on the current day
    is overdue.
    """
    if session.done or session.status == SessionStatus.COMPLETED:
        return SessionState.COMPLETED
    if session.status == SessionStatus.SKIPPED:
        return SessionState.SKIPPED
    if session.status == SessionStatus.MISSED:
        return SessionState.MISSED

    current = get_now(now)
    today = current.date()
    session_end = combine_clock_time(plan_date, session.end_time)
    if plan_date < today and session_end < current:
        return SessionState.MISSED
    if plan_date == today and session_end < current:
        return SessionState.OVERDUE
    return SessionState.SCHEDULED


def is_outstanding(session: StudySession) -> bool:
    """Work still sitting on its day: not done, completed, skipped or missed."""
    return not session.is_finished and session.status != SessionStatus.MISSED
