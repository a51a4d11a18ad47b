"""Free/busy lookups against sessions that are already placed."""
from __future__ import annotations

from typing import Iterable, Optional

from .domain import Identifier, ScheduledSession, WeekDay
from .timeutils import overlaps


def find_room_conflict(
    room_id: Identifier,
    day: WeekDay,
    start: str,
    end: str,
    sessions: Iterable[ScheduledSession],
) -> Optional[ScheduledSession]:
    for session in sessions:
        if session.room_id != room_id or session.day != day:
            continue
        if overlaps(session.start, session.end, start, end):
            return session
    return None


def find_staff_conflict(
    staff_id: Identifier,
    day: WeekDay,
    start: str,
    end: str,
    sessions: Iterable[ScheduledSession],
) -> Optional[ScheduledSession]:
    for session in sessions:
        if session.staff_id != staff_id or session.day != day:
            continue
        if overlaps(session.start, session.end, start, end):
            return session
    return None


def is_room_free(
    room_id: Identifier,
    day: WeekDay,
    start: str,
    end: str,
    sessions: Iterable[ScheduledSession],
) -> bool:
    return find_room_conflict(room_id, day, start, end, sessions) is None


def is_staff_free(
    staff_id: Identifier,
    day: WeekDay,
    start: str,
    end: str,
    sessions: Iterable[ScheduledSession],
) -> bool:
    return find_staff_conflict(staff_id, day, start, end, sessions) is None
