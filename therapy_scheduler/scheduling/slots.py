"""Enumerate candidate session slots over the work week."""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .activities import find_blocking_activity
from .domain import WEEK_DAYS, BlockingActivity, Slot, StaffMember, WeekDay
from .timeutils import minutes_to_time, to_minutes

SESSION_MINUTES = 45
SLOT_STEP_MINUTES = 15


def day_bounds(staff: Iterable[StaffMember], day: WeekDay) -> Optional[tuple[int, int]]:
    """Earliest start and latest end, in minutes, of everyone working ``day``."""
    starts: list[int] = []
    ends: list[int] = []
    for member in staff:
        hours = member.hours_on(day)
        if hours is None:
            continue
        starts.append(to_minutes(hours.start))
        ends.append(to_minutes(hours.end))
    if not starts:
        return None
    return min(starts), max(ends)


def slots_for_day(
    day: WeekDay,
    window_start: int,
    window_end: int,
    activities: Sequence[BlockingActivity],
) -> list[Slot]:
    slots: list[Slot] = []
    current = window_start
    while current + SESSION_MINUTES <= window_end:
        start = minutes_to_time(current)
        end = minutes_to_time(current + SESSION_MINUTES)
        if find_blocking_activity(activities, day, start, end) is None:
            slots.append(Slot(day, start, end))
        current += SLOT_STEP_MINUTES
    return slots


def generate_slots(
    staff: Sequence[StaffMember], activities: Sequence[BlockingActivity]
) -> list[Slot]:
    """Return every candidate slot in (weekday, start) order."""
    slots: list[Slot] = []
    for day in WEEK_DAYS:
        bounds = day_bounds(staff, day)
        if bounds is None:
            continue
        slots.extend(slots_for_day(day, bounds[0], bounds[1], activities))
    slots.sort(key=lambda slot: (slot.day.index, to_minutes(slot.start)))
    return slots
