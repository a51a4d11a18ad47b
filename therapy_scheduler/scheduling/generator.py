"""Greedy weekly schedule generation.

Slots are consumed once, in (weekday, start) order. For each slot the first
free room is paired with the eligible staff member holding the largest
remaining quota; ties keep the input order. There is no backtracking, so a
slot that cannot be filled is simply left empty and quotas may stay unmet.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .activities import blocking_only
from .availability import is_room_free, is_staff_free
from .domain import (
    BlockingActivity,
    Identifier,
    ScheduledSession,
    Slot,
    StaffMember,
    TherapyRoom,
    WeekDay,
    new_session_id,
)
from .fatigue import ConsecutiveSessionTracker
from .slots import generate_slots
from .timeutils import to_minutes

logger = logging.getLogger(__name__)


@dataclass
class EmployeeScheduleState:
    staff: StaffMember
    remaining_sessions: int
    days: Dict[WeekDay, ConsecutiveSessionTracker] = field(
        default_factory=lambda: defaultdict(ConsecutiveSessionTracker)
    )

    def tracker(self, day: WeekDay) -> ConsecutiveSessionTracker:
        return self.days[day]

    def can_work(self, slot: Slot, sessions: Sequence[ScheduledSession]) -> bool:
        if self.remaining_sessions <= 0:
            return False
        hours = self.staff.hours_on(slot.day)
        if hours is None:
            return False
        if to_minutes(slot.start) < to_minutes(hours.start):
            return False
        if to_minutes(slot.end) > to_minutes(hours.end):
            return False
        if not is_staff_free(self.staff.id, slot.day, slot.start, slot.end, sessions):
            return False
        return self.tracker(slot.day).can_take_slot(slot.start)

    def take(self, slot: Slot) -> None:
        self.remaining_sessions -= 1
        self.tracker(slot.day).record_slot(slot.start, slot.end)


def _check_snapshot(
    staff: Iterable[StaffMember], activities: Iterable[BlockingActivity]
) -> None:
    """Parse every time in the snapshot so bad input fails before placement."""
    for member in staff:
        for hours in member.working_hours.values():
            to_minutes(hours.start)
            to_minutes(hours.end)
    for activity in activities:
        if activity.default_start and activity.default_end:
            to_minutes(activity.default_start)
            to_minutes(activity.default_end)
        for override in activity.day_overrides.values():
            if override.interval is not None:
                to_minutes(override.interval.start)
                to_minutes(override.interval.end)


class ScheduleGenerator:
    """One generation run; state lives only as long as the instance."""

    def __init__(
        self,
        staff: Sequence[StaffMember],
        rooms: Sequence[TherapyRoom],
        activities: Sequence[BlockingActivity],
        *,
        id_factory: Callable[[], Identifier] = new_session_id,
    ) -> None:
        self.staff = list(staff)
        self.rooms = list(rooms)
        self.activities = blocking_only(activities)
        self.id_factory = id_factory
        self.sessions: List[ScheduledSession] = []
        self.states: Dict[Identifier, EmployeeScheduleState] = {}

    def run(self) -> List[ScheduledSession]:
        _check_snapshot(self.staff, self.activities)
        self.sessions = []
        self.states = {
            member.id: EmployeeScheduleState(member, max(member.weekly_quota, 0))
            for member in self.staff
        }
        for slot in generate_slots(self.staff, self.activities):
            self._try_assign(slot)
        return list(self.sessions)

    def _free_room(self, slot: Slot) -> Optional[TherapyRoom]:
        for room in self.rooms:
            if is_room_free(room.id, slot.day, slot.start, slot.end, self.sessions):
                return room
        return None

    def _try_assign(self, slot: Slot) -> Optional[ScheduledSession]:
        room = self._free_room(slot)
        if room is None:
            logger.debug("No free room for %s %s-%s", slot.day.value, slot.start, slot.end)
            return None

        candidates = [
            self.states[member.id]
            for member in self.staff
            if self.states[member.id].can_work(slot, self.sessions)
        ]
        if not candidates:
            logger.debug("No eligible staff for %s %s-%s", slot.day.value, slot.start, slot.end)
            return None

        # sorted() is stable, so equal quotas keep input order.
        candidates = sorted(candidates, key=lambda state: -state.remaining_sessions)
        chosen = candidates[0]

        session = ScheduledSession(
            day=slot.day,
            start=slot.start,
            end=slot.end,
            staff_id=chosen.staff.id,
            room_id=room.id,
            id=self.id_factory(),
        )
        self.sessions.append(session)
        chosen.take(slot)
        logger.debug(
            "Placed staff %s in room %s on %s %s-%s",
            chosen.staff.id,
            room.id,
            slot.day.value,
            slot.start,
            slot.end,
        )
        return session


def generate_schedule(
    staff: Sequence[StaffMember],
    rooms: Sequence[TherapyRoom],
    activities: Sequence[BlockingActivity],
    *,
    id_factory: Callable[[], Identifier] = new_session_id,
) -> List[ScheduledSession]:
    """Place as many sessions as the constraints allow for one week."""
    return ScheduleGenerator(staff, rooms, activities, id_factory=id_factory).run()


def unmet_quotas(
    staff: Iterable[StaffMember], sessions: Iterable[ScheduledSession]
) -> Dict[Identifier, int]:
    """Quota left over per staff member after ``sessions`` were placed."""
    placed: Dict[Identifier, int] = defaultdict(int)
    for session in sessions:
        placed[session.staff_id] += 1
    return {
        member.id: max(member.weekly_quota - placed[member.id], 0) for member in staff
    }
