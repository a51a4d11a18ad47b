"""Constraint checks for a single proposed session.

Used for sessions created or edited by hand. Checks run in a fixed order and
stop at the first violation, so the reported reason is stable when several
constraints are broken at once.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from .activities import find_blocking_activity
from .availability import find_room_conflict, find_staff_conflict
from .domain import BlockingActivity, ScheduledSession, StaffMember, TherapyRoom
from .timeutils import to_minutes


class Violation(str, Enum):
    STAFF_NOT_FOUND = "staff_not_found"
    ROOM_NOT_FOUND = "room_not_found"
    OUTSIDE_WORKING_HOURS = "outside_working_hours"
    ROOM_CONFLICT = "room_conflict"
    STAFF_CONFLICT = "staff_conflict"
    BLOCKED_BY_ACTIVITY = "blocked_by_activity"


MESSAGES = {
    Violation.STAFF_NOT_FOUND: "Staff member not found",
    Violation.ROOM_NOT_FOUND: "Room not found",
    Violation.OUTSIDE_WORKING_HOURS: "Session is outside the staff member's working hours",
    Violation.ROOM_CONFLICT: "Room is already booked at this time",
    Violation.STAFF_CONFLICT: "Staff member is already busy at this time",
    Violation.BLOCKED_BY_ACTIVITY: "Session overlaps {activity}",
}


@dataclass(frozen=True)
class ValidationResult:
    violation: Optional[Violation] = None
    activity_name: Optional[str] = None
    detail: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.violation is None

    @property
    def message(self) -> Optional[str]:
        if self.violation is None:
            return None
        text = MESSAGES[self.violation].format(activity=self.activity_name)
        if self.detail:
            text = f"{text} ({self.detail})"
        return text

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def invalid(
        cls,
        violation: Violation,
        *,
        activity_name: str | None = None,
        detail: str | None = None,
    ) -> "ValidationResult":
        return cls(violation, activity_name, detail)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"valid": self.valid}
        if not self.valid:
            payload["code"] = self.violation.value
            payload["message"] = self.message
        if self.activity_name is not None:
            payload["activity"] = self.activity_name
        return payload


def _within_working_hours(staff: StaffMember, candidate: ScheduledSession) -> bool:
    hours = staff.hours_on(candidate.day)
    if hours is None:
        return False
    return to_minutes(candidate.start) >= to_minutes(hours.start) and to_minutes(
        candidate.end
    ) <= to_minutes(hours.end)


def validate_session(
    candidate: ScheduledSession,
    other_sessions: Iterable[ScheduledSession],
    staff: Sequence[StaffMember],
    rooms: Sequence[TherapyRoom],
    activities: Sequence[BlockingActivity],
) -> ValidationResult:
    member = next((item for item in staff if item.id == candidate.staff_id), None)
    if member is None:
        return ValidationResult.invalid(Violation.STAFF_NOT_FOUND)

    room = next((item for item in rooms if item.id == candidate.room_id), None)
    if room is None:
        return ValidationResult.invalid(Violation.ROOM_NOT_FOUND)

    if not _within_working_hours(member, candidate):
        hours = member.hours_on(candidate.day)
        detail = (
            f"does not work on {candidate.day.value}"
            if hours is None
            else f"works {hours.start}-{hours.end}"
        )
        return ValidationResult.invalid(Violation.OUTSIDE_WORKING_HOURS, detail=detail)

    # An edited session must not collide with its own previous version.
    others = [session for session in other_sessions if session.id != candidate.id]

    if find_room_conflict(
        candidate.room_id, candidate.day, candidate.start, candidate.end, others
    ) is not None:
        return ValidationResult.invalid(Violation.ROOM_CONFLICT)

    if find_staff_conflict(
        candidate.staff_id, candidate.day, candidate.start, candidate.end, others
    ) is not None:
        return ValidationResult.invalid(Violation.STAFF_CONFLICT)

    blocking = find_blocking_activity(
        activities, candidate.day, candidate.start, candidate.end
    )
    if blocking is not None:
        return ValidationResult.invalid(
            Violation.BLOCKED_BY_ACTIVITY, activity_name=blocking.name
        )

    return ValidationResult.ok()
