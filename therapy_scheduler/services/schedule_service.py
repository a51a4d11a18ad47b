"""Bridge between stored records and the scheduling core."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from flask import current_app

from ..models import Activity, Room, Schedule, Session, Staff, parse_time, utcnow
from ..scheduling import (
    BlockingActivity,
    ScheduledSession,
    StaffMember,
    TherapyRoom,
    ValidationResult,
    generate_schedule,
    unmet_quotas,
    validate_session,
)


class GenerationError(ValueError):
    """Raised when a generation run cannot start."""


@dataclass
class Snapshot:
    staff: List[StaffMember] = field(default_factory=list)
    rooms: List[TherapyRoom] = field(default_factory=list)
    activities: List[BlockingActivity] = field(default_factory=list)


@dataclass
class GenerationResult:
    schedule: Schedule
    unmet: Dict[int, int]


def load_snapshot(session, *, active_only: bool = True) -> Snapshot:
    """Read staff, rooms and activities in creation order."""
    staff_query = session.query(Staff)
    room_query = session.query(Room)
    if active_only:
        staff_query = staff_query.filter(Staff.is_active.is_(True))
        room_query = room_query.filter(Room.is_active.is_(True))
    return Snapshot(
        staff=[member.to_core() for member in staff_query.order_by(Staff.id).all()],
        rooms=[room.to_core() for room in room_query.order_by(Room.id).all()],
        activities=[
            activity.to_core()
            for activity in session.query(Activity).order_by(Activity.id).all()
        ],
    )


def _deactivate_schedules(session, *, keep_id: int | None = None) -> None:
    query = session.query(Schedule).filter(Schedule.is_active.is_(True))
    if keep_id is not None:
        query = query.filter(Schedule.id != keep_id)
    query.update({"is_active": False}, synchronize_session="fetch")


def generate_and_store(session) -> GenerationResult:
    """Run one generation and store it as the new active schedule."""
    snapshot = load_snapshot(session)
    if not snapshot.staff:
        raise GenerationError("No active staff members found")
    if not snapshot.rooms:
        raise GenerationError("No active rooms found")

    placed = generate_schedule(snapshot.staff, snapshot.rooms, snapshot.activities)

    _deactivate_schedules(session)
    schedule = Schedule(generated_at=utcnow(), is_active=True)
    for item in placed:
        schedule.sessions.append(
            Session(
                staff_id=item.staff_id,
                room_id=item.room_id,
                weekday=item.day.value,
                start_time=parse_time(item.start),
                end_time=parse_time(item.end),
            )
        )
    session.add(schedule)
    session.commit()

    unmet = {
        staff_id: remaining
        for staff_id, remaining in unmet_quotas(snapshot.staff, placed).items()
        if remaining > 0
    }
    current_app.logger.info(
        "Generated schedule %s with %s session(s); %s staff member(s) below quota.",
        schedule.id,
        len(placed),
        len(unmet),
    )
    return GenerationResult(schedule=schedule, unmet=unmet)


def activate_schedule(session, schedule: Schedule) -> Schedule:
    _deactivate_schedules(session, keep_id=schedule.id)
    schedule.is_active = True
    session.commit()
    return schedule


def active_schedule(session) -> Optional[Schedule]:
    return (
        session.query(Schedule)
        .filter(Schedule.is_active.is_(True))
        .order_by(Schedule.generated_at.desc())
        .first()
    )


def check_session(
    session, candidate: ScheduledSession, schedule_id: int | None
) -> ValidationResult:
    """Validate ``candidate`` against the other sessions of its schedule."""
    snapshot = load_snapshot(session, active_only=False)
    others = [
        stored.to_core()
        for stored in session.query(Session)
        .filter(Session.schedule_id == schedule_id)
        .order_by(Session.id)
        .all()
    ]
    result = validate_session(
        candidate, others, snapshot.staff, snapshot.rooms, snapshot.activities
    )
    if not result.valid:
        current_app.logger.warning(
            "Rejected session for staff %s in room %s on %s %s-%s: %s",
            candidate.staff_id,
            candidate.room_id,
            candidate.day.value,
            candidate.start,
            candidate.end,
            result.violation.value,
        )
    return result
