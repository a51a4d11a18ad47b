from datetime import time

from . import db
from .models import Activity, ActivityDayOverride, Room, Staff, StaffWorkingHours


def _hours(staff: Staff, days: dict[str, tuple[time, time]]) -> None:
    for weekday, (start, end) in days.items():
        staff.working_hours.append(
            StaffWorkingHours(weekday=weekday, start_time=start, end_time=end)
        )


def seed_data() -> bool:
    if Staff.query.count():
        return False

    sarah = Staff(
        first_name="Sarah",
        role="Occupational therapy",
        weekly_sessions=12,
        color="#845ec2",
    )
    _hours(
        sarah,
        {
            "sunday": (time(8, 0), time(16, 0)),
            "monday": (time(8, 0), time(16, 0)),
            "tuesday": (time(8, 0), time(16, 0)),
            "wednesday": (time(8, 0), time(14, 0)),
            "thursday": (time(8, 0), time(16, 0)),
        },
    )

    david = Staff(
        first_name="David",
        role="Speech therapy",
        weekly_sessions=10,
        color="#ff6f91",
    )
    _hours(
        david,
        {
            "sunday": (time(9, 0), time(17, 0)),
            "monday": (time(9, 0), time(17, 0)),
            "tuesday": (time(9, 0), time(17, 0)),
            "wednesday": (time(9, 0), time(15, 0)),
            "thursday": (time(9, 0), time(17, 0)),
        },
    )

    miri = Staff(
        first_name="Miri",
        last_name="Abraham",
        role="Physiotherapy",
        weekly_sessions=8,
        color="#00c9a7",
    )
    _hours(
        miri,
        {
            "sunday": (time(8, 30), time(15, 30)),
            "tuesday": (time(8, 30), time(15, 30)),
            "thursday": (time(8, 30), time(15, 30)),
        },
    )

    rooms = [
        Room(name="Therapy room 1", color="#008dcd"),
        Room(name="Therapy room 2", color="#ffc75f"),
        Room(name="Physiotherapy room", color="#d65db1"),
        Room(name="Speech room", color="#ff8066"),
    ]

    breakfast = Activity(
        name="Breakfast",
        color="#f9f871",
        default_start=time(8, 0),
        default_end=time(8, 30),
    )
    meeting = Activity(
        name="Morning meeting",
        color="#b0a8b9",
        default_start=time(9, 0),
        default_end=time(9, 15),
    )
    # No meeting on Thursdays.
    meeting.day_overrides.append(ActivityDayOverride(weekday="thursday"))
    lunch = Activity(
        name="Lunch",
        color="#ff9671",
        default_start=time(12, 0),
        default_end=time(13, 0),
    )
    lunch.day_overrides.append(
        ActivityDayOverride(weekday="wednesday", start_time=time(12, 30), end_time=time(13, 30))
    )
    training = Activity(
        name="Optional training",
        color="#4b4453",
        default_start=time(14, 0),
        default_end=time(15, 0),
        is_blocking=False,
    )

    db.session.add_all([sarah, david, miri, *rooms, breakfast, meeting, lunch, training])
    db.session.commit()
    return True
