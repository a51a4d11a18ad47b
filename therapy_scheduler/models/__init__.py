"""SQLAlchemy models for the therapy scheduler."""
from __future__ import annotations

from datetime import datetime, time, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ..extensions import db
from ..scheduling import (
    BlockingActivity,
    DayOverride,
    ScheduledSession,
    StaffMember,
    TherapyRoom,
    TimeRange,
    WeekDay,
)

WEEKDAY_CHECK = "weekday IN ('sunday', 'monday', 'tuesday', 'wednesday', 'thursday')"


def format_time(value: time | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%H:%M")


def parse_time(value: str) -> time:
    return datetime.strptime(value, "%H:%M").time()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Staff(db.Model):
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=True)
    role = Column(String(120), nullable=True)
    weekly_sessions = Column(Integer, nullable=False, default=0)
    color = Column(String(16), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    working_hours = relationship(
        "StaffWorkingHours",
        cascade="all, delete-orphan",
        back_populates="staff",
        order_by="StaffWorkingHours.id",
    )
    sessions = relationship("Session", back_populates="staff", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("weekly_sessions >= 0", name="ck_staff_weekly_sessions"),
    )

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def to_core(self) -> StaffMember:
        return StaffMember(
            id=self.id,
            working_hours={
                WeekDay.parse(entry.weekday): TimeRange(
                    format_time(entry.start_time), format_time(entry.end_time)
                )
                for entry in self.working_hours
            },
            weekly_quota=self.weekly_sessions,
            name=self.full_name,
        )

    def __repr__(self) -> str:  # pragma: no cover - repr helper
        return f"<Staff {self.full_name}>"


class StaffWorkingHours(db.Model):
    __tablename__ = "staff_working_hours"

    id = Column(Integer, primary_key=True)
    staff_id = Column(Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False)
    weekday = Column(String(16), nullable=False)
    start_time = Column(db.Time, nullable=False)
    end_time = Column(db.Time, nullable=False)

    staff = relationship("Staff", back_populates="working_hours")

    __table_args__ = (
        CheckConstraint(WEEKDAY_CHECK, name="ck_working_hours_weekday"),
        UniqueConstraint("staff_id", "weekday", name="uq_working_hours_staff_day"),
    )


class Room(db.Model):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False, unique=True)
    color = Column(String(16), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    sessions = relationship("Session", back_populates="room", cascade="all, delete-orphan")

    def to_core(self) -> TherapyRoom:
        return TherapyRoom(id=self.id, name=self.name)

    def __repr__(self) -> str:  # pragma: no cover - repr helper
        return f"<Room {self.name}>"


class Activity(db.Model):
    """Recurring facility activity such as a meal or a staff meeting."""

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False)
    color = Column(String(16), nullable=True)
    default_start = Column(db.Time, nullable=True)
    default_end = Column(db.Time, nullable=True)
    is_blocking = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)

    day_overrides = relationship(
        "ActivityDayOverride",
        cascade="all, delete-orphan",
        back_populates="activity",
        order_by="ActivityDayOverride.id",
    )

    def to_core(self) -> BlockingActivity:
        overrides: dict[WeekDay, DayOverride] = {}
        for entry in self.day_overrides:
            day = WeekDay.parse(entry.weekday)
            if entry.is_cleared:
                overrides[day] = DayOverride.cleared()
            else:
                overrides[day] = DayOverride.custom(
                    format_time(entry.start_time), format_time(entry.end_time)
                )
        return BlockingActivity(
            id=self.id,
            name=self.name,
            is_blocking=self.is_blocking,
            default_start=format_time(self.default_start),
            default_end=format_time(self.default_end),
            day_overrides=overrides,
            is_active=self.is_active,
        )

    def __repr__(self) -> str:  # pragma: no cover - repr helper
        return f"<Activity {self.name}>"


class ActivityDayOverride(db.Model):
    """Replaces an activity's default times on one weekday.

    A row without times marks the activity as not taking place that day.
    """

    __tablename__ = "activity_day_overrides"

    id = Column(Integer, primary_key=True)
    activity_id = Column(
        Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False
    )
    weekday = Column(String(16), nullable=False)
    start_time = Column(db.Time, nullable=True)
    end_time = Column(db.Time, nullable=True)

    activity = relationship("Activity", back_populates="day_overrides")

    __table_args__ = (
        CheckConstraint(WEEKDAY_CHECK, name="ck_activity_override_weekday"),
        UniqueConstraint("activity_id", "weekday", name="uq_activity_override_day"),
    )

    @property
    def is_cleared(self) -> bool:
        return self.start_time is None or self.end_time is None


class Schedule(db.Model):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True)
    generated_at = Column(DateTime, nullable=False, default=utcnow)
    is_active = Column(Boolean, nullable=False, default=False)

    sessions = relationship(
        "Session",
        cascade="all, delete-orphan",
        back_populates="schedule",
        order_by="Session.id",
    )

    def __repr__(self) -> str:  # pragma: no cover - repr helper
        return f"<Schedule {self.id} active={self.is_active}>"


class Session(db.Model):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True)
    schedule_id = Column(
        Integer, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=True
    )
    staff_id = Column(Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False)
    weekday = Column(String(16), nullable=False)
    start_time = Column(db.Time, nullable=False)
    end_time = Column(db.Time, nullable=False)

    schedule = relationship("Schedule", back_populates="sessions")
    staff = relationship("Staff", back_populates="sessions")
    room = relationship("Room", back_populates="sessions")

    __table_args__ = (CheckConstraint(WEEKDAY_CHECK, name="ck_session_weekday"),)

    def to_core(self) -> ScheduledSession:
        return ScheduledSession(
            id=self.id,
            day=WeekDay.parse(self.weekday),
            start=format_time(self.start_time),
            end=format_time(self.end_time),
            staff_id=self.staff_id,
            room_id=self.room_id,
        )
