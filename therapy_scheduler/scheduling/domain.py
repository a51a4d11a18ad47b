"""Plain records consumed and produced by the scheduling core."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, NamedTuple, Optional, Union

Identifier = Union[int, str]


class WeekDay(str, Enum):
    """Facility work week, in iteration order."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"

    @property
    def index(self) -> int:
        return WEEK_DAYS.index(self)

    @classmethod
    def parse(cls, value: Union[str, "WeekDay"]) -> "WeekDay":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown weekday: {value!r}") from None


WEEK_DAYS: tuple[WeekDay, ...] = tuple(WeekDay)


class TimeRange(NamedTuple):
    start: str
    end: str


@dataclass(frozen=True)
class StaffMember:
    id: Identifier
    working_hours: Dict[WeekDay, TimeRange] = field(default_factory=dict)
    weekly_quota: int = 0
    name: str = ""

    def hours_on(self, day: WeekDay) -> Optional[TimeRange]:
        return self.working_hours.get(day)


@dataclass(frozen=True)
class TherapyRoom:
    id: Identifier
    name: str = ""


class OverrideKind(Enum):
    CLEARED = "cleared"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DayOverride:
    """Per-weekday replacement of an activity's default interval.

    A weekday missing from the override map inherits the default; a
    ``CLEARED`` override means the activity does not take place that day.
    """

    kind: OverrideKind
    interval: Optional[TimeRange] = None

    @classmethod
    def cleared(cls) -> "DayOverride":
        return cls(OverrideKind.CLEARED)

    @classmethod
    def custom(cls, start: str, end: str) -> "DayOverride":
        return cls(OverrideKind.CUSTOM, TimeRange(start, end))


@dataclass(frozen=True)
class BlockingActivity:
    id: Identifier
    name: str
    is_blocking: bool = True
    default_start: Optional[str] = None
    default_end: Optional[str] = None
    day_overrides: Dict[WeekDay, DayOverride] = field(default_factory=dict)
    is_active: bool = True

    @property
    def blocks_scheduling(self) -> bool:
        return self.is_blocking and self.is_active


def new_session_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ScheduledSession:
    """A therapy session placed on the weekly grid.

    The identity is excluded from equality so two runs over the same
    snapshot compare equal.
    """

    day: WeekDay
    start: str
    end: str
    staff_id: Identifier
    room_id: Identifier
    id: Identifier = field(default_factory=new_session_id, compare=False)


class Slot(NamedTuple):
    day: WeekDay
    start: str
    end: str
