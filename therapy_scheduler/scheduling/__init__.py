"""Scheduling core: slot enumeration, greedy assignment and validation.

The modules in this package work on plain dataclasses and never touch the
database or the Flask application.
"""
from __future__ import annotations

from .activities import BlockSource, effective_interval, resolve_block
from .availability import is_room_free, is_staff_free
from .domain import (
    WEEK_DAYS,
    BlockingActivity,
    DayOverride,
    OverrideKind,
    ScheduledSession,
    Slot,
    StaffMember,
    TherapyRoom,
    TimeRange,
    WeekDay,
)
from .fatigue import ConsecutiveSessionTracker
from .generator import ScheduleGenerator, generate_schedule, unmet_quotas
from .slots import generate_slots
from .timeutils import MalformedTime, minutes_to_time, overlaps, to_minutes
from .validation import ValidationResult, Violation, validate_session

__all__ = [
    "WEEK_DAYS",
    "BlockSource",
    "BlockingActivity",
    "ConsecutiveSessionTracker",
    "DayOverride",
    "MalformedTime",
    "OverrideKind",
    "ScheduleGenerator",
    "ScheduledSession",
    "Slot",
    "StaffMember",
    "TherapyRoom",
    "TimeRange",
    "ValidationResult",
    "Violation",
    "WeekDay",
    "effective_interval",
    "generate_schedule",
    "generate_slots",
    "is_room_free",
    "is_staff_free",
    "minutes_to_time",
    "overlaps",
    "resolve_block",
    "to_minutes",
    "unmet_quotas",
    "validate_session",
]
