"""Resolve the interval a recurring activity blocks on a given weekday."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from .domain import BlockingActivity, OverrideKind, TimeRange, WeekDay
from .timeutils import overlaps


class BlockSource(Enum):
    """Where the effective interval of an activity comes from."""

    CLEARED = "cleared"
    OVERRIDE = "override"
    DEFAULT = "default"
    NONE = "none"


def resolve_block(
    activity: BlockingActivity, day: WeekDay
) -> tuple[BlockSource, Optional[TimeRange]]:
    override = activity.day_overrides.get(day)
    if override is not None:
        if override.kind is OverrideKind.CLEARED:
            return BlockSource.CLEARED, None
        return BlockSource.OVERRIDE, override.interval
    if activity.default_start and activity.default_end:
        return BlockSource.DEFAULT, TimeRange(activity.default_start, activity.default_end)
    return BlockSource.NONE, None


def effective_interval(activity: BlockingActivity, day: WeekDay) -> Optional[TimeRange]:
    _source, interval = resolve_block(activity, day)
    return interval


def blocking_only(activities: Iterable[BlockingActivity]) -> list[BlockingActivity]:
    """Keep the activities that take part in scheduling exclusion."""
    return [activity for activity in activities if activity.blocks_scheduling]


def find_blocking_activity(
    activities: Iterable[BlockingActivity], day: WeekDay, start: str, end: str
) -> Optional[BlockingActivity]:
    """Return the first blocking activity overlapping ``[start, end)`` on ``day``."""
    for activity in activities:
        if not activity.blocks_scheduling:
            continue
        interval = effective_interval(activity, day)
        if interval is None:
            continue
        if overlaps(interval.start, interval.end, start, end):
            return activity
    return None
