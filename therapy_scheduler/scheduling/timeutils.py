"""Wall-clock helpers working on ``"HH:mm"`` strings and minute offsets."""
from __future__ import annotations

import re

TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)


class MalformedTime(ValueError):
    """Raised when a time string cannot be read as ``HH:mm``."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Malformed time value: {value!r} (expected HH:mm)")
        self.value = value


def to_minutes(value: str) -> int:
    """Return the number of minutes since midnight for ``value``."""
    if not isinstance(value, str):
        raise MalformedTime(value)
    match = TIME_PATTERN.fullmatch(value.strip())
    if match is None:
        raise MalformedTime(value)
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def overlaps(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """Half-open overlap test; touching intervals do not overlap."""
    return to_minutes(start_a) < to_minutes(end_b) and to_minutes(start_b) < to_minutes(end_a)
