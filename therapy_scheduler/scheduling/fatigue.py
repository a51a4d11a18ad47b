"""Back-to-back session limit for a staff member on one weekday."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .timeutils import to_minutes

MIN_BREAK_MINUTES = 5
MAX_CONSECUTIVE_SESSIONS = 2


@dataclass
class ConsecutiveSessionTracker:
    """Tracks the run of sessions separated by less than a short break.

    ``consecutive_count`` is the length of the current run ending at
    ``last_end``; a gap of at least ``MIN_BREAK_MINUTES`` starts a new run.
    """

    last_end: Optional[str] = None
    consecutive_count: int = 0

    def _gap_before(self, slot_start: str) -> Optional[int]:
        if self.last_end is None:
            return None
        return to_minutes(slot_start) - to_minutes(self.last_end)

    def can_take_slot(self, slot_start: str) -> bool:
        gap = self._gap_before(slot_start)
        if gap is None or gap >= MIN_BREAK_MINUTES:
            return True
        return self.consecutive_count < MAX_CONSECUTIVE_SESSIONS

    def record_slot(self, slot_start: str, slot_end: str) -> None:
        gap = self._gap_before(slot_start)
        if gap is None or gap >= MIN_BREAK_MINUTES:
            self.consecutive_count = 1
        else:
            self.consecutive_count += 1
        self.last_end = slot_end
