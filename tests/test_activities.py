import unittest

from therapy_scheduler.scheduling import (
    BlockSource,
    BlockingActivity,
    DayOverride,
    TimeRange,
    WeekDay,
    effective_interval,
    resolve_block,
)
from therapy_scheduler.scheduling.activities import blocking_only, find_blocking_activity


class EffectiveIntervalTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.lunch = BlockingActivity(
            id=1,
            name="Lunch",
            default_start="12:00",
            default_end="13:00",
            day_overrides={
                WeekDay.MONDAY: DayOverride.custom("12:30", "13:30"),
                WeekDay.THURSDAY: DayOverride.cleared(),
            },
        )

    def test_default_interval_applies_without_override(self) -> None:
        self.assertEqual(
            resolve_block(self.lunch, WeekDay.SUNDAY),
            (BlockSource.DEFAULT, TimeRange("12:00", "13:00")),
        )

    def test_override_replaces_default(self) -> None:
        self.assertEqual(
            effective_interval(self.lunch, WeekDay.MONDAY), TimeRange("12:30", "13:30")
        )
        self.assertEqual(resolve_block(self.lunch, WeekDay.MONDAY)[0], BlockSource.OVERRIDE)

    def test_cleared_override_wins_over_default(self) -> None:
        self.assertEqual(
            resolve_block(self.lunch, WeekDay.THURSDAY), (BlockSource.CLEARED, None)
        )

    def test_no_default_and_no_override_blocks_nothing(self) -> None:
        meeting = BlockingActivity(
            id=2,
            name="Team meeting",
            day_overrides={WeekDay.TUESDAY: DayOverride.custom("09:00", "09:30")},
        )
        self.assertEqual(resolve_block(meeting, WeekDay.SUNDAY), (BlockSource.NONE, None))
        self.assertEqual(effective_interval(meeting, WeekDay.TUESDAY), TimeRange("09:00", "09:30"))

    def test_half_default_is_ignored(self) -> None:
        activity = BlockingActivity(id=3, name="Broken", default_start="10:00")
        self.assertIsNone(effective_interval(activity, WeekDay.WEDNESDAY))


class BlockingLookupTestCase(unittest.TestCase):
    def test_only_active_blocking_activities_are_kept(self) -> None:
        activities = [
            BlockingActivity(id=1, name="Lunch", default_start="12:00", default_end="13:00"),
            BlockingActivity(
                id=2, name="Training", default_start="14:00", default_end="15:00", is_blocking=False
            ),
            BlockingActivity(
                id=3, name="Old meeting", default_start="09:00", default_end="09:30", is_active=False
            ),
        ]
        self.assertEqual([activity.id for activity in blocking_only(activities)], [1])

    def test_first_overlapping_activity_is_reported(self) -> None:
        activities = [
            BlockingActivity(id=1, name="Breakfast", default_start="08:00", default_end="08:30"),
            BlockingActivity(id=2, name="Meeting", default_start="08:15", default_end="08:45"),
        ]
        found = find_blocking_activity(activities, WeekDay.SUNDAY, "08:20", "09:05")
        self.assertEqual(found.name, "Breakfast")
        self.assertIsNone(find_blocking_activity(activities, WeekDay.SUNDAY, "08:45", "09:30"))


if __name__ == "__main__":
    unittest.main()
