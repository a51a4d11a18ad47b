import pytest

from therapy_scheduler.scheduling import MalformedTime, minutes_to_time, overlaps, to_minutes


def test_to_minutes_reads_hours_and_minutes():
    assert to_minutes("00:00") == 0
    assert to_minutes("09:45") == 585
    assert to_minutes("17:05") == 1025


@pytest.mark.parametrize(
    "value",
    ["", "9", "09-45", "ab:cd", "10:15:00", None, "1_0:00", "+8:00", "8:-5", "\u0669:30", "9:5"],
)
def test_to_minutes_rejects_malformed_values(value):
    with pytest.raises(MalformedTime):
        to_minutes(value)


def test_malformed_time_is_a_value_error():
    with pytest.raises(ValueError):
        to_minutes("noon")


def test_minutes_to_time_pads_both_fields():
    assert minutes_to_time(0) == "00:00"
    assert minutes_to_time(545) == "09:05"
    assert to_minutes(minutes_to_time(795)) == 795


def test_touching_intervals_do_not_overlap():
    assert overlaps("09:00", "09:45", "09:45", "10:30") is False
    assert overlaps("09:45", "10:30", "09:00", "09:45") is False


def test_partial_and_nested_intervals_overlap():
    assert overlaps("09:00", "09:45", "09:30", "10:15") is True
    assert overlaps("08:00", "12:00", "09:00", "09:15") is True
