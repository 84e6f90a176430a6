"""Unit tests for the time-of-day value type."""

import pytest

from worker.utils.time_of_day import END_OF_DAY, START_OF_DAY, TimeOfDay, lesson_periods


def test_from_hhmm_decomposes_hours_and_minutes():
    t = TimeOfDay.from_hhmm(815)
    assert (t.hour, t.minute) == (8, 15)
    assert t.minutes == 495
    assert t.hhmm == 815
    assert str(t) == "08:15"


def test_ordering_matches_wall_clock():
    assert TimeOfDay.from_hhmm(845) < TimeOfDay.from_hhmm(905)
    assert TimeOfDay.from_hhmm(1200) > TimeOfDay.from_hhmm(959)
    assert START_OF_DAY < END_OF_DAY


def test_duration_uses_real_minutes():
    # 905 - 845 would give 60 on the raw encoding
    assert TimeOfDay.from_hhmm(845).minutes_until(TimeOfDay.from_hhmm(905)) == 20
    assert TimeOfDay.from_hhmm(1000).minutes_until(TimeOfDay.from_hhmm(800)) == -120


@pytest.mark.parametrize("value", [2400, 860, -1, 99999])
def test_from_hhmm_rejects_invalid_times(value):
    with pytest.raises(ValueError):
        TimeOfDay.from_hhmm(value)


def test_lesson_periods_counts_whole_periods():
    assert lesson_periods(TimeOfDay.from_hhmm(800), TimeOfDay.from_hhmm(845)) == 1
    assert lesson_periods(TimeOfDay.from_hhmm(1000), TimeOfDay.from_hhmm(1130)) == 2
    assert lesson_periods(TimeOfDay.from_hhmm(1000), TimeOfDay.from_hhmm(1040)) == 0


def test_lesson_periods_subtracts_lunch_break():
    # 08:00-13:00 is 300 minutes, six full periods minus the break
    assert lesson_periods(TimeOfDay.from_hhmm(800), TimeOfDay.from_hhmm(1300)) == 5


def test_lesson_periods_for_reversed_span_is_zero():
    assert lesson_periods(TimeOfDay.from_hhmm(1300), TimeOfDay.from_hhmm(800)) == 0
