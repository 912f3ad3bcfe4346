"""
Unit tests for the lock policy.
"""

import datetime

import pytest

from app.atlas.lock import (
    DEFAULT_RIGIDITY,
    RigiditySetting,
    is_locked,
    lock_window_end,
    parse_rigidity,
)

TODAY = datetime.date(2026, 3, 2)


def _day(offset: int) -> datetime.date:
    return TODAY + datetime.timedelta(days=offset)


class TestIsLocked:
    """Test the calendar-day lock window."""

    @pytest.mark.parametrize("rigidity,offset,expected", [
        (RigiditySetting.LOCKED_TODAY, 0, True),
        (RigiditySetting.LOCKED_TODAY, 1, False),
        (RigiditySetting.LOCKED_1_DAY, 0, True),
        (RigiditySetting.LOCKED_1_DAY, 1, True),
        (RigiditySetting.LOCKED_1_DAY, 2, False),
        (RigiditySetting.LOCKED_2_DAYS, 2, True),
        (RigiditySetting.LOCKED_2_DAYS, 3, False),
        (RigiditySetting.LOCKED_3_DAYS, 3, True),
        (RigiditySetting.LOCKED_3_DAYS, 4, False),
        (RigiditySetting.FLEXIBLE_WEEK, 0, False),
        (RigiditySetting.FLEXIBLE_WEEK, 1, False),
    ])
    def test_window(self, rigidity, offset, expected):
        assert is_locked(_day(offset), TODAY, rigidity) is expected

    def test_past_workouts_not_locked(self):
        assert not is_locked(_day(-1), TODAY, RigiditySetting.LOCKED_3_DAYS)

    def test_two_day_window_wider_than_one_day(self):
        day_after_tomorrow = _day(2)
        assert is_locked(day_after_tomorrow, TODAY, RigiditySetting.LOCKED_2_DAYS)
        assert not is_locked(day_after_tomorrow, TODAY, RigiditySetting.LOCKED_1_DAY)

    @pytest.mark.parametrize("now", [
        datetime.datetime(2026, 3, 2, 0, 1),
        datetime.datetime(2026, 3, 2, 23, 59),
    ])
    def test_time_of_day_irrelevant(self, now):
        tomorrow_morning = datetime.datetime(2026, 3, 3, 6, 0)
        assert is_locked(tomorrow_morning, now, RigiditySetting.LOCKED_1_DAY)
        assert not is_locked(tomorrow_morning, now, RigiditySetting.LOCKED_TODAY)


class TestParseRigidity:

    def test_passthrough(self):
        assert parse_rigidity(RigiditySetting.LOCKED_2_DAYS) == RigiditySetting.LOCKED_2_DAYS

    def test_from_string(self):
        assert parse_rigidity("FLEXIBLE_WEEK") == RigiditySetting.FLEXIBLE_WEEK

    @pytest.mark.parametrize("value", [None, "", "locked", 3])
    def test_unknown_falls_back(self, value):
        assert parse_rigidity(value) == DEFAULT_RIGIDITY == RigiditySetting.LOCKED_1_DAY


class TestLockWindowEnd:

    def test_end_date(self):
        assert lock_window_end(TODAY, RigiditySetting.LOCKED_2_DAYS) == _day(2)
        assert lock_window_end(datetime.datetime(2026, 3, 2, 22, 0), RigiditySetting.LOCKED_TODAY) == TODAY

    def test_flexible_has_no_end(self):
        assert lock_window_end(TODAY, RigiditySetting.FLEXIBLE_WEEK) is None
