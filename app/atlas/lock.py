"""
Lock policy: may a workout be changed without asking?

A workout is *locked* when it falls inside the athlete's protection
window, counted in local calendar days from today (inclusive):

    LOCKED_TODAY    today only
    LOCKED_1_DAY    today .. today + 1
    LOCKED_2_DAYS   today .. today + 2
    LOCKED_3_DAYS   today .. today + 3
    FLEXIBLE_WEEK   never

Elapsed hours are irrelevant: a workout tomorrow at 06:00 is one day
away whether "now" is 00:01 or 23:59.  Past workouts are not locked;
writes to history are rejected upstream.

The rigidity setting is always passed in explicitly and the verdict is
never cached, because "now" keeps moving.
"""

import datetime
from enum import Enum
from typing import Optional, Union


class RigiditySetting(str, Enum):
    LOCKED_TODAY = "LOCKED_TODAY"
    LOCKED_1_DAY = "LOCKED_1_DAY"
    LOCKED_2_DAYS = "LOCKED_2_DAYS"
    LOCKED_3_DAYS = "LOCKED_3_DAYS"
    FLEXIBLE_WEEK = "FLEXIBLE_WEEK"


DEFAULT_RIGIDITY = RigiditySetting.LOCKED_1_DAY

# Days after today still inside the window; None = never locked.
_LOCK_DAYS: dict[RigiditySetting, Optional[int]] = {
    RigiditySetting.LOCKED_TODAY: 0,
    RigiditySetting.LOCKED_1_DAY: 1,
    RigiditySetting.LOCKED_2_DAYS: 2,
    RigiditySetting.LOCKED_3_DAYS: 3,
    RigiditySetting.FLEXIBLE_WEEK: None,
}

DateLike = Union[datetime.date, datetime.datetime]


def _as_date(value: DateLike) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def parse_rigidity(value: object) -> RigiditySetting:
    """Coerce a stored value into a setting, defaulting to LOCKED_1_DAY."""
    if isinstance(value, RigiditySetting):
        return value
    try:
        return RigiditySetting(str(value))
    except ValueError:
        return DEFAULT_RIGIDITY


def is_locked(
    workout_date: DateLike,
    now: DateLike,
    rigidity: RigiditySetting,
) -> bool:
    """Return ``True`` when *workout_date* sits inside the lock window.

    Args:
        workout_date: Scheduled date (a datetime is reduced to its date).
        now: Current local date or datetime.
        rigidity: The athlete's setting.
    """
    days = _LOCK_DAYS[rigidity]
    if days is None:
        return False

    today = _as_date(now)
    workout_day = _as_date(workout_date)
    return today <= workout_day <= today + datetime.timedelta(days=days)


def lock_window_end(now: DateLike, rigidity: RigiditySetting) -> Optional[datetime.date]:
    """Last locked calendar day, or ``None`` when nothing is locked."""
    days = _LOCK_DAYS[rigidity]
    if days is None:
        return None
    return _as_date(now) + datetime.timedelta(days=days)
