"""Clock-time helpers for the half-hour booking grid."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional, Union

import pytz

from tracking import t

from infrastructure import constants

_ZH_TW_WEEKDAYS = ["週一", "週二", "週三", "週四", "週五", "週六", "週日"]
_EN_WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
_EN_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def to_minutes(time_str: str) -> int:
    """Convert ``HH:MM`` to minutes since midnight.

    Raises ``ValueError`` for anything that is not a zero-padded 24-hour time.
    """

    t('bookings.time_utils.to_minutes')

    if not isinstance(time_str, str) or len(time_str) != 5 or time_str[2] != ":":
        raise ValueError(f"Time string {time_str!r} is not in HH:MM format")

    hour_str, minute_str = time_str.split(":")
    if not (hour_str.isdigit() and minute_str.isdigit()):
        raise ValueError(f"Time string {time_str!r} is not in HH:MM format")

    hour = int(hour_str)
    minute = int(minute_str)
    if not (0 <= hour <= 23):
        raise ValueError(f"Hour {hour} out of valid range 0-23")
    if not (0 <= minute <= 59):
        raise ValueError(f"Minute {minute} out of valid range 0-59")

    return hour * 60 + minute


def intervals_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """Return True if ``[start_a, end_a)`` and ``[start_b, end_b)`` overlap.

    Intervals that only touch (``end_a == start_b``) do not overlap.
    """

    t('bookings.time_utils.intervals_overlap')

    return (
        to_minutes(start_a) < to_minutes(end_b)
        and to_minutes(start_b) < to_minutes(end_a)
    )


def build_time_options(
    start_hour: int = constants.DAY_START_HOUR,
    end_hour: int = constants.DAY_END_HOUR,
    step_minutes: int = constants.SLOT_STEP_MINUTES,
) -> List[str]:
    """List every grid time from ``start_hour:00`` to ``end_hour:00`` inclusive."""

    t('bookings.time_utils.build_time_options')

    options: List[str] = []
    current = start_hour * 60
    last = end_hour * 60
    while current <= last:
        options.append(f"{current // 60:02d}:{current % 60:02d}")
        current += step_minutes
    return options


TIME_OPTIONS: List[str] = build_time_options()


def is_grid_time(value: Optional[str]) -> bool:
    t('bookings.time_utils.is_grid_time')
    return value in TIME_OPTIONS


def parse_iso_date(value: Union[str, date]) -> date:
    t('bookings.time_utils.parse_iso_date')
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_display_date(value: Union[str, date], language: Optional[str] = None) -> str:
    """Render a date in the long, weekday-bearing display form.

    ``zh-TW`` (the default) gives ``2025年6月1日 週日``; ``en`` gives
    ``Sun, June 1, 2025``. Display only: never compare these strings.
    """

    t('bookings.time_utils.format_display_date')

    day = parse_iso_date(value)
    language = language or constants.DEFAULT_DISPLAY_LANGUAGE

    if language == "en":
        return (
            f"{_EN_WEEKDAYS[day.weekday()]}, {_EN_MONTHS[day.month - 1]} "
            f"{day.day}, {day.year}"
        )
    return f"{day.year}年{day.month}月{day.day}日 {_ZH_TW_WEEKDAYS[day.weekday()]}"


def today_iso(timezone: str = constants.DEFAULT_TIMEZONE, now: Optional[datetime] = None) -> str:
    """Return today's date in ``timezone`` as ``YYYY-MM-DD``."""

    t('bookings.time_utils.today_iso')

    tz = pytz.timezone(timezone)
    if now is None:
        current = datetime.now(tz)
    elif now.tzinfo is None:
        current = pytz.utc.localize(now).astimezone(tz)
    else:
        current = now.astimezone(tz)
    return current.strftime("%Y-%m-%d")


def shift_date(value: Union[str, date], days: int) -> str:
    t('bookings.time_utils.shift_date')
    return (parse_iso_date(value) + timedelta(days=days)).isoformat()


def upcoming_dates(start: Union[str, date], count: int = constants.DATE_PICKER_DAYS) -> List[str]:
    """``count`` consecutive ISO dates beginning with ``start``."""

    t('bookings.time_utils.upcoming_dates')
    return [shift_date(start, offset) for offset in range(count)]


__all__ = [
    "TIME_OPTIONS",
    "build_time_options",
    "format_display_date",
    "intervals_overlap",
    "is_grid_time",
    "parse_iso_date",
    "shift_date",
    "to_minutes",
    "today_iso",
    "upcoming_dates",
]
