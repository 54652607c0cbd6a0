"""
Time-of-day and calendar-date helpers shared by the analytics engine
"""
from calendar import monthrange
from datetime import datetime, date, time, timedelta
from typing import Iterator, Tuple, Union

DateLike = Union[date, datetime]


def time_ranges_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Half-open overlap test for two time-of-day ranges on the same reference date.

    A range ending exactly when the other starts does not overlap it. Times are
    compared as written; overnight ranges are not wrapped past midnight.
    """
    return start_a < end_b and start_b < end_a


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def date_in_range(value: DateLike, range_start: DateLike, range_end: DateLike) -> bool:
    """Inclusive containment at calendar-date granularity"""
    return _as_date(range_start) <= _as_date(value) <= _as_date(range_end)


def day_of_week(value: DateLike) -> int:
    """Sunday-based day of week: 0=Sunday ... 6=Saturday"""
    return (_as_date(value).weekday() + 1) % 7


def iter_dates(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar date from start to end inclusive.

    An end before the start yields nothing.
    """
    current = _as_date(start)
    last = _as_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def count_days(start: DateLike, end: DateLike) -> int:
    """Number of dates iter_dates would yield"""
    return max(0, (_as_date(end) - _as_date(start)).days + 1)


def week_range(start: DateLike) -> Tuple[date, date]:
    """Seven-day window beginning on start"""
    first = _as_date(start)
    return first, first + timedelta(days=6)


def month_range(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar date of a month"""
    _, last_day = monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def format_period(start: DateLike, end: DateLike) -> str:
    return f"{_as_date(start).isoformat()} to {_as_date(end).isoformat()}"
