"""Tests for time-of-day and calendar helpers."""

from datetime import date, datetime, time
from itertools import product

import pytest

from src.shift_analytics.core.temporal import (
    count_days,
    date_in_range,
    day_of_week,
    format_period,
    iter_dates,
    month_range,
    time_ranges_overlap,
    week_range,
)


SAMPLE_TIMES = [time(h) for h in (0, 6, 9, 12, 17, 21, 23)]


class TestTimeRangesOverlap:

    def test_overlap_is_symmetric(self):
        for a, b, c, d in product(SAMPLE_TIMES, repeat=4):
            assert time_ranges_overlap(a, b, c, d) == time_ranges_overlap(c, d, a, b)

    def test_touching_ranges_do_not_overlap(self):
        assert not time_ranges_overlap(time(9), time(17), time(17), time(21))
        assert not time_ranges_overlap(time(17), time(21), time(9), time(17))

    def test_partial_and_nested_ranges_overlap(self):
        assert time_ranges_overlap(time(9), time(17), time(12), time(20))
        assert time_ranges_overlap(time(9), time(17), time(10), time(11))

    def test_overnight_range_is_not_wrapped(self):
        # 22:00-02:00 compares as written, so it never overlaps anything
        assert not time_ranges_overlap(time(22), time(2), time(23), time(23, 30))


class TestCalendarHelpers:

    def test_day_of_week_is_sunday_based(self):
        assert day_of_week(date(2024, 6, 9)) == 0    # Sunday
        assert day_of_week(date(2024, 6, 10)) == 1   # Monday
        assert day_of_week(date(2024, 6, 15)) == 6   # Saturday

    def test_day_of_week_accepts_datetimes(self):
        assert day_of_week(datetime(2024, 6, 12, 23, 59)) == 3

    def test_date_in_range_is_inclusive(self):
        start, end = date(2024, 6, 10), date(2024, 6, 14)
        assert date_in_range(start, start, end)
        assert date_in_range(end, start, end)
        assert not date_in_range(date(2024, 6, 15), start, end)

    def test_date_in_range_ignores_time_of_day(self):
        assert date_in_range(
            datetime(2024, 6, 14, 18, 0), datetime(2024, 6, 10, 9, 0), datetime(2024, 6, 14, 9, 0)
        )

    def test_iter_dates_inclusive(self):
        days = list(iter_dates(date(2024, 2, 27), date(2024, 3, 1)))
        assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]

    def test_iter_dates_reversed_range_is_empty(self):
        assert list(iter_dates(date(2024, 6, 10), date(2024, 6, 9))) == []
        assert count_days(date(2024, 6, 10), date(2024, 6, 9)) == 0

    def test_week_range(self):
        assert week_range(date(2024, 6, 10)) == (date(2024, 6, 10), date(2024, 6, 16))

    @pytest.mark.parametrize("year,month,last", [
        (2024, 2, date(2024, 2, 29)),
        (2023, 2, date(2023, 2, 28)),
        (2024, 12, date(2024, 12, 31)),
    ])
    def test_month_range(self, year, month, last):
        assert month_range(year, month) == (date(year, month, 1), last)

    def test_format_period(self):
        assert format_period(date(2024, 6, 1), date(2024, 6, 30)) == "2024-06-01 to 2024-06-30"
