"""Shared fixtures for shift analytics tests."""

from datetime import date
from typing import List

import pytest

from src.shift_analytics.models import Employee, Shift, Skill

from tests.factories import make_employee, make_shift


@pytest.fixture
def employees() -> List[Employee]:
    return [
        make_employee("e1", role="staff", skills=[Skill(name="register")], total_hours_worked=32),
        make_employee("e2", role="staff"),
        make_employee("m1", role="manager"),
    ]


@pytest.fixture
def week_of_shifts() -> List[Shift]:
    """One fully staffed and one understaffed shift per weekday starting Monday"""
    shifts = []
    for offset in range(5):
        day = date(2024, 6, 10 + offset)
        shifts.append(make_shift(f"am-{offset}", day, "08:00", "12:00", ["e1"], total_hours=4))
        shifts.append(make_shift(
            f"pm-{offset}", day, "12:00", "18:00", ["e2"],
            requirements=[("staff", 2)], total_hours=6,
        ))
    return shifts
