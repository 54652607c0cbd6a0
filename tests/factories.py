"""Record factories shared by the shift analytics tests."""

from datetime import date, time
from typing import List, Optional, Sequence, Tuple

from src.shift_analytics.models import (
    AvailabilityWindow,
    Employee,
    Shift,
    ShiftRequirement,
    TimeOffRequest,
)

# 2024-06-10 is a Monday
MONDAY = date(2024, 6, 10)
WEDNESDAY = date(2024, 6, 12)


def all_week(start: time = time(6, 0), end: time = time(22, 0)) -> List[AvailabilityWindow]:
    return [
        AvailabilityWindow(day_of_week=day, start_time=start, end_time=end)
        for day in range(7)
    ]


def make_employee(
    employee_id: str,
    role: str = "staff",
    first_name: Optional[str] = None,
    last_name: str = "Tester",
    windows: Optional[List[AvailabilityWindow]] = None,
    **overrides,
) -> Employee:
    return Employee(
        id=employee_id,
        first_name=first_name or employee_id.upper(),
        last_name=last_name,
        role=role,
        availability_windows=all_week() if windows is None else windows,
        **overrides,
    )


def make_shift(
    shift_id: str,
    day: date = MONDAY,
    start: str = "09:00",
    end: str = "17:00",
    assigned: Sequence[str] = (),
    requirements: Sequence[Tuple[str, int]] = (("staff", 1),),
    **overrides,
) -> Shift:
    return Shift(
        id=shift_id,
        title=f"Shift {shift_id}",
        date=day,
        start_time=start,
        end_time=end,
        assigned_employees=list(assigned),
        requirements=[ShiftRequirement(role=role, quantity=qty) for role, qty in requirements],
        **overrides,
    )


def make_time_off(
    request_id: str,
    employee_id: str,
    start: date,
    end: date,
    status: str = "approved",
    request_type: str = "vacation",
    **overrides,
) -> TimeOffRequest:
    return TimeOffRequest(
        id=request_id,
        employee_id=employee_id,
        start_date=start,
        end_date=end,
        status=status,
        type=request_type,
        **overrides,
    )
