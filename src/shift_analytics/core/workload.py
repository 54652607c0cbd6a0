"""
Per-employee workload over a date range
"""
import logging
from datetime import date, timedelta
from typing import Any, Iterable, List, Sequence

from ..models import Employee, EmployeeWorkload, Shift, TimeOffRequest
from ..utils.helpers import round_half_up, safe_division
from .engine import coerce_records
from .temporal import date_in_range

logger = logging.getLogger(__name__)


def longest_consecutive_run(days: Iterable[date]) -> int:
    """Length of the longest run of back-to-back calendar dates"""
    ordered = sorted(set(days))
    longest = current = 0
    previous = None
    for day in ordered:
        if previous is not None and day - previous == timedelta(days=1):
            current += 1
        else:
            current = 1
        longest = max(longest, current)
        previous = day
    return longest


class WorkloadAnalyzer:
    """Summarizes what one employee worked between two dates"""

    def analyze(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        shifts: Sequence[Any],
        employees: Sequence[Any] = (),
        time_off_requests: Sequence[Any] = (),
    ) -> EmployeeWorkload:
        shifts = coerce_records(Shift, shifts)
        employees = coerce_records(Employee, employees)
        time_off_requests = coerce_records(TimeOffRequest, time_off_requests)

        employee = next((e for e in employees if e.id == employee_id), None)
        if employee is None:
            logger.debug(f"Workload requested for unknown employee {employee_id}")

        worked: List[Shift] = [
            shift for shift in shifts
            if employee_id in shift.assigned_employees
            and date_in_range(shift.date, start_date, end_date)
        ]
        worked_days = {shift.date for shift in worked}

        approved_leave = [
            request for request in time_off_requests
            if request.employee_id == employee_id and request.is_approved
        ]
        time_off_days = {
            day for day in worked_days
            if any(date_in_range(day, r.start_date, r.end_date) for r in approved_leave)
        }

        total_hours = sum(shift.total_hours for shift in worked)

        return EmployeeWorkload(
            employee_id=employee_id,
            employee_name=employee.full_name if employee else "Unknown",
            total_hours=round_half_up(total_hours, 2),
            total_shifts=len(worked),
            unique_days=len(worked_days),
            time_off_days=len(time_off_days),
            average_hours_per_day=round_half_up(safe_division(total_hours, len(worked_days)), 2),
            consecutive_days=longest_consecutive_run(worked_days),
            skill_utilization=list(employee.skills) if employee else [],
            availability=list(employee.availability_windows) if employee else [],
        )
