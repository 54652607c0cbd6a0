"""
Collaborator contract for supplying one day's records to the engine
"""
import logging
import re
from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional

from ..models import AnalyticsFilters, DayInput, Employee, EmployeeStatus, Shift, TimeOffRequest
from .temporal import date_in_range

logger = logging.getLogger(__name__)


class ScheduleDataSource(ABC):
    """Loads the already-fetched records the engine needs for one calendar day"""

    @abstractmethod
    async def load_day(self, day: date, filters: Optional[AnalyticsFilters] = None) -> DayInput:
        """Return the shifts dated `day`, the employees needed to resolve them,
        and the approved time off intersecting that day."""


def matches_filter(value: str, pattern: Optional[str]) -> bool:
    """Case-insensitive substring match; an empty filter matches everything"""
    if not pattern:
        return True
    return re.search(re.escape(pattern), value or "", re.IGNORECASE) is not None


class InMemoryScheduleStore(ScheduleDataSource):
    """Serves day slices out of records held in memory.

    The employee pool for a day is every active employee matching the
    location/team/department filters, plus any employee referenced by that
    day's shift assignments so conflicts can resolve them.
    """

    def __init__(
        self,
        shifts: Iterable[Shift] = (),
        employees: Iterable[Employee] = (),
        time_off_requests: Iterable[TimeOffRequest] = (),
    ):
        self.shifts: List[Shift] = list(shifts)
        self.employees: List[Employee] = list(employees)
        self.time_off_requests: List[TimeOffRequest] = list(time_off_requests)

    def shifts_for(self, day: date, filters: Optional[AnalyticsFilters] = None) -> List[Shift]:
        filters = filters or AnalyticsFilters()
        return [
            shift for shift in self.shifts
            if shift.date == day
            and matches_filter(shift.location, filters.location)
            and matches_filter(shift.team, filters.team)
            and matches_filter(shift.department, filters.department)
        ]

    def employee_pool(self, shifts: List[Shift], filters: Optional[AnalyticsFilters] = None) -> List[Employee]:
        filters = filters or AnalyticsFilters()
        assigned_ids = {employee_id for shift in shifts for employee_id in shift.assigned_employees}
        return [
            employee for employee in self.employees
            if employee.id in assigned_ids
            or (
                employee.status == EmployeeStatus.ACTIVE
                and matches_filter(employee.location, filters.location)
                and matches_filter(employee.team, filters.team)
                and matches_filter(employee.department, filters.department)
            )
        ]

    def approved_time_off_for(self, day: date) -> List[TimeOffRequest]:
        return [
            request for request in self.time_off_requests
            if request.is_approved and date_in_range(day, request.start_date, request.end_date)
        ]

    def day_input(self, day: date, filters: Optional[AnalyticsFilters] = None) -> DayInput:
        shifts = self.shifts_for(day, filters)
        return DayInput(
            date=day,
            shifts=shifts,
            employees=self.employee_pool(shifts, filters),
            time_off_requests=self.approved_time_off_for(day),
        )

    async def load_day(self, day: date, filters: Optional[AnalyticsFilters] = None) -> DayInput:
        return self.day_input(day, filters)
