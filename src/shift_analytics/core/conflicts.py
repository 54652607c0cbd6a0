"""
Scheduling conflict detection

Four independent passes run over the same inputs and append to one flat list:
double bookings, time-off conflicts, availability conflicts and role
mismatches. A shift/employee pair may show up in several categories; nothing
is deduplicated across passes.
"""
import logging
from itertools import combinations
from typing import Dict, Iterable, List

from ..config import CONFLICT_RESOLUTION
from ..models import (
    Conflict,
    ConflictType,
    Employee,
    Severity,
    Shift,
    TimeOffRequest,
)
from ..utils.helpers import day_name, format_time_range
from .temporal import date_in_range, day_of_week, time_ranges_overlap

logger = logging.getLogger(__name__)


class ConflictDetector:
    """Detects scheduling conflicts for a set of shifts"""

    def detect(
        self,
        shifts: List[Shift],
        employees: Iterable[Employee],
        time_off_requests: Iterable[TimeOffRequest] = (),
    ) -> List[Conflict]:
        """Run all conflict passes and return their combined findings"""

        shifts = list(shifts)
        employee_dict = {e.id: e for e in employees}
        # Pending, rejected and cancelled requests never produce conflicts
        approved_time_off = [t for t in time_off_requests if t.is_approved]

        conflicts = []
        conflicts.extend(self.detect_double_bookings(shifts))
        conflicts.extend(self.detect_time_off_conflicts(shifts, approved_time_off))
        conflicts.extend(self.detect_availability_conflicts(shifts, employee_dict))
        conflicts.extend(self.detect_role_mismatches(shifts, employee_dict))

        logger.debug(
            f"Detected {len(conflicts)} conflicts across {len(shifts)} shifts"
        )
        return conflicts

    def detect_double_bookings(self, shifts: List[Shift]) -> List[Conflict]:
        """Employees assigned to overlapping shifts on the same date"""

        conflicts = []
        employee_shifts: Dict[str, List[Shift]] = {}

        for shift in shifts:
            for employee_id in shift.assigned_employees:
                employee_shifts.setdefault(employee_id, []).append(shift)

        for employee_id, assigned_shifts in employee_shifts.items():
            if len(assigned_shifts) < 2:
                continue

            for first, second in combinations(assigned_shifts, 2):
                if first.date != second.date:
                    continue
                if not time_ranges_overlap(
                    first.start_time, first.end_time, second.start_time, second.end_time
                ):
                    continue

                conflicts.append(Conflict(
                    type=ConflictType.DOUBLE_BOOKING,
                    severity=Severity.HIGH,
                    description=f'Employee {employee_id} is assigned to overlapping shifts',
                    affected_shifts=[first.id, second.id],
                    affected_employees=[employee_id],
                    resolution=CONFLICT_RESOLUTION['double_booking'],
                    details={
                        'shift1': {'id': first.id, 'title': first.title, 'time': first.time_range},
                        'shift2': {'id': second.id, 'title': second.title, 'time': second.time_range},
                        'date': first.date.isoformat(),
                    },
                ))

        return conflicts

    def detect_time_off_conflicts(
        self,
        shifts: List[Shift],
        time_off_requests: Iterable[TimeOffRequest],
    ) -> List[Conflict]:
        """Employees scheduled during their approved time off"""

        conflicts = []

        for time_off in time_off_requests:
            if not time_off.is_approved:
                continue

            for shift in shifts:
                if not date_in_range(shift.date, time_off.start_date, time_off.end_date):
                    continue
                if time_off.employee_id not in shift.assigned_employees:
                    continue

                conflicts.append(Conflict(
                    type=ConflictType.TIME_OFF_CONFLICT,
                    severity=Severity.MEDIUM,
                    description=f'Employee {time_off.employee_id} is assigned to shift during approved time-off',
                    affected_shifts=[shift.id],
                    affected_employees=[time_off.employee_id],
                    resolution=CONFLICT_RESOLUTION['time_off_conflict'],
                    details={
                        'time_off': {
                            'id': time_off.id,
                            'type': time_off.type.value,
                            'dates': f'{time_off.start_date.isoformat()} - {time_off.end_date.isoformat()}',
                        },
                        'shift': {'id': shift.id, 'title': shift.title, 'date': shift.date.isoformat()},
                    },
                ))

        return conflicts

    def detect_availability_conflicts(
        self,
        shifts: List[Shift],
        employee_dict: Dict[str, Employee],
    ) -> List[Conflict]:
        """Employees scheduled on unavailable days or outside their windows"""

        conflicts = []

        for shift in shifts:
            weekday = day_of_week(shift.date)

            for employee_id in shift.assigned_employees:
                employee = employee_dict.get(employee_id)
                if employee is None:
                    logger.debug(f"Skipping availability check for unknown employee {employee_id}")
                    continue

                window = next(
                    (w for w in employee.availability_windows if w.day_of_week == weekday),
                    None,
                )

                if window is None or not window.is_available:
                    conflicts.append(Conflict(
                        type=ConflictType.AVAILABILITY_CONFLICT,
                        severity=Severity.HIGH,
                        description=f'Employee {employee.full_name} scheduled on unavailable day',
                        affected_shifts=[shift.id],
                        affected_employees=[employee_id],
                        resolution=CONFLICT_RESOLUTION['unavailable_day'],
                        details={
                            'employee': employee.full_name,
                            'day': day_name(weekday),
                        },
                    ))
                elif shift.start_time < window.start_time or shift.end_time > window.end_time:
                    conflicts.append(Conflict(
                        type=ConflictType.AVAILABILITY_CONFLICT,
                        severity=Severity.MEDIUM,
                        description=f'Employee {employee.full_name} scheduled outside availability window',
                        affected_shifts=[shift.id],
                        affected_employees=[employee_id],
                        resolution=CONFLICT_RESOLUTION['availability_conflict'],
                        details={
                            'employee': employee.full_name,
                            'availability': format_time_range(window.start_time, window.end_time),
                            'shift': shift.time_range,
                            'day': day_name(weekday),
                        },
                    ))

        return conflicts

    def detect_role_mismatches(
        self,
        shifts: List[Shift],
        employee_dict: Dict[str, Employee],
    ) -> List[Conflict]:
        """Employees whose organizational role differs from a requirement line's role.

        This compares the fixed role, not skills: a skill-qualified employee is
        still flagged when their role label differs.
        """

        conflicts = []

        for shift in shifts:
            for requirement in shift.requirements:
                for employee_id in shift.assigned_employees:
                    employee = employee_dict.get(employee_id)
                    if employee is None:
                        continue
                    if employee.role.value == requirement.role:
                        continue

                    conflicts.append(Conflict(
                        type=ConflictType.ROLE_MISMATCH,
                        severity=Severity.MEDIUM,
                        description=f'Employee {employee.full_name} assigned to shift requiring different role',
                        affected_shifts=[shift.id],
                        affected_employees=[employee_id],
                        resolution=CONFLICT_RESOLUTION['role_mismatch'],
                        details={
                            'employee': employee.full_name,
                            'employee_role': employee.role.value,
                            'required_role': requirement.role,
                        },
                    ))

        return conflicts
