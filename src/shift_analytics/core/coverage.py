"""
Role coverage calculation for a scheduling unit
"""
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from ..config import settings
from ..models import CoverageEmployee, CoverageEntry, Employee, Shift
from ..utils.helpers import round_half_up, safe_division

logger = logging.getLogger(__name__)


def coverage_percentage(assigned: int, required: int, decimal_places: int = 0) -> float:
    """assigned/required as a percentage; nothing required counts as fully covered"""
    if required == 0:
        return 100.0
    return round_half_up(assigned / required * 100, decimal_places)


class CoverageCalculator:
    """Computes required/assigned/gap/overlap figures per shift requirement line.

    Coverage is not deduplicated across shifts that share a role: an employee
    assigned to two shifts requiring the same role is counted on both lines,
    which is what surfaces overstaffing in the overlap figures.
    """

    def __init__(self, decimal_places: Optional[int] = None):
        self.decimal_places = (
            settings.coverage_decimal_places if decimal_places is None else decimal_places
        )

    def calculate(self, shifts: Iterable[Shift], employees: Iterable[Employee]) -> List[CoverageEntry]:
        """One CoverageEntry per (shift, requirement) in encounter order"""

        employees_by_role = self.group_by_role(employees)
        coverage = []

        for shift in shifts:
            assigned = len(shift.assigned_employees)
            for requirement in shift.requirements:
                required = requirement.quantity
                available = employees_by_role.get(requirement.role, [])

                coverage.append(CoverageEntry(
                    role=requirement.role,
                    required=required,
                    assigned=assigned,
                    coverage=coverage_percentage(assigned, required, self.decimal_places),
                    gaps=max(0, required - assigned),
                    overlaps=max(0, assigned - required),
                    utilization=round_half_up(safe_division(assigned, required), 2),
                    employees=[self._describe(e) for e in available],
                    shift_id=shift.id,
                    shift_date=shift.date,
                    start_time=shift.start_time,
                    end_time=shift.end_time,
                ))

        logger.debug(f"Calculated {len(coverage)} coverage entries")
        return coverage

    @staticmethod
    def group_by_role(employees: Iterable[Employee]) -> Dict[str, List[Employee]]:
        employees_by_role = defaultdict(list)
        for employee in employees:
            employees_by_role[employee.role.value].append(employee)
        return dict(employees_by_role)

    @staticmethod
    def _describe(employee: Employee) -> CoverageEmployee:
        return CoverageEmployee(
            id=employee.id,
            name=employee.full_name,
            skills=[skill.name for skill in employee.skills],
            total_hours=employee.total_hours_worked,
        )
