"""
Summary metrics for one scheduling unit
"""
from typing import Iterable, List

from ..models import Conflict, CoverageEntry, Employee, PeriodMetrics, Severity, Shift
from ..utils.helpers import mean, round_half_up


class MetricsAggregator:
    """Folds shifts, employees, coverage and conflicts into a PeriodMetrics record"""

    def summarize(
        self,
        shifts: Iterable[Shift],
        employees: Iterable[Employee],
        coverage: List[CoverageEntry],
        conflicts: List[Conflict],
    ) -> PeriodMetrics:
        shifts = list(shifts)

        return PeriodMetrics(
            total_shifts=len(shifts),
            total_hours=round_half_up(sum(s.total_hours for s in shifts), 2),
            total_employees=len(list(employees)),
            average_utilization=mean(entry.coverage for entry in coverage),
            conflict_count=len(conflicts),
            # The detector only emits high/medium today, so this stays 0
            critical_conflicts=sum(1 for c in conflicts if c.severity == Severity.CRITICAL),
        )
