"""
Single-day analytics pipeline: coverage, conflicts and metrics for one date
"""
import logging
from datetime import date
from typing import Any, Iterable, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import settings
from ..logging_config import analytics_logger
from ..models import (
    DayAnalytics,
    Employee,
    ScheduleSnapshot,
    Shift,
    TimeOffRequest,
)
from ..utils.exceptions import ValidationError
from ..utils.helpers import slugify
from .conflicts import ConflictDetector
from .coverage import CoverageCalculator
from .datasource import matches_filter
from .metrics import MetricsAggregator
from .temporal import date_in_range

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_records(model: Type[ModelT], records: Optional[Iterable[Any]]) -> List[ModelT]:
    """Accept model instances or raw mappings; a broken record is a contract breach"""
    coerced = []
    for index, record in enumerate(records or []):
        if isinstance(record, model):
            coerced.append(record)
            continue
        try:
            coerced.append(model.model_validate(record))
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(
                f"Invalid {model.__name__} record at index {index}: {first.get('msg')}",
                record_type=model.__name__,
                record_index=index,
                field=field or None,
                value=first.get("input"),
            ) from e
    return coerced


class ScheduleEngine:
    """Runs coverage, conflict detection and metrics for one calendar day"""

    def __init__(
        self,
        coverage_calculator: Optional[CoverageCalculator] = None,
        conflict_detector: Optional[ConflictDetector] = None,
        metrics_aggregator: Optional[MetricsAggregator] = None,
    ):
        self.coverage_calculator = coverage_calculator or CoverageCalculator()
        self.conflict_detector = conflict_detector or ConflictDetector()
        self.metrics_aggregator = metrics_aggregator or MetricsAggregator()

    def analyze_day(
        self,
        day: date,
        shifts: Sequence[Any],
        employees: Sequence[Any],
        time_off_requests: Sequence[Any] = (),
        location: Optional[str] = None,
        team: Optional[str] = None,
        department: Optional[str] = None,
    ) -> DayAnalytics:
        """Coverage + conflicts + metrics for the records supplied for one day"""

        shifts = coerce_records(Shift, shifts)
        employees = coerce_records(Employee, employees)
        time_off_requests = coerce_records(TimeOffRequest, time_off_requests)

        coverage = self.coverage_calculator.calculate(shifts, employees)
        conflicts = self.conflict_detector.detect(shifts, employees, time_off_requests)
        metrics = self.metrics_aggregator.summarize(shifts, employees, coverage, conflicts)

        analytics_logger.log_day_analyzed(
            day=day.isoformat(),
            shift_count=metrics.total_shifts,
            coverage_entries=len(coverage),
            conflict_count=metrics.conflict_count,
        )

        return DayAnalytics(
            date=day,
            location=location or "all",
            team=team or "all",
            department=department or "all",
            role_coverage=coverage,
            total_shifts=metrics.total_shifts,
            total_hours=metrics.total_hours,
            total_employees=metrics.total_employees,
            average_utilization=metrics.average_utilization,
            conflicts=conflicts,
            metrics=metrics,
        )

    def generate_schedule(
        self,
        day: date,
        shifts: Sequence[Any],
        employees: Sequence[Any],
        time_off_requests: Sequence[Any] = (),
        location: str = "",
        team: str = "",
        department: str = "",
    ) -> ScheduleSnapshot:
        """Build a draft schedule snapshot for one date/location/team.

        Shifts and employees are scoped with the same case-insensitive
        location/team/department matching the analytics routes use; an empty
        value matches everything. The pool is further restricted to employees
        whose status matches the configured filter, and only approved time off
        covering the date is attached.
        """

        def in_scope(record) -> bool:
            return (
                matches_filter(record.location, location)
                and matches_filter(record.team, team)
                and matches_filter(record.department, department)
            )

        shifts = [s for s in coerce_records(Shift, shifts) if s.date == day and in_scope(s)]
        employees = [
            e for e in coerce_records(Employee, employees)
            if e.status.value == settings.employee_status_filter and in_scope(e)
        ]
        time_off_requests = [
            t for t in coerce_records(TimeOffRequest, time_off_requests)
            if t.is_approved and date_in_range(day, t.start_date, t.end_date)
        ]

        coverage = self.coverage_calculator.calculate(shifts, employees)
        conflicts = self.conflict_detector.detect(shifts, employees, time_off_requests)
        metrics = self.metrics_aggregator.summarize(shifts, employees, coverage, conflicts)

        schedule_id = "-".join(
            ["SCHEDULE", day.strftime("%Y%m%d"), slugify(location) or "all", slugify(team) or "all"]
        )
        logger.info(
            f"Generated schedule {schedule_id}: {len(shifts)} shifts, "
            f"{len(employees)} employees, {len(conflicts)} conflicts"
        )

        return ScheduleSnapshot(
            schedule_id=schedule_id,
            date=day,
            location=location,
            team=team,
            department=department,
            shift_ids=[s.id for s in shifts],
            employee_ids=[e.id for e in employees],
            time_off_ids=[t.id for t in time_off_requests],
            coverage=coverage,
            conflicts=conflicts,
            metrics=metrics,
            notes=f"Auto-generated schedule for {day.isoformat()}",
        )
