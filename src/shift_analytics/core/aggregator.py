"""
Period aggregation: drives the single-day pipeline across a date range
"""
import asyncio
import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import CONFLICT_IMPACT, CONFLICT_RESOLUTION, SuggestionType, settings
from ..logging_config import analytics_logger
from ..models import (
    AffectedEntities,
    AnalyticsFilters,
    ConflictAnalysis,
    ConflictTrendPoint,
    ConflictType,
    ConflictTypeCount,
    CoverageGap,
    CoverageOptimization,
    CoverageTrendPoint,
    DayAnalytics,
    DayInput,
    OptimizationSuggestion,
    PeriodMetrics,
    RangeAnalytics,
    RangeTrends,
    ResolutionSuggestion,
    RoleCoverageMetric,
    Severity,
    UtilizationTrendPoint,
)
from ..utils.exceptions import ConfigurationError, DataInconsistencyError, ResourceLimitError
from ..utils.helpers import mean, round_half_up, unique_in_order
from .coverage import coverage_percentage
from .datasource import ScheduleDataSource
from .engine import ScheduleEngine
from .temporal import count_days, format_period, iter_dates, month_range, week_range

logger = logging.getLogger(__name__)


class PeriodAggregator:
    """Runs the day pipeline once per calendar date and merges the results.

    Days never depend on each other, so they can be computed sequentially or
    fanned out concurrently; merged output is identical either way.
    """

    def __init__(
        self,
        engine: Optional[ScheduleEngine] = None,
        max_range_days: Optional[int] = None,
        target_coverage: Optional[float] = None,
    ):
        self.engine = engine or ScheduleEngine()
        self.max_range_days = max_range_days or settings.max_range_days
        self.target_coverage = settings.target_coverage if target_coverage is None else target_coverage

    # Day collection

    def check_range(self, start_date: date, end_date: date) -> int:
        """Number of days in the range; malformed ranges simply have none"""
        days = count_days(start_date, end_date)
        if days > self.max_range_days:
            raise ResourceLimitError(
                f"Date range of {days} days exceeds the limit of {self.max_range_days}",
                start_date=start_date,
                end_date=end_date,
                requested_days=days,
                max_days=self.max_range_days,
            )
        return days

    def analyze_day_input(
        self,
        day_input: DayInput,
        filters: Optional[AnalyticsFilters] = None,
    ) -> DayAnalytics:
        misdated = [shift.id for shift in day_input.shifts if shift.date != day_input.date]
        if misdated:
            raise DataInconsistencyError(
                f"Data source returned shifts not dated {day_input.date.isoformat()}",
                day=day_input.date,
                shift_ids=misdated,
            )

        filters = filters or AnalyticsFilters()
        return self.engine.analyze_day(
            day_input.date,
            day_input.shifts,
            day_input.employees,
            day_input.time_off_requests,
            location=filters.location,
            team=filters.team,
            department=filters.department,
        )

    def analyze_days(
        self,
        day_inputs: Iterable[DayInput],
        filters: Optional[AnalyticsFilters] = None,
    ) -> List[DayAnalytics]:
        """Sequential path over already-loaded day inputs"""
        days = [self.analyze_day_input(day_input, filters) for day_input in day_inputs]
        return sorted(days, key=lambda d: d.date)

    async def collect_days(
        self,
        source: ScheduleDataSource,
        start_date: date,
        end_date: date,
        filters: Optional[AnalyticsFilters] = None,
        max_concurrency: Optional[int] = None,
    ) -> List[DayAnalytics]:
        """Load and analyze every day in the range with bounded concurrency"""

        self.check_range(start_date, end_date)
        limit = settings.default_max_concurrency if max_concurrency is None else max_concurrency
        if limit < 1:
            raise ConfigurationError(
                f"max_concurrency must be at least 1, got {limit}",
                setting="max_concurrency",
                actual_value=limit,
                constraint=">= 1",
            )
        semaphore = asyncio.Semaphore(limit)

        async def run_day(day: date) -> DayAnalytics:
            async with semaphore:
                day_input = await source.load_day(day, filters)
                return self.analyze_day_input(day_input, filters)

        # gather keeps argument order, so results line up with calendar order
        days = await asyncio.gather(*(run_day(day) for day in iter_dates(start_date, end_date)))
        return sorted(days, key=lambda d: d.date)

    # Range views

    def summarize_range(
        self,
        start_date: date,
        end_date: date,
        days: List[DayAnalytics],
        include_daily_breakdown: bool = True,
    ) -> RangeAnalytics:
        """Fold per-day analytics into range totals and trend series"""

        days = sorted(days, key=lambda d: d.date)

        summary = PeriodMetrics(
            total_shifts=sum(d.total_shifts for d in days),
            total_hours=round_half_up(sum(d.total_hours for d in days), 2),
            # Summed per day, not deduplicated: volume reporting, not headcount
            total_employees=sum(d.total_employees for d in days),
            average_utilization=mean(d.average_utilization for d in days),
            conflict_count=sum(len(d.conflicts) for d in days),
            critical_conflicts=sum(d.metrics.critical_conflicts for d in days),
        )

        trends = RangeTrends(
            coverage_trend=[
                CoverageTrendPoint(date=d.date, coverage=d.average_utilization) for d in days
            ],
            conflict_trend=[
                ConflictTrendPoint(date=d.date, conflict_count=len(d.conflicts)) for d in days
            ],
            utilization_trend=[
                UtilizationTrendPoint(
                    date=d.date,
                    utilization=mean(entry.utilization * 100 for entry in d.role_coverage),
                )
                for d in days
            ],
        )

        analytics_logger.log_range_analyzed(
            period=format_period(start_date, end_date),
            days=len(days),
            total_shifts=summary.total_shifts,
            conflict_count=summary.conflict_count,
        )

        return RangeAnalytics(
            period=format_period(start_date, end_date),
            summary=summary,
            trends=trends,
            daily_breakdown=days if include_daily_breakdown else None,
        )

    async def analyze_range(
        self,
        source: ScheduleDataSource,
        start_date: date,
        end_date: date,
        filters: Optional[AnalyticsFilters] = None,
        max_concurrency: Optional[int] = None,
        include_daily_breakdown: bool = True,
    ) -> RangeAnalytics:
        days = await self.collect_days(source, start_date, end_date, filters, max_concurrency)
        return self.summarize_range(start_date, end_date, days, include_daily_breakdown)

    async def analyze_week(
        self,
        source: ScheduleDataSource,
        start_date: date,
        filters: Optional[AnalyticsFilters] = None,
        max_concurrency: Optional[int] = None,
    ) -> RangeAnalytics:
        first, last = week_range(start_date)
        return await self.analyze_range(source, first, last, filters, max_concurrency)

    async def analyze_month(
        self,
        source: ScheduleDataSource,
        year: int,
        month: int,
        filters: Optional[AnalyticsFilters] = None,
        max_concurrency: Optional[int] = None,
    ) -> RangeAnalytics:
        first, last = month_range(year, month)
        return await self.analyze_range(source, first, last, filters, max_concurrency)

    # Coverage optimization

    def optimize_coverage(
        self,
        start_date: date,
        end_date: date,
        days: List[DayAnalytics],
    ) -> CoverageOptimization:
        """Regroup every day's coverage by role and derive static suggestions"""

        totals: Dict[str, Dict[str, int]] = defaultdict(
            lambda: {"required": 0, "assigned": 0, "gaps": 0, "overlaps": 0}
        )
        gaps = []

        for day in sorted(days, key=lambda d: d.date):
            for entry in day.role_coverage:
                role_totals = totals[entry.role]
                role_totals["required"] += entry.required
                role_totals["assigned"] += entry.assigned
                role_totals["gaps"] += entry.gaps
                role_totals["overlaps"] += entry.overlaps

                if entry.gaps > 0:
                    gaps.append(CoverageGap(
                        role=entry.role,
                        shift_date=entry.shift_date or day.date,
                        shift_id=entry.shift_id,
                        start_time=entry.start_time,
                        end_time=entry.end_time,
                        shortage=entry.gaps,
                        available_employees=[e.name for e in entry.employees],
                    ))

        role_metrics = [
            RoleCoverageMetric(
                role=role,
                coverage=coverage_percentage(t["assigned"], t["required"], 2),
                required=t["required"],
                assigned=t["assigned"],
                gaps=t["gaps"],
                overlaps=t["overlaps"],
            )
            for role, t in totals.items()
        ]

        return CoverageOptimization(
            period=format_period(start_date, end_date),
            current_coverage=mean(m.coverage for m in role_metrics),
            target_coverage=self.target_coverage,
            role_coverage_metrics=role_metrics,
            # Largest shortage first; days stay in date order within a shortage
            gaps=sorted(gaps, key=lambda g: -g.shortage),
            optimization_suggestions=self.build_suggestions(role_metrics),
        )

    def build_suggestions(self, role_metrics: List[RoleCoverageMetric]) -> List[OptimizationSuggestion]:
        overstaffed = [m.role for m in role_metrics if m.overlaps > 0]
        understaffed = [m.role for m in role_metrics if m.gaps > 0]
        below_target = [m.role for m in role_metrics if m.coverage < self.target_coverage]

        suggestions = []
        if overstaffed:
            suggestions.append(self._suggestion(
                SuggestionType.REASSIGN,
                f"Reassign surplus staff from overstaffed roles: {', '.join(overstaffed)}",
            ))
        if understaffed:
            suggestions.append(self._suggestion(
                SuggestionType.HIRE,
                f"Hire or schedule additional staff for understaffed roles: {', '.join(understaffed)}",
            ))
        if below_target:
            suggestions.append(self._suggestion(
                SuggestionType.TRAIN,
                f"Cross-train employees for roles below {self.target_coverage:g}% coverage: "
                f"{', '.join(below_target)}",
            ))
        if not suggestions:
            suggestions.append(self._suggestion(
                SuggestionType.MAINTAIN,
                "Coverage meets target levels; maintain current staffing",
            ))
        return suggestions

    @staticmethod
    def _suggestion(suggestion_type: SuggestionType, description: str) -> OptimizationSuggestion:
        return OptimizationSuggestion(
            type=suggestion_type,
            description=description,
            impact=settings.suggestion_impacts.get(suggestion_type, 0.0),
            cost=settings.suggestion_costs.get(suggestion_type, 0.0),
        )

    async def analyze_coverage_optimization(
        self,
        source: ScheduleDataSource,
        start_date: date,
        end_date: date,
        filters: Optional[AnalyticsFilters] = None,
        max_concurrency: Optional[int] = None,
    ) -> CoverageOptimization:
        days = await self.collect_days(source, start_date, end_date, filters, max_concurrency)
        return self.optimize_coverage(start_date, end_date, days)

    # Conflict analysis

    def analyze_conflicts(
        self,
        start_date: date,
        end_date: date,
        days: List[DayAnalytics],
    ) -> ConflictAnalysis:
        """Break a range's conflicts down by type/severity and affected entities"""

        conflicts = [c for day in sorted(days, key=lambda d: d.date) for c in day.conflicts]

        counts: Dict[Tuple[ConflictType, Severity], int] = {}
        for conflict in conflicts:
            key = (conflict.type, conflict.severity)
            counts[key] = counts.get(key, 0) + 1

        per_type: Dict[ConflictType, int] = {}
        for (conflict_type, _), count in counts.items():
            per_type[conflict_type] = per_type.get(conflict_type, 0) + count

        resolution_suggestions = [
            ResolutionSuggestion(
                conflict_type=conflict_type,
                description=f"{count} {conflict_type.value.replace('_', ' ')} conflict(s) detected",
                suggestion=CONFLICT_RESOLUTION[conflict_type.value],
                impact=CONFLICT_IMPACT[conflict_type.value],
            )
            for conflict_type, count in per_type.items()
        ]

        analytics_logger.log_conflicts_detected(
            period=format_period(start_date, end_date),
            conflict_count=len(conflicts),
            by_type={t.value: c for t, c in per_type.items()},
        )

        return ConflictAnalysis(
            period=format_period(start_date, end_date),
            total_conflicts=len(conflicts),
            critical_conflicts=sum(1 for c in conflicts if c.severity == Severity.CRITICAL),
            conflict_types=[
                ConflictTypeCount(type=t, severity=s, count=n) for (t, s), n in counts.items()
            ],
            affected_entities=AffectedEntities(
                shifts=unique_in_order(s for c in conflicts for s in c.affected_shifts),
                employees=unique_in_order(e for c in conflicts for e in c.affected_employees),
            ),
            resolution_suggestions=resolution_suggestions,
        )

    async def analyze_conflict_range(
        self,
        source: ScheduleDataSource,
        start_date: date,
        end_date: date,
        filters: Optional[AnalyticsFilters] = None,
        max_concurrency: Optional[int] = None,
    ) -> ConflictAnalysis:
        days = await self.collect_days(source, start_date, end_date, filters, max_concurrency)
        return self.analyze_conflicts(start_date, end_date, days)
