"""
Analytics API routes: daily, range, weekly, monthly, conflicts, optimization
"""

import logging
import time

from fastapi import APIRouter, Depends

from ...core.aggregator import PeriodAggregator
from ...core.datasource import InMemoryScheduleStore
from ...core.temporal import count_days, month_range
from ...core.workload import WorkloadAnalyzer
from ...models import (
    AnalyticsFilters,
    ConflictAnalysis,
    CoverageOptimization,
    DailyAnalyticsRequest,
    DayAnalytics,
    EmployeeWorkload,
    MonthlyAnalyticsRequest,
    RangeAnalytics,
    RangeAnalyticsRequest,
    ScheduleRecords,
    WeeklyAnalyticsRequest,
    WorkloadRequest,
)
from ...utils.exceptions import CLIENT_EXCEPTIONS
from ...utils.helpers import generate_request_id
from ...utils.profiler import AnalyticsProfiler
from ..dependencies import get_aggregator, get_profiler, get_workload_analyzer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/analytics", tags=["Analytics"])


def _store(request: ScheduleRecords) -> InMemoryScheduleStore:
    return InMemoryScheduleStore(request.shifts, request.employees, request.time_off_requests)


def _filters(request: ScheduleRecords) -> AnalyticsFilters:
    return AnalyticsFilters(location=request.location, team=request.team, department=request.department)


@router.post(
    "/daily",
    response_model=DayAnalytics,
    summary="Coverage, conflicts and metrics for one day",
)
async def daily_analytics(
    request: DailyAnalyticsRequest,
    aggregator: PeriodAggregator = Depends(get_aggregator),
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> DayAnalytics:
    request_id = generate_request_id("daily")
    started = time.time()
    store = _store(request)
    filters = _filters(request)

    try:
        result = aggregator.analyze_day_input(store.day_input(request.date, filters), filters)
    except CLIENT_EXCEPTIONS:
        profiler.increment_counter("daily_client_errors")
        raise

    profiler.record_analysis("daily", 1, time.time() - started)
    logger.info(
        f"[{request_id}] Daily analytics for {request.date}: "
        f"{result.total_shifts} shifts, {len(result.conflicts)} conflicts"
    )
    return result


@router.post(
    "/range",
    response_model=RangeAnalytics,
    response_model_exclude_none=True,
    summary="Summary, trends and daily breakdown for a date range",
)
async def range_analytics(
    request: RangeAnalyticsRequest,
    aggregator: PeriodAggregator = Depends(get_aggregator),
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> RangeAnalytics:
    request_id = generate_request_id("range")
    started = time.time()

    try:
        result = await aggregator.analyze_range(
            _store(request),
            request.start_date,
            request.end_date,
            _filters(request),
            max_concurrency=request.max_concurrency,
            include_daily_breakdown=request.include_daily_breakdown,
        )
    except CLIENT_EXCEPTIONS:
        profiler.increment_counter("range_client_errors")
        raise

    days = count_days(request.start_date, request.end_date)
    profiler.record_analysis("range", days, time.time() - started)
    logger.info(f"[{request_id}] Range analytics for {result.period}: {days} days")
    return result


@router.post("/weekly", response_model=RangeAnalytics, summary="Seven days starting at startDate")
async def weekly_analytics(
    request: WeeklyAnalyticsRequest,
    aggregator: PeriodAggregator = Depends(get_aggregator),
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> RangeAnalytics:
    started = time.time()
    result = await aggregator.analyze_week(_store(request), request.start_date, _filters(request))
    profiler.record_analysis("weekly", 7, time.time() - started)
    return result


@router.post("/monthly", response_model=RangeAnalytics, summary="One calendar month")
async def monthly_analytics(
    request: MonthlyAnalyticsRequest,
    aggregator: PeriodAggregator = Depends(get_aggregator),
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> RangeAnalytics:
    started = time.time()
    result = await aggregator.analyze_month(_store(request), request.year, request.month, _filters(request))
    first, last = month_range(request.year, request.month)
    profiler.record_analysis("monthly", count_days(first, last), time.time() - started)
    return result


@router.post(
    "/conflicts",
    response_model=ConflictAnalysis,
    summary="Conflict breakdown by type and severity with resolution suggestions",
)
async def conflict_analysis(
    request: RangeAnalyticsRequest,
    aggregator: PeriodAggregator = Depends(get_aggregator),
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> ConflictAnalysis:
    started = time.time()
    result = await aggregator.analyze_conflict_range(
        _store(request),
        request.start_date,
        request.end_date,
        _filters(request),
        max_concurrency=request.max_concurrency,
    )
    profiler.record_analysis(
        "conflicts", count_days(request.start_date, request.end_date), time.time() - started
    )
    return result


@router.post(
    "/coverage-optimization",
    response_model=CoverageOptimization,
    summary="Per-role coverage, gaps and staffing suggestions",
)
async def coverage_optimization(
    request: RangeAnalyticsRequest,
    aggregator: PeriodAggregator = Depends(get_aggregator),
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> CoverageOptimization:
    started = time.time()
    result = await aggregator.analyze_coverage_optimization(
        _store(request),
        request.start_date,
        request.end_date,
        _filters(request),
        max_concurrency=request.max_concurrency,
    )
    profiler.record_analysis(
        "optimization", count_days(request.start_date, request.end_date), time.time() - started
    )
    return result


@router.post(
    "/employee-workload/{employee_id}",
    response_model=EmployeeWorkload,
    summary="Hours, shifts and consecutive days worked by one employee",
)
async def employee_workload(
    employee_id: str,
    request: WorkloadRequest,
    analyzer: WorkloadAnalyzer = Depends(get_workload_analyzer),
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> EmployeeWorkload:
    with profiler.timed("employee_workload"):
        return analyzer.analyze(
            employee_id,
            request.start_date,
            request.end_date,
            request.shifts,
            request.employees,
            request.time_off_requests,
        )
