"""
Schedule generation API routes
"""

import logging

from fastapi import APIRouter, Depends

from ...core.engine import ScheduleEngine
from ...models import GenerateScheduleRequest, ScheduleSnapshot
from ...utils.profiler import AnalyticsProfiler
from ..dependencies import get_engine, get_profiler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/schedules", tags=["Schedules"])


@router.post(
    "/generate",
    response_model=ScheduleSnapshot,
    summary="Draft schedule snapshot for one date, location and team",
    description="""
    Builds a draft schedule from the supplied records.

    Shifts and employees are restricted to the requested location, team and
    department (case-insensitive substring match; omitted values match all).
    Only employees with the configured status (active by default) form the pool,
    and only approved time off covering the date is attached. The schedule id is
    derived from the date, location and team.
    """,
)
async def generate_schedule(
    request: GenerateScheduleRequest,
    engine: ScheduleEngine = Depends(get_engine),
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> ScheduleSnapshot:
    profiler.increment_counter("schedule_generation_requests")

    with profiler.timed("schedule_generation"):
        snapshot = engine.generate_schedule(
            request.date,
            request.shifts,
            request.employees,
            request.time_off_requests,
            location=request.location or "",
            team=request.team or "",
            department=request.department or "",
        )

    if snapshot.conflicts:
        logger.warning(f"Schedule {snapshot.schedule_id} generated with {len(snapshot.conflicts)} conflicts")
    return snapshot
