"""
Shift API routes
"""

import logging

from fastapi import APIRouter, Depends

from ...core.recurrence import generate_recurring_shifts
from ...models import RecurringShiftRequest, RecurringShiftResponse
from ...utils.profiler import AnalyticsProfiler
from ..dependencies import get_profiler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/shifts", tags=["Shifts"])


@router.post("/recurring", response_model=RecurringShiftResponse)
async def create_recurring_shifts(
    request: RecurringShiftRequest,
    profiler: AnalyticsProfiler = Depends(get_profiler),
) -> RecurringShiftResponse:
    """Expand a shift template across a date range"""

    with profiler.timed("recurring_shifts"):
        shifts = generate_recurring_shifts(
            request.template, request.start_date, request.end_date, request.pattern
        )
    profiler.increment_counter("recurring_shifts_generated", len(shifts))

    return RecurringShiftResponse(
        message=f"Generated {len(shifts)} recurring shifts",
        template_id=request.template.id,
        pattern=request.pattern,
        start_date=request.start_date,
        end_date=request.end_date,
        shifts=shifts,
    )
