"""
Expansion of a shift template into dated occurrences
"""
import logging
from datetime import date
from typing import Any, Callable, Dict, List

from ..models import RecurrencePattern, Shift, ShiftStatus
from ..utils.exceptions import ResourceLimitError, ValidationError
from ..config import settings
from .engine import coerce_records
from .temporal import count_days, iter_dates

logger = logging.getLogger(__name__)

Matcher = Callable[[Shift, date], bool]

PATTERN_MATCHERS: Dict[RecurrencePattern, Matcher] = {
    RecurrencePattern.DAILY: lambda template, day: True,
    RecurrencePattern.WEEKLY: lambda template, day: day.weekday() == template.date.weekday(),
    RecurrencePattern.MONTHLY: lambda template, day: day.day == template.date.day,
}


def _resolve_pattern(pattern: Any) -> RecurrencePattern:
    if isinstance(pattern, RecurrencePattern):
        return pattern
    try:
        return RecurrencePattern(str(pattern).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Invalid recurrence pattern: {pattern}",
            field="pattern",
            value=pattern,
            allowed_values=[p.value for p in RecurrencePattern],
        ) from None


def generate_recurring_shifts(template: Any, start_date: date, end_date: date, pattern: Any) -> List[Shift]:
    """Copy the template onto every matching date in [start_date, end_date].

    Occurrence ids are `<template id>-<YYYYMMDD>`, so expanding the same
    template twice yields the same shifts.
    """
    template = coerce_records(Shift, [template])[0]
    pattern = _resolve_pattern(pattern)
    matches = PATTERN_MATCHERS[pattern]

    days = count_days(start_date, end_date)
    if days > settings.max_range_days:
        raise ResourceLimitError(
            f"Recurrence range of {days} days exceeds the limit of {settings.max_range_days}",
            start_date=start_date,
            end_date=end_date,
            requested_days=days,
            max_days=settings.max_range_days,
        )

    shifts = [
        template.model_copy(update={
            "id": f"{template.id}-{day.strftime('%Y%m%d')}",
            "date": day,
            "status": ShiftStatus.SCHEDULED,
        })
        for day in iter_dates(start_date, end_date)
        if matches(template, day)
    ]

    logger.info(f"Expanded template {template.id} into {len(shifts)} {pattern.value} shifts")
    return shifts
