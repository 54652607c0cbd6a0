"""
Utility helper functions for the shift analytics service
"""

import logging
import re
from datetime import datetime, date, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, TypeVar
from uuid import uuid4

logger = logging.getLogger(__name__)

T = TypeVar("T")

DAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


def generate_request_id(prefix: str = "req") -> str:
    """Generate a unique request ID for tracking"""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]  # Include milliseconds
    return f"{prefix}_{timestamp}_{uuid4().hex[:6]}"


def safe_division(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Safely divide two numbers, returning default if denominator is zero"""
    try:
        return numerator / denominator if denominator != 0 else default
    except (TypeError, ValueError):
        return default


def round_half_up(value: float, decimal_places: int = 0) -> float:
    """Round half away from zero, the way reporting dashboards expect"""
    quantum = Decimal(1).scaleb(-decimal_places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def mean(values: Iterable[float], decimal_places: int = 2) -> float:
    """Arithmetic mean rounded for reporting; 0 for an empty input"""
    values = list(values)
    if not values:
        return 0.0
    return round_half_up(sum(values) / len(values), decimal_places)


def parse_calendar_date(value: Any) -> Any:
    """Reduce ISO datetime strings and datetimes to a calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
        except ValueError:
            raise ValueError(f"Invalid date format: {value}. Expected date or ISO 8601 datetime string.") from None
    # Leave None and other types for pydantic to reject
    return value


def parse_time_of_day(value: Any) -> Any:
    """Parse 'HH:MM' / 'HH:MM:SS' strings or datetimes into a time of day"""
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        for fmt in ('%H:%M', '%H:%M:%S'):
            try:
                return datetime.strptime(value.strip(), fmt).time()
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00')).time()
        except ValueError:
            raise ValueError(f"Invalid time format: {value}. Expected HH:MM, HH:MM:SS or ISO 8601 datetime string.") from None
    return value


def format_time_range(start_time: time, end_time: time) -> str:
    """Format a time range as HH:MM-HH:MM"""
    return f"{start_time.strftime('%H:%M')}-{end_time.strftime('%H:%M')}"


def day_name(day_of_week: int) -> str:
    """Name of a Sunday-based (0=Sunday) day of week"""
    return DAY_NAMES[day_of_week]


def slugify(value: str) -> str:
    """Lowercase, hyphen-separated form of a label for identifiers"""
    return re.sub(r"[^a-z0-9]+", "-", (value or "").lower()).strip("-")


def unique_in_order(items: Iterable[T]) -> List[T]:
    """Deduplicate while keeping first-seen order"""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
