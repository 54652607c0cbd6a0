"""
Utility functions and classes for the Shift Analytics Service

- Performance profiling and monitoring
- Custom exceptions for error handling
- Helper functions for rounding, parsing and formatting
"""

from .exceptions import (
    CLIENT_EXCEPTIONS,
    AnalyticsError,
    ConfigurationError,
    DataInconsistencyError,
    ResourceLimitError,
    ValidationError,
    create_error_response,
)
from .helpers import (
    day_name,
    format_time_range,
    generate_request_id,
    mean,
    parse_calendar_date,
    parse_time_of_day,
    round_half_up,
    safe_division,
    slugify,
    unique_in_order,
)
from .profiler import AnalyticsProfiler, PerformanceProfiler

__all__ = [
    "AnalyticsProfiler",
    "PerformanceProfiler",

    "AnalyticsError",
    "ValidationError",
    "ConfigurationError",
    "DataInconsistencyError",
    "ResourceLimitError",
    "CLIENT_EXCEPTIONS",
    "create_error_response",

    "day_name",
    "format_time_range",
    "generate_request_id",
    "mean",
    "parse_calendar_date",
    "parse_time_of_day",
    "round_half_up",
    "safe_division",
    "slugify",
    "unique_in_order",
]
