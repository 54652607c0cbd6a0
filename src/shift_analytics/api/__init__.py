"""
API module for the Shift Analytics Service

- Route handlers for analytics, schedule and shift endpoints
- Dependency injection for engine components
"""

from .dependencies import (
    get_aggregator,
    get_engine,
    get_profiler,
    get_settings,
    get_workload_analyzer,
)

__all__ = [
    "get_aggregator",
    "get_engine",
    "get_profiler",
    "get_settings",
    "get_workload_analyzer",
]
