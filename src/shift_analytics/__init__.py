"""
Shift Analytics Service

Schedule coverage and conflict analytics for HR shift planning.

Features:
- Role coverage per shift requirement with gaps, overlaps and utilization
- Double booking, time-off, availability and role mismatch detection
- Daily, range, weekly and monthly aggregation with bounded concurrency
- Coverage optimization suggestions and conflict breakdowns
- Employee workload analytics and recurring shift expansion
- FastAPI REST API

Example:
    Direct usage with the engine:

    ```python
    from src.shift_analytics import ScheduleEngine

    engine = ScheduleEngine()
    day = engine.analyze_day(date(2024, 1, 15), shifts, employees, time_off_requests)
    print(day.metrics.conflict_count)
    ```

    Range analytics over in-memory records:

    ```python
    from src.shift_analytics import InMemoryScheduleStore, PeriodAggregator

    aggregator = PeriodAggregator()
    store = InMemoryScheduleStore(shifts, employees, time_off_requests)
    result = await aggregator.analyze_range(store, start, end, max_concurrency=4)
    ```
"""

__version__ = "1.0.0"
__license__ = "MIT"
__description__ = "Schedule coverage and conflict analytics for HR shift planning"

from .config import settings
from .core import (
    ConflictDetector,
    CoverageCalculator,
    InMemoryScheduleStore,
    MetricsAggregator,
    PeriodAggregator,
    ScheduleDataSource,
    ScheduleEngine,
    WorkloadAnalyzer,
    generate_recurring_shifts,
)
from .utils.exceptions import (
    AnalyticsError,
    ConfigurationError,
    DataInconsistencyError,
    ResourceLimitError,
    ValidationError,
)

__all__ = [
    "settings",
    "ConflictDetector",
    "CoverageCalculator",
    "InMemoryScheduleStore",
    "MetricsAggregator",
    "PeriodAggregator",
    "ScheduleDataSource",
    "ScheduleEngine",
    "WorkloadAnalyzer",
    "generate_recurring_shifts",
    "AnalyticsError",
    "ConfigurationError",
    "DataInconsistencyError",
    "ResourceLimitError",
    "ValidationError",
]
