"""
Core business logic for the Shift Analytics Service

This module contains the analytics pipeline components:
- Coverage calculation and conflict detection for one day
- Metrics aggregation and period (range/week/month) roll-ups
- Workload analytics and recurring shift expansion
"""

from .aggregator import PeriodAggregator
from .conflicts import ConflictDetector
from .coverage import CoverageCalculator, coverage_percentage
from .datasource import InMemoryScheduleStore, ScheduleDataSource
from .engine import ScheduleEngine, coerce_records
from .metrics import MetricsAggregator
from .recurrence import generate_recurring_shifts
from .workload import WorkloadAnalyzer

__all__ = [
    "PeriodAggregator",
    "ConflictDetector",
    "CoverageCalculator",
    "coverage_percentage",
    "InMemoryScheduleStore",
    "ScheduleDataSource",
    "ScheduleEngine",
    "coerce_records",
    "MetricsAggregator",
    "generate_recurring_shifts",
    "WorkloadAnalyzer",
]
