"""
FastAPI dependency injection for the analytics API
"""
import logging
from functools import lru_cache
from typing import Optional

from ..config import Settings, settings
from ..core.aggregator import PeriodAggregator
from ..core.engine import ScheduleEngine
from ..core.workload import WorkloadAnalyzer
from ..utils.profiler import AnalyticsProfiler

logger = logging.getLogger(__name__)

# Global instances - initialized once
_engine_instance: Optional[ScheduleEngine] = None
_aggregator_instance: Optional[PeriodAggregator] = None
_workload_instance: Optional[WorkloadAnalyzer] = None
_profiler_instance: Optional[AnalyticsProfiler] = None


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)"""
    return settings


def get_engine() -> ScheduleEngine:
    """Get the single-day engine instance (singleton)"""
    global _engine_instance

    if _engine_instance is None:
        _engine_instance = ScheduleEngine()
        logger.info("Schedule engine initialized")

    return _engine_instance


def get_aggregator() -> PeriodAggregator:
    """Get the period aggregator, sharing the engine singleton"""
    global _aggregator_instance

    if _aggregator_instance is None:
        _aggregator_instance = PeriodAggregator(engine=get_engine())
        logger.info("Period aggregator initialized")

    return _aggregator_instance


def get_workload_analyzer() -> WorkloadAnalyzer:
    global _workload_instance

    if _workload_instance is None:
        _workload_instance = WorkloadAnalyzer()

    return _workload_instance


def get_profiler() -> AnalyticsProfiler:
    """Get the performance profiler instance (singleton)"""
    global _profiler_instance

    if _profiler_instance is None:
        _profiler_instance = AnalyticsProfiler()

    return _profiler_instance
