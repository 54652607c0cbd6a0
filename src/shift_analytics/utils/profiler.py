"""
Performance profiler for analytics request monitoring
"""
import os
import statistics
import threading
import time
import logging
from collections import defaultdict
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Optional

import psutil

logger = logging.getLogger(__name__)

MAX_MEASUREMENTS = 100


class PerformanceProfiler:
    """Named timers, counters and process resource usage"""

    def __init__(self):
        self.timers = {}
        self.counters = defaultdict(int)
        self.measurements = defaultdict(list)
        self.lock = threading.Lock()
        self.start_time = time.time()

        try:
            self.process = psutil.Process(os.getpid())
        except psutil.Error:
            self.process = None

        logger.info("Performance profiler initialized")

    def start_timer(self, name: str):
        """Start a named timer"""
        with self.lock:
            self.timers[name] = {
                'start_time': time.time(),
                'start_cpu': time.process_time(),
                'start_memory': self._get_memory_usage()
            }

    def end_timer(self, name: str) -> float:
        """End a named timer and return duration in seconds"""
        end_time = time.time()
        end_cpu = time.process_time()
        end_memory = self._get_memory_usage()

        with self.lock:
            if name not in self.timers:
                logger.warning(f"Timer {name} was not started")
                return 0.0

            timer_data = self.timers.pop(name)
            duration = end_time - timer_data['start_time']

            self.measurements[name].append({
                'duration': duration,
                'cpu_time': end_cpu - timer_data['start_cpu'],
                'memory_delta': end_memory - timer_data['start_memory'],
                'timestamp': datetime.now()
            })
            if len(self.measurements[name]) > MAX_MEASUREMENTS:
                self.measurements[name] = self.measurements[name][-MAX_MEASUREMENTS:]

            return duration

    @contextmanager
    def timed(self, name: str):
        """Time the enclosed block under `name`"""
        self.start_timer(name)
        try:
            yield
        finally:
            self.end_timer(name)

    def increment_counter(self, name: str, value: int = 1):
        with self.lock:
            self.counters[name] += value

    def get_stats(self) -> Dict[str, Any]:
        """Get comprehensive performance statistics"""
        with self.lock:
            return {
                'uptime_seconds': time.time() - self.start_time,
                'active_timers': list(self.timers.keys()),
                'counters': dict(self.counters),
                'timer_stats': {
                    name: self._summarize(name) for name in self.measurements if self.measurements[name]
                },
                'current_system_state': self._get_current_system_state()
            }

    def _summarize(self, name: str) -> Optional[Dict[str, Any]]:
        measurements = self.measurements.get(name)
        if not measurements:
            return None

        durations = [m['duration'] for m in measurements]
        return {
            'count': len(measurements),
            'duration': {
                'mean': statistics.mean(durations),
                'median': statistics.median(durations),
                'min': min(durations),
                'max': max(durations),
                'stdev': statistics.stdev(durations) if len(durations) > 1 else 0
            },
            'cpu_time_total': sum(m['cpu_time'] for m in measurements),
            'last_execution': measurements[-1]['timestamp'].isoformat()
        }

    def _get_memory_usage(self) -> float:
        """Current resident memory in MB"""
        if self.process is None:
            return 0.0
        try:
            return self.process.memory_info().rss / 1024 / 1024
        except psutil.Error:
            return 0.0

    def _get_current_system_state(self) -> Dict[str, Any]:
        if self.process is None:
            return {}
        try:
            memory_info = self.process.memory_info()
            return {
                'memory_rss_mb': memory_info.rss / 1024 / 1024,
                'memory_vms_mb': memory_info.vms / 1024 / 1024,
                'cpu_percent': self.process.cpu_percent(),
                'system_memory_percent': psutil.virtual_memory().percent,
            }
        except psutil.Error as e:
            logger.warning(f"Failed to get system state: {e}")
            return {}


class AnalyticsProfiler(PerformanceProfiler):
    """Profiler that also tracks how many days each analysis covered"""

    def record_analysis(self, operation: str, days: int, duration: float):
        with self.lock:
            self.counters[f'{operation}_requests'] += 1
            self.counters['days_analyzed'] += days
            self.measurements[f'{operation}_days'].append({
                'duration': duration,
                'cpu_time': 0.0,
                'memory_delta': 0.0,
                'days': days,
                'timestamp': datetime.now()
            })
            if len(self.measurements[f'{operation}_days']) > MAX_MEASUREMENTS:
                self.measurements[f'{operation}_days'] = \
                    self.measurements[f'{operation}_days'][-MAX_MEASUREMENTS:]
