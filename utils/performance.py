"""
Timing and logging helpers.

CSV decode/encode and storage saves are timed through monitor_performance
and measure_time; durations are kept per operation name in a process-wide
PerformanceMonitor. configure_logging sets up the root logger once at start.
"""

import time
from collections import deque
import functools
from typing import Callable, Any, Deque, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# Seconds after which a timed operation is logged as slow
SLOW_OPERATION_THRESHOLD = 1.0

# Durations kept per operation; older ones are dropped
MAX_SAMPLES = 500

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

EMPTY_STATS = {'min': 0, 'max': 0, 'avg': 0, 'total': 0, 'count': 0}


def configure_logging(level: str = "INFO"):
    """
    Configure root logging for the application.

    Args:
        level: Log level name (DEBUG/INFO/WARNING/ERROR)
    """
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


class PerformanceMonitor:
    """
    Collects durations per operation name.

    Attributes:
        metrics: Most recent durations in seconds (at most MAX_SAMPLES),
            keyed by operation name
    """

    def __init__(self):
        self.metrics: Dict[str, Deque[float]] = {}

    def record(self, operation: str, duration: float):
        """
        Store one duration.

        Args:
            operation: Operation name, e.g. "csv_decode"
            duration: Seconds taken
        """
        self.metrics.setdefault(operation, deque(maxlen=MAX_SAMPLES)).append(duration)

    def get_stats(self, operation: str) -> Dict[str, float]:
        """
        Summarize the durations of one operation.

        Returns:
            min, max, avg, total and count; all zero for an unknown operation
        """
        durations = self.metrics.get(operation)
        if not durations:
            return dict(EMPTY_STATS)

        total = sum(durations)
        return {
            'min': min(durations),
            'max': max(durations),
            'avg': total / len(durations),
            'total': total,
            'count': len(durations)
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        return {operation: self.get_stats(operation) for operation in self.metrics}

    def clear(self):
        """Forget every recorded duration."""
        self.metrics.clear()

    def log_stats(self, operation: Optional[str] = None):
        """
        Write a summary line per operation to the log.

        Args:
            operation: Only this operation; all recorded operations when None
        """
        if operation:
            all_stats = {operation: self.get_stats(operation)}
        else:
            all_stats = self.get_all_stats()
        for op, stats in all_stats.items():
            logger.info(
                f"Performance stats for '{op}': count={stats['count']} "
                f"avg={stats['avg']:.4f}s max={stats['max']:.4f}s total={stats['total']:.4f}s"
            )


_monitor = PerformanceMonitor()


def get_monitor() -> PerformanceMonitor:
    """Process-wide monitor shared by the decorator and measure_time."""
    return _monitor


def _record(name: str, duration: float):
    _monitor.record(name, duration)
    if duration > SLOW_OPERATION_THRESHOLD:
        logger.warning(
            f"Operation '{name}' took {duration:.2f}s "
            f"(threshold: {SLOW_OPERATION_THRESHOLD}s)"
        )


def monitor_performance(operation_name: Optional[str] = None):
    """
    Time every call of the decorated function, including failing ones.

    Args:
        operation_name: Name the durations are stored under; the function
            name when omitted

    Example:
        @monitor_performance("csv_decode")
        def decode(self, text):
            ...
    """
    def decorator(func: Callable) -> Callable:
        name = operation_name or func.__name__

        @functools.wraps(func)
        def timed(*args, **kwargs) -> Any:
            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _record(name, time.perf_counter() - started)

        return timed
    return decorator


class measure_time:
    """
    Time a block of code under an operation name.

    Example:
        with measure_time("storage_save"):
            storage.upload(name, content)
    """

    def __init__(self, name: str):
        self.name = name
        self.started: Optional[float] = None

    def __enter__(self):
        self.started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _record(self.name, time.perf_counter() - self.started)
        return False
