"""
Tests for performance monitoring utilities.

Tests performance tracking, statistics, and the timing of codec and
export operations.
"""

import logging
import time

import pytest

from services import CsvCodec, ExportManager, RowStore
from utils import performance
from utils.performance import (
    PerformanceMonitor,
    get_monitor,
    monitor_performance,
    measure_time,
)


def test_performance_monitor_record():
    """Test recording performance metrics."""
    monitor = PerformanceMonitor()

    monitor.record("decode", 0.5)
    monitor.record("decode", 0.3)
    monitor.record("decode", 0.7)

    stats = monitor.get_stats("decode")

    assert stats['count'] == 3
    assert stats['min'] == 0.3
    assert stats['max'] == 0.7
    assert stats['avg'] == pytest.approx(0.5, rel=0.01)
    assert stats['total'] == pytest.approx(1.5, rel=0.01)


def test_performance_monitor_empty_operation():
    """Test getting stats for an operation never recorded."""
    stats = PerformanceMonitor().get_stats("nonexistent")
    assert stats == {'min': 0, 'max': 0, 'avg': 0, 'total': 0, 'count': 0}


def test_performance_monitor_all_stats_and_clear():
    """Test monitoring several operations and clearing them."""
    monitor = PerformanceMonitor()
    monitor.record("op1", 0.1)
    monitor.record("op2", 0.5)
    monitor.record("op2", 0.6)

    all_stats = monitor.get_all_stats()
    assert set(all_stats) == {"op1", "op2"}
    assert all_stats['op2']['count'] == 2

    monitor.clear()
    assert monitor.get_all_stats() == {}


def test_global_monitor_instance():
    """Test that get_monitor returns the same instance."""
    assert get_monitor() is get_monitor()


def test_monitor_performance_decorator():
    """Test that decorated calls are recorded under the given name."""
    monitor = get_monitor()
    monitor.clear()

    @monitor_performance("sleepy")
    def sleepy():
        time.sleep(0.01)
        return "done"

    assert sleepy() == "done"
    assert sleepy.__name__ == "sleepy"
    stats = monitor.get_stats("sleepy")
    assert stats['count'] == 1
    assert stats['min'] >= 0.01


def test_monitor_performance_default_name():
    """Test that the function name is used when no name is given."""
    monitor = get_monitor()
    monitor.clear()

    @monitor_performance()
    def unnamed_operation():
        return 1

    unnamed_operation()
    assert monitor.get_stats("unnamed_operation")['count'] == 1


def test_recorded_even_when_raising():
    """Test that a failing call is still timed."""
    monitor = get_monitor()
    monitor.clear()

    @monitor_performance("failing_op")
    def failing_function():
        raise ValueError("Test error")

    with pytest.raises(ValueError):
        failing_function()

    with pytest.raises(ValueError):
        with measure_time("failing_context"):
            raise ValueError("Test error")

    assert monitor.get_stats("failing_op")['count'] == 1
    assert monitor.get_stats("failing_context")['count'] == 1


def test_slow_operation_warning(caplog, monkeypatch):
    """Test that operations over the threshold log a warning."""
    monkeypatch.setattr(performance, "SLOW_OPERATION_THRESHOLD", 0.0)
    caplog.set_level(logging.WARNING, logger="utils.performance")

    with measure_time("slow_context"):
        time.sleep(0.01)

    assert "Operation 'slow_context' took" in caplog.text


def test_codec_operations_are_monitored():
    """Test that decode and encode are timed."""
    monitor = get_monitor()
    monitor.clear()

    codec = CsvCodec()
    rows = codec.decode("sentence,abbreviation,long_form,domain,completed\nx,X,,,true\n")
    codec.encode(rows)

    assert monitor.get_stats("csv_decode")['count'] == 1
    assert monitor.get_stats("csv_encode")['count'] == 1


def test_storage_save_is_monitored(storage):
    """Test that saving to storage is timed."""
    monitor = get_monitor()
    monitor.clear()

    store = RowStore()
    store.load("sentence,abbreviation,long_form,domain,completed\nx,X,,,true\n")
    ExportManager().save_to_storage(storage, "a.csv", store)

    assert monitor.get_stats("storage_save")['count'] == 1


def test_performance_log_stats(caplog):
    """Test logging of performance statistics."""
    caplog.set_level(logging.INFO, logger="utils.performance")

    monitor = PerformanceMonitor()
    monitor.record("csv_decode", 0.5)
    monitor.record("csv_decode", 0.3)
    monitor.log_stats()

    assert "Performance stats for 'csv_decode'" in caplog.text
    assert "count=2" in caplog.text


def test_durations_are_bounded(monkeypatch):
    """Test that only the most recent durations are kept per operation."""
    monkeypatch.setattr(performance, "MAX_SAMPLES", 3)
    monitor = PerformanceMonitor()

    for duration in [0.1, 0.2, 0.3, 0.4, 0.5]:
        monitor.record("csv_decode", duration)

    stats = monitor.get_stats("csv_decode")
    assert stats['count'] == 3
    assert stats['min'] == 0.3
    assert stats['max'] == 0.5


def test_save_logs_stats(storage, caplog):
    """Test that a save writes the timing summary to the log."""
    caplog.set_level(logging.INFO, logger="utils.performance")
    get_monitor().clear()

    store = RowStore()
    store.load("sentence,abbreviation,long_form,domain,completed\nx,X,,,true\n")
    ExportManager().save_to_storage(storage, "a.csv", store)

    assert "Performance stats for 'csv_decode': count=1" in caplog.text
    assert "Performance stats for 'storage_save': count=1" in caplog.text
