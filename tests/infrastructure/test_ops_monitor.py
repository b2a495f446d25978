"""Ops Monitor - counters, sampling windows and the background task."""

import asyncio
import logging

from versioned_api.core.domain_types import MonitorEvent
from versioned_api.infrastructure.ops_monitor import OpsMonitor


def test_sample_reports_request_counters():
    monitor = OpsMonitor()
    monitor.record(200, 10.0)
    monitor.record(200, 30.0)
    monitor.record(404, 2.0)

    stats = monitor.sample()
    assert stats["requests"] == 3
    assert stats["status_codes"] == {200: 2, 404: 1}
    assert stats["response_time_avg_ms"] == 14.0
    assert stats["response_time_max_ms"] == 30.0
    assert stats["max_rss_bytes"] > 0
    assert "rss_bytes" not in stats
    assert stats["uptime_s"] >= 0


def test_sample_resets_response_time_window_only():
    monitor = OpsMonitor()
    monitor.record(200, 5.0)
    monitor.sample()

    stats = monitor.sample()
    assert stats["requests"] == 1
    assert stats["response_time_avg_ms"] == 0.0
    assert stats["response_time_max_ms"] == 0.0


def test_emit_logs_ops_event(caplog):
    caplog.set_level(logging.INFO)
    OpsMonitor().emit()
    ops = [r for r in caplog.records if getattr(r, "event", None) == MonitorEvent.OPS]
    assert len(ops) == 1
    assert ops[0].requests == 0


async def test_background_task_emits_until_stopped(caplog):
    caplog.set_level(logging.INFO)
    monitor = OpsMonitor(interval_ms=10)
    monitor.start()
    monitor.start()  # second start is a no-op
    await asyncio.sleep(0.08)
    await monitor.stop()

    assert not monitor.running
    ops = [r for r in caplog.records if getattr(r, "event", None) == MonitorEvent.OPS]
    assert len(ops) >= 2


async def test_stop_without_start_is_noop():
    await OpsMonitor().stop()
