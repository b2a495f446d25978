"""Ops Monitor - periodic process and traffic samples emitted as "ops" log events.

Invariants:
    - record() is the only writer of traffic counters; sample() resets the
      per-interval response-time window but never the totals
    - start() is idempotent; stop() cancels and awaits the sampling task
    - A failing sample is logged and the loop keeps running
"""

import asyncio
import logging
import os
import resource
import sys
import time
from collections import Counter
from typing import Any

from versioned_api.core.domain_types import MonitorEvent

logger = logging.getLogger(__name__)


def _max_rss_bytes() -> int:
    # peak resident size; ru_maxrss is KiB on Linux, bytes on macOS
    rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    return rss if sys.platform == "darwin" else rss * 1024


def _load() -> list[float]:
    try:
        return [round(v, 2) for v in os.getloadavg()]
    except OSError:
        return []


class OpsMonitor:
    """Collects request counters and samples them every interval."""

    def __init__(self, interval_ms: int = 1000):
        self.interval = interval_ms / 1000
        self._started_at = time.monotonic()
        self._total = 0
        self._status_codes: Counter[int] = Counter()
        self._window: list[float] = []
        self._event_loop_delay_ms = 0.0
        self._task: asyncio.Task | None = None

    def record(self, status_code: int, duration_ms: float) -> None:
        """Count one finished response."""
        self._total += 1
        self._status_codes[status_code] += 1
        self._window.append(duration_ms)

    def sample(self) -> dict[str, Any]:
        """Snapshot current stats and start a new response-time window."""
        window, self._window = self._window, []
        return {
            "uptime_s": round(time.monotonic() - self._started_at, 3),
            "max_rss_bytes": _max_rss_bytes(),
            "load": _load(),
            "requests": self._total,
            "status_codes": dict(self._status_codes),
            "response_time_avg_ms": round(sum(window) / len(window), 3) if window else 0.0,
            "response_time_max_ms": round(max(window), 3) if window else 0.0,
            "event_loop_delay_ms": round(self._event_loop_delay_ms, 3),
        }

    def emit(self) -> dict[str, Any]:
        stats = self.sample()
        logger.info("ops", extra={"event": MonitorEvent.OPS, **stats})
        return stats

    async def _run(self) -> None:
        while True:
            before = time.monotonic()
            await asyncio.sleep(self.interval)
            lag = (time.monotonic() - before - self.interval) * 1000
            self._event_loop_delay_ms = max(lag, 0.0)
            try:
                self.emit()
            except Exception as e:
                logger.error(f"Ops sample failed: {e}", exc_info=True)

    def start(self) -> None:
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self._run(), name="ops-monitor")
        logger.debug(f"Ops monitor started (interval={self.interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug("Ops monitor stopped")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
