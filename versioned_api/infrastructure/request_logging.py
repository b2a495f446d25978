"""Request Logging - one "response" event per request, fed into the ops monitor.

Invariants:
    - Logs the path as the client sent it, plus routed_path when versioning rewrote it
    - duration_ms measured around the whole downstream stack
    - Unhandled exceptions are logged as "error" events and re-raised
"""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from versioned_api.core.domain_types import MonitorEvent
from versioned_api.infrastructure.ops_monitor import OpsMonitor

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Starlette middleware reporting each completed request."""

    def __init__(self, app: ASGIApp, monitor: OpsMonitor | None = None):
        super().__init__(app)
        self.monitor = monitor

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        method = request.method
        path = request.url.path
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"{method} {path} raised",
                exc_info=True,
                extra={"event": MonitorEvent.ERROR, "method": method, "path": path},
            )
            raise
        duration_ms = round((time.perf_counter() - start) * 1000, 3)

        routed_path = request.scope.get("path")
        api_version = request.scope.get("state", {}).get("api_version")
        if self.monitor is not None:
            self.monitor.record(response.status_code, duration_ms)

        logger.info(
            f"{method} {path} {response.status_code} ({duration_ms}ms)",
            extra={
                "event": MonitorEvent.RESPONSE,
                "method": method,
                "path": path,
                "routed_path": routed_path if routed_path != path else None,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "api_version": api_version,
            },
        )
        return response
