"""Structured Logging - JSON formatter, event filter and setup for console reporting.

Invariants:
    - All logs include timestamp, level, logger name, event and message
    - Extra fields (method, path, status_code, ops stats...) surfaced when present
    - Records without an `event` attribute are "log" events
    - setup_logging installs exactly one console handler, however often it is called

Design Decisions:
    - EventFilter mirrors a reporter selection: {event: "*" | [tags]}; an event
      absent from the selection is dropped from the console only, other
      handlers (e.g. pytest caplog) still see it
"""

import logging
import json
from datetime import datetime, timezone
from typing import Iterable, Mapping

from versioned_api.core.domain_types import MonitorEvent

_HANDLER_NAME = "versioned_api.console"

_EXTRA_KEYS = (
    "method", "path", "routed_path", "status_code", "duration_ms",
    "api_version", "error_code", "plugin", "tags",
    "uptime_s", "max_rss_bytes", "load", "requests", "status_codes",
    "response_time_avg_ms", "response_time_max_ms", "event_loop_delay_ms",
)


def event_of(record: logging.LogRecord) -> str:
    event = getattr(record, "event", None)
    if isinstance(event, MonitorEvent):
        return event.value
    return event or MonitorEvent.LOG.value


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": event_of(record),
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class EventFilter(logging.Filter):
    """Pass only the events (and tags) selected for a reporter."""

    def __init__(self, events: Mapping[str, str | Iterable[str]]):
        super().__init__()
        self._events: dict[str, str | frozenset[str]] = {
            name: sel if sel == "*" else frozenset(sel)
            for name, sel in events.items()
        }

    def filter(self, record: logging.LogRecord) -> bool:
        selection = self._events.get(event_of(record))
        if selection is None:
            return False
        if selection == "*":
            return True
        tags = getattr(record, "tags", None) or ()
        return bool(selection.intersection(tags))


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    events: Mapping[str, str | Iterable[str]] | None = None,
):
    """Configure the console reporter for the application."""
    root = logging.root
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    if events is not None:
        handler.addFilter(EventFilter(events))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
