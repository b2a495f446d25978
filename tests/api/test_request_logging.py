"""Request Logging + Lifespan - response events, ops counters, startup/shutdown hooks.

Invariants:
    - Every request produces exactly one "response" event
    - Rejected versions are still logged (logging wraps versioning)
    - Lifespan starts/stops the ops monitor and logs the route table
    - The lifespan never announces the server address (no socket is bound yet)
"""

import logging

from versioned_api.core.domain_types import MonitorEvent


def _response_events(caplog):
    return [r for r in caplog.records if getattr(r, "event", None) == MonitorEvent.RESPONSE]


async def test_response_event_logged_with_routing_details(client, caplog):
    caplog.set_level(logging.INFO)
    await client.get("/api/users", headers={"api-version": "1"})

    events = _response_events(caplog)
    assert len(events) == 1
    record = events[0]
    assert record.method == "GET"
    assert record.path == "/api/users"
    assert record.routed_path == "/api/v1/users"
    assert record.status_code == 200
    assert record.api_version == 1
    assert record.duration_ms >= 0


async def test_unrewritten_request_has_no_routed_path(client, caplog):
    caplog.set_level(logging.INFO)
    await client.get("/api/v2/users")
    assert _response_events(caplog)[0].routed_path is None


async def test_rejected_version_is_logged(client, caplog):
    caplog.set_level(logging.INFO)
    await client.get("/version", headers={"api-version": "9"})
    events = _response_events(caplog)
    assert len(events) == 1
    assert events[0].status_code == 400


async def test_requests_feed_ops_monitor(app, client):
    await client.get("/api/v1/users")
    await client.get("/version", headers={"api-version": "9"})
    stats = app.state.ops_monitor.sample()
    assert stats["requests"] == 2
    assert stats["status_codes"] == {200: 1, 400: 1}


async def test_plugins_registered_in_order(app):
    assert app.state.plugins == ["versioning", "monitoring", "docs", "route_table"]


async def test_lifespan_runs_plugin_hooks(app, caplog):
    caplog.set_level(logging.INFO)
    monitor = app.state.ops_monitor
    async with app.router.lifespan_context(app):
        assert monitor.running
    assert not monitor.running

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Registered routes:") and "/api/v2/users/{id}" in m for m in messages)
    assert not any(m.startswith("Server running at") for m in messages)
