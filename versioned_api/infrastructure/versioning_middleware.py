"""Versioning Middleware - resolves the API version and rewrites unversioned paths.

Invariants:
    - Runs before routing: rewrites scope["path"] so the router sees the versioned path
    - Rewrites only when a registered route fully matches the candidate path
    - Resolved version is stored in scope["state"]["api_version"] (request.state.api_version)
    - Invalid versions short-circuit with the 400 ApiError envelope

Design Decisions:
    - Pure ASGI class instead of BaseHTTPMiddleware: the path must change before
      the router runs and no response body buffering is needed
"""

import logging

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.routing import Match
from starlette.types import ASGIApp, Receive, Scope, Send

from versioned_api.core.errors import ErrorContext, InvalidApiVersionError
from versioned_api.core.versioning import (
    VersionOptions, extract_requested_version, resolve_version,
)

logger = logging.getLogger(__name__)


def route_exists(scope: Scope, path: str) -> bool:
    """True when the app's router has a route fully matching path + method."""
    app = scope.get("app")
    router = getattr(app, "router", None)
    if router is None:
        return False
    probe = {**scope, "path": path}
    for route in router.routes:
        match, _ = route.matches(probe)
        if match == Match.FULL:
            return True
    return False


class VersioningMiddleware:
    """ASGI middleware applying version resolution to every HTTP request."""

    def __init__(self, app: ASGIApp, options: VersionOptions):
        self.app = app
        self.options = options

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        headers = Headers(scope=scope)
        requested = extract_requested_version(headers, self.options.vendor_name)
        try:
            resolution = resolve_version(path, requested, self.options)
        except InvalidApiVersionError as exc:
            exc.context = ErrorContext(path=path)
            logger.warning(
                f"Rejected api version {requested!r} on {path}",
                extra={"error_code": exc.code, "path": path},
            )
            response = JSONResponse(
                status_code=exc.http_status, content=exc.to_response(),
            )
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})["api_version"] = resolution.version

        candidate = resolution.candidate_path
        if candidate and route_exists(scope, candidate):
            scope["path"] = candidate
            scope["raw_path"] = candidate.encode("utf-8")
            logger.debug(f"Routed {path} -> {candidate}")

        await self.app(scope, receive, send)
