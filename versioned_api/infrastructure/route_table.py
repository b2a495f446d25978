"""Route Table - lists every registered route at startup."""

import logging
from dataclasses import dataclass

from fastapi import FastAPI
from fastapi.routing import APIRoute
from starlette.routing import Route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteEntry:
    method: str
    path: str
    description: str = ""


def api_routes(app: FastAPI) -> list[APIRoute]:
    """APIRoutes of the routers recorded on app.state.routers.

    Router routes already carry the router prefix and tags, whether or not
    the FastAPI release flattens included routers into app.routes.
    """
    return [
        route
        for router in getattr(app.state, "routers", ())
        for route in router.routes
        if isinstance(route, APIRoute)
    ]


def _framework_routes(app: FastAPI) -> list[Route]:
    # openapi_url / docs_url endpoints added by FastAPI itself
    return [r for r in app.routes if isinstance(r, Route) and not isinstance(r, APIRoute)]


def build_route_table(app: FastAPI) -> list[RouteEntry]:
    """Collect (method, path, description) for each route, HEAD omitted."""
    entries = []
    for route in [*_framework_routes(app), *api_routes(app)]:
        if not route.methods:
            continue
        description = ""
        if isinstance(route, APIRoute):
            description = route.summary or (route.description or "").strip().split("\n")[0]
        for method in route.methods:
            if method == "HEAD":
                continue
            entries.append(RouteEntry(method, route.path, description))
    return sorted(entries, key=lambda e: (e.path, e.method))


def format_route_table(entries: list[RouteEntry]) -> str:
    if not entries:
        return "(no routes)"
    method_w = max(len(e.method) for e in entries)
    path_w = max(len(e.path) for e in entries)
    return "\n".join(
        f"{e.method.ljust(method_w)}  {e.path.ljust(path_w)}  {e.description}".rstrip()
        for e in entries
    )


def log_route_table(app: FastAPI) -> str:
    table = format_route_table(build_route_table(app))
    logger.info(f"Registered routes:\n{table}")
    return table
