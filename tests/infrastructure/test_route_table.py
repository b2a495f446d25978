"""Route Table - startup listing of registered routes."""

from fastapi import APIRouter, FastAPI

from versioned_api.config import Settings
from versioned_api.infrastructure.route_table import (
    RouteEntry, api_routes, build_route_table, format_route_table,
)
from versioned_api.main import create_app


def test_route_table_lists_api_routes_sorted():
    entries = build_route_table(create_app(Settings()))
    paths = [(e.method, e.path) for e in entries]

    assert ("GET", "/version") in paths
    assert ("GET", "/api/v1/users") in paths
    assert ("GET", "/api/v2/users") in paths
    assert ("GET", "/api/v2/users/{id}") in paths
    assert paths == sorted(paths, key=lambda p: (p[1], p[0]))


def test_route_table_omits_head():
    entries = build_route_table(create_app(Settings()))
    assert all(e.method != "HEAD" for e in entries)


def test_route_descriptions_from_docstrings():
    entries = build_route_table(create_app(Settings()))
    version = next(e for e in entries if e.path == "/version")
    assert version.description == "Return the api-version which was requested."


def test_route_table_lists_docs_endpoints():
    settings = Settings()
    paths = {e.path for e in build_route_table(create_app(settings))}
    assert settings.docs_json_path in paths
    assert settings.docs_ui_path in paths


def test_api_routes_come_from_recorded_routers():
    router = APIRouter(prefix="/things", tags=["api", "things"])

    @router.get("/{name}")
    async def get_thing(name: str):
        """Fetch a thing."""
        return {"name": name}

    app = FastAPI()
    app.include_router(router)
    app.state.routers = [router]

    routes = api_routes(app)
    assert [r.path for r in routes] == ["/things/{name}"]
    assert routes[0].tags == ["api", "things"]
    assert RouteEntry("GET", "/things/{name}", "Fetch a thing.") in build_route_table(app)


def test_app_without_recorded_routers_has_no_api_routes():
    assert api_routes(FastAPI()) == []


def test_format_aligns_columns():
    table = format_route_table([
        RouteEntry("GET", "/a", "first"),
        RouteEntry("DELETE", "/longer", ""),
    ])
    lines = table.splitlines()
    assert lines[0] == "GET     /a       first"
    assert lines[1] == "DELETE  /longer"


def test_format_empty_table():
    assert format_route_table([]) == "(no routes)"
