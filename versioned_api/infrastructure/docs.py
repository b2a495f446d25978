"""API Documentation - builds the OpenAPI document served at docs_json_path.

Invariants:
    - Only APIRoutes tagged "api" are documented, taken from app.state.routers
    - Paths under base_path are documented relative to it; servers carries base_path
    - Operation tags come from path grouping or from route tags (minus "api")
    - The document is built once per app and cached on app.openapi_schema

Design Decisions:
    - FastAPI's get_openapi does the schema introspection; this module only
      selects routes and reshapes the result
"""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from fastapi.routing import APIRoute

from versioned_api.config import Settings
from versioned_api.core.domain_types import DOCUMENTED_TAG, DocsGrouping, ReplaceIn
from versioned_api.core.openapi_transform import (
    dereference, group_name_by_path, replace_in_path, strip_base_path,
)
from versioned_api.infrastructure.route_table import api_routes

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def documented_routes(app: FastAPI) -> list[APIRoute]:
    return [
        route for route in api_routes(app)
        if route.include_in_schema
        and DOCUMENTED_TAG in (route.tags or [])
    ]


def _operation_tags(route: APIRoute, settings: Settings) -> list[str]:
    if settings.docs_grouping == DocsGrouping.TAGS:
        return [str(t) for t in route.tags if t != DOCUMENTED_TAG]
    return [group_name_by_path(
        route.path_format,
        settings.docs_path_prefix_size,
        settings.docs_path_replacements,
    )]


def build_openapi(app: FastAPI, settings: Settings) -> dict[str, Any]:
    """Generate and reshape the OpenAPI document for app."""
    routes = documented_routes(app)
    document = get_openapi(
        title=settings.docs_title,
        version=settings.docs_version,
        description=settings.docs_description,
        routes=routes,
    )

    raw_paths = document.get("paths", {})
    paths: dict[str, Any] = {}
    group_names: set[str] = set()
    for route in routes:
        item = raw_paths.get(route.path_format)
        if item is None:
            continue
        tags = _operation_tags(route, settings)
        group_names.update(tags)
        for method in route.methods or ():
            operation = item.get(method.lower())
            if operation is not None:
                operation["tags"] = tags

        documented = strip_base_path(route.path_format, settings.base_path)
        documented = replace_in_path(
            documented, ReplaceIn.ENDPOINTS, settings.docs_path_replacements,
        )
        target = paths.setdefault(documented, {})
        target.update({m: op for m, op in item.items() if m in HTTP_METHODS or m == "parameters"})

    document["paths"] = paths
    document["tags"] = [{"name": name} for name in sorted(group_names)]
    if settings.base_path != "/":
        document["servers"] = [{"url": settings.base_path.rstrip("/")}]
    if settings.docs_security_definitions:
        components = document.setdefault("components", {})
        components["securitySchemes"] = dict(settings.docs_security_definitions)

    if settings.docs_dereference:
        document = dereference(document)
    return document


def install_docs(app: FastAPI, settings: Settings) -> None:
    """Replace app.openapi with the reshaping builder (cached)."""

    def openapi() -> dict[str, Any]:
        if app.openapi_schema is None:
            app.openapi_schema = build_openapi(app, settings)
            logger.debug(f"Built API documentation with {len(app.openapi_schema['paths'])} paths")
        return app.openapi_schema

    app.openapi_schema = None
    app.openapi = openapi
