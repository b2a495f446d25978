"""Versioned Users API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Plugins (versioning, monitoring, docs, route table) registered before any
      request is served; a registration failure aborts app construction
    - Global error handlers map ApiError → structured JSON responses
    - Plugin lifecycle hooks run from the lifespan context manager
    - app.state.routers lists the included APIRouters; docs and the route
      table read routes from them, not from app.routes

Design Decisions:
    - Docs served at /swagger.json and /documentation (configurable), redoc disabled
    - create_app(settings) for tests; module-level `app` for uvicorn
"""

import inspect
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from versioned_api.api.error_handlers import register_error_handlers
from versioned_api.api.routes import users_v1, users_v2, version
from versioned_api.config import Settings, get_settings
from versioned_api.infrastructure.observability import setup_logging
from versioned_api.infrastructure.plugins import register_plugins

logger = logging.getLogger(__name__)

API_ROUTERS = (version.router, users_v2.router, users_v1.router)


async def _run_hooks(hooks) -> None:
    for hook in hooks:
        result = hook()
        if inspect.isawaitable(result):
            await result


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with routes, plugins and error handlers."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format, settings.log_events)
        await _run_hooks(app.state.startup_hooks)
        yield
        await _run_hooks(reversed(app.state.shutdown_hooks))
        logger.info("Versioned API shutting down")

    app = FastAPI(
        title=settings.docs_title,
        version=settings.docs_version,
        description=settings.docs_description,
        openapi_url=settings.docs_json_path,
        docs_url=settings.docs_ui_path,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routes - explicit registration
    for router in API_ROUTERS:
        app.include_router(router)
    app.state.routers = list(API_ROUTERS)

    register_plugins(app, settings)
    register_error_handlers(app)
    return app


app = create_app()
