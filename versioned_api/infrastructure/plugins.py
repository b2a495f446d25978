"""Plugin Registration - attaches cross-cutting layers to the app in a fixed order.

Invariants:
    - Plugins register in list order; the first failure aborts registration
    - Every failure surfaces as PluginRegistrationError naming the plugin
    - Plugins add lifecycle work through app.state.startup_hooks / shutdown_hooks,
      which the lifespan runs (startup in order, shutdown in reverse)

Design Decisions:
    - Middleware added later wraps earlier middleware, so request logging
      (registered after versioning) observes version rejections too
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from fastapi import FastAPI

from versioned_api.config import Settings
from versioned_api.core.errors import PluginRegistrationError
from versioned_api.infrastructure.docs import install_docs
from versioned_api.infrastructure.ops_monitor import OpsMonitor
from versioned_api.infrastructure.request_logging import RequestLoggingMiddleware
from versioned_api.infrastructure.route_table import log_route_table
from versioned_api.infrastructure.versioning_middleware import VersioningMiddleware

logger = logging.getLogger(__name__)

Hook = Callable[[], Awaitable[None] | None]


@dataclass(frozen=True)
class Plugin:
    name: str
    register: Callable[[FastAPI, Settings], None]


def _register_versioning(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(VersioningMiddleware, options=settings.version_options())


def _register_monitoring(app: FastAPI, settings: Settings) -> None:
    monitor = OpsMonitor(settings.ops_interval_ms)
    app.state.ops_monitor = monitor
    app.add_middleware(RequestLoggingMiddleware, monitor=monitor)
    app.state.startup_hooks.append(monitor.start)
    app.state.shutdown_hooks.append(monitor.stop)


def _register_docs(app: FastAPI, settings: Settings) -> None:
    install_docs(app, settings)


def _register_route_table(app: FastAPI, settings: Settings) -> None:
    app.state.startup_hooks.append(lambda: log_route_table(app))


DEFAULT_PLUGINS: tuple[Plugin, ...] = (
    Plugin("versioning", _register_versioning),
    Plugin("monitoring", _register_monitoring),
    Plugin("docs", _register_docs),
    Plugin("route_table", _register_route_table),
)


def register_plugins(
    app: FastAPI,
    settings: Settings,
    plugins: tuple[Plugin, ...] | list[Plugin] = DEFAULT_PLUGINS,
) -> list[str]:
    """Register plugins on app; returns the registered plugin names."""
    if not hasattr(app.state, "startup_hooks"):
        app.state.startup_hooks = []
        app.state.shutdown_hooks = []

    registered = []
    for plugin in plugins:
        try:
            plugin.register(app, settings)
        except Exception as e:
            logger.critical(
                f"Plugin registration failed: {plugin.name}",
                extra={"plugin": plugin.name, "error_code": "PLUGIN_REGISTRATION_FAILED"},
            )
            raise PluginRegistrationError(plugin.name, e) from e
        registered.append(plugin.name)
        logger.debug(f"Registered plugin {plugin.name}")
    app.state.plugins = registered
    return registered
