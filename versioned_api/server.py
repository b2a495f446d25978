"""Server Bootstrap - builds the app and serves it with uvicorn.

Invariants:
    - Any failure while registering plugins or starting the server is logged
      critically and terminates the process with exit status 1
    - uvicorn's own startup exits (SystemExit) surface as ServerStartupError
    - "Server running at" is logged only once the listening socket is bound
    - Ctrl-C is a clean shutdown (exit status 0)

Usage:
    python -m versioned_api.server
"""

import asyncio
import logging
import sys

from uvicorn import Config, Server

from versioned_api.config import Settings, get_settings
from versioned_api.core.errors import ApiError, ServerStartupError
from versioned_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


class VersionedApiServer(Server):
    """uvicorn Server announcing the bound address after a successful startup."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(f"Server running at: http://{self.config.host}:{self.config.port}")


async def serve(settings: Settings) -> None:
    """Create the app and run uvicorn until it stops."""
    from versioned_api.main import create_app

    app = create_app(settings)
    config = Config(
        app=app, host=settings.host, port=settings.port,
        log_level=settings.log_level.lower(), log_config=None,
    )
    server = VersionedApiServer(config)
    address = f"{settings.host}:{settings.port}"
    try:
        await server.serve()
    except SystemExit as e:
        raise ServerStartupError(f"uvicorn exited with status {e.code} on {address}") from e
    if not server.started:
        raise ServerStartupError(f"uvicorn did not start on {address}")


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_events)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        return 0
    except ApiError as e:
        logger.critical(e.message, extra={"error_code": e.code})
        return 1
    except Exception as e:
        logger.critical(f"Server failed to start: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
