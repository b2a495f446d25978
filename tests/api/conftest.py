"""API test fixtures - app built from fresh Settings + httpx test client.

Invariants:
    - Every test gets its own app instance (own ops monitor, own openapi cache)
    - Lifespan is not run by ASGITransport; lifespan tests enter it explicitly
"""

import pytest
from httpx import ASGITransport, AsyncClient

from versioned_api.config import Settings
from versioned_api.main import create_app


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
