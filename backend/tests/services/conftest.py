"""Service test fixtures: fresh demo store + in-process API clients.

Invariants:
    - Every test gets a fresh DemoStore seeded with a fixed clock
    - get_store dependency overridden to use that store
    - api_client talks to the FastAPI app in-process (ASGITransport), no network

Design Decisions:
    - ASGITransport does not run the lifespan: the store comes only from the override
    - Fixed clock: seeded paidAt falls in a known month for revenue assertions
"""

import pytest
from httpx import ASGITransport, AsyncClient

from schooldesk.infrastructure.demo_store import DemoStore, get_store
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.main import app

from tests.services.demo_api import FIXED_NOW


@pytest.fixture
def store():
    return DemoStore(clock=lambda: FIXED_NOW)


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def api_client(store):
    """ApiClient wired to the demo app, as the resource hooks use it."""
    app.dependency_overrides[get_store] = lambda: store
    async with ApiClient(
        "http://test/api", transport=ASGITransport(app=app),
    ) as c:
        yield c
    app.dependency_overrides.clear()
