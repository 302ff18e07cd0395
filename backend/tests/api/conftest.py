"""API test fixtures — FastAPI test clients over ASGITransport.

Invariants:
    - `client` swaps the repository for FakeSakeRepository (no database)
    - `db_client` keeps the real repository and points get_db at the seeded SQLite catalog
    - Dependency overrides are cleared after every test

Design Decisions:
    - raise_app_exceptions=False: Starlette re-raises unhandled errors after the
      500 response is sent; tests assert on that response instead
    - ASGITransport does not run the lifespan, so no PostgreSQL/Valkey is needed
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_sake_repository
from app.infrastructure.database import get_db
from app.main import app
from tests.fakes import FakeSakeRepository


@pytest.fixture
def fake_repository():
    return FakeSakeRepository()


@pytest.fixture
async def client(fake_repository):
    app.dependency_overrides[get_sake_repository] = lambda: fake_repository

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def db_client(catalog, test_session_factory):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
