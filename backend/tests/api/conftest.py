"""API test fixtures — isolated app per test + httpx client over ASGI.

Invariants:
    - get_db dependency overridden to use the in-memory test DB
    - app.state.db patched so readiness probes hit the same engine
    - Lifespan is not run by ASGITransport; nothing connects to PostgreSQL

Design Decisions:
    - Each test builds its own app via create_app(settings): no shared global app
"""

import pytest
from httpx import ASGITransport, AsyncClient

from social.config import Settings
from social.infrastructure.database import DatabaseSessionManager, get_db
from social.main import create_app


@pytest.fixture
def settings():
    return Settings(
        service_name="social-test",
        db_addr="sqlite+aiosqlite:///:memory:",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app, test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
