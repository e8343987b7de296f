"""API test fixtures — FastAPI app over an in-memory database.

Invariants:
    - get_db dependency overridden to use the per-test SQLite engine
    - get_broadcaster overridden with a fresh MessageBroadcaster per test
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - httpx AsyncClient over ASGITransport: lifespan does not run, so every
      process-wide resource the routes need is injected here
"""

import pytest
from httpx import ASGITransport, AsyncClient

import msgboard.infrastructure.database as db_module
from msgboard.infrastructure.database import DatabaseSessionManager, get_db
from msgboard.infrastructure.notifier import MessageBroadcaster, get_broadcaster
from msgboard.main import app


@pytest.fixture
def broadcaster():
    return MessageBroadcaster(queue_size=10)


@pytest.fixture
async def client(test_engine, test_session_factory, broadcaster):
    """FastAPI test client with DB and broadcaster dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
