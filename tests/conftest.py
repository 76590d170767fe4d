"""
Shared fixtures.

Every test gets its own SQLite file under pytest's tmp_path, so tests never
share state and never touch the development database.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from shortener.core.setting import Settings
from shortener.db.session import Database
from shortener.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        BASE_URL=None,
        RATE_LIMIT_ENABLED=False,
        LOG_LEVEL="WARNING",
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.DATABASE_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_maker() as session:
        yield session


@pytest.fixture
def client(settings):
    app = create_app(settings)
    # Entering the client runs the startup handlers, which open the database
    with TestClient(app) as client:
        yield client
