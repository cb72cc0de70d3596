"""
Shared fixtures for database and API tests.
"""
import pytest
import pytest_asyncio

from database import Database


MEMORY_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database with all tables created."""
    db = Database(MEMORY_URL)
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.close()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def api_client():
    """API client backed by its own in-memory database."""
    from fastapi.testclient import TestClient
    from api.main import create_app

    app = create_app(Database(MEMORY_URL), use_migrations=False)
    with TestClient(app) as client:
        yield client
