"""Pytest configuration and fixtures."""
import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient
from motor.motor_asyncio import AsyncIOMotorClient

os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret")

from tandem.config import settings  # noqa: E402
from tandem.database import database, ensure_indexes  # noqa: E402
from tandem.main import app  # noqa: E402


@pytest_asyncio.fixture
async def mock_db():
    """
    An in-memory MongoDB database for concept tests.

    Carries the same unique indexes as the real database.
    """
    client = AsyncMongoMockClient()
    db = client[f"{settings.mongodb_db_name}_test"]
    await ensure_indexes(db)
    return db


@pytest_asyncio.fixture
async def app_client():
    """
    Create a test client with a clean test database.

    This fixture:
    - Creates a test database connection with the unique indexes
    - Yields an async HTTP client for testing
    - Cleans up the test database after each test
    """
    test_client = AsyncIOMotorClient(settings.mongodb_url)
    test_db_name = f"{settings.mongodb_db_name}_test"
    test_db = test_client[test_db_name]
    await ensure_indexes(test_db)

    # Override the database dependency
    original_db = database.db
    database.db = test_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    # Cleanup: drop test database
    await test_client.drop_database(test_db_name)

    database.db = original_db
    test_client.close()


@pytest.fixture
def login(app_client):
    """
    Register a user, log in and return bearer auth headers.

    Usage:
        headers = await login("alice")
    """

    async def _login(username: str, password: str = "password123") -> dict:
        await app_client.post("/users", json={"username": username, "password": password})
        response = await app_client.post(
            "/login", json={"username": username, "password": password}
        )
        token = response.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _login
