"""Pytest configuration and fixtures for integration tests."""

from collections.abc import AsyncGenerator

import httpx
import pytest

from src.client.api_client import TaskApiClient
from src.core.config import Settings
from src.core.db_client import Database
from src.main import create_app


@pytest.fixture
async def api_client(test_settings: Settings, database: Database) -> AsyncGenerator[TaskApiClient]:
    """TaskApiClient talking to the real app in-process over ASGI.

    ASGITransport does not run the lifespan, so the already initialized
    database is attached to the app state directly.
    """
    app = create_app(test_settings, database=database)
    app.state.db = database
    transport = httpx.ASGITransport(app=app)
    async with TaskApiClient("http://testserver", transport=transport) as client:
        yield client
