"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.core.config import Settings
from src.core.db_client import Database
from src.core.schema import init_db
from src.main import create_app


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a throwaway SQLite database file."""
    return tmp_path / "tasks.db"


@pytest.fixture
def test_settings(db_path: Path) -> Settings:
    """Override settings for testing."""
    return Settings(
        sqlite_db_path=str(db_path),
        logfire_token=None,
        environment="test",
        api_base_url="http://testserver",
        tasks_per_page=2,
    )


@pytest.fixture
async def database(db_path: Path) -> AsyncGenerator[Database]:
    """Connected database with the schema created, closed after the test."""
    db = Database(db_path)
    await init_db(db)
    yield db
    await db.close()


@pytest.fixture
def test_client(test_settings: Settings) -> Generator[TestClient]:
    """Provide FastAPI test client with the lifespan running against a temp database."""
    app = create_app(test_settings)
    with TestClient(app) as client:
        yield client
