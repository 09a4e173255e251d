"""Pytest configuration and fixtures for unit tests."""

import pytest

from src.services.task_service import TaskService
from tests.unit.mocks import FakeTaskApi, InMemoryDatabase


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDatabase for each test."""
    return InMemoryDatabase()


@pytest.fixture
def task_service(in_memory_db):
    """TaskService wired to the in-memory database."""
    return TaskService(in_memory_db)


@pytest.fixture
def fake_api():
    """Provides an empty FakeTaskApi."""
    return FakeTaskApi()


@pytest.fixture
def sample_payload():
    """Returns a valid create payload."""
    return {"title": "Buy milk", "description": "2%"}
