"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from src.core.config import Settings, constants


def test_defaults() -> None:
    """Test defaults match the documented deployment."""
    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.sqlite_db_path == "data/tasks.db"
    assert settings.tasks_per_page == 2
    assert settings.cors_allow_origins == ["*"]


def test_environment_variables_override_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test values are read from the environment, case-insensitively."""
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("sqlite_db_path", "/tmp/other.db")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.sqlite_db_path == "/tmp/other.db"


def test_tasks_per_page_must_be_positive() -> None:
    """Test a page size of zero is rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, tasks_per_page=0)


def test_title_limits() -> None:
    """Test the title bounds used by validation and the schema."""
    assert constants.TITLE_MIN_LENGTH == 3
    assert constants.TITLE_MAX_LENGTH == 100
