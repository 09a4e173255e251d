"""Configuration management for taskboard."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    sqlite_db_path: str = Field(default="data/tasks.db", description="Path to the SQLite database file")

    # HTTP Server Configuration
    host: str = Field(default="0.0.0.0", description="Interface the API server binds to")  # noqa: S104
    port: int = Field(default=3000, description="Port the API server listens on")
    cors_allow_origins: list[str] = Field(
        default=["*"], description="Origins allowed to call the API from a browser"
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")

    # Client Configuration
    api_base_url: str = Field(default="http://localhost:3000", description="Base URL the board client talks to")
    tasks_per_page: int = Field(default=2, ge=1, description="Tasks shown per page in each status column")


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_TIMEOUT_SECONDS: int = 30
    API_TASKS_PATH: str = "/tasks"

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_CREATED: int = 201
    HTTP_BAD_REQUEST: int = 400
    HTTP_NOT_FOUND: int = 404
    HTTP_SERVER_ERROR: int = 500

    # Task field constraints
    TITLE_MIN_LENGTH: int = 3
    TITLE_MAX_LENGTH: int = 100

    # Board presentation
    DESCRIPTION_LINE_WIDTH: int = 35  # Characters per wrapped description line on a card


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
