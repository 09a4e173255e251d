"""Pydantic models for creating records in database."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from src.domain.task import TaskStatus


class TaskCreate(BaseModel):
    """Validated payload for creating a task record."""

    title: str = Field(..., description="Task title, 3 to 100 characters")
    description: str | None = Field(default=None, description="Optional description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Initial lifecycle state")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Creation timestamp, assigned by the server",
    )

    def to_record(self) -> dict:
        """Column values for the tasks table."""
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
        }
