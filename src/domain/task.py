"""Task domain model and lifecycle states."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(StrEnum):
    """Task lifecycle state."""

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


class Task(BaseModel):
    """Persisted task record."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Unique task ID from database")
    title: str = Field(..., description="Task title")
    description: str | None = Field(default=None, description="Free-form task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current lifecycle state")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")

    def to_json(self) -> dict:
        """Serialize with the public field names (``createdAt``)."""
        return self.model_dump(mode="json", by_alias=True)
