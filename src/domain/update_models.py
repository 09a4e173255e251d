"""Update models for database operations."""

from pydantic import BaseModel

from src.domain.task import TaskStatus


class TaskUpdate(BaseModel):
    """Partial update for a task. Only fields that were sent are set."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None

    def changes(self) -> dict:
        """Column values for the fields the client actually sent."""
        data = self.model_dump(exclude_unset=True)
        if data.get("status") is not None:
            data["status"] = TaskStatus(data["status"]).value
        return data
