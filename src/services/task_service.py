"""Task lifecycle service: validate, normalize and persist tasks."""

import logging
from typing import Any

from src.core.db_client import Database, DatabaseError, RecordNotFoundError
from src.core.logging import span
from src.domain.status import normalize_status
from src.domain.task import Task
from src.domain.validation import Operation, PayloadValidationError, validate_task_payload
from src.models.service_models import NotFound, PersistenceError, Success, TaskOutcome, ValidationFailed


logger = logging.getLogger(__name__)

COLLECTION = "tasks"


def normalize_payload_status(payload: Any) -> Any:
    """Return a copy of ``payload`` with its status mapped to the canonical spelling.

    Non-object payloads and payloads without a status come back unchanged.
    """
    if not isinstance(payload, dict) or payload.get("status") is None:
        return payload
    return {**payload, "status": normalize_status(payload["status"])}


class TaskService:
    """CRUD operations on tasks.

    Every method returns a TaskOutcome and never raises for expected failures:
    unknown ids become NotFound, bad payloads ValidationFailed, storage errors
    PersistenceError. Storage errors are not retried.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    async def _fetch(self, task_id: int) -> Task:
        record = await self._db.get_record(collection=COLLECTION, record_id=task_id)
        return Task.model_validate(record)

    async def list_all(self) -> TaskOutcome[list[Task]]:
        """Return every task, oldest first. An empty list is still a Success."""
        with span("task_service.list_all"):
            try:
                records = await self._db.list_records(collection=COLLECTION, sort="id ASC")
            except DatabaseError as e:
                logger.error("list_tasks_failed", extra={"error": str(e)})
                return PersistenceError(detail=str(e))

            return Success([Task.model_validate(record) for record in records])

    async def get_by_id(self, task_id: int) -> TaskOutcome[Task]:
        """Return a single task."""
        with span("task_service.get_by_id"):
            try:
                task = await self._fetch(task_id)
            except RecordNotFoundError:
                logger.info("task_not_found", extra={"task_id": task_id})
                return NotFound(task_id=task_id)
            except DatabaseError as e:
                logger.error("get_task_failed", extra={"task_id": task_id, "error": str(e)})
                return PersistenceError(detail=str(e))

            return Success(task)

    async def create(self, payload: Any) -> TaskOutcome[Task]:
        """Create a task.

        Steps: normalize status -> validate -> insert with server-assigned
        id and creation time. Status defaults to Pending when omitted.
        """
        with span("task_service.create"):
            try:
                dto = validate_task_payload(normalize_payload_status(payload), Operation.CREATE)
            except PayloadValidationError as e:
                logger.info("create_task_rejected", extra={"errors": e.messages})
                return ValidationFailed(messages=e.messages)

            try:
                record = await self._db.create_record(collection=COLLECTION, data=dto.to_record())
            except DatabaseError as e:
                logger.error("create_task_failed", extra={"error": str(e)})
                return PersistenceError(detail=str(e))

            task = Task.model_validate(record)
            logger.info("task_created", extra={"task_id": task.id, "status": task.status.value})
            return Success(task)

    async def update(self, task_id: int, payload: Any) -> TaskOutcome[Task]:
        """Apply a partial update to a task.

        The task must exist before the payload is looked at, so an invalid
        payload for an unknown id reports NotFound. Fields left out of the
        payload keep their stored values; an empty payload writes nothing.
        """
        with span("task_service.update"):
            try:
                existing = await self._fetch(task_id)
            except RecordNotFoundError:
                logger.info("task_not_found", extra={"task_id": task_id})
                return NotFound(task_id=task_id)
            except DatabaseError as e:
                logger.error("update_task_failed", extra={"task_id": task_id, "error": str(e)})
                return PersistenceError(detail=str(e))

            try:
                dto = validate_task_payload(normalize_payload_status(payload), Operation.UPDATE)
            except PayloadValidationError as e:
                logger.info("update_task_rejected", extra={"task_id": task_id, "errors": e.messages})
                return ValidationFailed(messages=e.messages)

            changes = dto.changes()
            if not changes:
                return Success(existing)

            # Read-then-write without a version check: concurrent updates are last-write-wins.
            try:
                record = await self._db.update_record(collection=COLLECTION, record_id=task_id, data=changes)
            except RecordNotFoundError:
                logger.info("task_deleted_during_update", extra={"task_id": task_id})
                return NotFound(task_id=task_id)
            except DatabaseError as e:
                logger.error("update_task_failed", extra={"task_id": task_id, "error": str(e)})
                return PersistenceError(detail=str(e))

            logger.info("task_updated", extra={"task_id": task_id, "fields": sorted(changes)})
            return Success(Task.model_validate(record))

    async def delete(self, task_id: int) -> TaskOutcome[int]:
        """Delete a task permanently. Returns the deleted id on success."""
        with span("task_service.delete"):
            try:
                # Lookup first: an unknown id is NotFound before any write is attempted.
                await self._db.get_record(collection=COLLECTION, record_id=task_id)
                await self._db.delete_record(collection=COLLECTION, record_id=task_id)
            except RecordNotFoundError:
                logger.info("task_not_found", extra={"task_id": task_id})
                return NotFound(task_id=task_id)
            except DatabaseError as e:
                logger.error("delete_task_failed", extra={"task_id": task_id, "error": str(e)})
                return PersistenceError(detail=str(e))

            logger.info("task_deleted", extra={"task_id": task_id})
            return Success(task_id)
