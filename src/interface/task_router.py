"""REST endpoints for tasks."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.core.config import constants
from src.core.errors import ErrorCategory, build_error_response, error_code_for
from src.core.logging import log_with_context
from src.models.service_models import NotFound, PersistenceError, Success, ValidationFailed
from src.services.task_service import TaskService


logger = logging.getLogger(__name__)

router = APIRouter(prefix=constants.API_TASKS_PATH, tags=["tasks"])

DELETE_CONFIRMATION = "Task deleted successfully"

_STATUS_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.NOT_FOUND: constants.HTTP_NOT_FOUND,
    ErrorCategory.VALIDATION_FAILED: constants.HTTP_BAD_REQUEST,
    ErrorCategory.PERSISTENCE_ERROR: constants.HTTP_SERVER_ERROR,
}


def get_task_service(request: Request) -> TaskService:
    """Build a TaskService bound to the application's database handle."""
    return TaskService(request.app.state.db)


def _error(status_code: int, category: ErrorCategory, **kwargs: Any) -> JSONResponse:
    body = build_error_response(category, **kwargs)
    log_with_context(logger, "info", "task_request_failed", status_code=status_code, error_code=error_code_for(category))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _render_failure(outcome: NotFound | ValidationFailed | PersistenceError, *, action: str) -> JSONResponse:
    """Map a failed service outcome onto its HTTP response by its error category."""
    status_code = _STATUS_CODES[outcome.category]
    if isinstance(outcome, ValidationFailed):
        return _error(status_code, outcome.category, errors=outcome.messages)
    if isinstance(outcome, PersistenceError):
        return _error(status_code, outcome.category, detail=outcome.detail, action=action)
    return _error(status_code, outcome.category)


async def _read_json_body(request: Request) -> Any:
    """Decode the request body.

    Raises:
        ValueError: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON payload: {e.msg}"
        raise ValueError(msg) from e


@router.get("")
async def list_tasks(service: TaskService = Depends(get_task_service)) -> JSONResponse:
    """Return every task, or 404 when there are none."""
    outcome = await service.list_all()
    if isinstance(outcome, Success):
        if not outcome.value:
            return _error(constants.HTTP_NOT_FOUND, ErrorCategory.EMPTY_COLLECTION)
        return JSONResponse(status_code=constants.HTTP_OK, content=[task.to_json() for task in outcome.value])
    return _render_failure(outcome, action="fetching tasks")


@router.get("/{task_id}")
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)) -> JSONResponse:
    """Return a single task."""
    outcome = await service.get_by_id(task_id)
    if isinstance(outcome, Success):
        return JSONResponse(status_code=constants.HTTP_OK, content=outcome.value.to_json())
    return _render_failure(outcome, action="fetching task")


@router.post("")
async def create_task(request: Request, service: TaskService = Depends(get_task_service)) -> JSONResponse:
    """Create a task from ``{title, description?, status?}``."""
    try:
        payload = await _read_json_body(request)
    except ValueError as e:
        return _error(constants.HTTP_BAD_REQUEST, ErrorCategory.INVALID_REQUEST, errors=[str(e)])

    outcome = await service.create(payload)
    if isinstance(outcome, Success):
        return JSONResponse(status_code=constants.HTTP_CREATED, content=outcome.value.to_json())
    return _render_failure(outcome, action="creating task")


@router.put("/{task_id}")
async def update_task(task_id: int, request: Request, service: TaskService = Depends(get_task_service)) -> JSONResponse:
    """Apply a partial update from ``{title?, description?, status?}``."""
    try:
        payload = await _read_json_body(request)
    except ValueError as e:
        return _error(constants.HTTP_BAD_REQUEST, ErrorCategory.INVALID_REQUEST, errors=[str(e)])

    outcome = await service.update(task_id, payload)
    if isinstance(outcome, Success):
        return JSONResponse(status_code=constants.HTTP_OK, content=outcome.value.to_json())
    return _render_failure(outcome, action="updating task")


@router.delete("/{task_id}")
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)) -> JSONResponse:
    """Delete a task permanently."""
    outcome = await service.delete(task_id)
    if isinstance(outcome, Success):
        return JSONResponse(status_code=constants.HTTP_OK, content={"message": DELETE_CONFIRMATION})
    return _render_failure(outcome, action="deleting task")
