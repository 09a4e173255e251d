"""HTTP client for the task API using httpx."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from src.core.config import constants, settings
from src.domain.task import Task, TaskStatus


logger = logging.getLogger(__name__)

T = TypeVar("T")

TASKS_PATH = constants.API_TASKS_PATH


class TaskApiError(Exception):
    """The task API answered with a non-success status."""

    def __init__(self, status_code: int, message: str, errors: list[str] | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(f"{status_code}: {message}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == constants.HTTP_NOT_FOUND


def _raise_for_response(response: httpx.Response) -> None:
    """Raise TaskApiError for any non-2xx response."""
    if response.is_success:
        return

    message = response.reason_phrase or "Request failed"
    errors: list[str] = []
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message", message)
        errors = list(body.get("errors") or [])
        if body.get("error"):
            errors.append(str(body["error"]))

    logger.warning(
        "task_api_error",
        extra={"status_code": response.status_code, "url": str(response.request.url), "api_message": message},
    )
    raise TaskApiError(response.status_code, message, errors)


def _decode(response: httpx.Response, build: Callable[[Any], T]) -> T:
    """Parse a success body with ``build``.

    Raises:
        TaskApiError: If the body is not JSON or does not have the expected shape
    """
    try:
        return build(response.json())
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning(
            "task_api_bad_body", extra={"status_code": response.status_code, "url": str(response.request.url)}
        )
        msg = "Unexpected response body"
        raise TaskApiError(response.status_code, msg, [str(e)]) from e


class TaskApiClient:
    """Async wrapper around the ``/tasks`` endpoints.

    Requests are sent once; there are no retries and no cancellation.
    Transport failures propagate as ``httpx.HTTPError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = constants.API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        root = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=root,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_tasks(self) -> list[Task]:
        """Fetch every task. The API's 404 for an empty store becomes an empty list."""
        response = await self._client.get(TASKS_PATH)
        if response.status_code == constants.HTTP_NOT_FOUND:
            return []
        _raise_for_response(response)
        return _decode(response, lambda body: [Task.model_validate(item) for item in body])

    async def get_task(self, task_id: int) -> Task:
        response = await self._client.get(f"{TASKS_PATH}/{task_id}")
        _raise_for_response(response)
        return _decode(response, Task.model_validate)

    async def create_task(
        self,
        *,
        title: str,
        description: str | None = None,
        status: TaskStatus | str = TaskStatus.PENDING,
    ) -> Task:
        """Create a task and return the stored record."""
        payload: dict[str, Any] = {"title": title, "description": description, "status": str(status)}
        response = await self._client.post(TASKS_PATH, json=payload)
        _raise_for_response(response)
        return _decode(response, Task.model_validate)

    async def update_task(self, task_id: int, changes: dict[str, Any]) -> Task:
        """Send a partial update; only keys present in ``changes`` are modified."""
        response = await self._client.put(f"{TASKS_PATH}/{task_id}", json=changes)
        _raise_for_response(response)
        return _decode(response, Task.model_validate)

    async def delete_task(self, task_id: int) -> str:
        """Delete a task and return the API's confirmation message."""
        response = await self._client.delete(f"{TASKS_PATH}/{task_id}")
        _raise_for_response(response)
        return _decode(response, lambda body: body.get("message", ""))
