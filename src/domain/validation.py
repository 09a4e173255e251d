"""Input-shape validation for task create and update payloads.

Each check walks the fields in a fixed order (title, description, status) and
collects every violation, so a client sees all problems with a request at once.
Nothing here touches storage.
"""

import re
from enum import StrEnum
from typing import Any

from src.core.config import constants
from src.domain.create_models import TaskCreate
from src.domain.status import canonical_statuses, is_canonical_status
from src.domain.update_models import TaskUpdate


MUTABLE_FIELDS = ("title", "description", "status")

# Titles are single-line text. SQLite length() also stops counting at NUL.
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class Operation(StrEnum):
    """Which payload shape is being validated."""

    CREATE = "create"
    UPDATE = "update"


class PayloadValidationError(ValueError):
    """Raised when a payload violates one or more field constraints."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


def _check_title(payload: dict[str, Any], *, required: bool) -> list[str]:
    title = payload.get("title")
    if title is None:
        return ["title is required"] if required else []
    if not isinstance(title, str):
        return ["title must be a string"]
    if _CONTROL_CHARS.search(title):
        return ["title must not contain control characters"]
    if len(title) < constants.TITLE_MIN_LENGTH:
        return [f"title must be at least {constants.TITLE_MIN_LENGTH} characters long"]
    if len(title) > constants.TITLE_MAX_LENGTH:
        return [f"title must be at most {constants.TITLE_MAX_LENGTH} characters long"]
    return []


def _check_description(payload: dict[str, Any]) -> list[str]:
    description = payload.get("description")
    if description is None or isinstance(description, str):
        return []
    return ["description must be a string"]


def _check_status(payload: dict[str, Any]) -> list[str]:
    status = payload.get("status")
    if status is None:
        return []
    if not isinstance(status, str):
        return ["status must be a string"]
    if not is_canonical_status(status):
        return [f"status must be one of: {', '.join(canonical_statuses())} (got {status!r})"]
    return []


def _require_object(payload: Any) -> list[str]:
    return [] if isinstance(payload, dict) else ["payload must be a JSON object"]


def check_create_payload(payload: Any) -> list[str]:
    """Return every constraint a create payload violates (empty when valid)."""
    if errors := _require_object(payload):
        return errors
    return [*_check_title(payload, required=True), *_check_description(payload), *_check_status(payload)]


def check_update_payload(payload: Any) -> list[str]:
    """Return every constraint an update payload violates (empty when valid)."""
    if errors := _require_object(payload):
        return errors
    return [*_check_title(payload, required=False), *_check_description(payload), *_check_status(payload)]


def _present_fields(payload: dict[str, Any]) -> dict[str, Any]:
    """Keep the mutable fields that were sent.

    ``null`` means "not sent" for title and status; for description it clears
    the value. Server-owned keys such as ``id`` and ``createdAt`` are dropped.
    """
    fields: dict[str, Any] = {}
    for name in MUTABLE_FIELDS:
        if name not in payload:
            continue
        if payload[name] is None and name != "description":
            continue
        fields[name] = payload[name]
    return fields


def validate_task_payload(payload: Any, operation: Operation) -> TaskCreate | TaskUpdate:
    """Check a payload and build the matching DTO.

    Args:
        payload: Decoded JSON body, with status already normalized
        operation: Whether this is a create or an update

    Returns:
        TaskCreate for creates, TaskUpdate (only sent fields set) for updates

    Raises:
        PayloadValidationError: With every violation, if any check fails
    """
    checker = check_create_payload if operation is Operation.CREATE else check_update_payload
    errors = checker(payload)
    if errors:
        raise PayloadValidationError(errors)

    fields = _present_fields(payload)
    if operation is Operation.CREATE:
        return TaskCreate(**fields)
    return TaskUpdate(**fields)
