"""Error taxonomy and response bodies for the task API."""

from enum import Enum

from pydantic import BaseModel, Field


class ErrorCategory(Enum):
    """Categories of failures the task API reports."""

    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    EMPTY_COLLECTION = "empty_collection"
    PERSISTENCE_ERROR = "persistence_error"
    INVALID_REQUEST = "invalid_request"


class ErrorCode:
    """Error codes for specific error conditions."""

    ERR_VALIDATION_FAILED = "ERR_VALIDATION_FAILED"
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_NO_TASKS = "ERR_NO_TASKS"
    ERR_PERSISTENCE = "ERR_PERSISTENCE"
    ERR_INVALID_REQUEST = "ERR_INVALID_REQUEST"


# User-facing messages per category. Persistence messages depend on the
# operation, so they are built by persistence_message().
ERROR_MESSAGES: dict[ErrorCategory, str] = {
    ErrorCategory.VALIDATION_FAILED: "Validation failed",
    ErrorCategory.NOT_FOUND: "Task not found",
    ErrorCategory.EMPTY_COLLECTION: "No tasks found",
    ErrorCategory.INVALID_REQUEST: "Validation failed",
}

_ERROR_CODES: dict[ErrorCategory, str] = {
    ErrorCategory.VALIDATION_FAILED: ErrorCode.ERR_VALIDATION_FAILED,
    ErrorCategory.NOT_FOUND: ErrorCode.ERR_TASK_NOT_FOUND,
    ErrorCategory.EMPTY_COLLECTION: ErrorCode.ERR_NO_TASKS,
    ErrorCategory.PERSISTENCE_ERROR: ErrorCode.ERR_PERSISTENCE,
    ErrorCategory.INVALID_REQUEST: ErrorCode.ERR_INVALID_REQUEST,
}


class ErrorResponse(BaseModel):
    """JSON body returned for every non-2xx task API response."""

    message: str = Field(..., description="Human-readable summary")
    errors: list[str] | None = Field(default=None, description="Every violated constraint, in order")
    error: str | None = Field(default=None, description="Underlying storage error detail")


def error_code_for(category: ErrorCategory) -> str:
    """Return the stable error code for a category."""
    return _ERROR_CODES[category]


def persistence_message(action: str) -> str:
    """Build the message for a storage failure during ``action``.

    Args:
        action: Verb phrase such as "fetching tasks" or "creating task"

    Returns:
        Message like "Error creating task"
    """
    return f"Error {action}"


def build_error_response(
    category: ErrorCategory,
    *,
    errors: list[str] | None = None,
    detail: str | None = None,
    action: str | None = None,
) -> ErrorResponse:
    """Build the fixed-shape error body for a failure category.

    Args:
        category: What kind of failure occurred
        errors: Validation messages (validation and invalid request only)
        detail: Storage error detail (persistence errors only)
        action: Verb phrase for persistence errors, e.g. "updating task"

    Returns:
        ErrorResponse ready for serialization
    """
    if category is ErrorCategory.PERSISTENCE_ERROR:
        return ErrorResponse(message=persistence_message(action or "processing request"), error=detail)
    return ErrorResponse(message=ERROR_MESSAGES[category], errors=errors)
