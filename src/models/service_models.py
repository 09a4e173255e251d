"""Outcome types returned by the task lifecycle service.

Every service operation returns exactly one of these, so the HTTP layer can
map results to responses without catching exceptions.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from src.core.errors import ErrorCategory


T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Operation completed; ``value`` holds its result."""

    value: T


@dataclass(frozen=True)
class NotFound:
    """The referenced task does not exist."""

    task_id: int

    category = ErrorCategory.NOT_FOUND


@dataclass(frozen=True)
class ValidationFailed:
    """The payload was rejected; ``messages`` lists every violation."""

    messages: list[str] = field(default_factory=list)

    category = ErrorCategory.VALIDATION_FAILED


@dataclass(frozen=True)
class PersistenceError:
    """The storage layer failed; ``detail`` carries the underlying message."""

    detail: str

    category = ErrorCategory.PERSISTENCE_ERROR


TaskOutcome = Success[T] | NotFound | ValidationFailed | PersistenceError
