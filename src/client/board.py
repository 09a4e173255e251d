"""Pure functions deriving the kanban columns from a flat task list.

Nothing here performs I/O: filtering, bucketing and pagination are plain
functions over lists so they can be tested without a server.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from src.domain.task import Task, TaskStatus


Direction = Literal["next", "prev"]


@dataclass
class PageCursor:
    """Current page of one status column (1-indexed)."""

    page: int = 1


def new_cursors() -> dict[TaskStatus, PageCursor]:
    """One cursor per status, each starting on page 1."""
    return {status: PageCursor() for status in TaskStatus}


def apply_filter(tasks: Iterable[Task], term: str) -> list[Task]:
    """Keep tasks whose title contains ``term``, ignoring case.

    An empty term keeps everything.
    """
    if not term:
        return list(tasks)
    needle = term.casefold()
    return [task for task in tasks if needle in task.title.casefold()]


def bucket_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    """Partition tasks by status, preserving their order within each bucket."""
    buckets: dict[TaskStatus, list[Task]] = {status: [] for status in TaskStatus}
    for task in tasks:
        buckets[task.status].append(task)
    return buckets


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        msg = f"page_size must be positive, got {page_size}"
        raise ValueError(msg)
    return math.ceil(count / page_size)


def paginate(bucket: list[Task], page: int, page_size: int) -> list[Task]:
    """Return the slice of ``bucket`` shown on ``page`` (1-indexed)."""
    if page_size < 1:
        msg = f"page_size must be positive, got {page_size}"
        raise ValueError(msg)
    start = (page - 1) * page_size
    if start < 0:
        return []
    return bucket[start : start + page_size]


def jump_to_page(cursor: PageCursor, page: int, *, count: int, page_size: int) -> int:
    """Move ``cursor`` to ``page`` if it lies within [1, total pages].

    Requests outside that range leave the cursor where it is.

    Returns:
        The cursor's page after the request
    """
    if 1 <= page <= total_pages(count, page_size):
        cursor.page = page
    return cursor.page


def step_page(cursor: PageCursor, direction: Direction, *, count: int, page_size: int) -> int:
    """Move ``cursor`` one page forward or back, staying within range.

    Returns:
        The cursor's page after the request
    """
    offset = 1 if direction == "next" else -1
    return jump_to_page(cursor, cursor.page + offset, count=count, page_size=page_size)
