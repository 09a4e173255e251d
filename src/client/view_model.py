"""Kanban board view model.

Holds the last fetched task list, the search term and one page cursor per
status column. Every mutation goes to the API first and is followed by a full
re-fetch; the local list is never edited optimistically, so after a failed
request the board still shows the last successful fetch.
"""

import logging
from collections.abc import Callable
from enum import StrEnum

import httpx
from pydantic import BaseModel, Field

from src.client.api_client import TaskApiClient, TaskApiError
from src.client.board import (
    Direction,
    PageCursor,
    apply_filter,
    bucket_by_status,
    jump_to_page,
    new_cursors,
    paginate,
    step_page,
    total_pages,
)
from src.client.presentation import (
    EMPTY_COLUMN_TEXT,
    format_created_date,
    page_label,
    status_label,
    wrap_description,
)
from src.core.config import settings
from src.domain.task import Task, TaskStatus


logger = logging.getLogger(__name__)


class NotificationLevel(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """User-facing message raised by a board action."""

    level: NotificationLevel
    title: str
    text: str


class CardView(BaseModel):
    """Display-ready fields of one task card."""

    id: int
    title: str
    description_lines: list[str]
    created: str

    @classmethod
    def from_task(cls, task: Task) -> "CardView":
        return cls(
            id=task.id,
            title=task.title,
            description_lines=wrap_description(task.description),
            created=format_created_date(task.created_at),
        )


class ColumnView(BaseModel):
    """Everything a UI needs to draw one status column."""

    status: TaskStatus
    label: str
    tasks: list[Task] = Field(default_factory=list)
    page: int
    total_pages: int
    has_prev: bool
    has_next: bool

    @property
    def is_empty(self) -> bool:
        return not self.tasks

    @property
    def cards(self) -> list[CardView]:
        return [CardView.from_task(task) for task in self.tasks]

    @property
    def placeholder(self) -> str | None:
        """Text shown in place of cards when the page is empty."""
        return EMPTY_COLUMN_TEXT if self.is_empty else None

    @property
    def page_caption(self) -> str:
        return page_label(self.page, max(self.total_pages, 1))


class TaskBoard:
    """Client-side state for the kanban board."""

    def __init__(
        self,
        api: TaskApiClient,
        *,
        page_size: int | None = None,
        notify: Callable[[Notification], None] | None = None,
    ) -> None:
        self._api = api
        self.page_size = page_size or settings.tasks_per_page
        self._notify = notify
        self.tasks: list[Task] = []
        self.search_term = ""
        self.cursors: dict[TaskStatus, PageCursor] = new_cursors()
        self.notifications: list[Notification] = []
        self.loading = True
        self.error = False

    def _emit(self, level: NotificationLevel, title: str, text: str) -> None:
        notification = Notification(level=level, title=title, text=text)
        self.notifications.append(notification)
        if self._notify is not None:
            self._notify(notification)

    # Fetching

    async def load(self) -> None:
        """Initial fetch. Any failure other than "no tasks" marks the board as errored."""
        try:
            self.tasks = await self._api.list_tasks()
        except (TaskApiError, httpx.HTTPError) as e:
            logger.error("board_load_failed", extra={"error": str(e)})
            self.error = True
        finally:
            self.loading = False

    async def refresh(self) -> bool:
        """Re-fetch the task list, keeping the previous list on failure."""
        try:
            self.tasks = await self._api.list_tasks()
        except (TaskApiError, httpx.HTTPError) as e:
            logger.error("board_refresh_failed", extra={"error": str(e)})
            self._emit(NotificationLevel.ERROR, "Erro!", "Ocorreu um erro ao carregar as tarefas.")
            return False
        return True

    # Derived state

    def set_search_term(self, term: str) -> None:
        """Change the title filter. Page cursors are left as they are."""
        self.search_term = term

    @property
    def filtered_tasks(self) -> list[Task]:
        return apply_filter(self.tasks, self.search_term)

    def bucket(self, status: TaskStatus) -> list[Task]:
        return bucket_by_status(self.filtered_tasks)[status]

    def column(self, status: TaskStatus) -> ColumnView:
        bucket = self.bucket(status)
        page = self.cursors[status].page
        pages = total_pages(len(bucket), self.page_size)
        return ColumnView(
            status=status,
            label=status_label(status),
            tasks=paginate(bucket, page, self.page_size),
            page=page,
            total_pages=pages,
            has_prev=page > 1,
            has_next=page < pages,
        )

    def columns(self) -> list[ColumnView]:
        return [self.column(status) for status in TaskStatus]

    def change_page(self, status: TaskStatus, direction: Direction) -> int:
        """Step a column's page; out-of-range requests are ignored."""
        return step_page(self.cursors[status], direction, count=len(self.bucket(status)), page_size=self.page_size)

    def go_to_page(self, status: TaskStatus, page: int) -> int:
        return jump_to_page(self.cursors[status], page, count=len(self.bucket(status)), page_size=self.page_size)

    # Mutations

    async def create_task(self, title: str, description: str = "") -> bool:
        """Create a Pending task. An empty title is rejected without calling the API."""
        if not title:
            self._emit(NotificationLevel.ERROR, "Erro!", "O título da tarefa é obrigatório.")
            return False

        try:
            await self._api.create_task(title=title, description=description, status=TaskStatus.PENDING)
        except (TaskApiError, httpx.HTTPError) as e:
            logger.error("board_create_failed", extra={"error": str(e)})
            self._emit(NotificationLevel.ERROR, "Erro!", "Ocorreu um erro ao criar a tarefa.")
            return False

        self._emit(NotificationLevel.SUCCESS, "Criado!", "A tarefa foi criada.")
        await self.refresh()
        return True

    async def on_status_drop(self, task: Task, new_status: TaskStatus) -> bool:
        """Move a dropped card to ``new_status``.

        Dropping a card on its own column does nothing. Otherwise only the
        status is sent, and the board re-fetches once the API accepts it.

        Returns:
            True if the API accepted a status change
        """
        if new_status == task.status:
            return False

        try:
            await self._api.update_task(task.id, {"status": TaskStatus(new_status).value})
        except (TaskApiError, httpx.HTTPError) as e:
            logger.error("board_status_change_failed", extra={"task_id": task.id, "error": str(e)})
            self._emit(NotificationLevel.ERROR, "Erro!", "Ocorreu um erro ao atualizar a tarefa.")
            return False

        self._emit(NotificationLevel.SUCCESS, "Atualizado!", "A tarefa foi atualizada.")
        await self.refresh()
        return True

    async def edit_task(self, task_id: int, title: str, description: str) -> bool:
        """Replace a task's title and description."""
        try:
            await self._api.update_task(task_id, {"title": title, "description": description})
        except (TaskApiError, httpx.HTTPError) as e:
            logger.error("board_edit_failed", extra={"task_id": task_id, "error": str(e)})
            self._emit(NotificationLevel.ERROR, "Erro!", "Ocorreu um erro ao editar a tarefa.")
            return False

        self._emit(NotificationLevel.SUCCESS, "Salvo!", "A tarefa foi editada.")
        await self.refresh()
        return True

    async def delete_task(self, task_id: int) -> bool:
        try:
            await self._api.delete_task(task_id)
        except (TaskApiError, httpx.HTTPError) as e:
            logger.error("board_delete_failed", extra={"task_id": task_id, "error": str(e)})
            self._emit(NotificationLevel.ERROR, "Erro!", "Ocorreu um erro ao excluir a tarefa.")
            return False

        self._emit(NotificationLevel.SUCCESS, "Excluído!", "A tarefa foi excluída.")
        await self.refresh()
        return True
