"""Display helpers for task cards and columns."""

from datetime import datetime

from src.core.config import constants
from src.domain.task import TaskStatus


STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.PENDING: "Pendente",
    TaskStatus.IN_PROGRESS: "Em progresso",
    TaskStatus.COMPLETED: "Concluído",
}

EMPTY_COLUMN_TEXT = "Nenhuma tarefa encontrada"


def status_label(status: TaskStatus | str) -> str:
    """Localized column heading; unknown values are shown as-is."""
    try:
        return STATUS_LABELS[TaskStatus(status)]
    except ValueError:
        return str(status)


def format_created_date(created_at: datetime) -> str:
    """Format a creation timestamp as dd/mm/yyyy."""
    return created_at.strftime("%d/%m/%Y")


def wrap_description(description: str | None, width: int = constants.DESCRIPTION_LINE_WIDTH) -> list[str]:
    """Split a description into fixed-width lines for a card.

    Lines are cut every ``width`` characters regardless of word boundaries;
    existing line breaks also start a new line.
    """
    if not description:
        return []
    lines: list[str] = []
    for paragraph in description.splitlines():
        lines.extend(paragraph[i : i + width] for i in range(0, len(paragraph), width))
    return lines


def page_label(page: int, pages: int) -> str:
    return f"Página {page} de {pages}"
