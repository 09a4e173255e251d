"""Status vocabulary: maps free-text and localized status names to canonical states.

Normalization is lenient and total: known synonyms become a canonical
``TaskStatus`` value, anything else is handed back unchanged. The strict gate is
``is_canonical_status``, applied later by validation, so a typo surfaces as a
validation error instead of silently becoming a default.
"""

import unicodedata
from typing import Any

from src.domain.task import TaskStatus


_SYNONYMS: dict[TaskStatus, tuple[str, ...]] = {
    TaskStatus.PENDING: ("Pending", "Pendente"),
    TaskStatus.IN_PROGRESS: ("InProgress", "In Progress", "Em Andamento", "Em progresso"),
    TaskStatus.COMPLETED: (
        "Completed",
        "Concluido",
        "Concluído",
        "Finalizado",
        "Finalizada",
        "Completo",
        "Completa",
    ),
}


def _fold(text: str) -> str:
    """Lowercase, strip accents and collapse whitespace."""
    decomposed = unicodedata.normalize("NFKD", text)
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(without_marks.casefold().split())


_LOOKUP: dict[str, TaskStatus] = {
    _fold(synonym): status for status, synonyms in _SYNONYMS.items() for synonym in synonyms
}


def normalize_status(raw: Any) -> Any:
    """Map a known status spelling to its canonical value.

    Args:
        raw: Status as received from a client

    Returns:
        The canonical status string, or ``raw`` unchanged when it is not a
        known spelling (including non-string input)
    """
    if not isinstance(raw, str):
        return raw
    status = _LOOKUP.get(_fold(raw))
    return status.value if status is not None else raw


def is_canonical_status(value: Any) -> bool:
    """Return True only for the exact canonical spellings."""
    return isinstance(value, str) and value in {status.value for status in TaskStatus}


def canonical_statuses() -> list[str]:
    return [status.value for status in TaskStatus]
