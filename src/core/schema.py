"""SQLite schema management (code-first approach)."""

import logging

from src.core.config import constants
from src.core.db_client import Database
from src.domain.task import TaskStatus


logger = logging.getLogger(__name__)


# Central list of all collections in the schema
COLLECTIONS = [
    "tasks",
]


def _status_check() -> str:
    allowed = ", ".join(f"'{status.value}'" for status in TaskStatus)
    return f"CHECK (status IN ({allowed}))"


def get_schema_sql() -> str:
    """Return the DDL for every collection.

    Status is constrained to the canonical members so an un-normalized value
    can never be stored, even by a caller that bypasses validation.
    """
    return f"""
CREATE TABLE IF NOT EXISTS tasks (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       VARCHAR({constants.TITLE_MAX_LENGTH}) NOT NULL
                CHECK (length(title) BETWEEN {constants.TITLE_MIN_LENGTH} AND {constants.TITLE_MAX_LENGTH}),
    description TEXT,
    status      TEXT NOT NULL DEFAULT '{TaskStatus.PENDING.value}' {_status_check()},
    created_at  TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);
"""


async def init_db(database: Database) -> None:
    """Create any missing tables (idempotent)."""
    logger.info("Starting schema sync...", extra={"db_path": str(database.path)})
    await database.connect()
    await database.execute_script(get_schema_sql())
    logger.info("Schema sync complete", extra={"collections": COLLECTIONS})
