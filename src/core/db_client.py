"""SQLite database client wrapper with CRUD operations."""

import json
import logging
import re
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import aiosqlite


logger = logging.getLogger(__name__)


class DatabaseError(RuntimeError):
    """Raised when the storage layer fails."""


class RecordNotFoundError(KeyError):
    """Raised when a record with the requested id does not exist."""


def _validate_collection_name(collection: str) -> None:
    """Validate that a collection name contains only alphanumeric characters and underscores."""
    if not re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", collection):
        msg = f"Invalid collection name: {collection}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


SQLITE_INTEGER_MIN = -(2**63)
SQLITE_INTEGER_MAX = 2**63 - 1


def _require_storable_id(collection: str, record_id: int) -> None:
    """Ids outside SQLite's 64-bit INTEGER range cannot name a stored row."""
    if not SQLITE_INTEGER_MIN <= record_id <= SQLITE_INTEGER_MAX:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)


def _to_column_value(val: Any) -> Any:
    """Convert a Python value into something SQLite can bind."""
    if isinstance(val, Enum):
        return val.value
    if isinstance(val, datetime):
        return val.isoformat()
    if isinstance(val, dict | list):
        return json.dumps(val)
    return val


def _row_to_record(cursor: aiosqlite.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    columns = [description[0] for description in cursor.description]
    return dict(zip(columns, row, strict=True))


class Database:
    """Owner of a single aiosqlite connection.

    Constructed once at process start and handed to the services that need it.
    ``connect()`` is idempotent so the first caller initializes the connection;
    ``close()`` releases it at shutdown.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def path(self) -> Path:
        return self._db_path

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        """Open the connection if it is not open yet."""
        if self._conn is not None:
            return

        try:
            if str(self._db_path) != ":memory:":
                self._db_path.parent.mkdir(parents=True, exist_ok=True)

            conn = await aiosqlite.connect(str(self._db_path))
            await conn.execute("PRAGMA foreign_keys = ON")
            if str(self._db_path) != ":memory:":
                await conn.execute("PRAGMA journal_mode = WAL")
        except (OSError, aiosqlite.Error) as e:
            logger.error("database_connect_failed", extra={"db_path": str(self._db_path), "error": str(e)})
            msg = f"Failed to open database at {self._db_path}: {e}"
            raise DatabaseError(msg) from e

        self._conn = conn
        logger.info("Created new SQLite connection", extra={"db_path": str(self._db_path)})

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._conn is None:
            return

        conn, self._conn = self._conn, None
        try:
            await conn.close()
            logger.info("Closed SQLite connection", extra={"db_path": str(self._db_path)})
        except aiosqlite.Error as e:
            logger.warning("Error closing SQLite connection", extra={"db_path": str(self._db_path), "error": str(e)})

    @property
    def connection(self) -> aiosqlite.Connection:
        """The open connection.

        Raises:
            DatabaseError: If connect() has not been awaited
        """
        if self._conn is None:
            msg = "Database is not connected. Call connect() first."
            raise DatabaseError(msg)
        return self._conn

    async def execute_script(self, script: str) -> None:
        """Run a multi-statement SQL script and commit."""
        try:
            await self.connection.executescript(script)
            await self.connection.commit()
        except aiosqlite.Error as e:
            logger.error("execute_script_failed", extra={"error": str(e)})
            msg = f"Failed to execute script: {e}"
            raise DatabaseError(msg) from e

    async def create_record(self, *, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a new record and return it with its assigned id."""
        _validate_collection_name(collection)
        try:
            columns = list(data.keys())
            columns_str = ", ".join(columns)
            placeholders_str = ", ".join("?" for _ in columns)
            values = [_to_column_value(data[key]) for key in columns]

            query = f"INSERT INTO {collection} ({columns_str}) VALUES ({placeholders_str})"  # noqa: S608 - collection is validated
            cursor = await self.connection.execute(query, values)
            await self.connection.commit()
            record_id = cursor.lastrowid
        except aiosqlite.Error as e:
            if isinstance(e, aiosqlite.OperationalError) and "no such table" in str(e):
                logger.error("Table not found", extra={"collection": collection})
                msg = f"Table '{collection}' does not exist. Call init_db() first."
                raise DatabaseError(msg) from e
            logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to create record in {collection}: {e}"
            raise DatabaseError(msg) from e

        logger.info("Created record", extra={"collection": collection, "record_id": record_id})
        return await self.get_record(collection=collection, record_id=record_id)

    async def get_record(self, *, collection: str, record_id: int) -> dict[str, Any]:
        """Fetch a single record by ID, raising RecordNotFoundError if not found."""
        _validate_collection_name(collection)
        _require_storable_id(collection, record_id)
        try:
            query = f"SELECT * FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
            cursor = await self.connection.execute(query, (record_id,))
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error("get_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
            msg = f"Failed to get record from {collection}: {e}"
            raise DatabaseError(msg) from e

        if row is None:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.debug("Retrieved record", extra={"collection": collection, "record_id": record_id})
        return _row_to_record(cursor, row)

    async def update_record(self, *, collection: str, record_id: int, data: dict[str, Any]) -> dict[str, Any]:
        """Update a record by ID and return the updated record."""
        if not data:
            msg = "Empty update payload"
            raise ValueError(msg)

        _validate_collection_name(collection)
        _require_storable_id(collection, record_id)
        try:
            set_clause = ", ".join(f"{key} = ?" for key in data)
            values = [_to_column_value(val) for val in data.values()]
            values.append(record_id)

            query = f"UPDATE {collection} SET {set_clause} WHERE id = ?"  # noqa: S608 - collection is validated
            cursor = await self.connection.execute(query, values)
            await self.connection.commit()
        except aiosqlite.Error as e:
            logger.error(
                "update_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)}
            )
            msg = f"Failed to update record in {collection}: {e}"
            raise DatabaseError(msg) from e

        if cursor.rowcount == 0:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.info("Updated record", extra={"collection": collection, "record_id": record_id})
        return await self.get_record(collection=collection, record_id=record_id)

    async def delete_record(self, *, collection: str, record_id: int) -> None:
        """Delete a record by ID, raising RecordNotFoundError if not found."""
        _validate_collection_name(collection)
        _require_storable_id(collection, record_id)
        try:
            query = f"DELETE FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
            cursor = await self.connection.execute(query, (record_id,))
            await self.connection.commit()
        except aiosqlite.Error as e:
            logger.error(
                "delete_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)}
            )
            msg = f"Failed to delete record from {collection}: {e}"
            raise DatabaseError(msg) from e

        if cursor.rowcount == 0:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.info("Deleted record", extra={"collection": collection, "record_id": record_id})

    async def list_records(self, *, collection: str, sort: str = "") -> list[dict[str, Any]]:
        """List every record in a collection, ordered by ``sort`` (default ``id ASC``)."""
        _validate_collection_name(collection)

        # Only allow: column_name [ASC|DESC]
        safe_sort = "id ASC"
        if sort:
            if re.match(r"^[A-Za-z_][A-Za-z0-9_]*\s*(ASC|DESC)?$", sort.strip(), re.IGNORECASE):
                safe_sort = sort.strip()
            else:
                logger.warning("Invalid sort parameter, using default", extra={"sort": sort})

        try:
            query = f"SELECT * FROM {collection} ORDER BY {safe_sort}"  # noqa: S608 - collection is validated
            cursor = await self.connection.execute(query)
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error("list_records_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to list records from {collection}: {e}"
            raise DatabaseError(msg) from e

        records = [_row_to_record(cursor, row) for row in rows]
        logger.info("Listed records", extra={"collection": collection, "count": len(records)})
        return records
