"""SQLite database connection implementation."""

import sqlite3
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ormkit.config import DEFAULT_PRAGMAS, IN_MEMORY_PATH
from ormkit.database.interfaces import DatabaseConnection, Row, RowCursor
from ormkit.database.values import Value, to_native_params
from ormkit.exceptions import DatabaseConnectionError, QueryError
from ormkit.log import get_logger

logger = get_logger(__name__)


class SQLiteRowCursor(RowCursor):
    """Cursor reading rows lazily from a sqlite3 cursor."""

    def __init__(self, cursor: sqlite3.Cursor, sql: str) -> None:
        self._cursor = cursor
        self._sql = sql
        self._columns = tuple(desc[0] for desc in cursor.description or ())
        self._exhausted = False

    async def next(self) -> Row | None:
        if self._exhausted:
            return None

        try:
            raw = self._cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Fetch failed: {e}")
            raise QueryError(f"Fetch failed: {e}", self._sql) from e

        if raw is None:
            self._exhausted = True
            self._cursor.close()
            return None
        return Row([Value.from_native(cell) for cell in raw], self._columns)


class SQLiteConnection(DatabaseConnection):
    """SQLite connection backed by the stdlib sqlite3 module.

    The connection runs in autocommit mode, so BEGIN/COMMIT/ROLLBACK statements
    sent through :meth:`execute` control transactions directly.
    """

    def __init__(
        self,
        db_path: Path | str,
        timeout: float = 60.0,
        pragmas: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SQLite connection.

        Args:
            db_path: Path to SQLite database file, or ':memory:'
            timeout: Seconds to wait on a locked database
            pragmas: PRAGMA name/value pairs applied after connecting
        """
        super().__init__()
        self.db_path = str(db_path)
        self.timeout = timeout
        self.pragmas = dict(DEFAULT_PRAGMAS) if pragmas is None else pragmas
        self._connection: sqlite3.Connection | None = None

    async def connect(self) -> None:
        """Open the SQLite database."""
        if self._connection is not None:
            return

        try:
            if self.db_path != IN_MEMORY_PATH:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                self.db_path,
                timeout=self.timeout,
                isolation_level=None,
                check_same_thread=False,
            )
            self._configure_connection()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to connect to SQLite database: {e}")
            self._connection = None
            raise DatabaseConnectionError(
                f"Cannot open SQLite database {self.db_path}: {e}"
            ) from e

        self._is_connected = True
        logger.info(f"Connected to SQLite: {self.db_path}")

    async def disconnect(self) -> None:
        """Close the SQLite database."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("Disconnected from SQLite")
        self._is_connected = False

    async def query(self, sql: str, params: Sequence[Value] = ()) -> RowCursor:
        cursor = self._run(sql, params)
        return SQLiteRowCursor(cursor, sql)

    async def execute(self, sql: str, params: Sequence[Value] = ()) -> int:
        cursor = self._run(sql, params)
        affected = cursor.rowcount
        cursor.close()
        # rowcount is -1 for statements that do not modify rows
        return max(affected, 0)

    def _run(self, sql: str, params: Sequence[Value]) -> sqlite3.Cursor:
        if self._connection is None:
            raise DatabaseConnectionError("Database not connected")

        logger.debug(f"SQL: {sql.strip()} | params={list(params)}")
        try:
            return self._connection.execute(sql, to_native_params(list(params)))
        except (sqlite3.Error, OverflowError) as e:
            logger.error(f"Query execution failed: {e}")
            raise QueryError(f"Query execution failed: {e}", sql) from e

    def _configure_connection(self) -> None:
        if self._connection is None:
            return
        for name, value in self.pragmas.items():
            self._connection.execute(f"PRAGMA {name} = {value}")
