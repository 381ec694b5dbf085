"""Database handle and its configuration-driven factory."""

from collections.abc import Sequence
from pathlib import Path
from types import TracebackType

from ormkit.config import Settings
from ormkit.database.implementations import FakeConnection, SQLiteConnection
from ormkit.database.interfaces import DatabaseConnection, RowCursor
from ormkit.database.values import Value
from ormkit.exceptions import ConfigurationError, DatabaseConnectionError, OrmError
from ormkit.log import get_logger
from ormkit.types import DatabaseDriver, Environment

logger = get_logger(__name__)


class Database:
    """Sole owner of one driver connection.

    Repositories, query builders and the migration manager all go through this
    handle. Closing the handle closes the connection; nothing else keeps it alive.
    There is no locking: callers sharing a handle serialize their own calls.
    """

    def __init__(self, connection: DatabaseConnection) -> None:
        self._connection: DatabaseConnection | None = connection

    @classmethod
    async def open_local(cls, path: Path | str = ":memory:") -> "Database":
        """Open a local SQLite database (':memory:' for an in-memory one)."""
        db = cls(SQLiteConnection(path))
        await db.connect()
        return db

    @property
    def connection(self) -> DatabaseConnection:
        if self._connection is None:
            raise DatabaseConnectionError("Database handle is closed")
        return self._connection

    @property
    def is_connected(self) -> bool:
        return self._connection is not None and self._connection.is_connected

    async def connect(self) -> None:
        await self.connection.connect()

    async def close(self) -> None:
        if self._connection is None:
            return
        await self._connection.disconnect()
        self._connection = None

    async def query(self, sql: str, params: Sequence[Value] = ()) -> RowCursor:
        return await self.connection.query(sql, params)

    async def execute(self, sql: str, params: Sequence[Value] = ()) -> int:
        return await self.connection.execute(sql, params)

    def transaction(self) -> "Transaction":
        """Explicit BEGIN/COMMIT block: ``async with db.transaction(): ...``"""
        return Transaction(self)

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()


class Transaction:
    """BEGIN on entry; COMMIT on clean exit, ROLLBACK when the block raises.

    The statements are sent as plain text through the handle; atomicity is
    whatever the backend provides for that pair.
    """

    def __init__(self, db: "Database") -> None:
        self._db = db

    async def __aenter__(self) -> "Transaction":
        await self._db.execute("BEGIN")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            await self._db.execute("COMMIT")
            return

        logger.warning(f"Rolling back transaction after error: {exc_val}")
        try:
            await self._db.execute("ROLLBACK")
        except OrmError as rollback_error:
            # The original exception keeps propagating
            logger.error(f"ROLLBACK failed: {rollback_error}")


def create_connection(settings: Settings) -> DatabaseConnection:
    """Build the driver selected by ``settings.database_driver``.

    Raises:
        ConfigurationError: If the driver is unknown or not allowed in the
            configured environment
    """
    driver = settings.database_driver

    if driver == DatabaseDriver.SQLITE:
        return SQLiteConnection(
            settings.resolved_database_path,
            timeout=settings.sqlite_timeout,
            pragmas=settings.sqlite_pragmas,
        )

    if driver == DatabaseDriver.FAKE:
        if settings.environment == Environment.PRODUCTION:
            raise ConfigurationError("The fake driver cannot be used in production")
        return FakeConnection()

    raise ConfigurationError(f"Unsupported database driver: {driver}")


def create_database(settings: Settings) -> Database:
    """Create an unconnected Database for the given settings."""
    connection = create_connection(settings)
    logger.info(
        f"Creating {settings.database_driver.value} database for "
        f"{settings.environment.value} environment"
    )
    return Database(connection)
