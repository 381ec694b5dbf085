"""Schema migrations and their tracking table.

A migration is Pending until :meth:`MigrationManager.execute_migration` records it
with an ``executed_at`` timestamp, after which it is Executed.
:meth:`MigrationManager.rollback_migration` only forgets the record; it does not
revert the schema.
"""

import re
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from ormkit.database.engine import Database
from ormkit.database.interfaces import Row
from ormkit.database.values import Value, ValueKind
from ormkit.exceptions import MigrationError
from ormkit.log import get_logger

logger = get_logger(__name__)

MIGRATIONS_TABLE = "migrations"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """RFC 3339 text in UTC, e.g. ``2024-01-02T03:04:05.000006+00:00``.

    Stored text sorts chronologically only because every value shares the offset.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(text: str) -> datetime:
    """Parse a stored timestamp.

    Raises:
        MigrationError: If the text is not an ISO-8601 date-time with offset
    """
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise MigrationError(f"Invalid datetime format: {text!r}") from e
    if parsed.tzinfo is None:
        raise MigrationError(f"Timestamp without offset: {text!r}")
    return parsed.astimezone(timezone.utc)


class Migration(BaseModel):
    """A named unit of schema-change SQL."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    sql: str
    created_at: datetime = Field(default_factory=utc_now)
    executed_at: datetime | None = None

    @property
    def is_executed(self) -> bool:
        return self.executed_at is not None


class MigrationManager:
    """Owns the tracking table and applies migrations through a Database."""

    def __init__(self, db: Database, table_name: str = MIGRATIONS_TABLE) -> None:
        self.db = db
        self.table_name = table_name

    @property
    def database(self) -> Database:
        return self.db

    async def init(self) -> None:
        """Create the tracking table if it does not exist."""
        create_sql = f"""
            CREATE TABLE IF NOT EXISTS {self.table_name} (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                sql TEXT NOT NULL,
                created_at TEXT NOT NULL,
                executed_at TEXT
            )
        """
        await self.db.execute(create_sql)

    async def execute_migration(self, migration: Migration) -> Migration:
        """Run ``migration.sql`` and record it, inside BEGIN/COMMIT.

        If any statement fails, ROLLBACK is issued and the error re-raised.

        Returns:
            A copy of the migration with ``executed_at`` set
        """
        executed_at = utc_now()
        insert_sql = (
            f"INSERT INTO {self.table_name} "
            "(id, name, sql, created_at, executed_at) VALUES (?, ?, ?, ?, ?)"
        )
        params = [
            Value.text(migration.id),
            Value.text(migration.name),
            Value.text(migration.sql),
            Value.text(format_timestamp(migration.created_at)),
            Value.text(format_timestamp(executed_at)),
        ]

        logger.info(f"Applying migration {migration.name} ({migration.id})")
        async with self.db.transaction():
            await self.db.execute(migration.sql)
            await self.db.execute(insert_sql, params)

        return migration.model_copy(update={"executed_at": executed_at})

    async def rollback_migration(self, migration_id: str) -> None:
        """Delete the tracking record of a migration.

        The migration's schema changes stay in place.
        """
        await self.db.execute(
            f"DELETE FROM {self.table_name} WHERE id = ?", [Value.text(migration_id)]
        )
        logger.info(f"Removed migration record {migration_id}")

    async def get_migrations(self) -> list[Migration]:
        """Read all tracking rows, oldest first.

        Raises:
            MigrationError: If any stored timestamp is malformed
        """
        cursor = await self.db.query(
            "SELECT id, name, sql, created_at, executed_at "
            f"FROM {self.table_name} ORDER BY created_at"
        )
        return [self._decode_row(row) async for row in cursor]

    async def get_pending_migrations(self) -> list[Migration]:
        return [m for m in await self.get_migrations() if m.executed_at is None]

    async def get_executed_migrations(self) -> list[Migration]:
        return [m for m in await self.get_migrations() if m.executed_at is not None]

    async def run_migrations(self, migrations: Iterable[Migration]) -> list[Migration]:
        """Execute every migration whose ``executed_at`` is unset.

        Only the passed-in objects are consulted, not the tracking table; filter
        against :meth:`get_executed_migrations` to avoid re-applying.

        Returns:
            The migrations executed by this call
        """
        executed: list[Migration] = []
        for migration in migrations:
            if migration.executed_at is not None:
                continue
            executed.append(await self.execute_migration(migration))
        return executed

    @staticmethod
    def create_migration(name: str, sql: str) -> Migration:
        return Migration(name=name, sql=sql)

    @staticmethod
    def create_migration_from_file(name: str, file_path: str | Path) -> Migration:
        """Build a migration whose SQL is the content of a file.

        Raises:
            MigrationError: If the file cannot be read
        """
        try:
            sql = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MigrationError(f"Failed to read migration file: {e}") from e
        return MigrationManager.create_migration(name, sql)

    @staticmethod
    def generate_migration_name(description: str) -> str:
        """``YYYYMMDD_HHMMSS_<description>`` with the description sanitized.

        Example:
            >>> MigrationManager.generate_migration_name("Add user-email index!")
            '20240102_030405_add_user_email_index'
        """
        timestamp = utc_now().strftime("%Y%m%d_%H%M%S")
        sanitized = description.lower().replace(" ", "_").replace("-", "_")
        sanitized = re.sub(r"[^\w]", "", sanitized)
        return f"{timestamp}_{sanitized}"

    def _decode_row(self, row: Row) -> Migration:
        executed_raw = row.get(4)
        executed_at = None
        if not executed_raw.is_null and executed_raw.to_python() != "":
            executed_at = parse_timestamp(self._text(executed_raw, "executed_at"))

        return Migration(
            id=self._text(row.get(0), "id"),
            name=self._text(row.get(1), "name"),
            sql=self._text(row.get(2), "sql"),
            created_at=parse_timestamp(self._text(row.get(3), "created_at")),
            executed_at=executed_at,
        )

    @staticmethod
    def _text(value: Value, column: str) -> str:
        if value.kind != ValueKind.TEXT:
            raise MigrationError(f"Tracking column {column} holds {value!r}")
        return str(value.data)


class MigrationBuilder:
    """Fluent construction of a Migration."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._sql = ""

    def up(self, sql: str) -> "MigrationBuilder":
        self._sql = sql
        return self

    def build(self) -> Migration:
        return Migration(name=self.name, sql=self._sql)
