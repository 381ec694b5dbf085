"""SQLite database implementation package."""

from .schema_builder import SQLiteSchemaBuilder
from .sqlite_connection import SQLiteConnection, SQLiteRowCursor

__all__ = [
    "SQLiteConnection",
    "SQLiteRowCursor",
    "SQLiteSchemaBuilder",
]
