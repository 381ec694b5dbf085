"""Database driver implementations."""

from .fake import FakeConnection
from .sqlite import SQLiteConnection, SQLiteSchemaBuilder

__all__ = [
    "FakeConnection",
    "SQLiteConnection",
    "SQLiteSchemaBuilder",
]
