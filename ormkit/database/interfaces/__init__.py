"""Database interfaces module."""

from .connection import DatabaseConnection, ListRowCursor, Row, RowCursor
from .schema_builder import SchemaBuilder

__all__ = [
    "DatabaseConnection",
    "ListRowCursor",
    "Row",
    "RowCursor",
    "SchemaBuilder",
]
